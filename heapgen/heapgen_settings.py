"""
heapgen settings resolution.

Each setting is resolved once at startup. Priority order:
1. Command-line arguments (highest priority)
2. Environment variables
3. Config file (~/.heapgen/config.json, or the file named by --config)
4. Default values (lowest priority)

Anything malformed raises ConfigurationError, before any object is allocated.
"""

import json
import os
from pathlib import Path
from typing import Annotated, Any, Dict, Mapping, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    NonNegativeInt,
    ValidationError,
    field_validator,
)

from heapgen.heapgen_arguments import HeapgenArguments
from heapgen.heapgen_config import DEFAULT_PERIOD, DEFAULT_SIZE, ConfigurationError
from heapgen.heapgen_memory_size import parse_memory_size

# Default config file
HEAPGEN_CONFIG_FILE = Path.home() / ".heapgen" / "config.json"

# nan and inf are rejected, so every deadline stays computable
FiniteFloat = Annotated[float, Field(allow_inf_nan=False)]
PositiveFiniteFloat = Annotated[float, Field(gt=0, allow_inf_nan=False)]

# Mapping of setting names to environment variables
SETTING_TO_ENV_MAP: Dict[str, str] = {
    "size": "HEAPGEN_SIZE",
    "period": "HEAPGEN_PERIOD",
    "delay": "HEAPGEN_DELAY",
    "fixed_rate": "HEAPGEN_FIXED_RATE",
    "repeat_count": "HEAPGEN_REPEAT_COUNT",
    "duration": "HEAPGEN_DURATION",
    "seed": "HEAPGEN_SEED",
}


class HeapgenSettings(BaseModel):
    """Validated settings, immutable for the lifetime of the process."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    # bytes per generated object
    size: NonNegativeInt = parse_memory_size(DEFAULT_SIZE)
    # seconds between ticks
    period: PositiveFiniteFloat = DEFAULT_PERIOD
    # seconds before the first tick; None means one period, negative disables the timer
    delay: Optional[FiniteFloat] = None
    fixed_rate: bool = True
    # 0 means unbounded
    repeat_count: NonNegativeInt = 0
    # stop after this many seconds; None runs until interrupted
    duration: Optional[PositiveFiniteFloat] = None
    seed: Optional[NonNegativeInt] = None

    @field_validator("size", mode="before")
    @classmethod
    def _parse_size(cls, value: Any) -> Any:
        if isinstance(value, str):
            return parse_memory_size(value)
        return value


def load_config(config_file: Path) -> Dict[str, Any]:
    """Load settings from a JSON config file.

    Returns an empty dict if the file doesn't exist.
    """
    if not config_file.exists():
        return {}

    try:
        with open(config_file, encoding="utf-8") as f:
            config = json.load(f)
    except (json.JSONDecodeError, OSError) as exc:
        raise ConfigurationError(f"cannot read config file {config_file}: {exc}") from exc
    if not isinstance(config, dict):
        raise ConfigurationError(
            f"config file {config_file} must contain a JSON object"
        )
    return config


def get_setting_source(
    key: str,
    args: HeapgenArguments,
    config: Mapping[str, Any],
    environ: Mapping[str, str],
) -> str:
    """Get the source of a setting.

    Returns one of: 'cli', 'env', 'config', 'default'
    """
    if getattr(args, key, None) is not None:
        return "cli"
    env_var = SETTING_TO_ENV_MAP.get(key)
    if env_var and environ.get(env_var):
        return "env"
    if config.get(key) is not None:
        return "config"
    return "default"


def _describe_errors(exc: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(loc) for loc in error['loc'])}: {error['msg']}"
        for error in exc.errors()
    )


def resolve_settings(
    args: HeapgenArguments, environ: Optional[Mapping[str, str]] = None
) -> HeapgenSettings:
    """Resolve every setting with priority: cli > env var > config file > default."""
    if environ is None:
        environ = os.environ
    config_file = Path(args.config) if args.config else HEAPGEN_CONFIG_FILE
    config = load_config(config_file)

    values: Dict[str, Any] = {}
    for key, env_var in SETTING_TO_ENV_MAP.items():
        source = get_setting_source(key, args, config, environ)
        if source == "cli":
            values[key] = getattr(args, key)
        elif source == "env":
            values[key] = environ[env_var]
        elif source == "config":
            values[key] = config[key]

    try:
        return HeapgenSettings(**values)
    except ValidationError as exc:
        raise ConfigurationError(f"invalid settings: {_describe_errors(exc)}") from exc
