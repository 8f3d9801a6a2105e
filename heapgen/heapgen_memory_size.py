import re

from heapgen.heapgen_config import ConfigurationError

# Binary multiples, keyed by the (case-insensitive) unit suffix.
UNITS = {
    "": 1,
    "b": 1,
    "k": 1024,
    "m": 1024**2,
    "g": 1024**3,
    "t": 1024**4,
}

MEMORY_SIZE_REGEX = re.compile(r"^(\d+)\s*([bkmgt]?)$", re.IGNORECASE)


def parse_memory_size(value: str) -> int:
    """Convert a magnitude such as "100M" or "512k" into a number of bytes."""
    match = MEMORY_SIZE_REGEX.match(str(value).strip())
    if not match:
        raise ConfigurationError(
            f"invalid memory size {value!r} (expected e.g. 1024, 512K, 100M, 2G)"
        )
    return int(match.group(1)) * UNITS[match.group(2).lower()]


def memory_size_str(size_in_bytes: int) -> str:
    """Return a human-readable string for a number of bytes, e.g. "100 MB"."""
    for suffix, multiple in (
        ("TB", UNITS["t"]),
        ("GB", UNITS["g"]),
        ("MB", UNITS["m"]),
        ("KB", UNITS["k"]),
    ):
        if size_in_bytes >= multiple:
            value = size_in_bytes / multiple
            if value.is_integer():
                return f"{value:.0f} {suffix}"
            return f"{value:3.3f} {suffix}"
    return f"{size_in_bytes} B"
