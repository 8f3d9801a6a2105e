"""Current version of heapgen; reported by --version."""

heapgen_version = "1.0.0"
heapgen_date = "2026.10.19"

# Size of each generated object unless configured otherwise.
DEFAULT_SIZE = "100M"

# Seconds between ticks.
DEFAULT_PERIOD = 0.1


class ConfigurationError(Exception):
    """Raised when the configuration is malformed; heapgen must not start."""
