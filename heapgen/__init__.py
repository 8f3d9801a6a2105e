# heapgen: a scheduled large-object allocator for memory load testing.

from heapgen.heapgen_config import heapgen_version as __version__  # noqa: F401
