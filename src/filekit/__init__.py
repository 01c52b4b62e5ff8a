"""filekit: failure-aware file utilities for command-line tools."""

__version__ = "0.1.0"
