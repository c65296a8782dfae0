"""Brand Guardian: brand safety and brand compliance evaluation engine."""

__version__ = "1.0.0"

# Plugins declare compatibility against this version.
SYSTEM_VERSION = __version__

__all__ = ["__version__", "SYSTEM_VERSION"]
