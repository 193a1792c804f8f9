"""
Exceptions for the C-Scan Processor

Exception Hierarchy:
    CScanError (base)
    ├── ConfigurationError (unknown colormap, invalid configuration values)
    ├── ResourceError (raster surface cannot be allocated or encoded)
    └── InvalidArgumentError (caller programming errors, also a ValueError)
"""


class CScanError(Exception):
    """Base class for all C-Scan processing errors."""


class ConfigurationError(CScanError):
    """Raised when a configuration value or colormap selection is invalid."""


class ResourceError(CScanError):
    """Raised when the rendering surface for a raster cannot be obtained."""


class InvalidArgumentError(CScanError, ValueError):
    """Raised when an operation is called with arguments it cannot act on."""
