"""Typed exceptions for cmdlib."""


class CmdlibError(Exception):
    """Base exception for cmdlib failures."""


class SourceError(CmdlibError):
    """Raised when a document exists but cannot be read."""


class IndexFormatError(CmdlibError):
    """Raised when an index document is not a valid manifest."""


class ConfigError(ValueError, CmdlibError):
    """Profile/configuration validation errors."""
