class InstrumentError(Exception):
    """Base exception for the project."""

class ConfigError(InstrumentError):
    """Configuration is missing/invalid."""

class TemplateError(InstrumentError, ValueError):
    """Raised when a log template cannot render the elapsed time."""
