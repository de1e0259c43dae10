"""Errors raised by the calendar core."""


class ConfigurationError(ValueError):
    """Raised when calendar options are invalid."""

    pass
