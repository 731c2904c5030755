from __future__ import annotations


class TunerError(Exception):
    """Base class for channel tuner exceptions."""


class ParsingError(TunerError):
    """Raised when a JSON payload cannot be parsed into a valid schema."""


class BrowserError(TunerError):
    """Raised for Playwright automation failures."""


class ConfigurationError(TunerError):
    """Raised when settings or the strategy registry are misconfigured."""
