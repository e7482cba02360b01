"""
Typed error classes for the ABI typings generator.

Fatal errors (configuration and source problems) propagate to the caller.
Formatter errors are raised by the formatter wrapper and recovered by the
driver, which falls back to the default prettier options.
"""

__all__ = [
    'AbiTypegenError',
    'ConfigurationError',
    'SourceError',
    'FormatterError',
    'FormatterUnavailableError',
]


class AbiTypegenError(Exception):
    """Base class for all generator errors."""


class ConfigurationError(AbiTypegenError):
    """Raised for an unknown provider or an output path that is not a directory."""


class SourceError(AbiTypegenError):
    """Raised when the ABI file is missing or is not a JSON ABI array."""


class FormatterError(AbiTypegenError):
    """Raised when the formatter rejects the supplied options or source."""


class FormatterUnavailableError(FormatterError):
    """Raised when no prettier executable can be located."""
