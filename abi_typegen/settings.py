"""
Run configuration for the ABI typings generator.

The GeneratorContext carries everything a single generation run needs:
where the ABI lives, how the output should be named and where it goes,
which provider convention to target and how to format the result.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from .errors import ConfigurationError


class Provider(Enum):
    """Client library conventions the typings can target."""
    WEB3 = 'web3'
    ETHERS = 'ethers'


SUPPORTED_PROVIDERS = ', '.join(p.value for p in Provider)

# Used when no options are supplied or the supplied ones are rejected
DEFAULT_PRETTIER_OPTIONS: Dict[str, Any] = {
    'parser': 'typescript',
    'trailingComma': 'es5',
    'singleQuote': True,
    'bracketSpacing': True,
    'printWidth': 80,
}


def coerce_provider(value: Any) -> Provider:
    """Convert a provider value (enum member or name) to a Provider."""
    if isinstance(value, Provider):
        return value
    if value is None:
        raise ConfigurationError(
            f'a provider must be supplied. Supported providers are {SUPPORTED_PROVIDERS}'
        )
    try:
        return Provider(str(value).strip().lower())
    except ValueError:
        raise ConfigurationError(
            f'{value} is not a known supported provider. '
            f'Supported providers are {SUPPORTED_PROVIDERS}'
        ) from None


@dataclass
class GeneratorContext:
    """Options for one generation run."""
    abi_file_location: str
    provider: Provider
    name: Optional[str] = None
    output_path_directory: Optional[str] = None
    prettier_options: Optional[Dict[str, Any]] = None
    watch: bool = False

    def __post_init__(self):
        self.provider = coerce_provider(self.provider)

    def clear_quotes(self) -> None:
        """Strip quote characters from the path-like fields."""
        self.abi_file_location = _strip_quotes(self.abi_file_location)
        if self.output_path_directory:
            self.output_path_directory = _strip_quotes(self.output_path_directory)


@dataclass
class GenerateResponse:
    """Where a run wrote its output and which ABI file it read."""
    output_location: str
    abi_json_file_location: str


def _strip_quotes(value: str) -> str:
    return value.replace("'", '').replace('"', '')


def default_prettier_options() -> Dict[str, Any]:
    """Return a fresh copy of the default formatter options."""
    return dict(DEFAULT_PRETTIER_OPTIONS)


def resolve_prettier_options(options: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Return the caller's options with the parser forced to typescript."""
    if not options:
        return default_prettier_options()
    resolved = dict(options)
    resolved['parser'] = 'typescript'
    return resolved


__all__ = [
    'Provider',
    'SUPPORTED_PROVIDERS',
    'DEFAULT_PRETTIER_OPTIONS',
    'GeneratorContext',
    'GenerateResponse',
    'coerce_provider',
    'default_prettier_options',
    'resolve_prettier_options',
]
