"""
Provider shaping for the typings generator.

Exactly two conventions are supported; `provider_factory` is the only place
that chooses between them.
"""

from typing import Union, TYPE_CHECKING

if TYPE_CHECKING:
    from ..context import CodeGenerationContext
    from ..type_converter import TypeConverter

from ...errors import ConfigurationError
from ...settings import SUPPORTED_PROVIDERS, Provider
from .ethers_factory import EthersFactory
from .web3_factory import Web3Factory

ProviderFactory = Union[Web3Factory, EthersFactory]


def provider_factory(
    provider: Provider,
    ctx: 'CodeGenerationContext',
    type_converter: 'TypeConverter',
) -> ProviderFactory:
    """Return the factory for `provider`.

    Raises:
        ConfigurationError: if the provider is not one of the supported values
    """
    if provider is Provider.WEB3:
        return Web3Factory(ctx, type_converter)
    elif provider is Provider.ETHERS:
        return EthersFactory(ctx, type_converter)
    raise ConfigurationError(
        f'{provider} is not a known supported provider. '
        f'Supported providers are {SUPPORTED_PROVIDERS}'
    )


__all__ = [
    'ProviderFactory',
    'Web3Factory',
    'EthersFactory',
    'provider_factory',
]
