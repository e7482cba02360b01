"""
ABI module for the ABI typings generator.

This module provides the ABI data model and the JSON loader.
"""

from .abi_nodes import (
    TUPLE_TYPE,
    AbiItemType,
    AbiInput,
    AbiOutput,
    AbiItem,
    AbiDocument,
)
from .loader import AbiLoader

__all__ = [
    'TUPLE_TYPE',
    'AbiItemType',
    'AbiInput',
    'AbiOutput',
    'AbiItem',
    'AbiDocument',
    'AbiLoader',
]
