"""
Types module for the ABI typings generator.

This module provides the Solidity to TypeScript type mappings.
"""

from .mappings import (
    solidity_type_to_ts,
    is_known_type,
    split_array_type,
    integer_bits,
    array_of,
    ANY_TYPE,
    SOLIDITY_TO_TS_MAP,
)

__all__ = [
    'solidity_type_to_ts',
    'is_known_type',
    'split_array_type',
    'integer_bits',
    'array_of',
    'ANY_TYPE',
    'SOLIDITY_TO_TS_MAP',
]
