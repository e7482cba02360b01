"""
Type mappings for converting Solidity ABI type tags to TypeScript.

This module contains the static tables and the pure conversion function used
for every primitive parameter, output and tuple component. Tags it does not
recognise map to `any` so a single odd parameter never aborts a run.
"""

import re
from typing import Optional, Tuple


# =============================================================================
# TYPE MAPPING CONSTANTS
# =============================================================================

# Fallback for anything the mapper does not recognise
ANY_TYPE = 'any'

# Widest integer that is still exactly representable as a JS number
MAX_SAFE_NUMBER_BITS = 48

# Non-numeric Solidity tags -> TypeScript
SOLIDITY_TO_TS_MAP = {
    'bool': 'boolean',
    'address': 'string',
    'string': 'string',
    'bytes': 'string',
    'function': 'string',
    'fixed': 'string',
    'ufixed': 'string',
}

_INTEGER_RE = re.compile(r'^(u?int)(\d*)$')
_FIXED_BYTES_RE = re.compile(r'^bytes(\d+)$')
_FIXED_POINT_RE = re.compile(r'^(u?fixed)(\d+)x(\d+)$')
_ARRAY_SUFFIX_RE = re.compile(r'^(.*)\[(\d*)\]$')


# =============================================================================
# HELPERS
# =============================================================================

def split_array_type(type_tag: str) -> Optional[Tuple[str, Optional[int]]]:
    """
    Split the outermost array suffix off a type tag.

    `uint8[2][]` -> (`uint8[2]`, None), `address[3]` -> (`address`, 3).
    Returns None for non-array tags.
    """
    match = _ARRAY_SUFFIX_RE.match(type_tag)
    if not match or not match.group(1):
        return None
    size = match.group(2)
    return match.group(1), int(size) if size else None


def integer_bits(type_tag: str) -> Optional[int]:
    """Return the width of an integer tag, or None if the tag is not a valid integer."""
    match = _INTEGER_RE.match(type_tag)
    if not match:
        return None
    bits = int(match.group(2)) if match.group(2) else 256
    if bits < 8 or bits > 256 or bits % 8 != 0:
        return None
    return bits


def _is_fixed_bytes(type_tag: str) -> bool:
    match = _FIXED_BYTES_RE.match(type_tag)
    return bool(match) and 1 <= int(match.group(1)) <= 32


def _is_fixed_point(type_tag: str) -> bool:
    match = _FIXED_POINT_RE.match(type_tag)
    if not match:
        return False
    bits, decimals = int(match.group(2)), int(match.group(3))
    return 8 <= bits <= 256 and bits % 8 == 0 and 0 < decimals <= 80


def array_of(ts_type: str) -> str:
    """Append an array suffix, parenthesising union types."""
    if ' | ' in ts_type:
        return f'({ts_type})[]'
    return f'{ts_type}[]'


# =============================================================================
# TYPE CONVERSION FUNCTIONS
# =============================================================================

def solidity_type_to_ts(type_tag: str) -> str:
    """
    Convert a Solidity ABI type tag to its TypeScript equivalent.

    Args:
        type_tag: The ABI type tag (e.g., 'uint256', 'address[]', 'bytes32')

    Returns:
        The TypeScript type string, `any` when the tag is not recognised
    """
    type_tag = (type_tag or '').strip()

    array = split_array_type(type_tag)
    if array:
        inner = solidity_type_to_ts(array[0])
        return array_of(inner)

    bits = integer_bits(type_tag)
    if bits is not None:
        return 'number' if bits <= MAX_SAFE_NUMBER_BITS else 'string'

    ts_type = SOLIDITY_TO_TS_MAP.get(type_tag)
    if ts_type:
        return ts_type

    if _is_fixed_bytes(type_tag) or _is_fixed_point(type_tag):
        return 'string'

    return ANY_TYPE


def is_known_type(type_tag: str) -> bool:
    """Check whether a tag maps to something more specific than `any`."""
    array = split_array_type((type_tag or '').strip())
    if array:
        return is_known_type(array[0])
    return solidity_type_to_ts(type_tag) != ANY_TYPE
