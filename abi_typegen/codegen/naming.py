"""
Identifier helpers for generated type names.

Converts file stems and hyphenated names to PascalCase type prefixes and
synthesises positional names for unnamed parameters:
- erc20 -> Erc20
- my-token.abi -> MyTokenAbi
- '' at index 2 -> parameter2
"""

import os
from typing import Iterable


def capitalize(value: str) -> str:
    """Uppercase the first character, leaving the rest untouched."""
    if not value:
        return ''
    return value[0].upper() + value[1:]


def sanitize_name(value: str, separators: Iterable[str] = ('-', '.')) -> str:
    """
    Convert a name to a PascalCase type prefix.

    The name is split on each separator in turn and every segment capitalised.
    Already capitalised single-segment names come back unchanged.
    """
    for separator in separators:
        value = ''.join(capitalize(part) for part in value.split(separator))
    return value


def derive_root_name(file_path: str) -> str:
    """Return the file basename cut at the first dot (`./abi/erc20.abi.json` -> `erc20`)."""
    return os.path.basename(file_path).split('.')[0]


def parameter_name(name: str, index: int) -> str:
    """Return `name`, or `parameter{index}` when the parameter is unnamed."""
    if not name:
        return f'parameter{index}'
    return name
