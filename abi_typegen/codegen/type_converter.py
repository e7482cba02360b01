"""
Type conversion utilities for code generation.

This module provides the TypeConverter class that wraps the pure type
mappings with context-awareness, recording a diagnostic whenever a type tag
falls back to `any`.
"""

from .base import BaseGenerator
from ..type_system import is_known_type, solidity_type_to_ts


class TypeConverter(BaseGenerator):
    """Handles Solidity ABI type tag to TypeScript conversions."""

    def solidity_type_to_ts(self, type_tag: str) -> str:
        """Convert an ABI type tag, noting unknown tags in the diagnostics.

        Args:
            type_tag: The ABI type tag

        Returns:
            The TypeScript type string
        """
        ts_type = solidity_type_to_ts(type_tag)
        if not is_known_type(type_tag):
            self._ctx.diagnostics.info_unknown_type(type_tag, source=self._ctx.source)
        return ts_type
