"""
Base generator class with shared utilities.

This module provides the BaseGenerator class that contains the TypeScript
emission helpers used across the specialised generators.
"""

from typing import Iterable, List, TYPE_CHECKING

if TYPE_CHECKING:
    from .context import CodeGenerationContext


class BaseGenerator:
    """
    Base class for all code generators.

    Provides shared utilities for:
    - Indentation management
    - Interface and union type declarations
    """

    def __init__(self, ctx: 'CodeGenerationContext'):
        """
        Initialize the base generator.

        Args:
            ctx: The code generation context containing all state
        """
        self._ctx = ctx

    # =========================================================================
    # INDENTATION
    # =========================================================================

    def indent(self) -> str:
        """Return the current indentation string."""
        return self._ctx.indent()

    @property
    def indent_level(self) -> int:
        """Get the current indentation level."""
        return self._ctx.indent_level

    @indent_level.setter
    def indent_level(self, value: int):
        """Set the current indentation level."""
        self._ctx.indent_level = value

    # =========================================================================
    # DECLARATIONS
    # =========================================================================

    def build_interface(self, name: str, properties: Iterable[str]) -> str:
        """Build an exported interface from already terminated property lines."""
        lines: List[str] = [f'export interface {name} {{']
        self.indent_level += 1
        for prop in properties:
            for line in prop.splitlines():
                lines.append(f'{self.indent()}{line}' if line else '')
        self.indent_level -= 1
        lines.append('}')
        return '\n'.join(lines) + '\n'

    def build_type(self, name: str, values: Iterable[str]) -> str:
        """Build an exported string-literal union type; empty unions become `undefined`."""
        members = ' | '.join(f"'{value}'" for value in values)
        return f'export type {name} = {members or "undefined"};\n'
