"""
Code generation context for the typings generator.

This module provides the context class that holds the state accumulated
while walking an ABI: the auxiliary interfaces synthesised for tuples and
multi-value returns, and the event and method names seen so far. A fresh
context is created for every run so nothing leaks between runs.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from ..settings import Provider
from .diagnostics import GeneratorDiagnostics


# Method name used for the constructor in the method names type
CONSTRUCTOR_METHOD_NAME = 'new'


@dataclass
class CodeGenerationContext:
    """
    Holds all state accumulated during one generation run.

    Generators that need to register a new top-level declaration append to
    `auxiliary_interfaces` instead of returning it up the call chain.
    """

    abi_name: str
    provider: Provider

    # Indentation state
    indent_level: int = 0
    indent_str: str = '  '

    # Accumulated declarations, in registration order
    auxiliary_interfaces: List[str] = field(default_factory=list)
    event_names: List[str] = field(default_factory=list)
    method_names: List[str] = field(default_factory=list)

    # Source label used in diagnostics
    source: str = ''

    # Diagnostics collector
    _diagnostics: Optional[GeneratorDiagnostics] = None

    @property
    def diagnostics(self) -> GeneratorDiagnostics:
        """Get the diagnostics collector, creating one if needed."""
        if self._diagnostics is None:
            self._diagnostics = GeneratorDiagnostics()
        return self._diagnostics

    def indent(self) -> str:
        """Return the current indentation string."""
        return self.indent_str * self.indent_level

    # =========================================================================
    # REGISTRATION
    # =========================================================================

    def register_interface(self, declaration: str) -> None:
        """Register a synthesised interface. Duplicates are kept."""
        self.auxiliary_interfaces.append(declaration)

    def register_event(self, name: str) -> None:
        self.event_names.append(name)

    def register_method(self, name: str) -> None:
        self.method_names.append(name)

    def reset(self) -> None:
        """Clear everything accumulated so far."""
        self.auxiliary_interfaces = []
        self.event_names = []
        self.method_names = []
        self.indent_level = 0
