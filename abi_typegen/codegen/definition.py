"""
Definition generation for synthesised interfaces.

This module handles the interfaces the generator creates on its own:
request interfaces for tuple (struct) parameters and response interfaces for
functions returning more than one value. Each interface is registered on the
context and only its name is handed back to the caller.
"""

from typing import List, Tuple, TYPE_CHECKING

if TYPE_CHECKING:
    from .context import CodeGenerationContext
    from .type_converter import TypeConverter

from .base import BaseGenerator
from .naming import capitalize, parameter_name
from ..abi.abi_nodes import AbiInput, AbiItem, AbiOutput
from ..type_system import ANY_TYPE


# Nesting limit for tuple expansion
MAX_TUPLE_DEPTH = 32


class DefinitionGenerator(BaseGenerator):
    """
    Generates TypeScript interfaces for composite shapes.

    This class handles:
    - Tuple parameters (as `<Owner>Request` interfaces, recursively)
    - Multi-value returns (as `<Method>Response` interfaces)
    """

    def __init__(
        self,
        ctx: 'CodeGenerationContext',
        type_converter: 'TypeConverter',
    ):
        """
        Initialize the definition generator.

        Args:
            ctx: The code generation context
            type_converter: The type converter
        """
        super().__init__(ctx)
        self._type_converter = type_converter

    # =========================================================================
    # TUPLES
    # =========================================================================

    def expand_tuple(self, owner_name: str, abi_input: AbiInput, depth: int = 0) -> str:
        """Register a request interface for a tuple parameter and return its type.

        Components that are tuples themselves are expanded first, named after
        the owner and the component. No deduplication is done: expanding the
        same owner twice registers two interfaces with the same name.

        Args:
            owner_name: The method (or enclosing tuple) the parameter belongs to
            abi_input: The tuple-typed parameter
            depth: Current nesting depth

        Returns:
            The interface name, with `[]` per array dimension for tuple arrays
        """
        suffix = '[]' * abi_input.array_suffix.count('[')
        if depth >= MAX_TUPLE_DEPTH:
            self._ctx.diagnostics.warn_tuple_depth_exceeded(
                owner_name, MAX_TUPLE_DEPTH, source=self._ctx.source
            )
            return ANY_TYPE + suffix

        interface_name = f'{capitalize(owner_name)}Request'

        properties: List[str] = []
        for i, component in enumerate(abi_input.components or []):
            name = parameter_name(component.name, i)
            if component.is_tuple and component.components:
                ts_type = self.expand_tuple(owner_name + capitalize(name), component, depth + 1)
            else:
                ts_type = self._type_converter.solidity_type_to_ts(component.type)
            properties.append(f'{name}: {ts_type};')

        self._ctx.register_interface(self.build_interface(interface_name, properties))
        return interface_name + suffix

    # =========================================================================
    # RESPONSES
    # =========================================================================

    def build_response_interface(
        self, item: AbiItem, outputs: List[Tuple[int, AbiOutput]]
    ) -> str:
        """Register a `<Method>Response` interface for a multi-value return.

        Outputs are typed with the plain mappings; tuple outputs become `any`.
        Each output comes with its position in the full output list, which
        names unnamed outputs.

        Returns:
            The interface name
        """
        interface_name = f'{capitalize(item.name)}Response'

        properties = [
            f'{parameter_name(output.name, i)}: '
            f'{self._type_converter.solidity_type_to_ts(output.type)};'
            for i, output in outputs
        ]

        self._ctx.register_interface(self.build_interface(interface_name, properties))
        return interface_name
