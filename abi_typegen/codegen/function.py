"""
Method signature generation for the typings generator.

This module turns constructor and function items into properties of the
main contract interface: a doc comment, the parameter list and the provider
shaped return type.
"""

from typing import List, Optional, Tuple, TYPE_CHECKING

if TYPE_CHECKING:
    from .context import CodeGenerationContext
    from .definition import DefinitionGenerator
    from .providers import ProviderFactory
    from .type_converter import TypeConverter

from .base import BaseGenerator
from .context import CONSTRUCTOR_METHOD_NAME
from .naming import parameter_name
from ..abi.abi_nodes import AbiItem, AbiItemType


def _js_literal(value: Optional[object]) -> str:
    """Render a flag the way it reads in JavaScript."""
    if value is None:
        return 'undefined'
    if isinstance(value, bool):
        return 'true' if value else 'false'
    return str(value)


class FunctionGenerator(BaseGenerator):
    """
    Generates interface properties from callable ABI items.

    This class handles:
    - Constructors (as the `'new'` property)
    - Functions, including overloads
    - Parameter lists with tuple expansion
    - Return types (void, single value, response interface)
    """

    def __init__(
        self,
        ctx: 'CodeGenerationContext',
        type_converter: 'TypeConverter',
        definition_generator: 'DefinitionGenerator',
        provider: 'ProviderFactory',
    ):
        """
        Initialize the function generator.

        Args:
            ctx: The code generation context
            type_converter: The type converter
            definition_generator: Registers tuple and response interfaces
            provider: Shapes return types for the selected provider
        """
        super().__init__(ctx)
        self._type_converter = type_converter
        self._definitions = definition_generator
        self._provider = provider

    def call_name(self, item: AbiItem) -> str:
        """The property name for an item; the constructor uses the `new` sentinel."""
        if item.type == AbiItemType.CONSTRUCTOR:
            return CONSTRUCTOR_METHOD_NAME
        return item.name

    # =========================================================================
    # PROPERTIES
    # =========================================================================

    def generate_property(self, item: AbiItem) -> str:
        """Generate the doc comment and signature for a callable item.

        Records the call name on the context.
        """
        name = self.call_name(item)
        self._ctx.register_method(name)

        params, return_type = self.build_signature(item)
        key = f"'{name}'" if item.type == AbiItemType.CONSTRUCTOR else name
        return f'{self.generate_docs(item)}\n{key}{params}: {return_type};\n'

    def build_signature(self, item: AbiItem) -> Tuple[str, str]:
        """Build the `(name: Type, ...)` list and the wrapped return type."""
        return self.build_parameters(item), self.build_return_type(item)

    def build_parameters(self, item: AbiItem) -> str:
        """Build the parenthesised parameter list; tuples become request interfaces."""
        owner = self.call_name(item)
        params: List[str] = []
        for i, abi_input in enumerate(item.inputs or []):
            if abi_input is None:
                continue
            name = parameter_name(abi_input.name, i)
            if abi_input.is_tuple and abi_input.components:
                ts_type = self._definitions.expand_tuple(owner, abi_input)
            else:
                ts_type = self._type_converter.solidity_type_to_ts(abi_input.type)
            params.append(f'{name}: {ts_type}')
        return f'({", ".join(params)})'

    def build_return_type(self, item: AbiItem) -> str:
        """Build the provider shaped return type.

        No outputs wrap `void`, one output wraps its mapped type and more than
        one output wraps a registered `<Method>Response` interface.
        """
        # null placeholders keep their position for naming
        outputs = [(i, output) for i, output in enumerate(item.outputs or []) if output is not None]
        if not outputs:
            inner = 'void'
        elif len(outputs) == 1:
            inner = self._type_converter.solidity_type_to_ts(outputs[0][1].type)
        else:
            inner = self._definitions.build_response_interface(item, outputs)
        return self._provider.wrap_return_type(inner, item)

    # =========================================================================
    # DOCS
    # =========================================================================

    def generate_docs(self, item: AbiItem) -> str:
        """Generate the doc comment describing an item's flags and inputs."""
        lines = [
            '/**',
            f' * Payable: {_js_literal(item.payable)}',
            f' * Constant: {_js_literal(item.constant)}',
            f' * StateMutability: {_js_literal(item.state_mutability)}',
            f' * Type: {item.raw_type or item.type.value}',
        ]
        for i, abi_input in enumerate(item.inputs or []):
            if abi_input is None:
                continue
            lines.append(
                f' * @param {parameter_name(abi_input.name, i)} Type: {abi_input.type}, '
                f'Indexed: {_js_literal(bool(abi_input.indexed))}'
            )
        lines.append(' */')
        return '\n'.join(lines)
