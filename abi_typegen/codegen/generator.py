"""
TypeScript typings generator.

Walks the ABI items once and concatenates the declarations into a single
unit in a fixed order:

1. provider preamble
2. event names type
3. events context interface
4. method names type
5. synthesised request/response interfaces, in registration order
6. the main contract interface
"""

from typing import List, Optional

from ..abi.abi_nodes import AbiDocument, AbiItemType
from ..settings import Provider, coerce_provider
from .base import BaseGenerator
from .context import CodeGenerationContext
from .definition import DefinitionGenerator
from .diagnostics import GeneratorDiagnostics
from .function import FunctionGenerator
from .providers import provider_factory
from .type_converter import TypeConverter


class TypeScriptTypingsGenerator:
    """
    Generates the typings for one ABI.

    Every call to `generate` works on its own CodeGenerationContext, so
    repeated or concurrent runs never share accumulated declarations.
    """

    def __init__(
        self,
        abi_name: str,
        provider: Provider,
        diagnostics: Optional[GeneratorDiagnostics] = None,
        source: str = '',
    ):
        """
        Initialize the generator.

        Args:
            abi_name: Formatted name used for the main interface and as type prefix
            provider: Provider convention to shape methods and events for
            diagnostics: Collector for degradations; one is created if omitted
            source: Label for diagnostics (usually the ABI path)
        """
        self.abi_name = abi_name
        self.provider = coerce_provider(provider)
        self.diagnostics = diagnostics or GeneratorDiagnostics()
        self.source = source

    def generate(self, document: AbiDocument) -> str:
        """Generate the unformatted typings for `document`."""
        ctx = CodeGenerationContext(
            abi_name=self.abi_name,
            provider=self.provider,
            source=self.source,
            _diagnostics=self.diagnostics,
        )
        try:
            return self._generate(ctx, document)
        finally:
            ctx.reset()

    def _generate(self, ctx: CodeGenerationContext, document: AbiDocument) -> str:
        type_converter = TypeConverter(ctx)
        definitions = DefinitionGenerator(ctx, type_converter)
        provider = provider_factory(ctx.provider, ctx, type_converter)
        functions = FunctionGenerator(ctx, type_converter, definitions, provider)
        emitter = BaseGenerator(ctx)

        properties: List[str] = []
        for item in document:
            if item.type in (AbiItemType.CONSTRUCTOR, AbiItemType.FUNCTION):
                properties.append(functions.generate_property(item))
            elif item.type == AbiItemType.EVENT:
                ctx.register_event(item.name)

        # Built before concatenation so every auxiliary interface is registered
        main_interface = emitter.build_interface(self.abi_name, properties)

        sections = [
            provider.build_provider_preamble(self.abi_name),
            emitter.build_type(f'{self.abi_name}Events', ctx.event_names),
            emitter.build_interface(
                f'{self.abi_name}EventsContext',
                provider.build_event_properties(document.events),
            ),
            emitter.build_type(f'{self.abi_name}MethodNames', ctx.method_names),
            *ctx.auxiliary_interfaces,
            main_interface,
        ]
        return '\n'.join(sections)
