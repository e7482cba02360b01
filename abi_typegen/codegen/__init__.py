"""
Code generation module for the ABI typings generator.

This module provides TypeScript typings generation from ABI items.
"""

from .context import CodeGenerationContext, CONSTRUCTOR_METHOD_NAME
from .base import BaseGenerator
from .type_converter import TypeConverter
from .definition import DefinitionGenerator, MAX_TUPLE_DEPTH
from .function import FunctionGenerator
from .providers import Web3Factory, EthersFactory, provider_factory
from .generator import TypeScriptTypingsGenerator
from .diagnostics import GeneratorDiagnostics, Diagnostic, DiagnosticSeverity
from . import naming

__all__ = [
    'CodeGenerationContext',
    'CONSTRUCTOR_METHOD_NAME',
    'BaseGenerator',
    'TypeConverter',
    'DefinitionGenerator',
    'MAX_TUPLE_DEPTH',
    'FunctionGenerator',
    'Web3Factory',
    'EthersFactory',
    'provider_factory',
    'TypeScriptTypingsGenerator',
    'GeneratorDiagnostics',
    'Diagnostic',
    'DiagnosticSeverity',
    'naming',
]
