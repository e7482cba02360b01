"""
Contract ABI to TypeScript typings generator

This package turns a JSON contract ABI into TypeScript declarations for the
web3 or ethers client libraries.

Module Structure:
- abi/: ABI data model and JSON loader (AbiItem, AbiInput, AbiLoader)
- type_system/: Solidity type tag to TypeScript mappings
- codegen/: Typings generation (TypeScriptTypingsGenerator and helpers)
- formatter.py: prettier wrapper
- watcher.py: ABI file watching with debounce
- abi2ts.py: Run orchestration and CLI

Usage:
    from abi_typegen import AbiTypesGenerator, GeneratorContext

    context = GeneratorContext('./abi/erc20.json', provider='ethers')
    response = AbiTypesGenerator(context).generate()
"""

# Re-export main classes for convenience
from .abi2ts import AbiTypesGenerator, GenerationState
from .abi import AbiLoader, AbiItem, AbiInput, AbiOutput, AbiItemType
from .codegen import TypeScriptTypingsGenerator, GeneratorDiagnostics
from .errors import (
    AbiTypegenError,
    ConfigurationError,
    SourceError,
    FormatterError,
    FormatterUnavailableError,
)
from .settings import GeneratorContext, GenerateResponse, Provider

__all__ = [
    'AbiTypesGenerator',
    'GenerationState',
    'AbiLoader',
    'AbiItem',
    'AbiInput',
    'AbiOutput',
    'AbiItemType',
    'TypeScriptTypingsGenerator',
    'GeneratorDiagnostics',
    'AbiTypegenError',
    'ConfigurationError',
    'SourceError',
    'FormatterError',
    'FormatterUnavailableError',
    'GeneratorContext',
    'GenerateResponse',
    'Provider',
]
