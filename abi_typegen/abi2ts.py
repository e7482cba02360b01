#!/usr/bin/env python3
"""
Contract ABI to TypeScript typings generator

Reads a JSON ABI and writes a `.ts` file declaring a typed interface for the
contract's methods and events, shaped for either the web3 or the ethers
client library.

Usage:
    python -m abi_typegen.abi2ts ./abi/erc20.json --provider ethers -o ./src/types/

A run moves through these states:
    IDLE -> VALIDATING -> LOADING -> BUILDING -> FORMATTING -> WRITING -> DONE
Any fatal error moves it to FAILED and is re-raised to the caller.
"""

import json
import os
import sys
import time
from enum import Enum
from typing import List, Optional

from .abi import AbiLoader
from .codegen import GeneratorDiagnostics, TypeScriptTypingsGenerator
from .codegen.naming import derive_root_name, sanitize_name
from .errors import AbiTypegenError, ConfigurationError, FormatterError, FormatterUnavailableError
from .formatter import PrettierFormatter
from .settings import (
    GenerateResponse,
    GeneratorContext,
    Provider,
    coerce_provider,
    default_prettier_options,
    resolve_prettier_options,
)
from .watcher import AbiFileWatcher, SingleShotLatch


class GenerationState(Enum):
    """Where a generation run currently is."""
    IDLE = 'idle'
    VALIDATING = 'validating'
    LOADING = 'loading'
    BUILDING = 'building'
    FORMATTING = 'formatting'
    WRITING = 'writing'
    DONE = 'done'
    FAILED = 'failed'


class AbiTypesGenerator:
    """Main generator class that orchestrates one ABI to typings conversion."""

    def __init__(
        self,
        context: GeneratorContext,
        formatter: Optional[PrettierFormatter] = None,
        diagnostics: Optional[GeneratorDiagnostics] = None,
        loader: Optional[AbiLoader] = None,
        watch_debounce: float = 0.1,
    ):
        self._context = context
        self.formatter = formatter or PrettierFormatter()
        self.diagnostics = diagnostics or GeneratorDiagnostics()
        self.loader = loader or AbiLoader()
        self.watch_debounce = watch_debounce
        self.state = GenerationState.IDLE
        self.watcher: Optional[AbiFileWatcher] = None
        self._watch_latch = SingleShotLatch()

    @property
    def context(self) -> GeneratorContext:
        return self._context

    def generate(self) -> GenerateResponse:
        """Generate the typings and write them to disk.

        Returns:
            Where the typings were written and which ABI file was read

        Raises:
            ConfigurationError: unknown provider or output path not a directory
            SourceError: ABI file missing or not a JSON ABI
        """
        try:
            response = self._generate()
        except Exception:
            self.state = GenerationState.FAILED
            raise

        if self._context.watch:
            self.watch_for_changes()

        return response

    def _generate(self) -> GenerateResponse:
        self.state = GenerationState.VALIDATING
        self._context.clear_quotes()
        self._context.provider = coerce_provider(self._context.provider)
        if not os.path.isdir(self.get_output_path_directory()):
            raise ConfigurationError('output path must be a directory')

        self.state = GenerationState.LOADING
        abi_path = self.get_abi_file_full_path_location()
        document = self.loader.load(abi_path)

        self.state = GenerationState.BUILDING
        generator = TypeScriptTypingsGenerator(
            self.get_abi_name(),
            self._context.provider,
            diagnostics=self.diagnostics,
            source=abi_path,
        )
        typings = generator.generate(document)

        self.state = GenerationState.FORMATTING
        output_location = self.build_output_location()
        formatted = self.format_typings(typings, os.path.basename(output_location))

        self.state = GenerationState.WRITING
        self.write_output(output_location, formatted)

        self.state = GenerationState.DONE
        return GenerateResponse(
            output_location=output_location,
            abi_json_file_location=abi_path,
        )

    # =========================================================================
    # FORMATTING AND OUTPUT
    # =========================================================================

    def format_typings(self, typings: str, filename: str = 'typings.ts') -> str:
        """Format with the configured options, retrying once with the defaults."""
        source = self.get_abi_file_full_path_location()
        try:
            return self.formatter.format(
                typings, resolve_prettier_options(self._context.prettier_options), filename
            )
        except FormatterUnavailableError as e:
            self.diagnostics.warn_formatter_unavailable(str(e), source=source)
            return typings
        except FormatterError as e:
            # users probably did not supply valid prettier options
            self.diagnostics.warn_formatter_options_rejected(str(e), source=source)

        return self.formatter.format(typings, default_prettier_options(), filename)

    def write_output(self, output_location: str, content: str) -> None:
        with open(output_location, 'w', encoding='utf-8') as f:
            f.write(content)
        os.chmod(output_location, 0o755)

    def build_output_location(self) -> str:
        name = self._context.name or self.get_abi_file_location_raw_name()
        output_directory = self.get_output_path_directory()

        if output_directory.endswith('/'):
            return f'{output_directory}{name}.ts'

        return self.build_executing_path(f'{output_directory}/{name}.ts')

    # =========================================================================
    # PATHS AND NAMES
    # =========================================================================

    def build_executing_path(self, join_path: str) -> str:
        """Resolve a path against the current working directory."""
        return os.path.abspath(os.path.join(os.getcwd(), join_path))

    def get_abi_file_full_path_location(self) -> str:
        return self.build_executing_path(self._context.abi_file_location)

    def get_output_path_directory(self) -> str:
        if self._context.output_path_directory:
            return self._context.output_path_directory
        return os.path.dirname(self.get_abi_file_full_path_location())

    def get_abi_file_location_raw_name(self) -> str:
        return derive_root_name(self._context.abi_file_location)

    def get_abi_name(self) -> str:
        """The type prefix: explicit name or file stem, in PascalCase."""
        return sanitize_name(self._context.name or self.get_abi_file_location_raw_name())

    # =========================================================================
    # WATCH
    # =========================================================================

    def watch_for_changes(self) -> AbiFileWatcher:
        """Start regenerating whenever the ABI file changes. Only the first call registers."""
        # no more watches once the first one is registered
        self._context.watch = False
        if self._watch_latch.trip():
            self.watcher = AbiFileWatcher(
                self.get_abi_file_full_path_location(),
                self._regenerate,
                debounce=self.watch_debounce,
            )
            self.watcher.start()
        return self.watcher

    def _regenerate(self) -> None:
        abi_path = self.get_abi_file_full_path_location()
        try:
            response = self.generate()
        except AbiTypegenError as e:
            print(f'Error regenerating typings for {abi_path}: {e}', file=sys.stderr)
            return

        self.diagnostics.info_regenerated(abi_path, response.output_location)
        print(
            f'successfully updated typings for abi file {abi_path} '
            f'saved in {response.output_location}'
        )

    def stop_watching(self) -> None:
        if self.watcher is not None:
            self.watcher.stop()


# =============================================================================
# CLI INTERFACE
# =============================================================================

def load_prettier_config(path: str) -> dict:
    """Read prettier options from a JSON file."""
    try:
        with open(path, 'r', encoding='utf-8') as f:
            options = json.load(f)
    except FileNotFoundError:
        raise ConfigurationError(f'can not find prettier config {path}') from None
    except json.JSONDecodeError as e:
        raise ConfigurationError(f'prettier config {path} is not valid json: {e}') from None
    if not isinstance(options, dict):
        raise ConfigurationError(f'prettier config {path} must be a json object')
    return options


def main(argv: Optional[List[str]] = None):
    import argparse

    parser = argparse.ArgumentParser(description='Contract ABI to TypeScript typings generator')
    parser.add_argument('abi', help='Path to the ABI JSON file')
    parser.add_argument('-o', '--output', help='Output directory (defaults to the ABI directory)')
    parser.add_argument('-n', '--name', help='Output file name and type prefix')
    parser.add_argument('-p', '--provider', default=Provider.WEB3.value,
                        choices=[p.value for p in Provider],
                        help='Client library the typings target')
    parser.add_argument('--prettier-config', metavar='FILE',
                        help='JSON file with prettier options')
    parser.add_argument('--watch', action='store_true',
                        help='Regenerate whenever the ABI file changes')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Print every diagnostic')

    args = parser.parse_args(argv)

    diagnostics = GeneratorDiagnostics(verbose=args.verbose)
    try:
        context = GeneratorContext(
            abi_file_location=args.abi,
            provider=args.provider,
            name=args.name,
            output_path_directory=args.output,
            prettier_options=load_prettier_config(args.prettier_config) if args.prettier_config else None,
            watch=args.watch,
        )
        generator = AbiTypesGenerator(context, diagnostics=diagnostics)
        response = generator.generate()
    except AbiTypegenError as e:
        print(f'Error: {e}', file=sys.stderr)
        sys.exit(1)

    print(f'Written: {response.output_location}')
    diagnostics.print_summary()

    if generator.watcher is not None:
        print(f'Watching {response.abi_json_file_location} for changes (Ctrl+C to stop)')
        try:
            while True:
                time.sleep(1)
        except KeyboardInterrupt:
            generator.stop_watching()


if __name__ == '__main__':
    main()
