#!/usr/bin/env python3
"""
Unit tests for the generation driver, formatter wrapper and watcher.

Run with: python3 -m pytest abi_typegen/test_abi2ts.py
"""

import contextlib
import io
import json
import os
import stat
import subprocess
import tempfile
import threading
import time
import unittest
from unittest import mock

from abi_typegen.abi2ts import AbiTypesGenerator, GenerationState, main
from abi_typegen.codegen import GeneratorDiagnostics
from abi_typegen.errors import (
    ConfigurationError,
    FormatterError,
    FormatterUnavailableError,
    SourceError,
)
from abi_typegen.formatter import PrettierFormatter, prettier_flags
from abi_typegen.settings import DEFAULT_PRETTIER_OPTIONS, GeneratorContext, Provider
from abi_typegen.watcher import AbiFileWatcher, Debouncer, SingleShotLatch


ERC20_ABI = [
    {
        'type': 'function',
        'name': 'balanceOf',
        'inputs': [{'name': 'owner', 'type': 'address'}],
        'outputs': [{'name': '', 'type': 'uint256'}],
        'constant': True,
        'payable': False,
        'stateMutability': 'view',
    },
    {
        'type': 'event',
        'name': 'Transfer',
        'inputs': [
            {'name': 'from', 'type': 'address', 'indexed': True},
            {'name': 'to', 'type': 'address', 'indexed': True},
            {'name': 'value', 'type': 'uint256', 'indexed': False},
        ],
    },
]


class FakeFormatter:
    """Records calls; rejects options carrying `reject`."""

    def __init__(self, unavailable=False):
        self.calls = []
        self.unavailable = unavailable

    def format(self, source, options=None, filename='typings.ts'):
        self.calls.append(dict(options or {}))
        if self.unavailable:
            raise FormatterUnavailableError('prettier could not be found on PATH')
        if options and options.get('reject'):
            raise FormatterError('Invalid option')
        return '// formatted\n' + source


class GeneratorTestCase(unittest.TestCase):

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = self._tmp.name
        self.generators = []

    def tearDown(self):
        for generator in self.generators:
            generator.stop_watching()
        self._tmp.cleanup()

    def write_abi(self, filename='erc20.json', content=None):
        path = os.path.join(self.tmp, filename)
        with open(path, 'w', encoding='utf-8') as f:
            if isinstance(content, str):
                f.write(content)
            else:
                json.dump(ERC20_ABI if content is None else content, f)
        return path

    def make_generator(self, abi_path, formatter=None, **kwargs):
        kwargs.setdefault('provider', Provider.WEB3)
        kwargs.setdefault('output_path_directory', self.tmp)
        context = GeneratorContext(abi_file_location=abi_path, **kwargs)
        generator = AbiTypesGenerator(context, formatter=formatter or FakeFormatter())
        self.generators.append(generator)
        return generator

    @staticmethod
    def read(path):
        with open(path, 'r', encoding='utf-8') as f:
            return f.read()


class TestGenerate(GeneratorTestCase):
    """Test end-to-end generation to disk."""

    def test_writes_typings(self):
        abi_path = self.write_abi()
        generator = self.make_generator(abi_path)

        response = generator.generate()

        self.assertEqual(response.output_location, os.path.join(self.tmp, 'erc20.ts'))
        self.assertEqual(response.abi_json_file_location, abi_path)
        self.assertEqual(generator.state, GenerationState.DONE)
        output = self.read(response.output_location)
        self.assertTrue(output.startswith('// formatted\n'))
        self.assertIn("export type Erc20MethodNames = 'balanceOf';", output)
        self.assertIn('balanceOf(owner: string): MethodConstantReturnContext<string>;', output)
        self.assertIn('export interface Erc20 {', output)

    def test_ethers_provider(self):
        generator = self.make_generator(self.write_abi(), provider='ethers')

        output = self.read(generator.generate().output_location)

        self.assertIn('balanceOf(owner: string): Promise<string>;', output)
        self.assertIn('Transfer(from?: string | null, to?: string | null): EventFilter;', output)

    def test_name_derived_from_file_stem(self):
        generator = self.make_generator(self.write_abi('my-token.abi.json'))

        response = generator.generate()

        self.assertEqual(os.path.basename(response.output_location), 'my-token.ts')
        output = self.read(response.output_location)
        self.assertIn('export interface MyToken {', output)
        self.assertIn("export type MyTokenMethodNames = 'balanceOf';", output)

    def test_explicit_name(self):
        generator = self.make_generator(self.write_abi(), name='token-contract')

        response = generator.generate()

        self.assertEqual(os.path.basename(response.output_location), 'token-contract.ts')
        self.assertIn('export interface TokenContract {', self.read(response.output_location))

    def test_trailing_slash_output_directory(self):
        generator = self.make_generator(self.write_abi(), output_path_directory=self.tmp + '/')

        response = generator.generate()

        self.assertEqual(response.output_location, self.tmp + '/erc20.ts')
        self.assertTrue(os.path.isfile(response.output_location))

    def test_defaults_to_abi_directory(self):
        generator = self.make_generator(self.write_abi(), output_path_directory=None)

        response = generator.generate()

        self.assertEqual(response.output_location, os.path.join(self.tmp, 'erc20.ts'))

    def test_quotes_are_stripped(self):
        abi_path = self.write_abi()
        generator = self.make_generator(f"'{abi_path}'", output_path_directory=f'"{self.tmp}"')

        response = generator.generate()

        self.assertEqual(response.abi_json_file_location, abi_path)
        self.assertTrue(os.path.isfile(response.output_location))

    def test_file_mode(self):
        response = self.make_generator(self.write_abi()).generate()

        self.assertEqual(stat.S_IMODE(os.stat(response.output_location).st_mode), 0o755)

    def test_repeated_runs_are_identical(self):
        generator = self.make_generator(self.write_abi())

        first = self.read(generator.generate().output_location)
        second = self.read(generator.generate().output_location)

        self.assertEqual(first, second)


class TestGenerateErrors(GeneratorTestCase):
    """Test fatal configuration and source errors."""

    def assert_nothing_written(self):
        self.assertEqual([f for f in os.listdir(self.tmp) if f.endswith('.ts')], [])

    def test_output_path_not_a_directory(self):
        abi_path = self.write_abi()
        generator = self.make_generator(abi_path, output_path_directory=abi_path)

        with self.assertRaises(ConfigurationError):
            generator.generate()
        self.assertEqual(generator.state, GenerationState.FAILED)
        self.assert_nothing_written()

    def test_output_path_missing(self):
        generator = self.make_generator(self.write_abi(), output_path_directory=os.path.join(self.tmp, 'nope'))

        with self.assertRaises(ConfigurationError):
            generator.generate()

    def test_provider_changed_to_unknown(self):
        generator = self.make_generator(self.write_abi())
        generator.context.provider = 'truffle'

        with self.assertRaises(ConfigurationError):
            generator.generate()
        self.assertEqual(generator.formatter.calls, [])

    def test_missing_abi_file(self):
        generator = self.make_generator(os.path.join(self.tmp, 'missing.json'))

        with self.assertRaises(SourceError):
            generator.generate()
        self.assertEqual(generator.state, GenerationState.FAILED)
        self.assert_nothing_written()

    def test_abi_not_json(self):
        generator = self.make_generator(self.write_abi(content='not json {'))

        with self.assertRaisesRegex(SourceError, 'is not a json file'):
            generator.generate()
        self.assert_nothing_written()

    def test_abi_json_object(self):
        generator = self.make_generator(self.write_abi(content={'abi': ERC20_ABI}))

        with self.assertRaises(SourceError):
            generator.generate()
        self.assertEqual(generator.formatter.calls, [])
        self.assert_nothing_written()

    def test_empty_abi(self):
        generator = self.make_generator(self.write_abi(content=[]), name='empty')

        output = self.read(generator.generate().output_location)

        self.assertIn('export type EmptyMethodNames = undefined;', output)
        self.assertIn('export type EmptyEvents = undefined;', output)


class TestFormatting(GeneratorTestCase):
    """Test formatter option handling and fallback."""

    def test_default_options(self):
        generator = self.make_generator(self.write_abi())

        generator.generate()

        self.assertEqual(generator.formatter.calls, [DEFAULT_PRETTIER_OPTIONS])

    def test_parser_is_forced(self):
        generator = self.make_generator(
            self.write_abi(), prettier_options={'parser': 'babel', 'printWidth': 100}
        )

        generator.generate()

        self.assertEqual(generator.formatter.calls, [{'parser': 'typescript', 'printWidth': 100}])

    def test_rejected_options_fall_back_to_default(self):
        generator = self.make_generator(self.write_abi(), prettier_options={'reject': True})

        response = generator.generate()

        self.assertEqual(len(generator.formatter.calls), 2)
        self.assertEqual(generator.formatter.calls[1], DEFAULT_PRETTIER_OPTIONS)
        self.assertEqual([d.code for d in generator.diagnostics.warnings], ['W001'])
        self.assertTrue(self.read(response.output_location).startswith('// formatted\n'))

    def test_unavailable_formatter_writes_unformatted(self):
        generator = self.make_generator(self.write_abi(), formatter=FakeFormatter(unavailable=True))

        response = generator.generate()

        self.assertEqual([d.code for d in generator.diagnostics.warnings], ['W002'])
        self.assertTrue(self.read(response.output_location).startswith('import BN'))


class TestPrettierFormatter(unittest.TestCase):
    """Test the prettier CLI wrapper."""

    def test_flags(self):
        flags = prettier_flags({
            'parser': 'typescript',
            'printWidth': 80,
            'singleQuote': True,
            'semi': False,
            'bracketSpacing': True,
            'trailingComma': 'es5',
        })

        self.assertEqual(flags, [
            '--parser', 'typescript',
            '--print-width', '80',
            '--single-quote',
            '--no-semi',
            '--trailing-comma', 'es5',
        ])

    @mock.patch('abi_typegen.formatter.subprocess.run')
    def test_format(self, run):
        run.return_value = subprocess.CompletedProcess([], 0, stdout='formatted', stderr='')
        formatter = PrettierFormatter(command=['prettier'])

        self.assertEqual(formatter.format('source', {'printWidth': 100}, 'erc20.ts'), 'formatted')
        cmd = run.call_args[0][0]
        self.assertEqual(cmd[:3], ['prettier', '--stdin-filepath', 'erc20.ts'])
        self.assertIn('--print-width', cmd)
        self.assertEqual(cmd[cmd.index('--parser') + 1], 'typescript')
        self.assertEqual(run.call_args[1]['input'], 'source')

    @mock.patch('abi_typegen.formatter.subprocess.run')
    def test_rejected(self, run):
        run.return_value = subprocess.CompletedProcess([], 2, stdout='', stderr='Invalid printWidth')

        with self.assertRaisesRegex(FormatterError, 'Invalid printWidth'):
            PrettierFormatter(command=['prettier']).format('source', {'printWidth': 'wide'})

    @mock.patch('abi_typegen.formatter.shutil.which', return_value=None)
    def test_unavailable(self, _which):
        with self.assertRaises(FormatterUnavailableError):
            PrettierFormatter().format('source')

    @mock.patch('abi_typegen.formatter.shutil.which')
    def test_npx_fallback(self, which):
        which.side_effect = lambda name: '/usr/bin/npx' if name == 'npx' else None

        self.assertEqual(PrettierFormatter().resolve_command(), ['/usr/bin/npx', '--no-install', 'prettier'])


class TestWatch(GeneratorTestCase):
    """Test watch registration, debouncing and change detection."""

    def test_watch_registers_once(self):
        generator = self.make_generator(self.write_abi(), watch=True)

        generator.generate()

        self.assertFalse(generator.context.watch)
        watcher = generator.watcher
        self.assertIsNotNone(watcher)
        self.assertTrue(watcher.running)
        self.assertIs(generator.watch_for_changes(), watcher)

    def test_no_watch_by_default(self):
        generator = self.make_generator(self.write_abi())

        generator.generate()

        self.assertIsNone(generator.watcher)

    def test_latch(self):
        latch = SingleShotLatch()

        self.assertTrue(latch.trip())
        self.assertFalse(latch.trip())
        self.assertTrue(latch.tripped)

    def test_debouncer_collapses_bursts(self):
        fired = []
        done = threading.Event()

        def action():
            fired.append(time.monotonic())
            done.set()

        debouncer = Debouncer(0.05, action)
        for _ in range(5):
            debouncer.trigger()

        self.assertTrue(done.wait(2))
        time.sleep(0.2)
        self.assertEqual(len(fired), 1)
        self.assertFalse(debouncer.pending)

    def test_debouncer_serializes_runs(self):
        lock = threading.Lock()
        active = [0]
        peak = [0]
        calls = []
        second_run = threading.Event()

        def slow_action():
            with lock:
                active[0] += 1
                peak[0] = max(peak[0], active[0])
            time.sleep(0.3)
            with lock:
                active[0] -= 1
                calls.append(time.monotonic())
                if len(calls) == 2:
                    second_run.set()

        debouncer = Debouncer(0.05, slow_action)
        debouncer.trigger()
        time.sleep(0.15)
        self.assertTrue(debouncer.running)
        debouncer.trigger()
        time.sleep(0.1)
        debouncer.trigger()

        self.assertTrue(second_run.wait(3))
        time.sleep(0.2)
        self.assertEqual(peak[0], 1)
        self.assertEqual(len(calls), 2)
        self.assertFalse(debouncer.running)
        self.assertFalse(debouncer.pending)

    def test_watcher_detects_change(self):
        abi_path = self.write_abi()
        changed = threading.Event()
        watcher = AbiFileWatcher(abi_path, changed.set, debounce=0.01)

        self.assertFalse(watcher.check())
        with open(abi_path, 'w', encoding='utf-8') as f:
            json.dump(ERC20_ABI + ERC20_ABI, f)

        self.assertTrue(watcher.check())
        self.assertTrue(changed.wait(2))
        self.assertFalse(watcher.check())
        watcher.stop()

    def test_regenerate_rewrites_typings(self):
        abi_path = self.write_abi()
        generator = self.make_generator(abi_path)
        response = generator.generate()

        with open(abi_path, 'w', encoding='utf-8') as f:
            json.dump(ERC20_ABI + [{'type': 'function', 'name': 'mint', 'inputs': [], 'outputs': []}], f)
        with contextlib.redirect_stdout(io.StringIO()) as out:
            generator._regenerate()

        self.assertIn('mint(): MethodReturnContext;', self.read(response.output_location))
        self.assertIn('successfully updated typings', out.getvalue())
        self.assertEqual([d.code for d in generator.diagnostics.infos][-1], 'I002')


class TestCli(GeneratorTestCase):
    """Test the command line entry point."""

    @mock.patch('abi_typegen.formatter.shutil.which', return_value=None)
    def test_main(self, _which):
        abi_path = self.write_abi()

        with contextlib.redirect_stdout(io.StringIO()) as out, \
                contextlib.redirect_stderr(io.StringIO()):
            main([abi_path, '-o', self.tmp, '-p', 'ethers', '-n', 'erc20'])

        self.assertIn('Written:', out.getvalue())
        self.assertIn('Promise<string>', self.read(os.path.join(self.tmp, 'erc20.ts')))

    def test_main_missing_abi(self):
        with contextlib.redirect_stderr(io.StringIO()) as err:
            with self.assertRaises(SystemExit) as cm:
                main([os.path.join(self.tmp, 'missing.json')])

        self.assertEqual(cm.exception.code, 1)
        self.assertIn('can not find abi file', err.getvalue())

    def test_main_bad_prettier_config(self):
        abi_path = self.write_abi()
        config = os.path.join(self.tmp, 'prettier.json')
        with open(config, 'w', encoding='utf-8') as f:
            f.write('[1, 2]')

        with contextlib.redirect_stderr(io.StringIO()) as err:
            with self.assertRaises(SystemExit):
                main([abi_path, '--prettier-config', config])

        self.assertIn('must be a json object', err.getvalue())


class TestDiagnosticsOutput(unittest.TestCase):
    """Test the printed diagnostics summary."""

    def test_print_summary(self):
        diagnostics = GeneratorDiagnostics(verbose=True)
        diagnostics.warn_formatter_options_rejected('bad option', source='erc20.json')
        buffer = io.StringIO()

        diagnostics.print_summary(file=buffer)

        self.assertIn('Generator warnings (1):', buffer.getvalue())
        self.assertIn('formatter: 1 occurrence(s)', buffer.getvalue())
        self.assertIn('(W001)', buffer.getvalue())


if __name__ == '__main__':
    unittest.main()
