"""
Prettier wrapper used to format the generated typings.

Runs the prettier CLI over stdin. Options use prettier's own (camelCase)
option names and are translated to command line flags.
"""

import re
import shutil
import subprocess
from typing import Any, Dict, List, Optional

from .errors import FormatterError, FormatterUnavailableError
from .settings import resolve_prettier_options


def _to_flag(option: str) -> str:
    """`printWidth` -> `--print-width`."""
    return '--' + re.sub(r'(?<!^)(?=[A-Z])', '-', option).lower()


# Boolean options prettier only exposes as `--no-<flag>`
TRUE_BY_DEFAULT = {'semi', 'bracketSpacing'}


def prettier_flags(options: Dict[str, Any]) -> List[str]:
    """Translate a prettier options dict to CLI flags."""
    flags: List[str] = []
    for option, value in options.items():
        if value is None or (value is True and option in TRUE_BY_DEFAULT):
            continue
        flag = _to_flag(option)
        if value is True:
            flags.append(flag)
        elif value is False:
            flags.append('--no-' + flag[2:])
        else:
            flags.extend([flag, str(value)])
    return flags


class PrettierFormatter:
    """Formats TypeScript source with the prettier CLI."""

    def __init__(self, command: Optional[List[str]] = None, timeout: float = 60.0):
        """
        Args:
            command: Command prefix to run prettier; located on PATH if omitted
            timeout: Seconds to wait for a single prettier run
        """
        self._command = command
        self.timeout = timeout

    def resolve_command(self) -> List[str]:
        """Find a prettier executable, preferring a global install over npx."""
        if self._command:
            return list(self._command)
        prettier = shutil.which('prettier')
        if prettier:
            return [prettier]
        npx = shutil.which('npx')
        if npx:
            return [npx, '--no-install', 'prettier']
        raise FormatterUnavailableError('prettier could not be found on PATH')

    def format(self, source: str, options: Optional[Dict[str, Any]] = None,
               filename: str = 'typings.ts') -> str:
        """Format `source`; the parser is always typescript.

        Raises:
            FormatterUnavailableError: if prettier cannot be run
            FormatterError: if prettier rejects the options or the source
        """
        cmd = self.resolve_command() + ['--stdin-filepath', filename]
        cmd += prettier_flags(resolve_prettier_options(options))

        try:
            result = subprocess.run(
                cmd,
                input=source,
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except FileNotFoundError as e:
            raise FormatterUnavailableError(str(e)) from e
        except subprocess.TimeoutExpired:
            raise FormatterError(f'prettier timed out after {self.timeout}s') from None

        if result.returncode != 0:
            raise FormatterError(result.stderr.strip() or f'prettier exited with {result.returncode}')
        return result.stdout
