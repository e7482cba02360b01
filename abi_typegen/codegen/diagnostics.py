"""
Diagnostic/warning system for the typings generator.

Collects and reports degradations that happened during a run: formatter
fallbacks, unknown ABI type tags that were typed as `any`, composite types
nested past the expansion limit. None of these abort generation.
"""

import sys
from dataclasses import dataclass
from enum import Enum
from typing import List


class DiagnosticSeverity(Enum):
    """Severity levels for generator diagnostics."""
    WARNING = 'warning'
    INFO = 'info'


@dataclass
class Diagnostic:
    """A single diagnostic message."""
    severity: DiagnosticSeverity
    code: str
    message: str
    source: str = ''
    construct: str = ''  # e.g., 'formatter', 'type', 'tuple'

    def __str__(self) -> str:
        if self.source:
            return f'[{self.severity.value}] {self.source}: {self.message} ({self.code})'
        return f'[{self.severity.value}] {self.message} ({self.code})'


class GeneratorDiagnostics:
    """
    Collects generator warnings/diagnostics during a run.

    Usage:
        diag = GeneratorDiagnostics()
        diag.warn_formatter_options_rejected("invalid printWidth")
        # ... after generation ...
        diag.print_summary()
    """

    def __init__(self, verbose: bool = False):
        self._diagnostics: List[Diagnostic] = []
        self._verbose = verbose

    @property
    def diagnostics(self) -> List[Diagnostic]:
        """Get all collected diagnostics."""
        return list(self._diagnostics)

    @property
    def warnings(self) -> List[Diagnostic]:
        """Get only warning-level diagnostics."""
        return [d for d in self._diagnostics if d.severity == DiagnosticSeverity.WARNING]

    @property
    def infos(self) -> List[Diagnostic]:
        """Get only info-level diagnostics."""
        return [d for d in self._diagnostics if d.severity == DiagnosticSeverity.INFO]

    @property
    def count(self) -> int:
        """Get total diagnostic count."""
        return len(self._diagnostics)

    def clear(self) -> None:
        """Clear all diagnostics."""
        self._diagnostics.clear()

    # =========================================================================
    # SPECIFIC WARNING METHODS
    # =========================================================================

    def warn_formatter_options_rejected(self, error: str, source: str = '') -> None:
        """Warn that the supplied prettier options were rejected."""
        self._diagnostics.append(Diagnostic(
            severity=DiagnosticSeverity.WARNING,
            code='W001',
            message='Your prettier options were not valid so falling back to default one. '
                    f'({error})',
            source=source,
            construct='formatter',
        ))

    def warn_formatter_unavailable(self, error: str, source: str = '') -> None:
        """Warn that no formatter could be run and the output is unformatted."""
        self._diagnostics.append(Diagnostic(
            severity=DiagnosticSeverity.WARNING,
            code='W002',
            message=f'Typings were written unformatted: {error}',
            source=source,
            construct='formatter',
        ))

    def warn_tuple_depth_exceeded(self, owner_name: str, depth: int, source: str = '') -> None:
        """Warn that a nested composite was typed as `any`."""
        self._diagnostics.append(Diagnostic(
            severity=DiagnosticSeverity.WARNING,
            code='W003',
            message=f'Tuple "{owner_name}" is nested deeper than {depth} levels; '
                    f'typed as any.',
            source=source,
            construct='tuple',
        ))

    def info_unknown_type(self, type_tag: str, source: str = '') -> None:
        """Info that an unrecognised type tag was typed as `any`."""
        self._diagnostics.append(Diagnostic(
            severity=DiagnosticSeverity.INFO,
            code='I001',
            message=f'Unknown abi type "{type_tag}" typed as any',
            source=source,
            construct='type',
        ))

    def info_regenerated(self, abi_path: str, output_location: str) -> None:
        """Info that watch mode regenerated the typings."""
        self._diagnostics.append(Diagnostic(
            severity=DiagnosticSeverity.INFO,
            code='I002',
            message=f'successfully updated typings for abi file {abi_path} '
                    f'saved in {output_location}',
            source=abi_path,
            construct='watch',
        ))

    # =========================================================================
    # REPORTING
    # =========================================================================

    def print_summary(self, file=None) -> None:
        """Print a summary of all diagnostics to stderr (or specified file)."""
        if file is None:
            file = sys.stderr

        if not self._diagnostics:
            return

        warnings = self.warnings
        infos = self.infos

        if warnings:
            print(f'\nGenerator warnings ({len(warnings)}):', file=file)
            by_construct: dict = {}
            for w in warnings:
                by_construct.setdefault(w.construct or 'other', []).append(w)

            for construct, diags in sorted(by_construct.items()):
                print(f'  {construct}: {len(diags)} occurrence(s)', file=file)
                if self._verbose:
                    for d in diags:
                        print(f'    {d}', file=file)

        if infos and self._verbose:
            print(f'\nGenerator info ({len(infos)}):', file=file)
            for d in infos:
                print(f'  {d}', file=file)

    def get_summary(self) -> str:
        """Get a summary string of all warnings."""
        warnings = self.warnings
        if not warnings:
            return 'No generator warnings.'

        by_construct: dict = {}
        for w in warnings:
            key = w.construct or 'other'
            by_construct[key] = by_construct.get(key, 0) + 1

        parts = [f'{count} {construct}' for construct, count in sorted(by_construct.items())]
        return f'Generator warnings: {", ".join(parts)}'
