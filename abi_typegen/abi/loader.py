"""
Reads a JSON ABI file into AbiItem objects.
"""

import json
from pathlib import Path
from typing import Any, List, Union

from ..errors import SourceError
from .abi_nodes import AbiDocument, AbiItem


class AbiLoader:
    """Loads and parses ABI JSON from disk or from an already decoded value."""

    def load(self, path: Union[str, Path]) -> AbiDocument:
        """
        Read the ABI file at `path`.

        Raises:
            SourceError: if the file does not exist or is not a JSON ABI array
        """
        abi_path = Path(path)
        if not abi_path.is_file():
            raise SourceError(f'can not find abi file {abi_path}')

        try:
            with open(abi_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError):
            raise SourceError(
                f'Abi file {abi_path} is not a json file. Abi must be a json file.'
            ) from None

        return self.parse(data, source=str(abi_path))

    def parse(self, data: Any, source: str = '<abi>') -> AbiDocument:
        """Build an AbiDocument from decoded JSON."""
        if not isinstance(data, list):
            raise SourceError(
                f'Abi file {source} is not a json abi. Abi must be a json array of items.'
            )

        items: List[AbiItem] = []
        for index, entry in enumerate(data):
            if not isinstance(entry, dict):
                raise SourceError(
                    f'Abi file {source} has an invalid item at index {index}; '
                    f'expected an object'
                )
            try:
                items.append(AbiItem.from_dict(entry))
            except SourceError as e:
                raise SourceError(
                    f'Abi file {source} has an invalid item at index {index}: {e}'
                ) from None
        return AbiDocument(items)

    def loads(self, text: str, source: str = '<abi>') -> AbiDocument:
        """Parse ABI JSON text."""
        try:
            data = json.loads(text)
        except json.JSONDecodeError:
            raise SourceError(
                f'Abi file {source} is not a json file. Abi must be a json file.'
            ) from None
        return self.parse(data, source=source)
