"""
Data model for contract ABI declarations.

This module contains the dataclasses representing the items of a JSON ABI:
constructors, functions and events together with their typed inputs and
outputs. Items are built once from the parsed JSON and not mutated afterwards.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from ..errors import SourceError


# The composite (struct) type tag
TUPLE_TYPE = 'tuple'


class AbiItemType(Enum):
    """Variant tag of an ABI item."""
    CONSTRUCTOR = 'constructor'
    FUNCTION = 'function'
    EVENT = 'event'
    FALLBACK = 'fallback'
    RECEIVE = 'receive'
    ERROR = 'error'
    UNKNOWN = 'unknown'

    @classmethod
    def from_tag(cls, tag: Optional[str]) -> 'AbiItemType':
        try:
            return cls(tag)
        except ValueError:
            return cls.UNKNOWN


def _text_field(data: Dict[str, Any], key: str) -> str:
    value = data.get(key)
    if value is None:
        return ''
    if not isinstance(value, str):
        raise SourceError(f'field "{key}" must be a string, got {type(value).__name__}')
    return value


def _list_field(data: Dict[str, Any], key: str) -> Optional[list]:
    value = data.get(key)
    if value is not None and not isinstance(value, list):
        raise SourceError(f'field "{key}" must be a list, got {type(value).__name__}')
    return value


# =============================================================================
# PARAMETERS
# =============================================================================

@dataclass
class AbiInput:
    """A typed input of a constructor, function or event."""
    name: str
    type: str
    indexed: Optional[bool] = None
    components: Optional[List['AbiInput']] = None

    @property
    def is_tuple(self) -> bool:
        """True for `tuple` and arrays of tuples (`tuple[]`, `tuple[2]`)."""
        return self.type == TUPLE_TYPE or self.type.startswith(TUPLE_TYPE + '[')

    @property
    def array_suffix(self) -> str:
        """The array brackets following a tuple tag, e.g. `[]` for `tuple[]`."""
        if self.type.startswith(TUPLE_TYPE + '['):
            return self.type[len(TUPLE_TYPE):]
        return ''

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'AbiInput':
        components = _list_field(data, 'components')
        return cls(
            name=_text_field(data, 'name'),
            type=_text_field(data, 'type'),
            indexed=data.get('indexed'),
            components=[cls.from_dict(c) for c in components if isinstance(c, dict)]
            if components is not None else None,
        )


@dataclass
class AbiOutput(AbiInput):
    """A typed output of a function. Shares the input shape."""
    pass


def _parse_params(param_cls, params):
    """Parse a parameter list, keeping a None placeholder for null entries."""
    if params is None:
        return None
    return [param_cls.from_dict(p) if isinstance(p, dict) else None for p in params]


# =============================================================================
# ITEMS
# =============================================================================

@dataclass
class AbiItem:
    """One declaration of the ABI."""
    type: AbiItemType
    name: str = ''
    inputs: Optional[List[Optional[AbiInput]]] = None
    outputs: Optional[List[Optional[AbiOutput]]] = None
    payable: Optional[bool] = None
    constant: Optional[bool] = None
    state_mutability: Optional[str] = None
    raw_type: str = ''

    @property
    def is_constant(self) -> bool:
        """True when calling the item never changes state."""
        return self.constant is True or self.state_mutability in ('view', 'pure')

    @property
    def is_payable(self) -> bool:
        """True when the item accepts value."""
        return self.payable is True or self.state_mutability == 'payable'

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'AbiItem':
        inputs = _list_field(data, 'inputs')
        outputs = _list_field(data, 'outputs')
        raw_type = _text_field(data, 'type')
        return cls(
            type=AbiItemType.from_tag(raw_type),
            name=_text_field(data, 'name'),
            inputs=_parse_params(AbiInput, inputs),
            outputs=_parse_params(AbiOutput, outputs),
            payable=data.get('payable'),
            constant=data.get('constant'),
            state_mutability=_text_field(data, 'stateMutability') or None,
            raw_type=raw_type,
        )


@dataclass
class AbiDocument:
    """The full ordered sequence of items read from one ABI source."""
    items: List[AbiItem] = field(default_factory=list)

    @property
    def events(self) -> List[AbiItem]:
        return [item for item in self.items if item.type == AbiItemType.EVENT]

    def __iter__(self):
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)
