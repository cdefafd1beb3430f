"""Value tree model: scalars, sequences, mappings and unsupported nodes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator, Union

# Non-text leaves are carried through unchanged.
ScalarData = Union[str, bytes, int, float, bool, None]


# ---------------------------------------------------------------------------
# Value variants
# ---------------------------------------------------------------------------

@dataclass(slots=True)
class Scalar:
    data: ScalarData


@dataclass(slots=True)
class Sequence:
    items: list[Value] = field(default_factory=list)


@dataclass(slots=True)
class Mapping:
    entries: dict[str, Value] = field(default_factory=dict)


@dataclass(slots=True)
class Unsupported:
    payload: Any
    tag: str


Value = Union[Scalar, Sequence, Mapping, Unsupported]

_SCALAR_TYPES = (str, bytes, int, float, bool, type(None))


# ---------------------------------------------------------------------------
# Structural copy
# ---------------------------------------------------------------------------

def clone_value(value: Value) -> Value:
    """
    Deep structural copy: every Scalar, Sequence and Mapping node and every
    list/dict container is new. Unsupported payloads are opaque and shared.
    """
    if isinstance(value, Scalar):
        return Scalar(value.data)
    if isinstance(value, Sequence):
        return Sequence([clone_value(item) for item in value.items])
    if isinstance(value, Mapping):
        return Mapping({key: clone_value(item) for key, item in value.entries.items()})
    if isinstance(value, Unsupported):
        return Unsupported(value.payload, value.tag)
    # Not a tree node at all; left as-is for the walker to report.
    return value


def iter_scalars(value: Value) -> Iterator[Scalar]:
    if isinstance(value, Scalar):
        yield value
    elif isinstance(value, Sequence):
        for item in value.items:
            yield from iter_scalars(item)
    elif isinstance(value, Mapping):
        for item in value.entries.values():
            yield from iter_scalars(item)


# ---------------------------------------------------------------------------
# Plain Python data <-> Value
# ---------------------------------------------------------------------------

def from_native(obj: Any) -> Value:
    """Wrap plain Python data (as produced by e.g. json.loads) into a tree."""
    if isinstance(obj, bytearray):
        return Scalar(bytes(obj))
    if isinstance(obj, _SCALAR_TYPES):
        return Scalar(obj)
    if isinstance(obj, list):
        return Sequence([from_native(item) for item in obj])
    if isinstance(obj, dict) and all(isinstance(key, str) for key in obj):
        return Mapping({key: from_native(item) for key, item in obj.items()})
    return Unsupported(obj, type(obj).__name__)


def to_native(value: Value) -> Any:
    if isinstance(value, Scalar):
        return value.data
    if isinstance(value, Sequence):
        return [to_native(item) for item in value.items]
    if isinstance(value, Mapping):
        return {key: to_native(item) for key, item in value.entries.items()}
    if isinstance(value, Unsupported):
        return value.payload
    return value
