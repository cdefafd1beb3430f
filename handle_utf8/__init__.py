"""Fix the encoding of nested values for internal use (input) and output to a console or the web."""

from .errors import InvalidDirection, UnsupportedValueKind
from .normalize import convert_scalar, normalize, normalize_cloned, normalize_json_bytes
from .repair import fix_latin
from .rules import Direction
from .tree import (
    Mapping,
    Scalar,
    Sequence,
    Unsupported,
    Value,
    clone_value,
    from_native,
    to_native,
)

__version__ = "0.1.0"

__all__ = [
    "normalize",
    "normalize_cloned",
    "normalize_json_bytes",
    "convert_scalar",
    "fix_latin",
    "Direction",
    "InvalidDirection",
    "UnsupportedValueKind",
    "Value",
    "Scalar",
    "Sequence",
    "Mapping",
    "Unsupported",
    "clone_value",
    "from_native",
    "to_native",
]
