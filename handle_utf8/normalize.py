"""
Core normalization logic.

Responsibilities:
- per-leaf mixed-encoding repair (see repair.py)
- direction-aware conversion between internal text and external UTF-8 bytes
- in-place recursive walk over sequences and mappings
- clone-then-transform entry point
- whole JSON document normalization + report for the HTTP service
"""

from __future__ import annotations

import base64
import hashlib
import json
import logging
import warnings
from typing import Any, Dict

from charset_normalizer import from_bytes

from .errors import UnsupportedValueKind
from .repair import fix_latin, is_utf8
from .rules import TARGET_ENCODING, Direction
from .tree import (
    Mapping,
    Scalar,
    ScalarData,
    Sequence,
    Unsupported,
    Value,
    clone_value,
    from_native,
    iter_scalars,
    to_native,
)

logger = logging.getLogger(__name__)


def _encode_text(text: str) -> bytes:
    try:
        return text.encode(TARGET_ENCODING, errors="surrogateescape")
    except UnicodeEncodeError:
        # Surrogates outside the escape range cannot be restored to bytes.
        return text.encode(TARGET_ENCODING, errors="surrogatepass")


def convert_scalar(direction: Direction, data: ScalarData) -> ScalarData:
    """
    Convert one leaf between internal text (str) and external UTF-8 bytes.

    Idempotent: str stays str for INPUT, bytes stay bytes for OUTPUT.
    Bytes that are not valid UTF-8 are left as bytes for INPUT.
    """
    if direction is Direction.OUTPUT:
        if isinstance(data, str):
            return _encode_text(data)
        return data

    if isinstance(data, bytes):
        try:
            return data.decode(TARGET_ENCODING)
        except UnicodeDecodeError as exc:
            logger.debug("leaving undecodable bytes as-is: %s", exc)
    return data


def _walk(direction: Direction, value: Value, skip_repair: bool) -> None:
    if isinstance(value, Scalar):
        data = value.data
        if not skip_repair:
            data = fix_latin(data)
        value.data = convert_scalar(direction, data)
    elif isinstance(value, Sequence):
        for item in value.items:
            _walk(direction, item, skip_repair)
    elif isinstance(value, Mapping):
        for item in value.entries.values():
            _walk(direction, item, skip_repair)
    else:
        tag = value.tag if isinstance(value, Unsupported) else type(value).__name__
        logger.warning("unsupported value kind '%s' left unmodified", tag)
        warnings.warn(UnsupportedValueKind(tag), stacklevel=3)


def normalize(direction: Direction | str, value: Value, skip_repair: bool = False) -> Value:
    """
    Fix the encoding of every leaf of ``value`` in place and return it.

    ``direction`` is ``"input"`` (decode external bytes to text) or
    ``"output"`` (encode text to UTF-8 bytes). Unless ``skip_repair`` is
    set, every leaf is first passed through ``fix_latin``.

    Raises InvalidDirection before anything is touched. The tree must be
    acyclic.

    Nodes that are not Scalar, Sequence or Mapping (including plain Python
    objects passed without ``from_native``) are left unmodified. Each one is
    logged at WARNING; the UnsupportedValueKind warning is subject to the
    active warnings filter, which may collapse repeats with the same tag.
    """
    direction = Direction.parse(direction)
    _walk(direction, value, skip_repair)
    return value


def normalize_cloned(direction: Direction | str, value: Value, skip_repair: bool = False) -> Value:
    """Same as ``normalize`` but transforms and returns a deep copy."""
    direction = Direction.parse(direction)
    cloned = clone_value(value)
    _walk(direction, cloned, skip_repair)
    return cloned


# ---------------------------------------------------------------------------
# JSON documents
# ---------------------------------------------------------------------------

def _sha256_hex(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


def _restore_raw_leaves(tree: Value) -> None:
    # Text leaves were decoded with surrogateescape; turn them back into the
    # bytes that were actually uploaded.
    for leaf in iter_scalars(tree):
        if isinstance(leaf.data, str):
            leaf.data = _encode_text(leaf.data)


def normalize_json_bytes(
    raw: bytes,
    direction: Direction | str = Direction.INPUT,
    skip_repair: bool = False,
) -> Dict[str, Any]:
    """
    Normalize every string value of a JSON document given as raw bytes.

    Returns a dict matching the API's response envelope. Raises
    InvalidDirection for a bad direction and ValueError when the body is
    not JSON.
    """
    direction = Direction.parse(direction)
    warning_items: list[dict] = []
    errors: list[dict] = []

    detected = None
    match = from_bytes(raw).best()
    if match is not None:
        detected = match.encoding

    text = raw.decode(TARGET_ENCODING, errors="surrogateescape")
    if text.startswith("\ufeff"):
        text = text[1:]
    document = json.loads(text)

    source = from_native(document)
    _restore_raw_leaves(source)

    leaves = 0
    repaired = 0
    for leaf in iter_scalars(source):
        if isinstance(leaf.data, bytes):
            leaves += 1
            if not skip_repair and not is_utf8(leaf.data):
                repaired += 1

    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always", UnsupportedValueKind)
        result = normalize_cloned(direction, source, skip_repair=skip_repair)

    for w in caught:
        if isinstance(w.message, UnsupportedValueKind):
            warning_items.append({
                "leaf": None,
                "issue": "unsupported_value_kind",
                "value": w.message.tag,
                "action": "left_unmodified",
            })

    for index, leaf in enumerate(iter_scalars(result)):
        if isinstance(leaf.data, bytes):
            if not is_utf8(leaf.data):
                warning_items.append({
                    "leaf": index,
                    "issue": "leaf_not_utf8",
                    "value": leaf.data.decode(TARGET_ENCODING, errors="backslashreplace"),
                    "action": "replaced_invalid_bytes",
                })
            leaf.data = leaf.data.decode(TARGET_ENCODING, errors="replace")

    out_text = json.dumps(to_native(result), ensure_ascii=False, sort_keys=False)
    normalized = _encode_text(out_text)

    report = {
        "encoding": {
            "detected": detected,
            "direction": direction.value,
            "repair": not skip_repair,
            "output": TARGET_ENCODING,
            "notes": "Detected encoding is informational; leaves are repaired as UTF-8 mixed with Latin-1.",
        },
    }

    b64 = base64.b64encode(normalized).decode("ascii")
    return {
        "normalized_json": {
            "sha256": _sha256_hex(normalized),
            "encoding": TARGET_ENCODING,
            "content_b64": b64,
        },
        "report": {
            "summary": {
                "leaves": leaves,
                "repaired": repaired,
                "warnings": len(warning_items),
                "errors": len(errors),
                "deterministic": True,
            },
            "normalizations": report,
            "warnings": warning_items,
            "errors": errors,
        },
    }
