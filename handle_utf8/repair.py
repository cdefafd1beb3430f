"""
Repair of byte strings that mix valid UTF-8 with stray Latin-1 bytes.

Text assembled from sources with inconsistent encodings often ends up with
some substrings correctly UTF-8 encoded and others as raw Latin-1 bytes,
e.g. ``b"Montr\\xc3\\xa9al / M\\xfcnchen"``. ``fix_latin`` decodes every valid
UTF-8 sequence as-is and reinterprets every remaining high byte as the
Latin-1 character of the same value.
"""

from __future__ import annotations

import codecs
from typing import Any

from .rules import LATIN1_TABLE, TARGET_ENCODING

LATIN1_FALLBACK = "handle_utf8.latin1_fallback"


def _latin1_fallback(exc: UnicodeError) -> tuple[str, int]:
    # The decoder reports the whole invalid span; only its first byte is
    # reinterpreted so that a valid sequence starting inside the span is
    # still decoded as UTF-8 on the next attempt.
    if not isinstance(exc, UnicodeDecodeError):
        raise exc
    return LATIN1_TABLE[exc.object[exc.start]], exc.start + 1


codecs.register_error(LATIN1_FALLBACK, _latin1_fallback)


def is_utf8(raw: bytes) -> bool:
    try:
        raw.decode(TARGET_ENCODING)
    except UnicodeDecodeError:
        return False
    return True


def fix_latin(data: Any) -> Any:
    """
    Decode ``data`` into one consistent Unicode string.

    Rules:
    - bytes: valid UTF-8 runs are decoded as-is, stray bytes >= 0x80 become
      the Latin-1 character of the same value, ASCII passes through.
    - str is already decoded text and is returned unchanged.
    - Anything else (None, numbers) is returned unchanged.
    """
    if isinstance(data, (bytes, bytearray)):
        return bytes(data).decode(TARGET_ENCODING, errors=LATIN1_FALLBACK)
    return data
