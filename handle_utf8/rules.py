"""
Deterministic normalization rules.

This file exists to make the supported directions and encodings explicit
and enforceable.
"""

from __future__ import annotations

from enum import Enum

from .errors import InvalidDirection

TARGET_ENCODING = "utf-8"
FALLBACK_ENCODING = "latin-1"
ACCEPTED_SUFFIX = ".json"

# Byte values 0x80-0xFF that are not part of a valid UTF-8 sequence map to
# the Latin-1 code point of the same value.
LATIN1_TABLE: tuple[str, ...] = tuple(bytes([b]).decode(FALLBACK_ENCODING) for b in range(0x100))


class Direction(str, Enum):
    INPUT = "input"    # external bytes -> internal text
    OUTPUT = "output"  # internal text -> external UTF-8 bytes

    @classmethod
    def parse(cls, raw: "Direction | str | None") -> "Direction":
        if isinstance(raw, cls):
            return raw
        try:
            return cls(raw)
        except ValueError:
            raise InvalidDirection(raw) from None


DEFAULT_DIRECTION = Direction.INPUT
