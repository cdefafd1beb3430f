"""Error and diagnostic types raised while normalizing value trees."""

from __future__ import annotations

from typing import Any


class InvalidDirection(ValueError):
    """Direction missing or not one of ``input`` / ``output``."""

    def __init__(self, direction: Any):
        self.direction = direction
        super().__init__(f"invalid direction '{direction}' (input or output)")


class UnsupportedValueKind(UserWarning):
    """
    Non-fatal diagnostic for a node that is neither a scalar, a sequence
    nor a mapping. The node is left untouched and traversal continues.
    """

    def __init__(self, tag: str):
        self.tag = tag
        super().__init__(f"unsupported value kind '{tag}'")
