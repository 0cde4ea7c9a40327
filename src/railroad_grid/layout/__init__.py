"""Layout algebra and engine public API."""

from __future__ import annotations

from railroad_grid.layout.algebra import bypass, loop, round_up_to_even, sequence, stack, text_box
from railroad_grid.layout.engine import build_layout
from railroad_grid.layout.types import Bypass, LayoutNode, Loop, Sequence, Stack, TextBox

__all__ = [
    "Bypass",
    "LayoutNode",
    "Loop",
    "Sequence",
    "Stack",
    "TextBox",
    "build_layout",
    "bypass",
    "loop",
    "round_up_to_even",
    "sequence",
    "stack",
    "text_box",
]
