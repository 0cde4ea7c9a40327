"""Layout node variants produced by the layout algebra.

Every node is an immutable box measured in grid units with a single main
line: it enters at ``(0, baseline)`` and leaves at ``(width, baseline)``.
Widths are always even so a node can be centered inside a stack with an
integer offset.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class TextBox:
    """A terminal or nonterminal label in a rounded box."""

    text: str
    style: str
    width: int
    height: int
    baseline: int


@dataclass(frozen=True)
class Sequence:
    children: tuple[LayoutNode, ...]
    width: int
    height: int
    baseline: int


@dataclass(frozen=True)
class Stack:
    """Alternatives stacked vertically; the first one is the straight path."""

    children: tuple[LayoutNode, ...]
    inner_width: int
    width: int
    height: int
    baseline: int


@dataclass(frozen=True)
class Bypass:
    child: LayoutNode
    width: int
    height: int
    baseline: int


@dataclass(frozen=True)
class Loop:
    child: LayoutNode
    width: int
    height: int
    baseline: int


LayoutNode = TextBox | Sequence | Stack | Bypass | Loop
