"""Shared type definitions for railroad-grid.

Enums, style tags and grid constants used across the parser, layout
algebra, path builder and renderers.
"""

from __future__ import annotations

from enum import Enum


class Heading(Enum):
    NORTH = "north"
    SOUTH = "south"
    EAST = "east"
    WEST = "west"

    @property
    def delta(self) -> tuple[int, int]:
        """Unit step on a y-down grid."""
        return _DELTAS[self]

    def left(self) -> Heading:
        return _LEFT_OF[self]

    def right(self) -> Heading:
        return _RIGHT_OF[self]


_DELTAS: dict[Heading, tuple[int, int]] = {
    Heading.NORTH: (0, -1),
    Heading.SOUTH: (0, 1),
    Heading.EAST: (1, 0),
    Heading.WEST: (-1, 0),
}

_LEFT_OF: dict[Heading, Heading] = {
    Heading.NORTH: Heading.WEST,
    Heading.WEST: Heading.SOUTH,
    Heading.SOUTH: Heading.EAST,
    Heading.EAST: Heading.NORTH,
}

_RIGHT_OF: dict[Heading, Heading] = {
    Heading.NORTH: Heading.EAST,
    Heading.EAST: Heading.SOUTH,
    Heading.SOUTH: Heading.WEST,
    Heading.WEST: Heading.NORTH,
}


class OutputFormat(Enum):
    SVG = "svg"
    TEXT = "text"

    @classmethod
    def default(cls) -> OutputFormat:
        return cls.SVG


# Style tags are free-form; these two carry meaning beyond styling.
TERMINAL = "terminal"
NONTERMINAL = "nonterminal"

# ─── Grid constants (grid units) ─────────────────────────────────────────────

DEFAULT_GRID_SIZE: int = 24
TEXT_BOX_HEIGHT: int = 2
TEXT_BOX_BASELINE: int = 1
SEQUENCE_GAP: int = 2
STACK_MARGIN: int = 2
RULE_RAIL: int = 2
