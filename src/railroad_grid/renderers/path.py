"""Turtle-graphics builder for rail paths.

The builder keeps a cursor (position + heading) on the integer grid and
records one open path at a time. Commands are buffered in grid units and
scaled to device units only when the path is finished and attached to the
surface.

A turn is a quarter arc of radius 1: the control point lies one unit along
the old heading and the end point one more unit along the new heading. A
turn therefore moves the cursor one unit in each of the two directions,
which is why every turn-run-turn connector shortens its straight runs by 2.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass

from railroad_grid.errors import InvalidState, UnsupportedTransition
from railroad_grid.renderers.surface import Group, LineTo, MoveTo, PathCommand, QuadTo
from railroad_grid.types import Heading

# The eight quarter turns that have an arc.
ARC_TRANSITIONS: frozenset[tuple[Heading, Heading]] = frozenset(
    {
        (Heading.EAST, Heading.NORTH),
        (Heading.EAST, Heading.SOUTH),
        (Heading.WEST, Heading.NORTH),
        (Heading.WEST, Heading.SOUTH),
        (Heading.NORTH, Heading.EAST),
        (Heading.NORTH, Heading.WEST),
        (Heading.SOUTH, Heading.EAST),
        (Heading.SOUTH, Heading.WEST),
    }
)


@dataclass(frozen=True)
class TrackPosition:
    x: int
    y: int
    heading: Heading


class PathBuilder:
    """Stateful rail-path emitter bound to one surface."""

    def __init__(self, surface: Group) -> None:
        self.surface = surface
        self.x = 0
        self.y = 0
        self.heading = Heading.EAST
        self._commands: list[tuple[str, tuple[int, ...]]] | None = None
        self._sequence: list[str] = []

    @property
    def is_open(self) -> bool:
        return self._commands is not None

    def _require_open(self, op: str) -> list[tuple[str, tuple[int, ...]]]:
        if self._commands is None:
            raise InvalidState(f"{op}() called with no open path; call start() first")
        return self._commands

    def start(self, x: int, y: int, heading: Heading) -> PathBuilder:
        if self._commands is not None:
            raise InvalidState("path already started; call finish() before starting a new path")
        self.x = x
        self.y = y
        self.heading = heading
        self._commands = [("M", (x, y))]
        self._sequence = [f"start({x}, {y}, {heading.value})"]
        return self

    def forward(self, units: int) -> PathBuilder:
        commands = self._require_open("forward")
        if units < 0:
            raise ValueError(f"forward() distance must be non-negative, got {units}")
        dx, dy = self.heading.delta
        self.x += dx * units
        self.y += dy * units
        commands.append(("L", (self.x, self.y)))
        self._sequence.append(f"forward({units})")
        return self

    def turn_left(self) -> PathBuilder:
        self._require_open("turn_left")
        self._arc(self.heading.left())
        self._sequence.append("turnLeft()")
        return self

    def turn_right(self) -> PathBuilder:
        self._require_open("turn_right")
        self._arc(self.heading.right())
        self._sequence.append("turnRight()")
        return self

    def _arc(self, new_heading: Heading) -> None:
        commands = self._require_open("turn")
        old_heading = self.heading
        if (old_heading, new_heading) not in ARC_TRANSITIONS:
            raise UnsupportedTransition(
                f"no arc transition defined for {old_heading.value}-{new_heading.value}"
            )
        fx, fy = old_heading.delta
        tx, ty = new_heading.delta
        cx, cy = self.x + fx, self.y + fy
        self.x, self.y = cx + tx, cy + ty
        self.heading = new_heading
        commands.append(("Q", (cx, cy, self.x, self.y)))

    def finish(self, label: str | None = None, css_class: str = "rail-track") -> PathBuilder:
        commands = self._require_open("finish")
        self.surface.add_path(
            [_to_device(op, args, self.surface.scale) for op, args in commands],
            css_class=css_class,
            label=label,
            sequence=" ".join(self._sequence),
        )
        self._commands = None
        self._sequence = []
        return self

    def reset(self) -> None:
        """Discard any open path without attaching it."""
        self._commands = None
        self._sequence = []

    def position(self) -> TrackPosition:
        return TrackPosition(self.x, self.y, self.heading)


def _to_device(op: str, args: tuple[int, ...], scale: int) -> PathCommand:
    s = [a * scale for a in args]
    if op == "M":
        return MoveTo(*s)
    if op == "L":
        return LineTo(*s)
    return QuadTo(*s)


@contextmanager
def open_builder(surface: Group) -> Iterator[PathBuilder]:
    """Yield a fresh builder; an open path never outlives the block."""
    builder = PathBuilder(surface)
    try:
        yield builder
    finally:
        builder.reset()
