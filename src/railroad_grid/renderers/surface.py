"""Drawing surface — a tree of translated groups holding vector primitives.

Callers address the surface in grid units; elements are stored in device
units (grid units times ``scale``), so every backend can serialise them
without knowing about the grid.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field


@dataclass(frozen=True)
class MoveTo:
    x: float
    y: float


@dataclass(frozen=True)
class LineTo:
    x: float
    y: float


@dataclass(frozen=True)
class QuadTo:
    """Quadratic curve through control point (cx, cy) to (x, y)."""

    cx: float
    cy: float
    x: float
    y: float


PathCommand = MoveTo | LineTo | QuadTo


@dataclass
class PathElement:
    commands: list[PathCommand]
    css_class: str = "rail-track"
    label: str | None = None
    sequence: str = ""

    def points(self) -> list[tuple[float, float]]:
        """Vertices of the path, with each arc's control point as a corner."""
        pts: list[tuple[float, float]] = []
        for cmd in self.commands:
            if isinstance(cmd, QuadTo):
                pts.append((cmd.cx, cmd.cy))
            pts.append((cmd.x, cmd.y))
        return pts


@dataclass
class RoundedRect:
    x: float
    y: float
    width: float
    height: float
    radius: float
    css_class: str = "textbox"


@dataclass
class TextElement:
    """Label whose anchor point is (x, y); ``anchor`` is 'middle' or 'start'."""

    x: float
    y: float
    text: str
    css_class: str = "textbox-text"
    anchor: str = "middle"


@dataclass
class CircleElement:
    cx: float
    cy: float
    r: float
    css_class: str = ""


@dataclass
class Group:
    """A translated sub-region; offsets are device units relative to the parent."""

    scale: int
    x: float = 0
    y: float = 0
    attrs: dict[str, str] = field(default_factory=dict)
    children: list[Element] = field(default_factory=list)

    def add_path(
        self,
        commands: list[PathCommand],
        css_class: str = "rail-track",
        label: str | None = None,
        sequence: str = "",
    ) -> PathElement:
        path = PathElement(commands, css_class, label, sequence)
        self.children.append(path)
        return path

    def add_rounded_rect(
        self, x: float, y: float, width: float, height: float, radius: float, css_class: str = "textbox"
    ) -> RoundedRect:
        s = self.scale
        rect = RoundedRect(x * s, y * s, width * s, height * s, radius * s, css_class)
        self.children.append(rect)
        return rect

    def add_text(
        self, x: float, y: float, text: str, css_class: str = "textbox-text", anchor: str = "middle"
    ) -> TextElement:
        elem = TextElement(x * self.scale, y * self.scale, text, css_class, anchor)
        self.children.append(elem)
        return elem

    def add_circle(self, cx: float, cy: float, r: float, css_class: str = "") -> CircleElement:
        s = self.scale
        circle = CircleElement(cx * s, cy * s, r * s, css_class)
        self.children.append(circle)
        return circle

    def translate(self, x: float, y: float, **attrs: str) -> Group:
        """Open a nested group whose origin sits at grid point (x, y)."""
        group = Group(self.scale, x * self.scale, y * self.scale, dict(attrs))
        self.children.append(group)
        return group

    def walk(self, ox: float = 0, oy: float = 0) -> Iterator[tuple[float, float, Element]]:
        """Yield every non-group element with its absolute device offset."""
        ox += self.x
        oy += self.y
        for child in self.children:
            if isinstance(child, Group):
                yield from child.walk(ox, oy)
            else:
                yield (ox, oy, child)

    def paths(self) -> list[PathElement]:
        return [elem for _, _, elem in self.walk() if isinstance(elem, PathElement)]


Element = PathElement | RoundedRect | TextElement | CircleElement | Group
