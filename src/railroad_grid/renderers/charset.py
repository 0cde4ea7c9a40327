"""Glyph tables for the text backend and junction merging of rails.

A junction is described by which of its four arms (up, down, left, right)
carry a rail. Painting a rail into a cell that already holds a rail or a
box edge ORs the arms together, so crossings and tees come out right
regardless of drawing order.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

ArmKey = tuple[bool, bool, bool, bool]  # (up, down, left, right)


class CharSet(Enum):
    Unicode = "unicode"
    Ascii = "ascii"


_UNICODE_GLYPHS: dict[ArmKey, str] = {
    (False, False, True, True): "─",
    (True, True, False, False): "│",
    (False, True, False, True): "╭",
    (False, True, True, False): "╮",
    (True, False, False, True): "╰",
    (True, False, True, False): "╯",
    (True, True, False, True): "├",
    (True, True, True, False): "┤",
    (False, True, True, True): "┬",
    (True, False, True, True): "┴",
    (True, True, True, True): "┼",
}

_ASCII_GLYPHS: dict[ArmKey, str] = {
    key: "-" if key == (False, False, True, True) else "|" if key == (True, True, False, False) else "+"
    for key in _UNICODE_GLYPHS
}

_GLYPHS: dict[CharSet, dict[ArmKey, str]] = {CharSet.Unicode: _UNICODE_GLYPHS, CharSet.Ascii: _ASCII_GLYPHS}

# Reverse lookup; "+" reads back as a full crossing.
_ARMS_BY_CHAR: dict[str, ArmKey] = {glyph: key for key, glyph in _UNICODE_GLYPHS.items()}
_ARMS_BY_CHAR.update({"-": (False, False, True, True), "|": (True, True, False, False), "+": (True, True, True, True)})

_TERMINALS = {CharSet.Unicode: "●", CharSet.Ascii: "o"}


@dataclass(frozen=True)
class BoxChars:
    """The glyphs a canvas needs to draw text boxes and rule terminals."""

    top_left: str
    top_right: str
    bottom_left: str
    bottom_right: str
    horizontal: str
    vertical: str
    terminal: str

    @classmethod
    def for_charset(cls, cs: CharSet) -> BoxChars:
        g = _GLYPHS[cs]
        return cls(
            top_left=g[(False, True, False, True)],
            top_right=g[(False, True, True, False)],
            bottom_left=g[(True, False, False, True)],
            bottom_right=g[(True, False, True, False)],
            horizontal=g[(False, False, True, True)],
            vertical=g[(True, True, False, False)],
            terminal=_TERMINALS[cs],
        )


@dataclass
class Arms:
    """Which arms of a junction cell are active."""

    up: bool = False
    down: bool = False
    left: bool = False
    right: bool = False

    @classmethod
    def from_char(cls, c: str) -> Arms | None:
        key = _ARMS_BY_CHAR.get(c)
        if key is None:
            return None
        return cls(*key)

    def merge(self, other: Arms) -> Arms:
        return Arms(
            up=self.up or other.up,
            down=self.down or other.down,
            left=self.left or other.left,
            right=self.right or other.right,
        )

    def to_char(self, cs: CharSet) -> str:
        key = (self.up, self.down, self.left, self.right)
        if not any(key):
            return " "
        # a rail ending in a cell still draws a full stroke through it
        if not (self.up or self.down):
            key = (False, False, True, True)
        elif not (self.left or self.right):
            key = (True, True, False, False)
        return _GLYPHS[cs][key]
