"""ASCII/Unicode text renderer.

Paints a drawing made at scale 1 (one character cell per grid unit): boxes
first, then rails merged into them, then labels and terminals on top.
"""

from __future__ import annotations

import math

from railroad_grid.diagram import DrawingResult
from railroad_grid.renderers.canvas import Canvas, Rect
from railroad_grid.renderers.charset import CharSet
from railroad_grid.renderers.surface import CircleElement, PathElement, RoundedRect, TextElement


def _cell(v: float) -> int:
    return math.floor(v + 0.5)


def _paint_text(canvas: Canvas, ox: float, oy: float, elem: TextElement) -> None:
    row = _cell(oy + elem.y)
    if elem.anchor == "start":
        col = _cell(ox + elem.x)
    else:
        col = _cell(ox + elem.x - len(elem.text) / 2)
    canvas.write_str(col, row, elem.text)


class AsciiRenderer:
    """ASCII/Unicode text renderer."""

    def __init__(self, unicode: bool = True) -> None:
        self.unicode = unicode

    def render(self, result: DrawingResult) -> str:
        if result.scale != 1:
            raise ValueError(f"text output needs a drawing at scale 1, got {result.scale}")
        if not result.root.children:
            return ""
        cs = CharSet.Unicode if self.unicode else CharSet.Ascii
        canvas = Canvas(result.width + 1, result.height + 1, cs)
        elements = list(result.root.walk())

        for ox, oy, elem in elements:
            if isinstance(elem, RoundedRect):
                canvas.draw_box(
                    Rect(_cell(ox + elem.x), _cell(oy + elem.y), _cell(elem.width), _cell(elem.height))
                )
        for ox, oy, elem in elements:
            if isinstance(elem, PathElement):
                canvas.trace([(_cell(ox + x), _cell(oy + y)) for x, y in elem.points()])
        for ox, oy, elem in elements:
            if isinstance(elem, TextElement):
                _paint_text(canvas, ox, oy, elem)
            elif isinstance(elem, CircleElement):
                canvas.set(_cell(ox + elem.cx), _cell(oy + elem.cy), canvas.box_chars.terminal)

        return canvas.to_string()
