"""Canvas — 2D character grid for the text backend.

One cell per grid point. Rails are traced through their vertices and merged
with whatever is already in a cell, so a rail meeting a box edge or another
rail becomes the matching tee or cross.
"""

from __future__ import annotations

from dataclasses import dataclass

from railroad_grid.renderers.charset import Arms, BoxChars, CharSet


@dataclass
class Rect:
    x: int
    y: int
    width: int
    height: int

    def right(self) -> int:
        return self.x + self.width

    def bottom(self) -> int:
        return self.y + self.height


class Canvas:
    """A 2D character grid onto which diagram elements are painted."""

    def __init__(self, width: int, height: int, charset: CharSet) -> None:
        self.width = width
        self.height = height
        self.charset = charset
        self.box_chars = BoxChars.for_charset(charset)
        self.cells: list[list[str]] = [[" "] * width for _ in range(height)]

    def in_bounds(self, col: int, row: int) -> bool:
        return 0 <= row < self.height and 0 <= col < self.width

    def get(self, col: int, row: int) -> str:
        if self.in_bounds(col, row):
            return self.cells[row][col]
        return " "

    def set(self, col: int, row: int, c: str) -> None:
        if self.in_bounds(col, row):
            self.cells[row][col] = c

    def add_arms(self, col: int, row: int, arms: Arms) -> None:
        """Merge ``arms`` into the junction already painted at (col, row)."""
        if not self.in_bounds(col, row):
            return
        existing = Arms.from_char(self.cells[row][col])
        if existing is not None:
            arms = existing.merge(arms)
        self.cells[row][col] = arms.to_char(self.charset)

    def trace(self, points: list[tuple[int, int]]) -> None:
        """Paint an orthogonal polyline through ``points``."""
        pts: list[tuple[int, int]] = []
        for p in points:
            if not pts or pts[-1] != p:
                pts.append(p)
        if len(pts) == 1:
            self.add_arms(pts[0][0], pts[0][1], Arms(left=True, right=True))
            return

        for (x0, y0), (x1, y1) in zip(pts, pts[1:]):
            if y0 == y1:
                lo, hi = min(x0, x1), max(x0, x1)
                for col in range(lo + 1, hi):
                    self.add_arms(col, y0, Arms(left=True, right=True))
            elif x0 == x1:
                lo, hi = min(y0, y1), max(y0, y1)
                for row in range(lo + 1, hi):
                    self.add_arms(x0, row, Arms(up=True, down=True))

        for i, (x, y) in enumerate(pts):
            arms = Arms()
            for j in (i - 1, i + 1):
                if 0 <= j < len(pts):
                    nx, ny = pts[j]
                    arms.right = arms.right or nx > x
                    arms.left = arms.left or nx < x
                    arms.down = arms.down or ny > y
                    arms.up = arms.up or ny < y
            self.add_arms(x, y, arms)

    def draw_box(self, rect: Rect) -> None:
        """Rounded box whose corners sit on the rect's corner grid points."""
        if rect.width < 1 or rect.height < 1:
            return
        bc = self.box_chars
        x0, y0 = rect.x, rect.y
        x1, y1 = rect.right(), rect.bottom()
        self.set(x0, y0, bc.top_left)
        self.set(x1, y0, bc.top_right)
        self.set(x0, y1, bc.bottom_left)
        self.set(x1, y1, bc.bottom_right)
        for col in range(x0 + 1, x1):
            self.set(col, y0, bc.horizontal)
            self.set(col, y1, bc.horizontal)
        for row in range(y0 + 1, y1):
            self.set(x0, row, bc.vertical)
            self.set(x1, row, bc.vertical)

    def write_str(self, col: int, row: int, s: str) -> None:
        for i, ch in enumerate(s):
            self.set(col + i, row, ch)

    def to_string(self) -> str:
        lines = ["".join(row).rstrip() for row in self.cells]
        return "\n".join(lines).rstrip("\n") + "\n"
