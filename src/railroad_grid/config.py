"""Centralized configuration for railroad-grid."""

from __future__ import annotations

from dataclasses import dataclass, replace

from railroad_grid.types import DEFAULT_GRID_SIZE


@dataclass(frozen=True)
class RenderConfig:
    """Configuration for the layout and rendering pipeline.

    Passed explicitly to every stage that needs it; nothing reads style or
    font settings from module state.
    """

    grid_size: int = DEFAULT_GRID_SIZE
    font_size: float = 14.0
    font_family: str = "monospace"
    font_path: str | None = None  # font file for measuring labels; overrides font_family
    box_radius: float = 0.9  # grid units
    terminal_radius: float = 0.75  # grid units
    rule_spacing: int = 1
    padding: int = 1
    unicode: bool = True
    stylesheet: bool = True

    def for_text(self) -> RenderConfig:
        """One device cell per grid unit, as the text backend needs."""
        return replace(self, grid_size=1)
