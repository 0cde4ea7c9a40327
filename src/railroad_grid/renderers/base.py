"""Base renderer protocol."""

from __future__ import annotations

from typing import Protocol

from railroad_grid.diagram import DrawingResult


class Renderer(Protocol):
    """Protocol that all renderers must implement."""

    def render(self, result: DrawingResult) -> str:
        """Serialise a drawn diagram to an output string."""
        ...
