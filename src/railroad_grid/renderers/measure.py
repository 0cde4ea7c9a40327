"""Text measurement used to size text boxes.

Measurers return widths in device units; :func:`grid_units` converts to the
grid, rounding up so a label never overflows its box.
"""

from __future__ import annotations

import logging
import math
from typing import Protocol

from PIL import ImageFont

from railroad_grid.config import RenderConfig
from railroad_grid.errors import MeasurementFailure

logger = logging.getLogger(__name__)

# CSS generic families mapped to font files Pillow can find in the system font dirs.
GENERIC_FONT_FILES: dict[str, list[str]] = {
    "monospace": [
        "DejaVuSansMono.ttf",
        "LiberationMono-Regular.ttf",
        "Menlo.ttc",
        "consola.ttf",
        "cour.ttf",
        "Courier New.ttf",
    ],
    "sans-serif": ["DejaVuSans.ttf", "LiberationSans-Regular.ttf", "Helvetica.ttc", "arial.ttf", "Arial.ttf"],
    "serif": ["DejaVuSerif.ttf", "LiberationSerif-Regular.ttf", "Times.ttc", "times.ttf", "Times New Roman.ttf"],
}


class TextMeasurer(Protocol):
    """Anything that can report the rendered width of a label."""

    def measure(self, text: str, style: str) -> float:
        """Width of ``text`` drawn in ``style``, in device units."""
        ...


class FontMetricsMeasurer:
    """Measures labels with Pillow using the font the SVG stylesheet asks for.

    The font is resolved once, from ``config.font_path`` if set, then the
    files mapped to ``config.font_family``, then Pillow's bundled default
    font at the same size.
    """

    def __init__(self, config: RenderConfig) -> None:
        self.font_size = config.font_size
        self.font_family = config.font_family
        self.explicit_path = config.font_path
        self.font_path: str | None = None
        self._font: ImageFont.FreeTypeFont | ImageFont.ImageFont | None = None

    def _candidates(self) -> list[str]:
        candidates: list[str] = []
        if self.explicit_path:
            candidates.append(self.explicit_path)
        family = self.font_family.strip().strip("'\"")
        candidates.extend(GENERIC_FONT_FILES.get(family.lower(), [family]))
        return candidates

    def font(self) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
        if self._font is not None:
            return self._font
        size = max(1, int(round(self.font_size)))
        for candidate in self._candidates():
            try:
                self._font = ImageFont.truetype(candidate, size)
            except OSError:
                continue
            self.font_path = candidate
            logger.debug("measuring %r with %s at %dpx", self.font_family, candidate, size)
            return self._font
        try:
            self._font = ImageFont.load_default(size=size)
        except (OSError, TypeError, ImportError) as exc:
            raise MeasurementFailure(f"no font available for {self.font_family!r}: {exc}") from exc
        logger.info("no font file found for %r; measuring with Pillow's default font", self.font_family)
        return self._font

    def measure(self, text: str, style: str) -> float:
        return float(self.font().getlength(text))


class MonospaceMeasurer:
    """Every character advances by the same amount."""

    def __init__(self, advance: float = 1.0) -> None:
        self.advance = advance

    def measure(self, text: str, style: str) -> float:
        return len(text) * self.advance


def default_measurer(config: RenderConfig) -> TextMeasurer:
    if config.grid_size == 1:
        return MonospaceMeasurer()
    return FontMetricsMeasurer(config)


def grid_units(measurer: TextMeasurer, text: str, style: str, grid_size: int) -> int:
    """Measured width of ``text`` in whole grid units.

    Raises:
        MeasurementFailure: The measurer raised or returned a width that is
            not a finite, non-negative number.
    """
    if grid_size <= 0:
        raise MeasurementFailure(f"grid size must be positive, got {grid_size}")
    try:
        px = measurer.measure(text, style)
    except MeasurementFailure:
        raise
    except Exception as exc:
        raise MeasurementFailure(f"cannot measure {text!r}: {exc}") from exc
    if isinstance(px, bool) or not isinstance(px, (int, float)):
        raise MeasurementFailure(f"measurer returned {px!r} for {text!r}")
    if math.isnan(px) or math.isinf(px) or px < 0:
        raise MeasurementFailure(f"measurer returned unusable width {px!r} for {text!r}")
    return math.ceil(px / grid_size)
