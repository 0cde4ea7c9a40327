"""Layout algebra — the five combinators that build a layout tree.

Each function measures its inputs and returns a new immutable node; nothing
is drawn here. The geometry constants follow the rail routing in
:mod:`railroad_grid.render`: sequence gaps are 2 units of straight rail,
stacks reserve 2 units of margin on each side for their turn-run-turn
connectors, and bypass/loop push their child down one unit to make room
for the rail running above it.
"""

from __future__ import annotations

import logging

from railroad_grid.layout.types import Bypass, LayoutNode, Loop, Sequence, Stack, TextBox
from railroad_grid.renderers.measure import MonospaceMeasurer, TextMeasurer, grid_units
from railroad_grid.types import (
    DEFAULT_GRID_SIZE,
    SEQUENCE_GAP,
    STACK_MARGIN,
    TERMINAL,
    TEXT_BOX_BASELINE,
    TEXT_BOX_HEIGHT,
)

logger = logging.getLogger(__name__)


def round_up_to_even(value: int) -> int:
    return value + (value % 2)


def text_box(
    text: str,
    style: str = TERMINAL,
    *,
    measurer: TextMeasurer | None = None,
    grid_size: int = DEFAULT_GRID_SIZE,
) -> TextBox:
    """A labelled box: measured text plus a rail stub and padding.

    The content width is the measured label in grid units plus 3 (one unit
    of rail on each side, one of padding), rounded up to an even number.

    Raises:
        MeasurementFailure: The measurer could not size the label.
    """
    if measurer is None:
        measurer = MonospaceMeasurer(advance=grid_size)
    text_width = grid_units(measurer, text, style, grid_size)
    width = round_up_to_even(text_width + 3)
    logger.debug("text_box %r: width=%d height=%d baseline=%d", text, width, TEXT_BOX_HEIGHT, TEXT_BOX_BASELINE)
    return TextBox(text=text, style=style, width=width, height=TEXT_BOX_HEIGHT, baseline=TEXT_BOX_BASELINE)


def sequence(*children: LayoutNode) -> Sequence:
    """Children side by side with their main lines on one horizontal.

    Height is ``baseline + max(child.height - child.baseline)``, which equals
    ``max(child.height)`` when all baselines agree and also covers children
    shifted down to the common baseline.
    """
    if not children:
        raise ValueError("sequence() needs at least one child")
    width = sum(child.width for child in children) + SEQUENCE_GAP * (len(children) - 1)
    baseline = max(child.baseline for child in children)
    # each child is shifted down by (baseline - child.baseline)
    height = baseline + max(child.height - child.baseline for child in children)
    logger.debug("sequence of %d: width=%d height=%d baseline=%d", len(children), width, height, baseline)
    return Sequence(children=tuple(children), width=width, height=height, baseline=baseline)


def stack(*children: LayoutNode) -> Stack:
    """Alternatives stacked top to bottom, the first on the main line."""
    if not children:
        raise ValueError("stack() needs at least one child")
    inner_width = round_up_to_even(max(child.width for child in children))
    width = inner_width + 2 * STACK_MARGIN
    height = sum(child.height for child in children) + (len(children) - 1) + 1
    baseline = children[0].baseline
    logger.debug("stack of %d: width=%d height=%d baseline=%d", len(children), width, height, baseline)
    return Stack(children=tuple(children), inner_width=inner_width, width=width, height=height, baseline=baseline)


def _above_child_box(child: LayoutNode) -> tuple[int, int, int]:
    width = round_up_to_even(child.width + 2 * STACK_MARGIN)
    return width, child.height + 1, child.baseline + 1


def bypass(child: LayoutNode) -> Bypass:
    """Optional content: a skip lane runs above the child."""
    width, height, baseline = _above_child_box(child)
    logger.debug("bypass: width=%d height=%d baseline=%d", width, height, baseline)
    return Bypass(child=child, width=width, height=height, baseline=baseline)


def loop(child: LayoutNode) -> Loop:
    """Repeatable content: a return lane runs above the child."""
    width, height, baseline = _above_child_box(child)
    logger.debug("loop: width=%d height=%d baseline=%d", width, height, baseline)
    return Loop(child=child, width=width, height=height, baseline=baseline)
