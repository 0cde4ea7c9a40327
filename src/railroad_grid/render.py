"""Render a layout tree onto a drawing surface.

A single recursive function dispatches on the node variant. Each node draws
its own rails with a fresh :class:`PathBuilder` bound to its local frame,
then places every child in a translated sub-group: parent shapes first,
children left to right and top to bottom.

All coordinates here are grid units relative to the node's own box.
"""

from __future__ import annotations

import logging

from railroad_grid.config import RenderConfig
from railroad_grid.layout.types import Bypass, LayoutNode, Loop, Sequence, Stack, TextBox
from railroad_grid.renderers.path import PathBuilder, open_builder
from railroad_grid.renderers.surface import Group
from railroad_grid.types import NONTERMINAL, SEQUENCE_GAP, STACK_MARGIN, Heading

logger = logging.getLogger(__name__)


def render_node(node: LayoutNode, surface: Group, config: RenderConfig | None = None) -> None:
    """Draw ``node`` into ``surface``, whose origin is the node's top-left corner."""
    if config is None:
        config = RenderConfig()
    with open_builder(surface) as track:
        match node:
            case TextBox():
                _render_text_box(node, surface, track, config)
            case Sequence():
                _render_sequence(node, surface, track, config)
            case Stack():
                _render_stack(node, surface, track, config)
            case Bypass():
                _render_bypass(node, surface, track, config)
            case Loop():
                _render_loop(node, surface, track, config)
            case _:
                raise TypeError(f"not a layout node: {node!r}")


def _place(child: LayoutNode, surface: Group, x: int, y: int, config: RenderConfig) -> None:
    logger.debug("placing %s (%dx%d, baseline %d) at (%d, %d)", type(child).__name__, child.width,
                 child.height, child.baseline, x, y)
    attrs: dict[str, str] = {}
    if isinstance(child, TextBox) and child.style == NONTERMINAL:
        attrs["data-rule"] = child.text
    render_node(child, surface.translate(x, y, **attrs), config)


def _render_text_box(node: TextBox, surface: Group, track: PathBuilder, config: RenderConfig) -> None:
    w, b = node.width, node.baseline
    track.start(0, b, Heading.EAST).forward(1).finish("textbox-left")
    track.start(w - 1, b, Heading.EAST).forward(1).finish("textbox-right")

    box_width = w - 2
    surface.add_rounded_rect(1, 0, box_width, node.height, config.box_radius, f"textbox {node.style}")
    surface.add_text(1 + box_width / 2, node.height / 2, node.text, f"textbox-text {node.style}")


def _render_sequence(node: Sequence, surface: Group, track: PathBuilder, config: RenderConfig) -> None:
    x = 0
    last = len(node.children) - 1
    for index, child in enumerate(node.children):
        _place(child, surface, x, node.baseline - child.baseline, config)
        if index < last:
            track.start(x + child.width, node.baseline, Heading.EAST).forward(SEQUENCE_GAP).finish(f"seq-{index}")
        x += child.width + SEQUENCE_GAP


def _render_stack(node: Stack, surface: Group, track: PathBuilder, config: RenderConfig) -> None:
    left, right = 0, node.width
    main = node.baseline
    y = 0
    for index, child in enumerate(node.children):
        child_x = STACK_MARGIN + (node.inner_width - child.width) // 2
        child_baseline = y + child.baseline
        _place(child, surface, child_x, y, config)

        child_left = child_x
        child_right = child_x + child.width
        if index == 0:
            track.start(left, main, Heading.EAST).forward(child_left - left).finish(f"child{index}-left")
            track.start(child_right, child_baseline, Heading.EAST).forward(right - child_right).finish(
                f"child{index}-right"
            )
        else:
            # turn, run down, turn back toward the child: each turn eats one unit both ways
            drop = child_baseline - main
            (
                track.start(left, main, Heading.EAST)
                .turn_right()
                .forward(drop - 2)
                .turn_left()
                .forward(child_left - left - 2)
                .finish(f"child{index}-left")
            )
            (
                track.start(right, main, Heading.WEST)
                .turn_left()
                .forward(drop - 2)
                .turn_right()
                .forward(right - child_right - 2)
                .finish(f"child{index}-right")
            )
        y += child.height + 1


def _render_through_stubs(node: Bypass | Loop, track: PathBuilder) -> None:
    b = node.baseline
    track.start(0, b, Heading.EAST).forward(2).finish("through-path")
    track.start(node.width, b, Heading.WEST).forward(2).finish("through-path")


def _render_bypass(node: Bypass, surface: Group, track: PathBuilder, config: RenderConfig) -> None:
    w, b = node.width, node.baseline
    _place(node.child, surface, (w - node.child.width) // 2, 1, config)
    (
        track.start(0, b, Heading.EAST)
        .turn_left()
        .forward(b - 2)
        .turn_right()
        .forward(w - 4)
        .turn_right()
        .forward(b - 2)
        .turn_left()
        .finish("bypass-path")
    )
    _render_through_stubs(node, track)


def _render_loop(node: Loop, surface: Group, track: PathBuilder, config: RenderConfig) -> None:
    w, b = node.width, node.baseline
    _place(node.child, surface, (w - node.child.width) // 2, 1, config)
    # walks the same rectangle as a bypass, entered from the inside heading back
    (
        track.start(2, b, Heading.WEST)
        .turn_right()
        .forward(b - 2)
        .turn_right()
        .forward(w - 4)
        .turn_right()
        .forward(b - 2)
        .turn_right()
        .finish("loop-path", css_class="rail-track loop")
    )
    _render_through_stubs(node, track)
