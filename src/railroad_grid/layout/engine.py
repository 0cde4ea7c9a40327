"""Layout engine — turns a parsed expression into a layout tree."""

from __future__ import annotations

from railroad_grid.config import RenderConfig
from railroad_grid.ir.ast import BypassExpr, Expr, LoopExpr, SequenceExpr, StackExpr, TextBoxExpr
from railroad_grid.layout.algebra import bypass, loop, sequence, stack, text_box
from railroad_grid.layout.types import LayoutNode
from railroad_grid.renderers.measure import TextMeasurer, default_measurer


def build_layout(expr: Expr, config: RenderConfig | None = None, measurer: TextMeasurer | None = None) -> LayoutNode:
    """Build the layout tree bottom-up with the combinators from layout.algebra."""
    if config is None:
        config = RenderConfig()
    if measurer is None:
        measurer = default_measurer(config)
    return _build(expr, measurer, config.grid_size)


def _build(expr: Expr, measurer: TextMeasurer, grid_size: int) -> LayoutNode:
    match expr:
        case TextBoxExpr(text=text, style=style):
            return text_box(text, style, measurer=measurer, grid_size=grid_size)
        case SequenceExpr(items=items):
            return sequence(*(_build(item, measurer, grid_size) for item in items))
        case StackExpr(items=items):
            return stack(*(_build(item, measurer, grid_size) for item in items))
        case BypassExpr(item=item):
            return bypass(_build(item, measurer, grid_size))
        case LoopExpr(item=item):
            return loop(_build(item, measurer, grid_size))
    raise TypeError(f"not an expression: {expr!r}")
