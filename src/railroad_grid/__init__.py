"""railroad-grid: grammar expressions to railroad diagrams on an integer grid."""

from __future__ import annotations

import logging

from railroad_grid.config import RenderConfig
from railroad_grid.diagram import Diagram, DrawingResult
from railroad_grid.errors import (
    ExpressionSyntaxError,
    InvalidState,
    MeasurementFailure,
    RailroadError,
    UnsupportedTransition,
)
from railroad_grid.ir.ast import Grammar, Rule
from railroad_grid.layout import build_layout, bypass, loop, sequence, stack, text_box
from railroad_grid.parsers import DEFAULT_RULE_NAME, parse, parse_expression
from railroad_grid.renderers.ascii import AsciiRenderer
from railroad_grid.renderers.base import Renderer
from railroad_grid.renderers.measure import TextMeasurer
from railroad_grid.renderers.svg import SvgRenderer
from railroad_grid.types import OutputFormat

logger = logging.getLogger(__name__)

__all__ = [
    "Diagram",
    "DrawingResult",
    "ExpressionSyntaxError",
    "InvalidState",
    "MeasurementFailure",
    "OutputFormat",
    "RailroadError",
    "RenderConfig",
    "UnsupportedTransition",
    "build_diagram",
    "bypass",
    "loop",
    "render_dsl",
    "render_expression",
    "render_grammar",
    "sequence",
    "stack",
    "text_box",
]


def _resolve_format(fmt: OutputFormat | str) -> OutputFormat:
    if isinstance(fmt, OutputFormat):
        return fmt
    try:
        return OutputFormat(fmt.lower())
    except ValueError:
        raise ValueError(f"Unknown output format '{fmt}'; use svg or text") from None


def build_diagram(grammar: Grammar, config: RenderConfig, measurer: TextMeasurer | None = None) -> Diagram:
    """Lay out every rule; a rule whose layout fails becomes an error marker."""
    diagram = Diagram(config, measurer)
    for rule in grammar.rules:
        try:
            node = build_layout(rule.expression, config, diagram.measurer)
        except RailroadError as exc:
            diagram.add_failed_rule(rule.name, exc)
            continue
        diagram.add_rule(rule.name, node)
    return diagram


def render_grammar(
    grammar: Grammar,
    fmt: OutputFormat | str = OutputFormat.SVG,
    config: RenderConfig | None = None,
    measurer: TextMeasurer | None = None,
) -> str:
    """Render an already-parsed grammar to SVG or text."""
    fmt = _resolve_format(fmt)
    config = config or RenderConfig()
    if fmt == OutputFormat.TEXT:
        config = config.for_text()
    if not grammar.rules:
        return ""
    result = build_diagram(grammar, config, measurer).draw()
    logger.debug("drew %d rule(s) at %dx%d grid units", len(grammar.rules), result.width, result.height)
    if fmt == OutputFormat.TEXT:
        renderer: Renderer = AsciiRenderer(unicode=config.unicode)
    else:
        renderer = SvgRenderer(config)
    return renderer.render(result)


def render_dsl(
    src: str,
    fmt: OutputFormat | str = OutputFormat.SVG,
    config: RenderConfig | None = None,
    rule_name: str = DEFAULT_RULE_NAME,
) -> str:
    """Parse a grammar (or one bare expression) and render it.

    Args:
        src: Grammar source (``name = expr;`` rules) or a single expression.
        fmt: ``svg`` for a standalone SVG document, ``text`` for box-drawing text.
        config: Rendering configuration; defaults to ``RenderConfig()``.
        rule_name: Name given to a bare expression.

    Returns:
        The rendered document, or an empty string if the source has no rules.

    Raises:
        ExpressionSyntaxError: If the source cannot be parsed (also a ValueError).
        ValueError: If the output format is unknown.
    """
    grammar = parse(src, rule_name)
    return render_grammar(grammar, fmt, config)


def render_expression(
    src: str,
    fmt: OutputFormat | str = OutputFormat.SVG,
    config: RenderConfig | None = None,
    rule_name: str = DEFAULT_RULE_NAME,
) -> str:
    """Render a single bare expression as a one-rule diagram.

    Raises:
        ExpressionSyntaxError: If ``src`` is not exactly one expression.
    """
    grammar = Grammar(rules=[Rule(name=rule_name, expression=parse_expression(src))])
    return render_grammar(grammar, fmt, config)
