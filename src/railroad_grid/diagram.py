"""Diagram — an ordered list of rules drawn one under another.

Each rule is framed by a start terminal, a 2-unit lead-in rail, the
expression itself, a 2-unit lead-out rail and an end terminal, all on the
expression's baseline. A rule that fails to lay out or draw is replaced by
an error marker; the remaining rules still render.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from railroad_grid.config import RenderConfig
from railroad_grid.errors import MeasurementFailure, RailroadError
from railroad_grid.layout.types import LayoutNode
from railroad_grid.render import render_node
from railroad_grid.renderers.measure import MonospaceMeasurer, TextMeasurer, default_measurer, grid_units
from railroad_grid.renderers.path import open_builder
from railroad_grid.renderers.surface import Group
from railroad_grid.types import RULE_RAIL, Heading

logger = logging.getLogger(__name__)

ERROR_HEIGHT = 2


@dataclass(frozen=True)
class RuleLayout:
    """A named rule whose expression has been laid out."""

    name: str
    expression: LayoutNode


@dataclass(frozen=True)
class RuleFailure:
    name: str
    error: RailroadError

    @property
    def message(self) -> str:
        return f"Error: {self.error}"


@dataclass
class DrawingResult:
    """Self-contained drawing output — everything backends need."""

    root: Group
    width: int  # grid units
    height: int  # grid units
    failures: list[RuleFailure] = field(default_factory=list)

    @property
    def scale(self) -> int:
        return self.root.scale


class Diagram:
    """Rules in the order they were added, each laid out independently."""

    def __init__(self, config: RenderConfig | None = None, measurer: TextMeasurer | None = None) -> None:
        self.config = config or RenderConfig()
        self.measurer = measurer or default_measurer(self.config)
        self.entries: list[RuleLayout | RuleFailure] = []

    @property
    def rules(self) -> list[RuleLayout]:
        return [e for e in self.entries if isinstance(e, RuleLayout)]

    def add_rule(self, name: str, expression: LayoutNode) -> None:
        self.entries.append(RuleLayout(name, expression))

    def add_failed_rule(self, name: str, error: RailroadError) -> None:
        """Record a rule whose layout could not be built; it draws as an error marker."""
        logger.warning("rule %r failed to lay out: %s", name, error)
        self.entries.append(RuleFailure(name, error))

    def draw(self) -> DrawingResult:
        cfg = self.config
        root = Group(cfg.grid_size, attrs={"class": "diagram"})
        failures: list[RuleFailure] = []
        pad = cfg.padding
        y = pad
        max_width = 0

        for entry in self.entries:
            if isinstance(entry, RuleLayout):
                group = root.translate(pad, y, **{"class": "rule-group", "id": f"rule-{entry.name}"})
                try:
                    self._draw_rule(entry, group)
                except RailroadError as exc:
                    logger.warning("rule %r failed to render: %s", entry.name, exc)
                    root.children.remove(group)
                    entry = RuleFailure(entry.name, exc)
                else:
                    max_width = max(max_width, entry.expression.width + 2 * RULE_RAIL)
                    y += entry.expression.height + cfg.rule_spacing
                    continue
            max_width = max(max_width, self._draw_error(root, pad, y, entry))
            failures.append(entry)
            y += ERROR_HEIGHT + cfg.rule_spacing

        if self.entries:
            y -= cfg.rule_spacing
        return DrawingResult(root=root, width=max_width + 2 * pad, height=y + pad + 1, failures=failures)

    def _draw_rule(self, rule: RuleLayout, group: Group) -> None:
        expr = rule.expression
        baseline = expr.baseline
        r = self.config.terminal_radius
        logger.debug("rule %r: %dx%d baseline %d", rule.name, expr.width, expr.height, baseline)

        group.add_circle(0, baseline, r, "start-terminal")
        with open_builder(group) as track:
            track.start(0, baseline, Heading.EAST).forward(RULE_RAIL).finish("start-rail")
            render_node(expr, group.translate(RULE_RAIL, 0), self.config)
            track.start(RULE_RAIL + expr.width, baseline, Heading.EAST).forward(RULE_RAIL).finish("end-rail")
        group.add_circle(RULE_RAIL + expr.width + RULE_RAIL, baseline, r, "end-terminal")

    def _draw_error(self, root: Group, x: int, y: int, failure: RuleFailure) -> int:
        """Draw the error marker and return its width in grid units."""
        group = root.translate(x, y, **{"class": "rule-error", "id": f"rule-{failure.name}"})
        group.add_text(0, 1, failure.message, "error", anchor="start")
        try:
            return grid_units(self.measurer, failure.message, "error", self.config.grid_size)
        except MeasurementFailure as exc:
            # one em per character bounds any glyph advance
            logger.debug("sizing error marker for %r without the measurer: %s", failure.name, exc)
            em = MonospaceMeasurer(advance=self.config.font_size if self.config.grid_size > 1 else 1)
            return grid_units(em, failure.message, "error", self.config.grid_size)
