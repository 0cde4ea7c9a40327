"""Tests for diagram.py — rule framing and per-rule error isolation."""

import pytest

from railroad_grid import RenderConfig, build_diagram
from railroad_grid.diagram import Diagram, RuleFailure, RuleLayout
from railroad_grid.errors import InvalidState, MeasurementFailure
from railroad_grid.ir.ast import Grammar, Rule, TextBoxExpr
from railroad_grid.layout import bypass, text_box
from railroad_grid.renderers.measure import MonospaceMeasurer
from railroad_grid.renderers.surface import CircleElement, Group, PathElement

TEXT = RenderConfig().for_text()


class PickyMeasurer:
    """Monospace, but refuses to measure one label."""

    def __init__(self, bad: str) -> None:
        self.bad = bad

    def measure(self, text: str, style: str) -> float:
        if text == self.bad:
            raise RuntimeError("font not loaded")
        return float(len(text))


def rule_groups(root: Group) -> list[Group]:
    return [c for c in root.children if isinstance(c, Group)]


class TestRuleFrame:
    def test_terminals_and_lead_rails(self):
        diagram = Diagram(TEXT)
        node = bypass(text_box("AB", grid_size=1))
        diagram.add_rule("opt", node)
        result = diagram.draw()

        (group,) = rule_groups(result.root)
        assert (group.x, group.y) == (1, 1)
        assert group.attrs == {"class": "rule-group", "id": "rule-opt"}

        circles = [c for c in group.children if isinstance(c, CircleElement)]
        assert [(c.cx, c.cy, c.css_class) for c in circles] == [
            (0, node.baseline, "start-terminal"),
            (node.width + 4, node.baseline, "end-terminal"),
        ]
        rails = {p.label: p.points() for p in group.children if isinstance(p, PathElement)}
        assert rails["start-rail"] == [(0, node.baseline), (2, node.baseline)]
        assert rails["end-rail"] == [(node.width + 2, node.baseline), (node.width + 4, node.baseline)]

    def test_expression_placed_after_lead_rail(self):
        diagram = Diagram(TEXT)
        diagram.add_rule("a", text_box("A", grid_size=1))
        (group,) = rule_groups(diagram.draw().root)
        inner = [c for c in group.children if isinstance(c, Group)]
        assert [(g.x, g.y) for g in inner] == [(2, 0)]

    def test_rules_stack_top_to_bottom(self):
        diagram = Diagram(TEXT)
        diagram.add_rule("a", text_box("A", grid_size=1))
        diagram.add_rule("b", bypass(text_box("B", grid_size=1)))
        diagram.add_rule("c", text_box("C", grid_size=1))
        result = diagram.draw()
        assert [g.y for g in rule_groups(result.root)] == [1, 4, 8]
        # last rule ends at 8 + 2, then padding and one row for the canvas edge
        assert result.height == 12
        assert result.width == (8 + 4) + 2

    def test_device_units_at_pixel_scale(self):
        diagram = Diagram(RenderConfig(grid_size=24))
        diagram.add_rule("a", text_box("A"))
        result = diagram.draw()
        (group,) = rule_groups(result.root)
        assert (group.x, group.y) == (24, 24)
        assert result.scale == 24

    def test_rules_property_skips_failures(self):
        diagram = Diagram(TEXT)
        diagram.add_rule("a", text_box("A", grid_size=1))
        diagram.add_failed_rule("b", MeasurementFailure("nope"))
        assert [r.name for r in diagram.rules] == ["a"]


class TestErrorIsolation:
    def test_failed_layout_becomes_error_marker(self):
        grammar = Grammar(
            [
                Rule("a", TextBoxExpr("A")),
                Rule("b", TextBoxExpr("broken")),
                Rule("c", TextBoxExpr("C")),
            ]
        )
        result = build_diagram(grammar, TEXT, PickyMeasurer("broken")).draw()
        groups = rule_groups(result.root)
        assert [g.attrs["id"] for g in groups] == ["rule-a", "rule-b", "rule-c"]
        assert [g.attrs["class"] for g in groups] == ["rule-group", "rule-error", "rule-group"]

        assert [f.name for f in result.failures] == ["b"]
        assert isinstance(result.failures[0].error, MeasurementFailure)
        label = groups[1].children[0]
        assert label.text.startswith("Error: ")
        assert label.anchor == "start"

    def test_error_marker_counts_toward_width(self):
        diagram = Diagram(TEXT)
        diagram.add_rule("a", text_box("A", grid_size=1))
        failure = RuleFailure("b", MeasurementFailure("a rather long explanation of the failure"))
        diagram.add_failed_rule(failure.name, failure.error)
        result = diagram.draw()
        assert result.width == len(failure.message) + 2

    def test_error_marker_sized_with_the_diagram_measurer(self):
        diagram = Diagram(TEXT, MonospaceMeasurer(advance=2))
        diagram.add_failed_rule("b", MeasurementFailure("nope"))
        result = diagram.draw()
        assert result.width == 2 * len("Error: nope") + 2

    def test_build_diagram_measures_errors_like_layouts(self):
        grammar = Grammar([Rule("a", TextBoxExpr("A")), Rule("b", TextBoxExpr("broken"))])
        diagram = build_diagram(grammar, TEXT, PickyMeasurer("broken"))
        assert isinstance(diagram.measurer, PickyMeasurer)

    def test_unusable_measurer_still_sizes_the_marker(self):
        diagram = Diagram(TEXT, PickyMeasurer("Error: nope"))
        diagram.add_failed_rule("b", MeasurementFailure("nope"))
        result = diagram.draw()
        assert result.width == len("Error: nope") + 2
        assert [f.name for f in result.failures] == ["b"]

    def test_render_failure_is_isolated(self, monkeypatch):
        import railroad_grid.diagram as diagram_mod

        real = diagram_mod.render_node

        def flaky(node, surface, config=None):
            if getattr(node, "text", None) == "B":
                raise InvalidState("boom")
            real(node, surface, config)

        monkeypatch.setattr(diagram_mod, "render_node", flaky)
        diagram = Diagram(TEXT)
        diagram.add_rule("a", text_box("A", grid_size=1))
        diagram.add_rule("b", text_box("B", grid_size=1))
        result = diagram.draw()

        groups = rule_groups(result.root)
        assert [g.attrs["class"] for g in groups] == ["rule-group", "rule-error"]
        assert [f.name for f in result.failures] == ["b"]
        # nothing half-drawn is left behind for the failed rule
        assert all(p.label != "start-rail" for p in groups[1].paths())

    def test_failures_are_logged(self, caplog):
        diagram = Diagram(TEXT)
        with caplog.at_level("WARNING", logger="railroad_grid.diagram"):
            diagram.add_failed_rule("b", MeasurementFailure("nope"))
        assert "nope" in caplog.text


class TestBuildDiagram:
    def test_all_rules_laid_out(self):
        grammar = Grammar([Rule("a", TextBoxExpr("A")), Rule("b", TextBoxExpr("B"))])
        diagram = build_diagram(grammar, TEXT)
        assert [r.name for r in diagram.rules] == ["a", "b"]
        assert all(isinstance(r, RuleLayout) for r in diagram.rules)
        assert diagram.rules[0].expression.width == 4

    @pytest.mark.parametrize("bad", ["A", "B"])
    def test_one_bad_rule_never_hides_the_others(self, bad):
        grammar = Grammar([Rule("a", TextBoxExpr("A")), Rule("b", TextBoxExpr("B"))])
        diagram = build_diagram(grammar, TEXT, PickyMeasurer(bad))
        assert len(diagram.entries) == 2
        assert len(diagram.rules) == 1
