"""Tests for render.py — rail geometry each node draws in its own frame."""

from __future__ import annotations

import pytest

from railroad_grid.layout import bypass, loop, sequence, stack, text_box
from railroad_grid.render import render_node
from railroad_grid.renderers.measure import MonospaceMeasurer
from railroad_grid.renderers.surface import Group, PathElement, RoundedRect, TextElement


def box(text: str, style: str = "terminal"):
    return text_box(text, style, measurer=MonospaceMeasurer(), grid_size=1)


def draw(node) -> Group:
    surface = Group(1)
    render_node(node, surface)
    return surface


def own_paths(surface: Group) -> dict[str, PathElement]:
    """Paths drawn directly by the node, keyed by label (last one wins)."""
    return {c.label: c for c in surface.children if isinstance(c, PathElement)}


def child_groups(surface: Group) -> list[Group]:
    return [c for c in surface.children if isinstance(c, Group)]


def endpoints(path: PathElement) -> tuple[tuple[float, float], tuple[float, float]]:
    pts = path.points()
    return pts[0], pts[-1]


def turn_count(path: PathElement) -> int:
    return path.sequence.count("turnLeft()") + path.sequence.count("turnRight()")


class TestTextBoxRender:
    def test_stubs_box_and_label(self):
        node = box("FROM")
        surface = draw(node)
        paths = own_paths(surface)
        assert endpoints(paths["textbox-left"]) == ((0, 1), (1, 1))
        assert endpoints(paths["textbox-right"]) == ((node.width - 1, 1), (node.width, 1))

        rect = next(c for c in surface.children if isinstance(c, RoundedRect))
        assert (rect.x, rect.y, rect.width, rect.height) == (1, 0, node.width - 2, 2)
        assert rect.css_class == "textbox terminal"

        label = next(c for c in surface.children if isinstance(c, TextElement))
        assert label.text == "FROM"
        assert (label.x, label.y) == (node.width / 2, 1)

    def test_scale_applies_to_shapes(self):
        node = box("AB")
        surface = Group(24)
        render_node(node, surface)
        rect = next(c for c in surface.children if isinstance(c, RoundedRect))
        assert (rect.x, rect.height) == (24, 48)


class TestSequenceRender:
    def test_children_and_gap_rails(self):
        a, b = box("ABC"), box("XYZ")
        surface = draw(sequence(a, b))
        groups = child_groups(surface)
        assert [(g.x, g.y) for g in groups] == [(0, 0), (8, 0)]
        rail = own_paths(surface)["seq-0"]
        assert endpoints(rail) == ((6, 1), (8, 1))
        assert turn_count(rail) == 0

    def test_baseline_continuity(self):
        shallow, deep = box("A"), bypass(box("B"))
        node = sequence(shallow, deep, box("C"))
        surface = draw(node)
        groups = child_groups(surface)
        # shallow children shift down to the deep baseline
        assert [g.y for g in groups] == [1, 0, 1]
        for label in ("seq-0", "seq-1"):
            (x0, y0), (x1, y1) = endpoints(own_paths(surface)[label])
            assert y0 == y1 == node.baseline
            assert x1 - x0 == 2

    def test_no_rail_after_last_child(self):
        surface = draw(sequence(box("A")))
        assert own_paths(surface) == {}


class TestStackRender:
    def test_children_centered_and_stacked(self):
        node = stack(box("A"), box("LONGER"), box("ABC"))
        surface = draw(node)
        groups = child_groups(surface)
        # inner width 10: offsets 2 + (10 - w) / 2
        assert [(g.x, g.y) for g in groups] == [(5, 0), (2, 3), (4, 6)]

    def test_first_child_is_straight(self):
        node = stack(box("A"), box("B"))
        paths = own_paths(draw(node))
        assert endpoints(paths["child0-left"]) == ((0, 1), (2, 1))
        assert endpoints(paths["child0-right"]) == ((6, 1), (8, 1))
        assert turn_count(paths["child0-left"]) == 0

    def test_endpoint_symmetry(self):
        node = stack(box("A"), box("BBBB"), bypass(box("C")), box("D"))
        paths = own_paths(draw(node))
        for i in range(4):
            left_start, _ = endpoints(paths[f"child{i}-left"])
            right = paths[f"child{i}-right"]
            assert left_start == (0, node.baseline)
            if i == 0:
                assert endpoints(right)[1] == (node.width, node.baseline)
            else:
                assert endpoints(right)[0] == (node.width, node.baseline)

    def test_branch_connector_reaches_child_baseline(self):
        node = stack(box("A"), box("B"))
        surface = draw(node)
        paths = own_paths(surface)
        second = child_groups(surface)[1]
        child_baseline = second.y + 1

        left = paths["child1-left"]
        assert turn_count(left) == 2
        start, end = endpoints(left)
        assert end == (second.x, child_baseline)
        # net displacement equals the full offset despite the two turns
        assert (end[0] - start[0], end[1] - start[1]) == (second.x, child_baseline - node.baseline)

        right = paths["child1-right"]
        assert turn_count(right) == 2
        assert endpoints(right) == ((node.width, node.baseline), (second.x + 4, child_baseline))

    def test_branch_connector_sequence(self):
        node = stack(box("A"), box("B"))
        left = own_paths(draw(node))["child1-left"]
        assert left.sequence == "start(0, 1, east) turnRight() forward(1) turnLeft() forward(0)"


class TestBypassRender:
    def test_child_placed_one_unit_down(self):
        node = bypass(box("AB"))
        groups = child_groups(draw(node))
        assert [(g.x, g.y) for g in groups] == [(2, 1)]

    def test_skip_lane_over_the_top(self):
        node = bypass(box("AB"))
        path = own_paths(draw(node))["bypass-path"]
        pts = path.points()
        assert pts[0] == (0, node.baseline)
        assert pts[-1] == (node.width, node.baseline)
        assert min(y for _, y in pts) == 0
        assert turn_count(path) == 4

    def test_through_path_stubs(self):
        node = bypass(box("AB"))
        surface = draw(node)
        through = [c for c in surface.children if isinstance(c, PathElement) and c.label == "through-path"]
        assert sorted(endpoints(p) for p in through) == [
            ((0, node.baseline), (2, node.baseline)),
            ((node.width, node.baseline), (node.width - 2, node.baseline)),
        ]


class TestLoopRender:
    def test_loop_path_walks_back_from_inside(self):
        node = loop(box("AB"))
        path = own_paths(draw(node))["loop-path"]
        pts = path.points()
        assert pts[0] == (2, node.baseline)
        assert pts[-1] == (node.width - 2, node.baseline)
        assert min(y for _, y in pts) == 0
        assert path.sequence.startswith("start(2, 2, west) turnRight()")
        assert path.css_class == "rail-track loop"

    def test_loop_bounding_box_matches_bypass(self):
        child = box("AB")
        bp = own_paths(draw(bypass(child)))["bypass-path"].points()
        lp = own_paths(draw(loop(child)))["loop-path"].points()

        def bounds(pts):
            xs, ys = [p[0] for p in pts], [p[1] for p in pts]
            return min(xs), max(xs), min(ys), max(ys)

        assert bounds(bp)[2:] == bounds(lp)[2:]
        assert bounds(lp)[0] == 1 and bounds(lp)[1] == bypass(child).width - 1


class TestRenderProperties:
    def test_idempotent(self):
        tree = sequence(box("A"), stack(box("B"), loop(box("C"))), bypass(box("D")))
        assert draw(tree) == draw(tree)

    def test_nonterminal_group_is_navigable(self):
        surface = draw(sequence(box("expr", "nonterminal"), box("x")))
        groups = child_groups(surface)
        assert groups[0].attrs == {"data-rule": "expr"}
        assert groups[1].attrs == {}

    def test_not_a_node_raises(self):
        with pytest.raises(TypeError):
            render_node("nope", Group(1))
