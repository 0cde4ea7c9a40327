"""SVG renderer — serialises a drawing tree with xml.etree.ElementTree."""

from __future__ import annotations

import xml.etree.ElementTree as ET

from railroad_grid.config import RenderConfig
from railroad_grid.diagram import DrawingResult
from railroad_grid.renderers.surface import (
    CircleElement,
    Group,
    LineTo,
    MoveTo,
    PathCommand,
    PathElement,
    QuadTo,
    RoundedRect,
    TextElement,
)

SVG_NS = "http://www.w3.org/2000/svg"

DEFAULT_STYLESHEET = """
.rail-track { fill: none; stroke: #222; stroke-width: 2; }
.textbox { fill: #fff; stroke: #222; stroke-width: 2; }
.textbox.nonterminal { fill: #eef4ff; }
.textbox-text { font-family: %(family)s; font-size: %(size)spx; fill: #111; }
.textbox-text.nonterminal { font-style: italic; }
.start-terminal, .end-terminal { fill: #000; }
.error { font-family: %(family)s; font-size: %(size)spx; fill: #b00020; }
"""


def _fmt(v: float) -> str:
    if float(v).is_integer():
        return str(int(v))
    return f"{v:.4g}"


def path_data(commands: list[PathCommand]) -> str:
    parts: list[str] = []
    for cmd in commands:
        if isinstance(cmd, MoveTo):
            parts.append(f"M {_fmt(cmd.x)} {_fmt(cmd.y)}")
        elif isinstance(cmd, LineTo):
            parts.append(f"L {_fmt(cmd.x)} {_fmt(cmd.y)}")
        elif isinstance(cmd, QuadTo):
            parts.append(f"Q {_fmt(cmd.cx)} {_fmt(cmd.cy)} {_fmt(cmd.x)} {_fmt(cmd.y)}")
    return " ".join(parts)


def _emit(parent: ET.Element, group: Group) -> None:
    attrs = dict(group.attrs)
    if group.x or group.y:
        attrs["transform"] = f"translate({_fmt(group.x)}, {_fmt(group.y)})"
    node = ET.SubElement(parent, "g", attrs)
    for child in group.children:
        if isinstance(child, Group):
            _emit(node, child)
        elif isinstance(child, PathElement):
            path_attrs = {"d": path_data(child.commands), "class": child.css_class}
            if child.sequence:
                path_attrs["data-seq"] = child.sequence
            if child.label:
                path_attrs["data-id"] = child.label
            ET.SubElement(node, "path", path_attrs)
        elif isinstance(child, RoundedRect):
            ET.SubElement(
                node,
                "rect",
                {
                    "x": _fmt(child.x),
                    "y": _fmt(child.y),
                    "width": _fmt(child.width),
                    "height": _fmt(child.height),
                    "rx": _fmt(child.radius),
                    "ry": _fmt(child.radius),
                    "class": child.css_class,
                },
            )
        elif isinstance(child, TextElement):
            text = ET.SubElement(
                node,
                "text",
                {
                    "x": _fmt(child.x),
                    "y": _fmt(child.y),
                    "text-anchor": child.anchor,
                    "dominant-baseline": "middle",
                    "class": child.css_class,
                },
            )
            text.text = child.text
        elif isinstance(child, CircleElement):
            ET.SubElement(
                node,
                "circle",
                {"cx": _fmt(child.cx), "cy": _fmt(child.cy), "r": _fmt(child.r), "class": child.css_class},
            )


class SvgRenderer:
    """Standalone SVG document renderer."""

    def __init__(self, config: RenderConfig | None = None) -> None:
        self.config = config or RenderConfig()

    def to_element(self, result: DrawingResult) -> ET.Element:
        scale = result.scale
        width = result.width * scale
        height = result.height * scale
        svg = ET.Element(
            "svg",
            {
                "xmlns": SVG_NS,
                "width": _fmt(width),
                "height": _fmt(height),
                "viewBox": f"0 0 {_fmt(width)} {_fmt(height)}",
                "class": "diagram-svg",
            },
        )
        if self.config.stylesheet:
            style = ET.SubElement(svg, "style")
            style.text = DEFAULT_STYLESHEET % {"family": self.config.font_family, "size": _fmt(self.config.font_size)}
        _emit(svg, result.root)
        return svg

    def render(self, result: DrawingResult) -> str:
        return ET.tostring(self.to_element(result), encoding="unicode") + "\n"
