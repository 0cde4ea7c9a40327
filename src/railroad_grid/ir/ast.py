"""AST data structures for the grammar-expression language.

These types are the parsed form of expressions such as
``sequence(textBox("SELECT", "terminal"), bypass(textBox("DISTINCT")))``.
They carry no geometry; :func:`railroad_grid.layout.engine.build_layout`
turns them into layout nodes.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

from railroad_grid.types import NONTERMINAL, TERMINAL


@dataclass(frozen=True)
class TextBoxExpr:
    text: str
    style: str = TERMINAL

    @property
    def is_nonterminal(self) -> bool:
        return self.style == NONTERMINAL


@dataclass(frozen=True)
class SequenceExpr:
    items: tuple[Expr, ...]


@dataclass(frozen=True)
class StackExpr:
    items: tuple[Expr, ...]


@dataclass(frozen=True)
class BypassExpr:
    item: Expr


@dataclass(frozen=True)
class LoopExpr:
    item: Expr


Expr = TextBoxExpr | SequenceExpr | StackExpr | BypassExpr | LoopExpr


def iter_text_boxes(expr: Expr) -> Iterator[TextBoxExpr]:
    """Depth-first, left-to-right walk over the leaves of ``expr``."""
    match expr:
        case TextBoxExpr():
            yield expr
        case SequenceExpr(items=items) | StackExpr(items=items):
            for item in items:
                yield from iter_text_boxes(item)
        case BypassExpr(item=item) | LoopExpr(item=item):
            yield from iter_text_boxes(item)


@dataclass
class Rule:
    name: str
    expression: Expr

    def references(self) -> list[str]:
        """Nonterminal names used by this rule, in order of first use."""
        seen: list[str] = []
        for leaf in iter_text_boxes(self.expression):
            if leaf.is_nonterminal and leaf.text not in seen:
                seen.append(leaf.text)
        return seen


@dataclass
class Grammar:
    rules: list[Rule] = field(default_factory=list)

    def rule(self, name: str) -> Rule | None:
        for r in self.rules:
            if r.name == name:
                return r
        return None

    def names(self) -> list[str]:
        return [r.name for r in self.rules]
