"""Parser entry point — detect source kind and dispatch."""

from __future__ import annotations

import re

from railroad_grid.ir.ast import Grammar, Rule
from railroad_grid.parsers.expression import COMBINATORS, parse_expression, parse_grammar

DEFAULT_RULE_NAME = "expression"

_LEADING_CALL_RE = re.compile(r"\s*(?:(?:#|//)[^\n]*\s*)*([A-Za-z_][A-Za-z0-9_]*)\s*\(")


def detect_kind(src: str) -> str:
    """Return 'expression' for a bare combinator call, else 'grammar'."""
    m = _LEADING_CALL_RE.match(src)
    if m and m.group(1) in COMBINATORS:
        return "expression"
    return "grammar"


def parse(src: str, rule_name: str = DEFAULT_RULE_NAME) -> Grammar:
    """Parse a grammar file, or wrap a bare expression in a one-rule grammar."""
    if detect_kind(src) == "expression":
        return Grammar(rules=[Rule(name=rule_name, expression=parse_expression(src))])
    return parse_grammar(src)


__all__ = ["DEFAULT_RULE_NAME", "detect_kind", "parse", "parse_expression", "parse_grammar"]
