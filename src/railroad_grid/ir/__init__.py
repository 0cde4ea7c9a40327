"""Intermediate representation: expression AST and grammar reference graph."""

from railroad_grid.ir.ast import BypassExpr, Expr, Grammar, LoopExpr, Rule, SequenceExpr, StackExpr, TextBoxExpr
from railroad_grid.ir.graph import GrammarIR

__all__ = [
    "BypassExpr",
    "Expr",
    "Grammar",
    "GrammarIR",
    "LoopExpr",
    "Rule",
    "SequenceExpr",
    "StackExpr",
    "TextBoxExpr",
]
