"""Expression-language parser — hand-rolled recursive descent.

Parses grammar files and single expressions into the AST types from
ir.ast. Source text is never evaluated: only the five combinator names are
recognised, and anything inside a string literal is plain text.

    grammar := rule*
    rule    := NAME ("=" | "::=") expr ";"?
    expr    := CALL "(" [arg ("," arg)*] ")"
    arg     := expr | STRING
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from railroad_grid.errors import ExpressionSyntaxError
from railroad_grid.ir.ast import BypassExpr, Expr, Grammar, LoopExpr, Rule, SequenceExpr, StackExpr, TextBoxExpr
from railroad_grid.types import TERMINAL

# ─── Tokenizer ───────────────────────────────────────────────────────────────

_COMMENT_RE = re.compile(r"(?:#|//)[^\n]*")
_WHITESPACE_RE = re.compile(r"[ \t\r\n]+")
_NAME_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_-]*")
_CALL_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")

_ESCAPES = {"n": "\n", "t": "\t", "\\": "\\", '"': '"', "'": "'"}

COMBINATORS = ("textBox", "sequence", "stack", "bypass", "loop")


@dataclass
class _Cursor:
    """Stateful parser cursor over the input string."""

    src: str
    pos: int = 0

    def eof(self) -> bool:
        return self.pos >= len(self.src)

    def peek(self, s: str) -> bool:
        return self.src.startswith(s, self.pos)

    def consume(self, s: str) -> bool:
        if self.peek(s):
            self.pos += len(s)
            return True
        return False

    def match_re(self, pattern: re.Pattern[str]) -> str | None:
        m = pattern.match(self.src, self.pos)
        if m:
            self.pos = m.end()
            return m.group(0)
        return None

    def skip_ws(self) -> None:
        while True:
            m = _WHITESPACE_RE.match(self.src, self.pos)
            if m:
                self.pos = m.end()
                continue
            m = _COMMENT_RE.match(self.src, self.pos)
            if m:
                self.pos = m.end()
                continue
            break

    def error(self, message: str, pos: int | None = None) -> ExpressionSyntaxError:
        return ExpressionSyntaxError(message, self.src, self.pos if pos is None else pos)

    def expect(self, s: str, what: str) -> None:
        self.skip_ws()
        if not self.consume(s):
            found = self.src[self.pos] if not self.eof() else "end of input"
            raise self.error(f"expected {what}, found {found!r}")

    # ── Literals ──────────────────────────────────────────────────────────────

    def parse_string(self) -> str:
        quote = self.src[self.pos]
        start = self.pos
        self.pos += 1
        buf: list[str] = []
        while self.pos < len(self.src):
            ch = self.src[self.pos]
            if ch == quote:
                self.pos += 1
                return "".join(buf)
            if ch == "\n":
                break
            if ch == "\\" and self.pos + 1 < len(self.src):
                nxt = self.src[self.pos + 1]
                buf.append(_ESCAPES.get(nxt, nxt))
                self.pos += 2
            else:
                buf.append(ch)
                self.pos += 1
        raise self.error("unterminated string literal", start)

    # ── Expressions ───────────────────────────────────────────────────────────

    def parse_arg(self) -> Expr | str:
        self.skip_ws()
        if self.peek('"') or self.peek("'"):
            return self.parse_string()
        return self.parse_expr()

    def parse_expr(self) -> Expr:
        self.skip_ws()
        start = self.pos
        name = self.match_re(_CALL_RE)
        if name is None:
            found = self.src[self.pos] if not self.eof() else "end of input"
            raise self.error(f"expected an expression, found {found!r}")
        if name not in COMBINATORS:
            raise self.error(f"unknown function {name!r}; expected one of {', '.join(COMBINATORS)}", start)
        self.skip_ws()
        if not self.consume("("):
            raise self.error(f"expected '(' after {name}")
        args = self.parse_args()
        return _build_call(self, name, args, start)

    def parse_args(self) -> list[Expr | str]:
        args: list[Expr | str] = []
        self.skip_ws()
        if self.consume(")"):
            return args
        while True:
            args.append(self.parse_arg())
            self.skip_ws()
            if self.consume(")"):
                return args
            if not self.consume(","):
                found = self.src[self.pos] if not self.eof() else "end of input"
                raise self.error(f"expected ',' or ')', found {found!r}")

    # ── Rules ─────────────────────────────────────────────────────────────────

    def parse_rule(self) -> Rule:
        self.skip_ws()
        name = self.match_re(_NAME_RE)
        if name is None:
            raise self.error("expected a rule name")
        self.skip_ws()
        if not (self.consume("::=") or self.consume("=")):
            raise self.error(f"expected '=' after rule name {name!r}")
        expr = self.parse_expr()
        self.skip_ws()
        self.consume(";")
        return Rule(name=name, expression=expr)

    def parse_grammar(self) -> Grammar:
        grammar = Grammar()
        self.skip_ws()
        while not self.eof():
            start = self.pos
            rule = self.parse_rule()
            if grammar.rule(rule.name) is not None:
                raise self.error(f"duplicate rule {rule.name!r}", start)
            grammar.rules.append(rule)
            self.skip_ws()
        return grammar


def _build_call(cur: _Cursor, name: str, args: list[Expr | str], start: int) -> Expr:
    if name == "textBox":
        if not 1 <= len(args) <= 2 or not all(isinstance(a, str) for a in args):
            raise cur.error("textBox() takes a text string and an optional style string", start)
        text = args[0]
        style = args[1] if len(args) == 2 else TERMINAL
        return TextBoxExpr(text=text, style=style)

    items: list[Expr] = []
    for a in args:
        if isinstance(a, str):
            raise cur.error(f"{name}() arguments must be expressions, got string {a!r}", start)
        items.append(a)

    if name in ("bypass", "loop"):
        if len(items) != 1:
            raise cur.error(f"{name}() takes exactly one expression, got {len(items)}", start)
        return BypassExpr(items[0]) if name == "bypass" else LoopExpr(items[0])

    if not items:
        raise cur.error(f"{name}() needs at least one expression", start)
    if name == "sequence":
        return SequenceExpr(tuple(items))
    return StackExpr(tuple(items))


def parse_expression(src: str) -> Expr:
    """Parse a single expression; trailing input is an error."""
    cur = _Cursor(src)
    expr = cur.parse_expr()
    cur.skip_ws()
    cur.consume(";")
    cur.skip_ws()
    if not cur.eof():
        raise cur.error("unexpected input after expression")
    return expr


def parse_grammar(src: str) -> Grammar:
    """Parse a sequence of ``name = expression`` rules."""
    return _Cursor(src).parse_grammar()
