"""Grammar IR — rule reference graph built on a networkx DiGraph.

One node per rule, one edge per nonterminal reference. Nonterminals that
name no rule still get a node (with ``rule=None``) so dangling references
show up in the analysis instead of vanishing.
"""

from __future__ import annotations

import networkx as nx

from railroad_grid.ir.ast import Grammar, Rule


class GrammarIR:
    """Wraps the reference graph and exposes topology queries."""

    def __init__(self, digraph: nx.DiGraph, rule_names: list[str]) -> None:
        self.digraph = digraph
        self.rule_names = rule_names

    @classmethod
    def from_ast(cls, grammar: Grammar) -> GrammarIR:
        digraph: nx.DiGraph = nx.DiGraph()
        for rule in grammar.rules:
            digraph.add_node(rule.name, rule=rule)
        for rule in grammar.rules:
            for ref in rule.references():
                if ref not in digraph:
                    digraph.add_node(ref, rule=None)
                digraph.add_edge(rule.name, ref)
        return cls(digraph=digraph, rule_names=grammar.names())

    def rule(self, name: str) -> Rule | None:
        if name not in self.digraph:
            return None
        return self.digraph.nodes[name]["rule"]

    def rule_count(self) -> int:
        return len(self.rule_names)

    def references(self, name: str) -> list[str]:
        if name not in self.digraph:
            return []
        return sorted(self.digraph.successors(name))

    def undefined_references(self) -> list[tuple[str, str]]:
        """(rule, name) pairs for nonterminals with no matching rule."""
        missing: list[tuple[str, str]] = []
        for src, dst in self.digraph.edges:
            if self.digraph.nodes[dst]["rule"] is None:
                missing.append((src, dst))
        missing.sort()
        return missing

    def unreachable_rules(self, start: str | None = None) -> list[str]:
        """Rules that cannot be reached from ``start`` (the first rule by default)."""
        if not self.rule_names:
            return []
        if start is None:
            start = self.rule_names[0]
        if start not in self.digraph:
            raise ValueError(f"Unknown start rule '{start}'")
        reachable = nx.descendants(self.digraph, start) | {start}
        return [name for name in self.rule_names if name not in reachable]

    def recursive_rules(self) -> list[str]:
        """Rules that take part in a reference cycle, self-references included."""
        recursive: set[str] = set()
        for component in nx.strongly_connected_components(self.digraph):
            if len(component) > 1:
                recursive.update(component)
        recursive.update(n for n in self.digraph.nodes if self.digraph.has_edge(n, n))
        return [name for name in self.rule_names if name in recursive]

    def dependency_order(self) -> list[str] | None:
        """Rules ordered so each comes after the rules it references, or None if cyclic."""
        try:
            order = list(reversed(list(nx.topological_sort(self.digraph))))
        except nx.NetworkXUnfeasible:
            return None
        return [n for n in order if self.digraph.nodes[n]["rule"] is not None]
