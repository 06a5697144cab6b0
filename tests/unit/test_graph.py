"""
Tests for the alias dependency graph.
"""

from __future__ import annotations

from tokenkit.components.resolver import (
    DependencyGraph,
    build_graph,
    find_cycles,
    topological_order,
)
from tokenkit.domain.entities import Token


def graph_of(*edges: tuple[str, str], nodes: tuple[str, ...] = ()) -> DependencyGraph:
    graph = DependencyGraph()
    for node in nodes:
        graph.add_node(node)
    for source, target in edges:
        graph.add_edge(source, target)
    return graph


def ids(graph: DependencyGraph, nodes: list[int]) -> list[str]:
    return [graph.ids[node] for node in nodes]


class TestDependencyGraph:
    def test_arena_indices_are_stable(self) -> None:
        graph = graph_of(("a", "b"), ("c", "b"))

        assert graph.ids == ["a", "b", "c"]
        assert graph.edges == [[1], [], [1]]

    def test_build_graph_skips_foreign_and_missing(self) -> None:
        base = Token(id="base", scope="p1", path=["base"])
        foreign = Token(id="foreign", scope="p2", path=["foreign"])
        tokens = [
            base,
            Token(id="alias", scope="p1", path=["alias"], alias_to="base"),
            Token(id="cross", scope="p1", path=["cross"], alias_to="foreign"),
            Token(id="dangling", scope="p1", path=["dangling"], alias_to="gone"),
        ]
        lookup = {t.id: t for t in [*tokens, foreign]}.get

        graph = build_graph(tokens, lookup)

        assert graph.ids == ["base", "alias", "cross", "dangling"]
        assert graph.edges == [[], [0], [], []]


class TestFindCycles:
    def test_two_cycle(self) -> None:
        graph = graph_of(("a", "b"), ("b", "a"))

        assert [ids(graph, c) for c in find_cycles(graph)] == [["a", "b"]]

    def test_tail_into_cycle(self) -> None:
        """Only the loop itself is reported, not the path leading in."""
        graph = graph_of(("t", "a"), ("a", "b"), ("b", "c"), ("c", "a"))

        assert [ids(graph, c) for c in find_cycles(graph)] == [["a", "b", "c"]]

    def test_diamond_has_no_cycle(self) -> None:
        """Shared targets reached twice are not cycles."""
        graph = graph_of(("a", "c"), ("b", "c"), ("c", "d"))

        assert find_cycles(graph) == []

    def test_later_roots_still_searched(self) -> None:
        graph = graph_of(("a", "b"), ("b", "a"), ("x", "y"), ("y", "x"))

        assert [ids(graph, c) for c in find_cycles(graph)] == [["a", "b"], ["x", "y"]]

    def test_sibling_after_cycle_is_not_a_cycle(self) -> None:
        """Nodes leave the DFS path once their edges are exhausted."""
        graph = graph_of(("r", "a"), ("a", "a"), ("r", "s"), ("s", "t"))

        assert [ids(graph, c) for c in find_cycles(graph)] == [["a"]]


class TestTopologicalOrder:
    def test_targets_first(self) -> None:
        graph = graph_of(("a", "b"), ("b", "c"))

        assert ids(graph, topological_order(graph, [])) == ["c", "b", "a"]

    def test_every_node_once_with_cycle(self) -> None:
        graph = graph_of(("t", "a"), ("a", "b"), ("b", "a"), nodes=("lone",))
        cycles = find_cycles(graph)

        order = ids(graph, topological_order(graph, cycles))

        assert sorted(order) == ["a", "b", "lone", "t"]
        assert order.index("a") < order.index("t")

    def test_deep_chain_is_iterative(self) -> None:
        edges = [(f"n{i}", f"n{i + 1}") for i in range(20000)]
        graph = graph_of(*edges)

        order = topological_order(graph, find_cycles(graph))

        assert graph.ids[order[0]] == "n20000"
        assert len(order) == 20001
