"""
Alias dependency graph.

Nodes are integer indices into an arena of token ids; an edge ``a -> b``
means token ``a`` is an alias of token ``b``. Both traversals use explicit
stacks so chain depth is bounded by memory, not the recursion limit.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable

from tokenkit.domain.entities import Token

logger = logging.getLogger(__name__)


class DependencyGraph:
    """Arena-indexed adjacency lists."""

    def __init__(self) -> None:
        self.ids: list[str] = []
        self.edges: list[list[int]] = []
        self._index: dict[str, int] = {}

    def __len__(self) -> int:
        return len(self.ids)

    def add_node(self, token_id: str) -> int:
        node = self._index.get(token_id)
        if node is None:
            node = len(self.ids)
            self._index[token_id] = node
            self.ids.append(token_id)
            self.edges.append([])
        return node

    def add_edge(self, source_id: str, target_id: str) -> None:
        source = self.add_node(source_id)
        self.edges[source].append(self.add_node(target_id))


def build_graph(
    tokens: Iterable[Token],
    lookup: Callable[[str], Token | None],
) -> DependencyGraph:
    """
    Build the alias graph for one scope's tokens.

    Edges are added only when the target exists and shares the alias's
    scope; dangling and cross-scope aliases stay as isolated nodes.
    """
    graph = DependencyGraph()
    for token in tokens:
        graph.add_node(token.id)
        if token.alias_to is None:
            continue

        target = lookup(token.alias_to)
        if target is None:
            logger.debug(
                "Alias target not found for %s (alias_to=%s)",
                token.qualified_name,
                token.alias_to,
            )
        elif target.scope != token.scope:
            logger.debug(
                "Cross-scope alias from %s to %s (scope %s) left out of graph",
                token.qualified_name,
                target.qualified_name,
                target.scope,
            )
        else:
            graph.add_edge(token.id, target.id)
    return graph


def find_cycles(graph: DependencyGraph) -> list[list[int]]:
    """
    Find alias cycles with a depth-first search.

    A cycle is the slice of the current DFS path from the revisited node to
    the top. After recording it the search carries on, so every root is
    explored and nodes leave the path only when their edges are exhausted.
    """
    visited = [False] * len(graph)
    on_path = [False] * len(graph)
    cycles: list[list[int]] = []

    for root in range(len(graph)):
        if visited[root]:
            continue

        visited[root] = on_path[root] = True
        path = [root]
        cursors = [0]

        while path:
            node = path[-1]
            edges = graph.edges[node]
            position = cursors[-1]

            if position == len(edges):
                on_path[node] = False
                path.pop()
                cursors.pop()
                continue

            cursors[-1] = position + 1
            nxt = edges[position]
            if on_path[nxt]:
                cycles.append(path[path.index(nxt) :])
            elif not visited[nxt]:
                visited[nxt] = on_path[nxt] = True
                path.append(nxt)
                cursors.append(0)

    return cycles


def topological_order(graph: DependencyGraph, cycles: list[list[int]]) -> list[int]:
    """
    Order nodes so every alias target precedes its aliases.

    Postorder DFS; an edge is skipped when both endpoints belong to a
    detected cycle. Each node appears exactly once.
    """
    in_cycle = [False] * len(graph)
    for cycle in cycles:
        for node in cycle:
            in_cycle[node] = True

    visited = [False] * len(graph)
    order: list[int] = []

    for root in range(len(graph)):
        if visited[root]:
            continue

        visited[root] = True
        stack = [root]
        cursors = [0]

        while stack:
            node = stack[-1]
            edges = graph.edges[node]
            position = cursors[-1]

            if position == len(edges):
                order.append(node)
                stack.pop()
                cursors.pop()
                continue

            cursors[-1] = position + 1
            nxt = edges[position]
            if in_cycle[node] and in_cycle[nxt]:
                continue
            if not visited[nxt]:
                visited[nxt] = True
                stack.append(nxt)
                cursors.append(0)

    return order
