"""
TokenResolver - Alias and reference resolution.

Functional Core - reads the store through TokenStorePort; the only write
is stamping ``resolved_value`` onto aliases during batch resolution.

Lookup tiers (keyed ``scope:reference``):
1. exact - qualified name as written
2. normalized - lowercased, ``/`` and ``\\`` turned into ``.``
3. fuzzy - suffix, then substring, then leaf-name scan; misses cached too

Caches are not invalidated by store mutations. Call ``clear_cache()``
after bulk add/update/remove.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any

from tokenkit.domain.entities import Token
from tokenkit.domain.values import parse_reference

from ._graph import build_graph, find_cycles, topological_order
from .models import CircularReference, ResolutionStats, ResolveAllOutput, ResolverError
from .ports import TokenStorePort

logger = logging.getLogger(__name__)


# --- Reference Helpers ---


def clean_reference(reference: str) -> str | None:
    """Trim and strip one layer of braces. Empty -> None."""
    if not isinstance(reference, str):
        return None
    cleaned = reference.strip()
    inner = parse_reference(cleaned)
    if inner is not None:
        return inner
    # Empty or nested braces fall outside the reference grammar
    if cleaned.startswith("{") and cleaned.endswith("}"):
        cleaned = cleaned[1:-1].strip()
    return cleaned or None


def normalize_reference(reference: str) -> str:
    """``Color/Primary`` -> ``color.primary``."""
    return reference.replace("/", ".").replace("\\", ".").lower()


def fuzzy_match(reference: str, tokens: list[Token]) -> Token | None:
    """
    Best-effort match of ``reference`` against a scope's tokens.

    Phases run in strict priority and the first hit of the first successful
    phase wins: qualified-name suffix, qualified-name substring, then leaf
    name equal to the reference's last dotted segment.
    """
    needle = reference.lower()

    for token in tokens:
        if token.qualified_name.lower().endswith(needle):
            return token

    for token in tokens:
        if needle in token.qualified_name.lower():
            return token

    leaf = needle.split(".")[-1]
    for token in tokens:
        if token.name.lower() == leaf:
            return token

    return None


# --- Resolver ---


class TokenResolver:
    """
    Resolves reference strings to tokens and alias chains to values.

    Caches and counters live on the instance.
    """

    def __init__(self, store: TokenStorePort | None) -> None:
        if store is None:
            raise ValueError("TokenResolver requires a token store")
        self._store = store

        self._exact_cache: dict[str, Token | None] = {}
        self._normalized_cache: dict[str, Token | None] = {}
        self._fuzzy_cache: dict[str, Token | None] = {}

        self._stats = ResolutionStats()

    # --- Single Reference ---

    def resolve_reference(self, reference: str, scope: str) -> Token | None:
        """
        Resolve ``reference`` (``color.primary``, ``{color.primary}``,
        ``color/primary``) within ``scope``.

        Returns:
            The matching token, or None.
        """
        self._stats.total_resolutions += 1

        cleaned = clean_reference(reference)
        if cleaned is None:
            return None

        exact_key = f"{scope}:{cleaned}"
        if exact_key in self._exact_cache:
            return self._hit(self._exact_cache[exact_key])

        exact = self._store.get_by_qualified_name(scope, cleaned)
        if exact is not None:
            self._exact_cache[exact_key] = exact
            return self._miss(exact)

        normalized = normalize_reference(cleaned)
        normalized_key = f"{scope}:{normalized}"
        if normalized_key in self._normalized_cache:
            return self._hit(self._normalized_cache[normalized_key])

        match = self._store.get_by_qualified_name(scope, normalized)
        if match is not None:
            self._normalized_cache[normalized_key] = match
            self._exact_cache[exact_key] = match
            return self._miss(match)

        if exact_key in self._fuzzy_cache:
            return self._hit(self._fuzzy_cache[exact_key])

        match = fuzzy_match(cleaned, self._store.get_by_scope(scope))
        self._fuzzy_cache[exact_key] = match
        if match is not None:
            self._exact_cache[exact_key] = match
        else:
            self._stats.unresolved_references += 1
            logger.debug("No token matches %r in scope %s", cleaned, scope)
        return self._miss(match)

    def _hit(self, token: Token | None) -> Token | None:
        self._stats.cache_hits += 1
        self._update_hit_rate()
        return token

    def _miss(self, token: Token | None) -> Token | None:
        self._stats.cache_misses += 1
        self._update_hit_rate()
        return token

    def _update_hit_rate(self) -> None:
        total = self._stats.cache_hits + self._stats.cache_misses
        self._stats.cache_hit_rate = self._stats.cache_hits / total if total else 0.0

    # --- Batch Resolution ---

    async def resolve_all_tokens(self, scope: str) -> ResolveAllOutput:
        """
        Resolve every token in ``scope`` in dependency order.

        Cycles are reported and broken, never fatal. Unexpected failures
        come back as ``success=False`` instead of raising.
        """
        try:
            values = self._resolve_scope(scope)
        except Exception as e:
            logger.exception("Failed to resolve tokens for scope %s", scope)
            return ResolveAllOutput(
                values={},
                errors=[ResolverError(code="resolution_failed", message=str(e))],
                success=False,
            )
        return ResolveAllOutput(values=values, errors=[], success=True)

    def _resolve_scope(self, scope: str) -> dict[str, Any]:
        graph = build_graph(self._store.get_by_scope(scope), self._store.get)

        cycles = find_cycles(graph)
        if cycles:
            self._stats.circular_references += len(cycles)
            logger.warning("Detected %d circular reference(s) in scope %s", len(cycles), scope)

        resolved: dict[str, Any] = {}
        for node in topological_order(graph, cycles):
            token = self._store.get(graph.ids[node])
            if token is None:
                continue

            if token.alias_to is None:
                resolved[token.id] = token.value
                continue

            target = self._store.get(token.alias_to)
            if target is not None and target.scope == scope:
                # Cycle members may be visited before their target
                value = resolved[target.id] if target.id in resolved else target.value
                resolved[token.id] = value
                token.resolved_value = value
            elif target is not None:
                logger.warning(
                    "Cross-scope reference: %s (scope %s) references %s (scope %s)",
                    token.qualified_name,
                    scope,
                    target.qualified_name,
                    target.scope,
                )
                resolved[token.id] = token.value
                self._stats.unresolved_references += 1
            else:
                logger.warning(
                    "Unresolved reference: %s references %s",
                    token.qualified_name,
                    token.alias_to,
                )
                resolved[token.id] = token.value
                self._stats.unresolved_references += 1

        return resolved

    # --- Diagnostics ---

    def detect_circular_references(self, scope: str) -> list[CircularReference]:
        """Report alias cycles in ``scope`` without touching caches or stats."""
        graph = build_graph(self._store.get_by_scope(scope), self._store.get)
        reports = []
        for cycle in find_cycles(graph):
            ids = tuple(graph.ids[node] for node in cycle)
            reports.append(CircularReference(cycle=ids, paths=tuple(self._path_of(i) for i in ids)))
        return reports

    def _path_of(self, token_id: str) -> tuple[str, ...]:
        token = self._store.get(token_id)
        return tuple(token.path) if token is not None else ()

    def detect_cross_scope_references(self, scope: str) -> list[Token]:
        """Tokens in ``scope`` whose alias target lives in another scope."""
        found = []
        for token in self._store.get_by_scope(scope):
            if token.alias_to is None:
                continue
            target = self._store.get(token.alias_to)
            if target is not None and target.scope != scope:
                found.append(token)
        return found

    def detect_unresolved_aliases(self, scope: str) -> list[Token]:
        """Tokens in ``scope`` whose alias target does not exist."""
        return [
            token
            for token in self._store.get_by_scope(scope)
            if token.alias_to is not None and self._store.get(token.alias_to) is None
        ]

    # --- Administration ---

    def clear_cache(self) -> None:
        self._exact_cache.clear()
        self._normalized_cache.clear()
        self._fuzzy_cache.clear()
        logger.debug("Resolver caches cleared")

    def cache_sizes(self) -> dict[str, int]:
        return {
            "exact": len(self._exact_cache),
            "normalized": len(self._normalized_cache),
            "fuzzy": len(self._fuzzy_cache),
        }

    def get_stats(self) -> ResolutionStats:
        """Snapshot of the counters."""
        return replace(self._stats)

    def reset_stats(self) -> None:
        self._stats = ResolutionStats()
