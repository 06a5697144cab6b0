"""
Resolver component - Data models.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from tokenkit.domain.entities import Token

# --- Errors ---


@dataclass(frozen=True)
class ResolverError:
    """Resolver error."""

    code: str
    message: str
    field: str | None = None


# --- Results ---


@dataclass(frozen=True)
class CircularReference:
    """
    One alias cycle.

    ``cycle`` lists token ids in traversal order starting at the node that
    closed the loop; ``paths`` holds each member's path in the same order.
    """

    cycle: tuple[str, ...]
    paths: tuple[tuple[str, ...], ...]


@dataclass
class ResolutionStats:
    """Running resolver counters."""

    total_resolutions: int = 0
    cache_hits: int = 0
    cache_misses: int = 0
    cache_hit_rate: float = 0.0
    circular_references: int = 0
    unresolved_references: int = 0


# --- Input Models ---


@dataclass(frozen=True)
class ResolveReferenceInput:
    """Input for resolving one reference string within a scope."""

    reference: str
    scope: str


@dataclass(frozen=True)
class ResolveAllInput:
    """Input for batch resolution of a scope."""

    scope: str


@dataclass(frozen=True)
class DetectInput:
    """Input for read-only scope diagnostics."""

    scope: str


# --- Output Models ---


@dataclass(frozen=True)
class ResolveReferenceOutput:
    """Output from single reference resolution."""

    token: Token | None
    errors: list[ResolverError] = field(default_factory=list)
    success: bool = True


@dataclass(frozen=True)
class ResolveAllOutput:
    """Output from batch resolution: token id -> resolved value."""

    values: dict[str, Any] = field(default_factory=dict)
    errors: list[ResolverError] = field(default_factory=list)
    success: bool = True


@dataclass(frozen=True)
class CycleReportOutput:
    """Output from cycle detection."""

    cycles: tuple[CircularReference, ...]
    success: bool = True


@dataclass(frozen=True)
class CrossScopeOutput:
    """Output from cross-scope alias detection."""

    tokens: tuple[Token, ...]
    success: bool = True
