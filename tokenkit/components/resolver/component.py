"""
Resolver component - shell entry points.
"""

from __future__ import annotations

from ._impl import TokenResolver
from .models import (
    CrossScopeOutput,
    CycleReportOutput,
    DetectInput,
    ResolveAllInput,
    ResolveAllOutput,
    ResolveReferenceInput,
    ResolveReferenceOutput,
    ResolverError,
)

# --- Component Entry Points ---


def run_resolve_reference(
    inp: ResolveReferenceInput,
    *,
    resolver: TokenResolver,
) -> ResolveReferenceOutput:
    """
    Resolve one reference string within a scope.

    Args:
        inp: Input containing the reference and scope.
        resolver: Resolver holding the caches.

    Returns:
        ResolveReferenceOutput with the token or a not-found error.
    """
    token = resolver.resolve_reference(inp.reference, inp.scope)

    if token is None:
        return ResolveReferenceOutput(
            token=None,
            errors=[
                ResolverError(
                    code="reference_not_found",
                    message=f"No token matches {inp.reference!r} in scope {inp.scope}",
                    field="reference",
                )
            ],
            success=False,
        )

    return ResolveReferenceOutput(token=token, errors=[], success=True)


async def run_resolve_all(
    inp: ResolveAllInput,
    *,
    resolver: TokenResolver,
) -> ResolveAllOutput:
    """Resolve every token in a scope in dependency order."""
    return await resolver.resolve_all_tokens(inp.scope)


def run_detect_cycles(inp: DetectInput, *, resolver: TokenResolver) -> CycleReportOutput:
    cycles = tuple(resolver.detect_circular_references(inp.scope))
    return CycleReportOutput(cycles=cycles, success=True)


def run_detect_cross_scope(inp: DetectInput, *, resolver: TokenResolver) -> CrossScopeOutput:
    tokens = tuple(resolver.detect_cross_scope_references(inp.scope))
    return CrossScopeOutput(tokens=tokens, success=True)
