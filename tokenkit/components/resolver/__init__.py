"""
Resolver component - alias and reference resolution.

Invariants:
- I1: Aliases resolve only within their own scope
- I2: Cycles are reported, never fatal
- I3: Every token in a scope appears once in batch results
"""

from ._graph import DependencyGraph, build_graph, find_cycles, topological_order
from ._impl import (
    TokenResolver,
    clean_reference,
    fuzzy_match,
    normalize_reference,
)
from .component import (
    run_detect_cross_scope,
    run_detect_cycles,
    run_resolve_all,
    run_resolve_reference,
)
from .models import (
    CircularReference,
    CrossScopeOutput,
    CycleReportOutput,
    DetectInput,
    ResolutionStats,
    ResolveAllInput,
    ResolveAllOutput,
    ResolveReferenceInput,
    ResolveReferenceOutput,
    ResolverError,
)
from .ports import TokenStorePort

__all__ = [
    # Entry points
    "run_detect_cross_scope",
    "run_detect_cycles",
    "run_resolve_all",
    "run_resolve_reference",
    # Input models
    "DetectInput",
    "ResolveAllInput",
    "ResolveReferenceInput",
    # Output models
    "CircularReference",
    "CrossScopeOutput",
    "CycleReportOutput",
    "ResolutionStats",
    "ResolveAllOutput",
    "ResolveReferenceOutput",
    "ResolverError",
    # Ports
    "TokenStorePort",
    # _impl re-exports
    "DependencyGraph",
    "TokenResolver",
    "build_graph",
    "clean_reference",
    "find_cycles",
    "fuzzy_match",
    "normalize_reference",
    "topological_order",
]
