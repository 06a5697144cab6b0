"""
Token store component - indexed in-memory token storage.

Invariants:
- I1: Every stored token appears in exactly the index buckets its fields name
- I2: (scope, qualified_name) maps to one id
- I3: id and created never change after the first insert
"""

from ._impl import (
    DEFAULT_CONFIG,
    StoreConfig,
    TokenStore,
    is_well_formed,
    matches_query,
    qualified_key,
)
from .component import (
    run_add,
    run_get,
    run_query,
    run_remove,
    run_remove_project,
    run_stats,
    run_update,
)
from .models import (
    AddTokensInput,
    AddTokensOutput,
    GetTokenInput,
    QueryTokensInput,
    RemoveOutput,
    RemoveProjectInput,
    RemoveTokensInput,
    StoreError,
    StoreStats,
    TokenListOutput,
    TokenOutput,
    TokenQuery,
    UpdateTokenInput,
)
from .ports import IdGeneratorPort, TimePort, TokenValidatorPort

__all__ = [
    # Entry points
    "run_add",
    "run_get",
    "run_query",
    "run_remove",
    "run_remove_project",
    "run_stats",
    "run_update",
    # Input models
    "AddTokensInput",
    "GetTokenInput",
    "QueryTokensInput",
    "RemoveProjectInput",
    "RemoveTokensInput",
    "UpdateTokenInput",
    # Output models
    "AddTokensOutput",
    "RemoveOutput",
    "StoreError",
    "StoreStats",
    "TokenListOutput",
    "TokenOutput",
    "TokenQuery",
    # Ports
    "IdGeneratorPort",
    "TimePort",
    "TokenValidatorPort",
    # _impl re-exports
    "DEFAULT_CONFIG",
    "StoreConfig",
    "TokenStore",
    "is_well_formed",
    "matches_query",
    "qualified_key",
]
