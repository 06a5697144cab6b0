"""
Token store component - Data models.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from tokenkit.domain.entities import Token, TokenStatus, TokenType

# --- Errors ---


@dataclass(frozen=True)
class StoreError:
    """Token store error."""

    code: str
    message: str
    field: str | None = None


# --- Query / Stats ---


@dataclass(frozen=True)
class TokenQuery:
    """
    Composable token filter.

    Unset fields do not filter. ``tags`` matches tokens carrying any of the
    given tags; ``is_alias`` filters on presence of ``alias_to``.
    """

    scope: str | None = None
    type: TokenType | None = None
    types: Sequence[TokenType] | None = None
    collection: str | None = None
    theme: str | None = None
    brand: str | None = None
    path: Sequence[str] | None = None
    path_prefix: Sequence[str] | None = None
    qualified_name: str | None = None
    tags: Sequence[str] | None = None
    status: TokenStatus | None = None
    is_alias: bool | None = None
    ids: Sequence[str] | None = None


@dataclass(frozen=True)
class StoreStats:
    """Aggregate counts over the store."""

    total_tokens: int
    by_scope: dict[str, int] = field(default_factory=dict)
    by_type: dict[str, int] = field(default_factory=dict)
    by_collection: dict[str, int] = field(default_factory=dict)
    alias_count: int = 0


# --- Input Models ---


@dataclass(frozen=True)
class AddTokensInput:
    """Input for adding (upserting) tokens."""

    tokens: tuple[Token, ...]


@dataclass(frozen=True)
class GetTokenInput:
    """Input for getting a token by id or by (scope, qualified name)."""

    token_id: str | None = None
    scope: str | None = None
    qualified_name: str | None = None


@dataclass(frozen=True)
class QueryTokensInput:
    """Input for querying tokens."""

    query: TokenQuery = field(default_factory=TokenQuery)


@dataclass(frozen=True)
class UpdateTokenInput:
    """Input for patching a token."""

    token_id: str
    patch: dict[str, Any]


@dataclass(frozen=True)
class RemoveTokensInput:
    """Input for removing tokens by id."""

    token_ids: tuple[str, ...]


@dataclass(frozen=True)
class RemoveProjectInput:
    """Input for removing every token in a scope."""

    scope: str


# --- Output Models ---


@dataclass(frozen=True)
class AddTokensOutput:
    """Output from add operation."""

    added: int
    skipped: int
    success: bool = True


@dataclass(frozen=True)
class TokenOutput:
    """Output carrying a single token."""

    token: Token | None
    errors: list[StoreError] = field(default_factory=list)
    success: bool = True


@dataclass(frozen=True)
class TokenListOutput:
    """Output from query operation."""

    tokens: tuple[Token, ...]
    total: int


@dataclass(frozen=True)
class RemoveOutput:
    """Output from remove operations."""

    removed: int
    success: bool = True
