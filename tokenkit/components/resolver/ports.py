"""
Resolver component - Port interfaces.
"""

from __future__ import annotations

from typing import Protocol

from tokenkit.domain.entities import Token


class TokenStorePort(Protocol):
    """Read-only view of the token store."""

    def get(self, token_id: str) -> Token | None:
        """Get token by id."""
        ...

    def get_by_qualified_name(self, scope: str, qualified_name: str) -> Token | None:
        """Get token by dotted name within a scope."""
        ...

    def get_by_scope(self, scope: str) -> list[Token]:
        """All tokens in a scope, in insertion order."""
        ...
