"""
Token store component - Port interfaces.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from typing import Protocol

from tokenkit.domain.entities import Token
from tokenkit.validation.schemas import TokenValidationIssue


class TimePort(Protocol):
    """Time provider interface."""

    def now_utc(self) -> datetime:
        """Get current UTC time."""
        ...


class IdGeneratorPort(Protocol):
    """Deterministic token id strategy."""

    def generate(self, scope: str, path: Sequence[str]) -> str:
        """Derive the id for a token at ``path`` within ``scope``."""
        ...


class TokenValidatorPort(Protocol):
    """Optional schema check run on add."""

    def validate(self, token: Token) -> list[TokenValidationIssue]:
        """Return issues for ``token`` (empty = valid)."""
        ...
