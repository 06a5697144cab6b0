from collections.abc import Callable
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

import pytest

from tokenkit.adapters.clock import FrozenClock
from tokenkit.adapters.ids import SimpleHashIdGenerator
from tokenkit.components.resolver import TokenResolver
from tokenkit.components.token_store import TokenStore
from tokenkit.domain.entities import Token

PROJECT_ROOT = Path(__file__).parent.parent

TokenFactory = Callable[..., Token]


@pytest.fixture
def make_token() -> TokenFactory:
    """
    Build a well-formed token from a dotted name.

    Keyword arguments override any Token field.
    """
    ids = SimpleHashIdGenerator()

    def _make(scope: str, dotted: str, **fields: Any) -> Token:
        path = dotted.split(".")
        fields.setdefault("type", "color")
        return Token(id=ids.generate(scope, path), path=path, scope=scope, **fields)

    return _make


@pytest.fixture
def clock() -> FrozenClock:
    return FrozenClock(datetime(2025, 1, 1, tzinfo=UTC))


@pytest.fixture
def store(clock: FrozenClock) -> TokenStore:
    return TokenStore(time_port=clock)


@pytest.fixture
def resolver(store: TokenStore) -> TokenResolver:
    return TokenResolver(store)
