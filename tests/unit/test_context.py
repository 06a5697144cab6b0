"""
Tests for TokenContext wiring and logging setup.
"""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from tokenkit.adapters.clock import FrozenClock
from tokenkit.adapters.ids import Sha256IdGenerator
from tokenkit.context import TokenContext, configure_logging, rules_path_from_env
from tokenkit.rules.models import LoggingRules, Rules, StoreRules


class TestCreate:
    def test_defaults(self) -> None:
        ctx = TokenContext.create()

        assert ctx.rules == Rules()
        assert ctx.store.count() == 0
        assert ctx.store.generate_id("a", ["b"]) == "token_21e1"

    def test_rules_drive_store(self, clock: FrozenClock) -> None:
        rules = Rules(store=StoreRules(schema_validation=True, id_strategy="sha256"))

        ctx = TokenContext.create(rules, clock=clock)

        expected = Sha256IdGenerator().generate("p1", ["color", "base"])
        assert ctx.store.generate_id("p1", ["color", "base"]) == expected
        assert ctx.clock is clock

    def test_invalidate_clears_resolver_cache(self, make_token) -> None:
        ctx = TokenContext.create()
        token = make_token("p1", "color.base")
        ctx.store.add([token])
        ctx.resolver.resolve_reference("color.base", "p1")

        ctx.invalidate()

        assert ctx.resolver.cache_sizes()["exact"] == 0


class TestFromEnv:
    def test_loads_rules_from_env(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        path = tmp_path / "rules.yaml"
        path.write_text("store:\n  id_strategy: sha256\n")
        monkeypatch.setenv("TOKENKIT_RULES_PATH", str(path))

        ctx = TokenContext.from_env()

        assert ctx.rules.store.id_strategy == "sha256"

    def test_missing_rules_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TOKENKIT_RULES_PATH", str(tmp_path / "absent.yaml"))

        with pytest.raises(FileNotFoundError):
            TokenContext.from_env()

    def test_default_path(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("TOKENKIT_RULES_PATH", raising=False)

        assert rules_path_from_env() == Path("rules.yaml")


class TestConfigureLogging:
    def test_debug_mode_forces_debug(self, monkeypatch: pytest.MonkeyPatch) -> None:
        calls: list[dict] = []
        monkeypatch.setattr(logging, "basicConfig", lambda **kw: calls.append(kw))

        configure_logging(Rules(logging=LoggingRules(level="WARNING", debug_mode=True)))
        configure_logging(Rules(logging=LoggingRules(level="WARNING")))

        assert [c["level"] for c in calls] == [logging.DEBUG, logging.WARNING]
        assert "%(levelname)s" in calls[0]["format"]
