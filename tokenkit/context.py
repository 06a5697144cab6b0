from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from tokenkit.adapters.clock import SystemClock
from tokenkit.adapters.ids import create_id_generator
from tokenkit.components.resolver import TokenResolver
from tokenkit.components.token_store import StoreConfig, TokenStore
from tokenkit.rules.loader import default_rules, load_rules
from tokenkit.rules.models import Rules

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def rules_path_from_env() -> Path:
    return Path(os.environ.get("TOKENKIT_RULES_PATH", "rules.yaml"))


def configure_logging(rules: Rules) -> None:
    level = logging.DEBUG if rules.logging.debug_mode else getattr(logging, rules.logging.level)
    logging.basicConfig(level=level, format=LOG_FORMAT)


@dataclass
class TokenContext:
    store: TokenStore
    resolver: TokenResolver
    rules: Rules
    clock: Any = None  # For testing/injection

    @classmethod
    def create(cls, rules: Rules | None = None, clock: Any = None) -> TokenContext:
        rules = rules or default_rules()
        clock = clock or SystemClock()

        store = TokenStore(
            id_generator=create_id_generator(rules.store.id_strategy),
            time_port=clock,
            config=StoreConfig(schema_validation=rules.store.schema_validation),
        )
        resolver = TokenResolver(store)

        return cls(store=store, resolver=resolver, rules=rules, clock=clock)

    @classmethod
    def from_env(cls) -> TokenContext:
        """Load rules from TOKENKIT_RULES_PATH, set up logging and wire."""
        rules_path = rules_path_from_env()
        rules = load_rules(rules_path)
        configure_logging(rules)
        logger.info("Loaded rules from %s", rules_path)
        return cls.create(rules)

    def invalidate(self) -> None:
        """Drop resolver caches after bulk store changes."""
        self.resolver.clear_cache()
