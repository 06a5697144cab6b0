"""
TokenStore - In-memory token storage with indexed queries.

Functional Core - no I/O beyond logging.

Key behaviors:
- O(1) lookup by id and by (scope, qualified name)
- O(k) retrieval by scope, type, collection, tag and alias target
- add() is a batch upsert; malformed tokens are skipped, never raised
- Optional schema validation demotes failing tokens to draft
- Every index preserves insertion order, so iteration is deterministic

Invariants:
- I1: Every stored token appears in exactly the index buckets its fields name
- I2: Empty index buckets are pruned
- I3: ``id`` and ``created`` never change after the first insert
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError

from tokenkit.adapters.clock import SystemClock
from tokenkit.adapters.ids import SimpleHashIdGenerator
from tokenkit.domain.entities import Token, TokenType
from tokenkit.validation.schemas import SchemaTokenValidator

from .models import StoreError, StoreStats, TokenQuery
from .ports import IdGeneratorPort, TimePort, TokenValidatorPort

logger = logging.getLogger(__name__)

# Insertion-ordered id set
_Bucket = dict[str, None]

_PROTECTED_FIELDS = frozenset({"id", "created", "last_modified"})


# --- Configuration ---


@dataclass(frozen=True)
class StoreConfig:
    """Store configuration from rules."""

    schema_validation: bool = False


DEFAULT_CONFIG = StoreConfig()


# --- Pure Helpers ---


def qualified_key(scope: str, qualified_name: str) -> str:
    """Composite index key for (scope, qualified name)."""
    return f"{scope}:{qualified_name}"


def is_well_formed(token: Token) -> bool:
    """Tokens without id, scope or path cannot be indexed."""
    return bool(token.id and token.scope and token.path)


def matches_query(token: Token, query: TokenQuery) -> bool:
    """Apply every predicate set on ``query`` to ``token``."""
    if query.scope is not None and token.scope != query.scope:
        return False
    if query.type is not None and token.type != query.type:
        return False
    if query.types and token.type not in query.types:
        return False
    if query.collection is not None and token.collection != query.collection:
        return False
    if query.theme is not None and token.theme != query.theme:
        return False
    if query.brand is not None and token.brand != query.brand:
        return False
    if query.qualified_name is not None and token.qualified_name != query.qualified_name:
        return False
    if query.path is not None and list(token.path) != list(query.path):
        return False
    if query.path_prefix:
        prefix = list(query.path_prefix)
        if token.path[: len(prefix)] != prefix:
            return False
    if query.tags and not any(tag in token.tags for tag in query.tags):
        return False
    if query.status is not None and token.status != query.status:
        return False
    if query.is_alias is not None and token.is_alias != query.is_alias:
        return False
    return True


def _add_to(index: dict[str, _Bucket], key: str, token_id: str) -> None:
    index.setdefault(key, {})[token_id] = None


def _discard_from(index: dict[str, _Bucket], key: str, token_id: str) -> None:
    bucket = index.get(key)
    if bucket is None:
        return
    bucket.pop(token_id, None)
    if not bucket:
        del index[key]


# --- Token Store ---


class TokenStore:
    """
    In-memory token store.

    Authoritative collection of tokens plus secondary indexes kept in step
    with every mutation. The resolver reads it through ``TokenStorePort``.
    """

    def __init__(
        self,
        id_generator: IdGeneratorPort | None = None,
        validator: TokenValidatorPort | None = None,
        time_port: TimePort | None = None,
        config: StoreConfig | None = None,
    ) -> None:
        """Initialize store."""
        self._id_generator = id_generator or SimpleHashIdGenerator()
        self._validator = validator or SchemaTokenValidator()
        self._time = time_port or SystemClock()
        self._config = config or DEFAULT_CONFIG

        # Primary storage
        self._tokens: dict[str, Token] = {}

        # Indexes
        self._scope_index: dict[str, _Bucket] = {}
        self._type_index: dict[str, _Bucket] = {}
        self._collection_index: dict[str, _Bucket] = {}
        self._qualified_index: dict[str, str] = {}  # "scope:qualified_name" -> id
        self._alias_index: dict[str, _Bucket] = {}  # target id -> referrer ids
        self._tag_index: dict[str, _Bucket] = {}

    # --- Identity ---

    def generate_id(self, scope: str, path: Sequence[str]) -> str:
        """Stable id for a token at ``path`` in ``scope``."""
        return self._id_generator.generate(scope, path)

    # --- Writes ---

    def add(self, tokens: Iterable[Token]) -> int:
        """
        Add or replace tokens, keeping every index in step.

        Returns:
            Number of tokens stored. Malformed tokens are skipped.
        """
        added = 0
        drafts = 0

        for token in tokens:
            if not is_well_formed(token):
                logger.warning(
                    "Skipping malformed token (id=%r, scope=%r, path=%r)",
                    token.id,
                    token.scope,
                    token.path,
                )
                continue

            if self._config.schema_validation:
                issues = self._validator.validate(token)
                if issues:
                    logger.warning(
                        "Token %s failed validation (%d issue(s)); storing as draft",
                        token.qualified_name,
                        len(issues),
                    )
                    token = token.model_copy(
                        update={
                            "status": "draft",
                            "extensions": {
                                **token.extensions,
                                "validation_errors": [issue.as_dict() for issue in issues],
                            },
                        }
                    )
                    drafts += 1

            existing = self._tokens.get(token.id)
            if existing is not None:
                self._unindex(existing)
                if token.created != existing.created:
                    token = token.model_copy(update={"created": existing.created})

            self._tokens[token.id] = token
            self._index(token)
            added += 1

        if drafts:
            logger.warning("%d token(s) failed validation but were added as drafts", drafts)
        logger.debug("Stored %d token(s); store size %d", added, len(self._tokens))
        return added

    def update(
        self,
        token_id: str,
        patch: Mapping[str, Any],
    ) -> tuple[Token | None, list[StoreError]]:
        """
        Patch fields of a stored token.

        ``id`` and ``created`` are preserved; ``last_modified`` is refreshed.

        Returns:
            Tuple of (token, errors). Token is None if the id is unknown
            or the patched token fails validation; the store is then
            left untouched.
        """
        current = self._tokens.get(token_id)
        if current is None:
            return None, [
                StoreError(
                    code="token_not_found",
                    message=f"Token not found: {token_id}",
                    field="id",
                )
            ]

        changes: dict[str, Any] = {}
        for key, value in patch.items():
            if key in _PROTECTED_FIELDS:
                continue
            if key not in Token.model_fields:
                logger.debug("Ignoring unknown patch field %r for token %s", key, token_id)
                continue
            changes[key] = value

        if "path" in changes:
            # Blank names are re-derived from the new path on validation
            changes.setdefault("name", "")
            changes.setdefault("qualified_name", "")

        changes["last_modified"] = self._time.now_utc()
        try:
            updated = Token.model_validate({**current.model_dump(), **changes})
        except ValidationError as e:
            logger.debug("Rejected patch for token %s: %s", token_id, e)
            return None, [
                StoreError(
                    code="invalid_patch",
                    message=f"Patch validation failed:\n{e}",
                )
            ]

        if not is_well_formed(updated):
            return None, [
                StoreError(
                    code="invalid_patch",
                    message="Patched token must keep a scope and a non-empty path",
                )
            ]

        # Indexes change only once the new token is known to be valid
        self._reindex(current, updated)
        self._tokens[token_id] = updated
        return updated, []

    def remove(self, token_ids: Iterable[str]) -> int:
        """Remove tokens by id. Unknown ids are ignored."""
        removed = 0
        for token_id in token_ids:
            token = self._tokens.pop(token_id, None)
            if token is None:
                continue
            self._unindex(token)
            removed += 1
        return removed

    def remove_project(self, scope: str) -> int:
        """Remove every token in ``scope``."""
        return self.remove(list(self._scope_index.get(scope, ())))

    def clear(self) -> None:
        """Drop all tokens and indexes."""
        self._tokens.clear()
        self._scope_index.clear()
        self._type_index.clear()
        self._collection_index.clear()
        self._qualified_index.clear()
        self._alias_index.clear()
        self._tag_index.clear()

    # --- Reads ---

    def get(self, token_id: str) -> Token | None:
        return self._tokens.get(token_id)

    def get_by_qualified_name(self, scope: str, qualified_name: str) -> Token | None:
        token_id = self._qualified_index.get(qualified_key(scope, qualified_name))
        return self._tokens.get(token_id) if token_id is not None else None

    def get_by_path(self, scope: str, path: Sequence[str]) -> Token | None:
        return self.get_by_qualified_name(scope, ".".join(path))

    def get_by_scope(self, scope: str) -> list[Token]:
        return self._from_bucket(self._scope_index.get(scope))

    def get_by_type(self, token_type: TokenType) -> list[Token]:
        return self._from_bucket(self._type_index.get(token_type))

    def get_by_collection(self, collection: str) -> list[Token]:
        return self._from_bucket(self._collection_index.get(collection))

    def get_by_tag(self, tag: str) -> list[Token]:
        return self._from_bucket(self._tag_index.get(tag))

    def get_referencing_tokens(self, target_id: str) -> list[Token]:
        """Tokens whose ``alias_to`` is ``target_id``."""
        return self._from_bucket(self._alias_index.get(target_id))

    def get_all(self) -> list[Token]:
        return list(self._tokens.values())

    def query(self, query: TokenQuery) -> list[Token]:
        """
        Filter tokens.

        Starts from the most selective index available (ids, then scope,
        then type) and narrows with the remaining predicates.
        """
        if query.ids:
            candidates = [
                self._tokens[token_id]
                for token_id in dict.fromkeys(query.ids)
                if token_id in self._tokens
            ]
        elif query.scope is not None:
            candidates = self.get_by_scope(query.scope)
        elif query.type is not None:
            candidates = self.get_by_type(query.type)
        else:
            candidates = list(self._tokens.values())

        return [token for token in candidates if matches_query(token, query)]

    def get_stats(self) -> StoreStats:
        return StoreStats(
            total_tokens=len(self._tokens),
            by_scope={key: len(ids) for key, ids in self._scope_index.items()},
            by_type={key: len(ids) for key, ids in self._type_index.items()},
            by_collection={key: len(ids) for key, ids in self._collection_index.items()},
            alias_count=sum(len(ids) for ids in self._alias_index.values()),
        )

    def count(self) -> int:
        return len(self._tokens)

    def __len__(self) -> int:
        return len(self._tokens)

    def __contains__(self, token_id: object) -> bool:
        return token_id in self._tokens

    # --- Index Maintenance ---

    def _from_bucket(self, bucket: _Bucket | None) -> list[Token]:
        if not bucket:
            return []
        return [self._tokens[token_id] for token_id in bucket]

    def _index(self, token: Token) -> None:
        _add_to(self._scope_index, token.scope, token.id)
        _add_to(self._type_index, token.type, token.id)
        _add_to(self._collection_index, token.collection, token.id)
        self._qualified_index[qualified_key(token.scope, token.qualified_name)] = token.id
        if token.alias_to is not None:
            _add_to(self._alias_index, token.alias_to, token.id)
        for tag in token.tags:
            _add_to(self._tag_index, tag, token.id)

    def _unindex(self, token: Token) -> None:
        _discard_from(self._scope_index, token.scope, token.id)
        _discard_from(self._type_index, token.type, token.id)
        _discard_from(self._collection_index, token.collection, token.id)
        self._drop_qualified(token)
        if token.alias_to is not None:
            _discard_from(self._alias_index, token.alias_to, token.id)
        for tag in token.tags:
            _discard_from(self._tag_index, tag, token.id)

    def _drop_qualified(self, token: Token) -> None:
        key = qualified_key(token.scope, token.qualified_name)
        # Another token may have claimed this name since
        if self._qualified_index.get(key) == token.id:
            del self._qualified_index[key]

    def _reindex(self, old: Token, new: Token) -> None:
        """Move ``old``'s index entries to ``new``, touching only changed keys."""
        token_id = new.id

        if old.scope != new.scope:
            _discard_from(self._scope_index, old.scope, token_id)
            _add_to(self._scope_index, new.scope, token_id)
        if old.type != new.type:
            _discard_from(self._type_index, old.type, token_id)
            _add_to(self._type_index, new.type, token_id)
        if old.collection != new.collection:
            _discard_from(self._collection_index, old.collection, token_id)
            _add_to(self._collection_index, new.collection, token_id)
        if (old.scope, old.qualified_name) != (new.scope, new.qualified_name):
            self._drop_qualified(old)
            self._qualified_index[qualified_key(new.scope, new.qualified_name)] = token_id
        if old.alias_to != new.alias_to:
            if old.alias_to is not None:
                _discard_from(self._alias_index, old.alias_to, token_id)
            if new.alias_to is not None:
                _add_to(self._alias_index, new.alias_to, token_id)
        if old.tags != new.tags:
            for tag in old.tags:
                if tag not in new.tags:
                    _discard_from(self._tag_index, tag, token_id)
            for tag in new.tags:
                _add_to(self._tag_index, tag, token_id)
