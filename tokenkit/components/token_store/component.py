"""
Token store component - shell entry points.

Wraps TokenStore calls into frozen output models.
"""

from __future__ import annotations

from ._impl import TokenStore
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
    UpdateTokenInput,
)

# --- Component Entry Points ---


def run_add(inp: AddTokensInput, *, store: TokenStore) -> AddTokensOutput:
    """
    Add (upsert) a batch of tokens.

    Args:
        inp: Input containing the tokens to store.
        store: Target token store.

    Returns:
        AddTokensOutput with stored and skipped counts.
    """
    added = store.add(inp.tokens)
    return AddTokensOutput(
        added=added,
        skipped=len(inp.tokens) - added,
        success=True,
    )


def run_get(inp: GetTokenInput, *, store: TokenStore) -> TokenOutput:
    """
    Get a token by id or by (scope, qualified name).

    Args:
        inp: Input containing token_id, or scope and qualified_name.
        store: Token store to read.

    Returns:
        TokenOutput with the token or a not-found error.
    """
    if inp.token_id is not None:
        token = store.get(inp.token_id)
    elif inp.scope is not None and inp.qualified_name is not None:
        token = store.get_by_qualified_name(inp.scope, inp.qualified_name)
    else:
        return TokenOutput(
            token=None,
            errors=[
                StoreError(
                    code="invalid_input",
                    message="Either token_id or scope and qualified_name must be provided",
                )
            ],
            success=False,
        )

    if token is None:
        return TokenOutput(
            token=None,
            errors=[StoreError(code="token_not_found", message="Token not found")],
            success=False,
        )

    return TokenOutput(token=token, errors=[], success=True)


def run_query(inp: QueryTokensInput, *, store: TokenStore) -> TokenListOutput:
    """Filter tokens with a TokenQuery."""
    tokens = tuple(store.query(inp.query))
    return TokenListOutput(tokens=tokens, total=len(tokens))


def run_update(inp: UpdateTokenInput, *, store: TokenStore) -> TokenOutput:
    """
    Patch fields of a stored token.

    Args:
        inp: Input containing token_id and the field patch.
        store: Token store to modify.

    Returns:
        TokenOutput with the updated token or errors.
    """
    token, errors = store.update(inp.token_id, inp.patch)
    return TokenOutput(token=token, errors=errors, success=len(errors) == 0)


def run_remove(inp: RemoveTokensInput, *, store: TokenStore) -> RemoveOutput:
    """Remove tokens by id; unknown ids are ignored."""
    return RemoveOutput(removed=store.remove(inp.token_ids), success=True)


def run_remove_project(inp: RemoveProjectInput, *, store: TokenStore) -> RemoveOutput:
    """Remove every token in a scope."""
    return RemoveOutput(removed=store.remove_project(inp.scope), success=True)


def run_stats(*, store: TokenStore) -> StoreStats:
    return store.get_stats()
