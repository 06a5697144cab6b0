"""
Token id strategies.

Ids are derived from ``scope + ":" + ".".join(path)`` so re-importing an
unchanged token yields the same id across sessions. Switching strategy
changes every id; pick one per deployment and keep it.
"""

from __future__ import annotations

import hashlib
from collections.abc import Sequence

_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"


def id_key(scope: str, path: Sequence[str]) -> str:
    return f"{scope}:{'.'.join(path)}"


def _to_base36(number: int) -> str:
    if number == 0:
        return "0"
    digits = []
    while number:
        number, rem = divmod(number, 36)
        digits.append(_BASE36[rem])
    return "".join(reversed(digits))


def string_hash32(text: str) -> int:
    """
    Signed 32-bit ``h = h * 31 + unit`` over UTF-16 code units.

    Matches the ids issued by earlier browser-side imports.
    """
    data = text.encode("utf-16-le")
    value = 0
    for i in range(0, len(data), 2):
        unit = data[i] | (data[i + 1] << 8)
        value = (value * 31 + unit) & 0xFFFFFFFF
    if value >= 0x80000000:
        value -= 0x100000000
    return value


class SimpleHashIdGenerator:
    """Default strategy: ``token_<abs(hash32) in base 36>``."""

    def generate(self, scope: str, path: Sequence[str]) -> str:
        return f"token_{_to_base36(abs(string_hash32(id_key(scope, path))))}"


class Sha256IdGenerator:
    """Content-hash strategy: ``token_<first 16 hex chars of sha256>``."""

    def __init__(self, length: int = 16) -> None:
        self._length = length

    def generate(self, scope: str, path: Sequence[str]) -> str:
        digest = hashlib.sha256(id_key(scope, path).encode("utf-8")).hexdigest()
        return f"token_{digest[: self._length]}"


def create_id_generator(strategy: str) -> SimpleHashIdGenerator | Sha256IdGenerator:
    """Build the id generator named in the rules."""
    if strategy == "simple_hash":
        return SimpleHashIdGenerator()
    if strategy == "sha256":
        return Sha256IdGenerator()
    raise ValueError(f"Unknown id strategy: {strategy!r}")
