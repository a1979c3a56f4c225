"""
Key-equality strategies.

A comparer replaces ``__hash__``/``__eq__`` of the keys for one container.
The hash index stores keys wrapped in ``ComparedKey`` so that the plain dict
underneath hashes and compares through the comparer.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class KeyComparer(Protocol):
    def equals(self, a: Any, b: Any) -> bool: ...

    def hash(self, key: Any) -> int: ...


class IdentityComparer:
    """Keys are equal only when they are the same object."""

    __slots__ = ()

    def equals(self, a: Any, b: Any) -> bool:
        return a is b

    def hash(self, key: Any) -> int:
        return id(key)

    def __repr__(self) -> str:
        return "IdentityComparer()"


class CaseInsensitiveComparer:
    """``str`` keys compare by ``casefold()``; other keys use normal equality."""

    __slots__ = ()

    @staticmethod
    def _fold(key: Any) -> Any:
        return key.casefold() if isinstance(key, str) else key

    def equals(self, a: Any, b: Any) -> bool:
        return bool(self._fold(a) == self._fold(b))

    def hash(self, key: Any) -> int:
        return hash(self._fold(key))

    def __repr__(self) -> str:
        return "CaseInsensitiveComparer()"


class ComparedKey:
    """Dict key that hashes and compares through a comparer."""

    __slots__ = ("_hash", "comparer", "key")

    def __init__(self, key: Any, comparer: KeyComparer) -> None:
        self.key = key
        self.comparer = comparer
        # computed eagerly: an unhashable key must fail before any mutation
        self._hash = comparer.hash(key)

    def __hash__(self) -> int:
        return self._hash

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ComparedKey):
            return NotImplemented
        return self.comparer.equals(self.key, other.key)

    def __repr__(self) -> str:
        return f"ComparedKey({self.key!r})"


__all__ = [
    "CaseInsensitiveComparer",
    "ComparedKey",
    "IdentityComparer",
    "KeyComparer",
]
