"""
Error taxonomy of the ordered map.

Every error also derives from the built-in exception a plain ``dict`` would
raise in the same situation, so ``except KeyError`` and friends keep working.
"""

from __future__ import annotations


class OrderedMapError(Exception):
    """Base class for all container errors."""


class DuplicateKeyError(OrderedMapError, ValueError):
    """Raised by ``add`` when the key is already present."""

    def __init__(self, key: object) -> None:
        super().__init__(f"An entry with the same key already exists: {key!r}")
        self.key = key


class KeyNotFoundError(OrderedMapError, KeyError):
    """Raised on direct access to an absent key."""

    def __init__(self, key: object, message: str | None = None) -> None:
        super().__init__(key)
        self.key = key
        self.message = message

    def __str__(self) -> str:
        return self.message or f"Key not found: {self.key!r}"


class InvalidArgumentError(OrderedMapError, ValueError):
    """Raised when an argument is malformed (destination buffer, index, capacity)."""


class UnsupportedOperationError(OrderedMapError, TypeError):
    """Raised when a mutation is attempted through a read-only view."""


class ConcurrentModificationError(OrderedMapError, RuntimeError):
    """Raised by an iterator when the container was structurally changed mid-traversal."""


__all__ = [
    "ConcurrentModificationError",
    "DuplicateKeyError",
    "InvalidArgumentError",
    "KeyNotFoundError",
    "OrderedMapError",
    "UnsupportedOperationError",
]
