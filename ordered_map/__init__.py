"""
Public API of the order-preserving hash map.
"""

from __future__ import annotations

from .comparers import CaseInsensitiveComparer, IdentityComparer, KeyComparer
from .container import OrderedMap
from .errors import (
    ConcurrentModificationError,
    DuplicateKeyError,
    InvalidArgumentError,
    KeyNotFoundError,
    OrderedMapError,
    UnsupportedOperationError,
)
from .lru import LRUSet
from .views import ItemView, KeyView, ValueView


__all__ = [
    "CaseInsensitiveComparer",
    "ConcurrentModificationError",
    "DuplicateKeyError",
    "IdentityComparer",
    "InvalidArgumentError",
    "ItemView",
    "KeyComparer",
    "KeyNotFoundError",
    "KeyView",
    "LRUSet",
    "OrderedMap",
    "OrderedMapError",
    "UnsupportedOperationError",
    "ValueView",
]
