"""
Order-preserving hash map.

``OrderedMap`` composes two structures that are always updated together:

- the hash index, a plain ``dict`` from key to a ``_Slot`` holding the
  caller's key, the value and the position handle of the key's order node;
- the ``OrderSequence``, an arena of order nodes linked by index.

Lookups go through the index only. Removal pops the slot from the index and
unlinks its node by handle, so no operation except value-membership scans
the whole map.

Structural changes (insert, remove, reorder, clear) bump a version counter.
Iterators capture it on creation and raise ``ConcurrentModificationError``
as soon as it moves. Overwriting the value of a present key is not
structural and leaves running iterators valid.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping, MutableMapping, MutableSequence
from dataclasses import dataclass
from typing import Any, Generic, TypeVar, overload

from ordered_map.comparers import ComparedKey, KeyComparer
from ordered_map.errors import (
    ConcurrentModificationError,
    DuplicateKeyError,
    InvalidArgumentError,
    KeyNotFoundError,
)
from ordered_map.order import NIL, OrderSequence
from ordered_map.views import ItemView, KeyView, ValueView, copy_into


K = TypeVar("K")
V = TypeVar("V")
D = TypeVar("D")

_MISSING: Any = object()


@dataclass(slots=True)
class _Slot(Generic[K, V]):
    # key as the caller first inserted it
    key: K
    value: V
    # index of the key's node in the order sequence
    handle: int


class OrderedMap(MutableMapping[K, V]):
    """Hash map that iterates in first-insertion order.

    ``capacity`` preallocates order nodes; ``comparer`` overrides key
    hashing/equality (see ``ordered_map.comparers``).
    """

    __slots__ = ("_comparer", "_index", "_order", "_version")

    def __init__(
        self,
        items: Mapping[K, V] | Iterable[tuple[K, V]] | None = None,
        /,
        *,
        capacity: int = 0,
        comparer: KeyComparer | None = None,
    ) -> None:
        if isinstance(capacity, bool) or not isinstance(capacity, int) or capacity < 0:
            raise InvalidArgumentError(f"capacity must be a non-negative int, got {capacity!r}")
        self._comparer = comparer
        self._index: dict[Any, _Slot[K, V]] = {}
        self._order = OrderSequence(capacity)
        self._version = 0
        if items is not None:
            self.update(items)

    @property
    def comparer(self) -> KeyComparer | None:
        return self._comparer

    # --- lookup ---------------------------------------------------------------

    def __getitem__(self, key: K) -> V:
        slot = self._index.get(self._index_key(key))
        if slot is None:
            raise KeyNotFoundError(key)
        return slot.value

    @overload
    def get(self, key: K) -> V | None: ...

    @overload
    def get(self, key: K, default: D) -> V | D: ...

    def get(self, key: K, default: Any = None) -> Any:
        slot = self._index.get(self._index_key(key))
        return default if slot is None else slot.value

    def try_get(self, key: K) -> tuple[bool, V | None]:
        """Return ``(True, value)`` when present, ``(False, None)`` otherwise."""
        slot = self._index.get(self._index_key(key))
        if slot is None:
            return False, None
        return True, slot.value

    def __contains__(self, key: object) -> bool:
        return self._index_key(key) in self._index

    def contains_key(self, key: K) -> bool:
        return key in self

    def contains_item(self, key: K, value: V) -> bool:
        """True if ``key`` is present and currently maps to ``value``."""
        slot = self._index.get(self._index_key(key))
        if slot is None:
            return False
        return slot.value is value or slot.value == value

    def __len__(self) -> int:
        return len(self._index)

    # --- mutation -------------------------------------------------------------

    def add(self, key: K, value: V) -> None:
        """Insert a new entry at the end; ``DuplicateKeyError`` if the key exists."""
        index_key = self._index_key(key)
        if index_key in self._index:
            raise DuplicateKeyError(key)
        self._append(index_key, key, value)

    def __setitem__(self, key: K, value: V) -> None:
        index_key = self._index_key(key)
        slot = self._index.get(index_key)
        if slot is None:
            self._append(index_key, key, value)
        else:
            slot.value = value

    def remove(self, key: K) -> bool:
        """Remove ``key`` if present. Returns whether an entry was removed."""
        slot = self._index.pop(self._index_key(key), None)
        if slot is None:
            return False
        self._unlink(slot)
        return True

    def remove_item(self, key: K, value: V) -> bool:
        """Remove ``key`` only while it maps to ``value``."""
        index_key = self._index_key(key)
        slot = self._index.get(index_key)
        if slot is None or not (slot.value is value or slot.value == value):
            return False
        del self._index[index_key]
        self._unlink(slot)
        return True

    def __delitem__(self, key: K) -> None:
        if not self.remove(key):
            raise KeyNotFoundError(key)

    @overload
    def pop(self, key: K) -> V: ...

    @overload
    def pop(self, key: K, default: V | D) -> V | D: ...

    def pop(self, key: K, default: Any = _MISSING) -> Any:
        slot = self._index.pop(self._index_key(key), None)
        if slot is None:
            if default is _MISSING:
                raise KeyNotFoundError(key)
            return default
        self._unlink(slot)
        return slot.value

    def popitem(self, last: bool = True) -> tuple[K, V]:
        """Remove and return the newest (``last=True``) or oldest entry."""
        handle = self._order.tail if last else self._order.head
        if handle == NIL:
            raise KeyNotFoundError(None, "popitem(): map is empty")
        slot = self._index.pop(self._order.key_at(handle))
        self._unlink(slot)
        return slot.key, slot.value

    def move_to_end(self, key: K, last: bool = True) -> None:
        """Move an existing key to the end (or the front with ``last=False``)."""
        slot = self._index.get(self._index_key(key))
        if slot is None:
            raise KeyNotFoundError(key)
        self._order.move_to_end(slot.handle, last)
        self._version += 1

    def clear(self) -> None:
        self._index.clear()
        self._order.clear()
        self._version += 1

    # --- iteration ------------------------------------------------------------

    def __iter__(self) -> Iterator[K]:
        return (slot.key for slot in self._iter_slots())

    def __reversed__(self) -> Iterator[K]:
        return (slot.key for slot in self._iter_slots(reverse=True))

    def keys(self) -> KeyView:
        return KeyView(self)

    def values(self) -> ValueView:
        return ValueView(self)

    def items(self) -> ItemView:
        return ItemView(self)

    def copy_to(self, destination: MutableSequence[Any], start_index: int = 0) -> None:
        """Write ``(key, value)`` pairs in order into ``destination`` from ``start_index``.

        The destination is validated before the first write; on
        ``InvalidArgumentError`` it is left untouched.
        """
        copy_into(destination, start_index, self.items(), len(self))

    # --- misc -----------------------------------------------------------------

    def copy(self) -> OrderedMap[K, V]:
        return type(self)(self.items(), capacity=len(self), comparer=self._comparer)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, OrderedMap):
            if len(self) != len(other):
                return False
            # keys compare through the comparer only when both maps use the same kind
            comparer = self._comparer
            if comparer is None or type(comparer) is not type(other._comparer):
                return all(a == b for a, b in zip(self.items(), other.items(), strict=True))
            return all(
                comparer.equals(ka, kb) and (va is vb or va == vb)
                for (ka, va), (kb, vb) in zip(self.items(), other.items(), strict=True)
            )
        return super().__eq__(other)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        if not self:
            return f"{type(self).__name__}()"
        return f"{type(self).__name__}({list(self.items())!r})"

    # --- internals ------------------------------------------------------------

    def _index_key(self, key: Any) -> Any:
        if self._comparer is None:
            return key
        return ComparedKey(key, self._comparer)

    def _append(self, index_key: Any, key: K, value: V) -> None:
        handle = self._order.append(index_key)
        self._index[index_key] = _Slot(key, value, handle)
        self._version += 1

    def _unlink(self, slot: _Slot[K, V]) -> None:
        # the slot is already out of the index
        self._order.remove(slot.handle)
        self._version += 1

    def _iter_slots(self, reverse: bool = False) -> Iterator[_Slot[K, V]]:
        # version is captured here, when the iterator is created, not on first next()
        return self._walk(self._version, reverse)

    def _walk(self, version: int, reverse: bool) -> Iterator[_Slot[K, V]]:
        order = self._order
        self._check_version(version)
        handle = order.tail if reverse else order.head
        while handle != NIL:
            yield self._index[order.key_at(handle)]
            self._check_version(version)
            handle = order.prev_of(handle) if reverse else order.next_of(handle)

    def _check_version(self, version: int) -> None:
        if self._version != version:
            raise ConcurrentModificationError(
                f"{type(self).__name__} changed size or order during iteration"
            )


__all__ = ["OrderedMap"]
