"""
Insertion-order structure for the ordered map.

Nodes live in an arena of parallel lists and are doubly linked by their
integer indices. The index of a node is its position handle: the hash index
stores it so that a key can be unlinked without scanning.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any


NIL = -1


class OrderSequence:
    """Arena-backed doubly linked sequence with O(1) append, unlink and move."""

    __slots__ = ("_free", "_head", "_keys", "_next", "_prev", "_size", "_tail")

    def __init__(self, capacity: int = 0) -> None:
        # preallocated slots are handed out from the free list, lowest index first
        self._keys: list[Any] = [None] * capacity
        self._prev: list[int] = [NIL] * capacity
        self._next: list[int] = [NIL] * capacity
        self._free: list[int] = list(range(capacity - 1, -1, -1))
        self._head: int = NIL
        self._tail: int = NIL
        self._size: int = 0

    # --- navigation -----------------------------------------------------------

    @property
    def head(self) -> int:
        return self._head

    @property
    def tail(self) -> int:
        return self._tail

    def key_at(self, handle: int) -> Any:
        return self._keys[handle]

    def next_of(self, handle: int) -> int:
        return self._next[handle]

    def prev_of(self, handle: int) -> int:
        return self._prev[handle]

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[Any]:
        handle = self._head
        while handle != NIL:
            yield self._keys[handle]
            handle = self._next[handle]

    def __reversed__(self) -> Iterator[Any]:
        handle = self._tail
        while handle != NIL:
            yield self._keys[handle]
            handle = self._prev[handle]

    # --- mutation -------------------------------------------------------------

    def append(self, key: Any) -> int:
        """Append ``key`` at the end and return its handle."""
        if self._free:
            handle = self._free.pop()
            self._keys[handle] = key
        else:
            handle = len(self._keys)
            self._keys.append(key)
            self._prev.append(NIL)
            self._next.append(NIL)
        self._link_last(handle)
        self._size += 1
        return handle

    def remove(self, handle: int) -> None:
        """Unlink the node and return its slot to the free list."""
        self._unlink(handle)
        self._keys[handle] = None  # drop the reference to the key
        self._free.append(handle)
        self._size -= 1

    def move_to_end(self, handle: int, last: bool = True) -> None:
        if last:
            if handle == self._tail:
                return
            self._unlink(handle)
            self._link_last(handle)
        else:
            if handle == self._head:
                return
            self._unlink(handle)
            self._link_first(handle)

    def clear(self) -> None:
        self._keys = []
        self._prev = []
        self._next = []
        self._free = []
        self._head = NIL
        self._tail = NIL
        self._size = 0

    # --- helpers --------------------------------------------------------------

    def _link_last(self, handle: int) -> None:
        self._prev[handle] = self._tail
        self._next[handle] = NIL
        if self._tail == NIL:
            self._head = handle
        else:
            self._next[self._tail] = handle
        self._tail = handle

    def _link_first(self, handle: int) -> None:
        self._prev[handle] = NIL
        self._next[handle] = self._head
        if self._head == NIL:
            self._tail = handle
        else:
            self._prev[self._head] = handle
        self._head = handle

    def _unlink(self, handle: int) -> None:
        prev_handle = self._prev[handle]
        next_handle = self._next[handle]
        if prev_handle == NIL:
            self._head = next_handle
        else:
            self._next[prev_handle] = next_handle
        if next_handle == NIL:
            self._tail = prev_handle
        else:
            self._prev[next_handle] = prev_handle
        self._prev[handle] = NIL
        self._next[handle] = NIL


__all__ = ["NIL", "OrderSequence"]
