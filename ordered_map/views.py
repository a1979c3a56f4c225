"""
Read-only, order-preserving views over an ``OrderedMap``.

Views are live: they reflect the current state of the map and share its
fail-fast iteration. Mutating methods exist only to fail loudly with
``UnsupportedOperationError`` for callers written against mutable collections.
"""

from __future__ import annotations

from collections.abc import ItemsView, Iterable, Iterator, KeysView, MutableSequence, ValuesView
from typing import TYPE_CHECKING, Any, NoReturn

from ordered_map.errors import InvalidArgumentError, UnsupportedOperationError


if TYPE_CHECKING:
    from ordered_map.container import OrderedMap


def check_destination(destination: Any, start_index: Any, count: int) -> None:
    """Validate a copy target before anything is written to it."""
    if destination is None:
        raise InvalidArgumentError("destination is required")
    if not isinstance(destination, MutableSequence):
        raise InvalidArgumentError(
            f"destination must be a mutable sequence, got {type(destination).__name__}"
        )
    if isinstance(start_index, bool) or not isinstance(start_index, int):
        raise InvalidArgumentError(f"start_index must be an int, got {start_index!r}")
    if start_index < 0 or start_index > len(destination):
        raise InvalidArgumentError(
            f"start_index {start_index} is outside destination bounds [0, {len(destination)}]"
        )
    if len(destination) - start_index < count:
        raise InvalidArgumentError(
            f"destination has room for {len(destination) - start_index} items, {count} required"
        )


def copy_into(destination: Any, start_index: Any, items: Iterable[Any], count: int) -> None:
    """Copy ``items`` into ``destination``; on failure the destination is left as it was."""
    check_destination(destination, start_index, count)
    buf = list(items)
    saved = [destination[start_index + offset] for offset in range(len(buf))]
    written = 0
    try:
        for offset, item in enumerate(buf):
            destination[start_index + offset] = item
            written += 1
    except (TypeError, ValueError, OverflowError) as exc:
        # typed sequences (array, bytearray) reject items one at a time
        for offset in range(written):
            destination[start_index + offset] = saved[offset]
        raise InvalidArgumentError(
            f"destination rejected item {written}: {exc}"
        ) from exc


class _ReadOnlyView:
    __slots__ = ()

    def _refuse(self, operation: str) -> NoReturn:
        raise UnsupportedOperationError(f"{type(self).__name__} is read-only: {operation}")

    def add(self, *args: Any, **kwargs: Any) -> NoReturn:
        self._refuse("add")

    def remove(self, *args: Any, **kwargs: Any) -> NoReturn:
        self._refuse("remove")

    def discard(self, *args: Any, **kwargs: Any) -> NoReturn:
        self._refuse("discard")

    def pop(self, *args: Any, **kwargs: Any) -> NoReturn:
        self._refuse("pop")

    def clear(self) -> NoReturn:
        self._refuse("clear")

    def update(self, *args: Any, **kwargs: Any) -> NoReturn:
        self._refuse("update")


class KeyView(_ReadOnlyView, KeysView):
    """Live keys in insertion order; O(1) membership through the hash index."""

    __slots__ = ()
    _mapping: OrderedMap[Any, Any]

    def __iter__(self) -> Iterator[Any]:
        return iter(self._mapping)

    def __reversed__(self) -> Iterator[Any]:
        return reversed(self._mapping)

    def __contains__(self, key: object) -> bool:
        return key in self._mapping

    def copy_to(self, destination: MutableSequence[Any], start_index: int = 0) -> None:
        copy_into(destination, start_index, self, len(self._mapping))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self)!r})"


class ValueView(_ReadOnlyView, ValuesView):
    """Live values in key order. Membership is a linear scan; values are not indexed."""

    __slots__ = ()
    _mapping: OrderedMap[Any, Any]

    def __iter__(self) -> Iterator[Any]:
        return (slot.value for slot in self._mapping._iter_slots())

    def __reversed__(self) -> Iterator[Any]:
        return (slot.value for slot in self._mapping._iter_slots(reverse=True))

    def __contains__(self, value: object) -> bool:
        return any(v is value or v == value for v in self)

    def copy_to(self, destination: MutableSequence[Any], start_index: int = 0) -> None:
        copy_into(destination, start_index, self, len(self._mapping))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self)!r})"


class ItemView(_ReadOnlyView, ItemsView):
    """Live ``(key, value)`` pairs in insertion order."""

    __slots__ = ()
    _mapping: OrderedMap[Any, Any]

    def __iter__(self) -> Iterator[tuple[Any, Any]]:
        return ((slot.key, slot.value) for slot in self._mapping._iter_slots())

    def __reversed__(self) -> Iterator[tuple[Any, Any]]:
        return ((slot.key, slot.value) for slot in self._mapping._iter_slots(reverse=True))

    def __contains__(self, item: object) -> bool:
        if not isinstance(item, tuple) or len(item) != 2:
            return False
        key, value = item
        return self._mapping.contains_item(key, value)

    def copy_to(self, destination: MutableSequence[Any], start_index: int = 0) -> None:
        copy_into(destination, start_index, self, len(self._mapping))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self)!r})"


__all__ = ["ItemView", "KeyView", "ValueView", "check_destination", "copy_into"]
