from __future__ import annotations

from collections.abc import Hashable, Iterator

from ordered_map.config import AppConfig, get_settings
from ordered_map.container import OrderedMap
from ordered_map.logger import get_logger


class LRUSet:
    """O(1) membership + eviction by capacity using OrderedMap."""

    __slots__ = ("_capacity", "_data", "_log")

    def __init__(self, capacity: int) -> None:
        self._capacity: int = max(1, int(capacity))
        self._data: OrderedMap[Hashable, None] = OrderedMap(capacity=self._capacity + 1)
        self._log = get_logger("lru")

    @classmethod
    def from_config(cls, config: AppConfig | None = None) -> LRUSet:
        cfg = config or get_settings()
        return cls(capacity=cfg.lru.capacity)

    @property
    def capacity(self) -> int:
        return self._capacity

    def add(self, key: Hashable) -> None:
        if key in self._data:
            self._data.move_to_end(key, last=True)
            return
        self._data.add(key, None)
        if len(self._data) > self._capacity:
            evicted, _ = self._data.popitem(last=False)
            self._log.debug("lru.evicted", key=evicted, capacity=self._capacity)

    def discard(self, key: Hashable) -> None:
        self._data.remove(key)

    def clear(self) -> None:
        self._data.clear()

    def __contains__(self, key: Hashable) -> bool:
        if key in self._data:
            self._data.move_to_end(key, last=True)
            return True
        return False

    def __len__(self) -> int:
        return len(self._data)

    def __iter__(self) -> Iterator[Hashable]:
        # oldest first; iterating does not count as access
        return iter(self._data)
