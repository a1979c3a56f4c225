"""
Wall-clock checks for the container's complexity guarantees.

- measure_growth(): times one action on maps of geometrically growing size
  and reports the ratio between consecutive sizes. A constant-time operation
  run ``count`` times grows linearly (ratio ~ factor); a linear-time one grows
  quadratically (ratio ~ factor ** 2).
- measure_throughput(): how many times an action completes within a fixed
  time budget, used to compare the ordered map with a plain ``dict``.
"""

from __future__ import annotations

import gc
import math
import time
from collections.abc import Callable, Iterator, MutableMapping
from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from structlog.typing import FilteringBoundLogger

from ordered_map.container import OrderedMap


AnyMap = MutableMapping[int, int]
Arrange = Callable[[Any], object]
Act = Callable[[Any, int], object]


@dataclass(slots=True, frozen=True)
class GrowthSample:
    capacity: int
    # entries present right before the timed action
    count: int
    seconds: float
    # seconds / previous seconds; None for the first sample, inf after a zero baseline
    ratio: float | None = None


@dataclass(slots=True)
class GrowthReport:
    max_ratio: float
    samples: list[GrowthSample] = field(default_factory=list)

    @property
    def worst_ratio(self) -> float | None:
        ratios = [s.ratio for s in self.samples if s.ratio is not None]
        return max(ratios) if ratios else None

    @property
    def ok(self) -> bool:
        worst = self.worst_ratio
        return worst is None or worst < self.max_ratio


@dataclass(slots=True, frozen=True)
class ParityReport:
    ordered_ops: int
    reference_ops: int
    max_slowdown: float

    @property
    def slowdown(self) -> float:
        return self.reference_ops / max(self.ordered_ops, 1)

    @property
    def ok(self) -> bool:
        return self.slowdown <= self.max_slowdown


class Scenario(StrEnum):
    """Growth scenarios, one per removal/lookup path of the map."""

    REMOVE = "remove"
    REMOVE_ITEM = "remove-item"
    REMOVE_ABSENT = "remove-absent"
    REMOVE_ITEM_ABSENT = "remove-item-absent"
    CONTAINS_ITEM = "contains-item"


def _remove_all(mapping: OrderedMap[int, int], count: int) -> None:
    for i in range(count):
        mapping.remove(i)


def _remove_all_items(mapping: OrderedMap[int, int], count: int) -> None:
    for i in range(count):
        mapping.remove_item(i, i)


def _remove_zero(mapping: OrderedMap[int, int], count: int) -> None:
    for _ in range(count):
        mapping.remove(0)


def _remove_one_one(mapping: OrderedMap[int, int], count: int) -> None:
    for _ in range(count):
        mapping.remove_item(1, 1)


def _contains_all_items(mapping: OrderedMap[int, int], count: int) -> None:
    for i in range(count):
        mapping.contains_item(i, i)


# scenario -> (warm-up, timed action)
SCENARIOS: dict[Scenario, tuple[Arrange, Act]] = {
    Scenario.REMOVE: (lambda m: m.remove(-1), _remove_all),
    Scenario.REMOVE_ITEM: (lambda m: m.remove_item(-1, -1), _remove_all_items),
    # warm-up removes the key, the timed loop then misses it every time
    Scenario.REMOVE_ABSENT: (lambda m: m.remove(0), _remove_zero),
    Scenario.REMOVE_ITEM_ABSENT: (lambda m: m.remove_item(1, 1), _remove_one_one),
    Scenario.CONTAINS_ITEM: (lambda m: m.contains_item(-1, -1), _contains_all_items),
}


def populate(mapping: AnyMap, capacity: int) -> AnyMap:
    for j in range(capacity):
        mapping.setdefault(j, j)
    return mapping


def create_ordered_map(capacity: int) -> OrderedMap[int, int]:
    mapping: OrderedMap[int, int] = OrderedMap(capacity=capacity)
    populate(mapping, capacity)
    return mapping


def create_reference_dict(capacity: int) -> dict[int, int]:
    mapping: dict[int, int] = {}
    populate(mapping, capacity)
    return mapping


def capacities(start: int, stop: int, factor: int = 2) -> list[int]:
    """Geometric sizes from ``start`` (inclusive) to ``stop`` (exclusive)."""
    if start < 1 or factor < 2:
        raise ValueError("start must be >= 1 and factor >= 2")
    out: list[int] = []
    capacity = start
    while capacity < stop:
        out.append(capacity)
        capacity *= factor
    return out


@contextmanager
def quiet_gc() -> Iterator[None]:
    """Collect now and keep the collector off for the timed block."""
    gc.collect()
    was_enabled = gc.isenabled()
    gc.disable()
    try:
        yield
    finally:
        if was_enabled:
            gc.enable()


def measure_growth(
    create: Callable[[int], Any],
    arrange: Arrange,
    act: Act,
    *,
    sizes: list[int],
    max_ratio: float,
    repeats: int = 1,
    log: FilteringBoundLogger | None = None,
) -> GrowthReport:
    report = GrowthReport(max_ratio=max_ratio)
    previous: float | None = None

    for capacity in sizes:
        best = math.inf
        count = 0
        for _ in range(max(1, repeats)):
            mapping = create(capacity)
            arrange(mapping)
            count = len(mapping)
            with quiet_gc():
                started = time.perf_counter()
                act(mapping, count)
                spent = time.perf_counter() - started
            best = min(best, spent)

        ratio: float | None = None
        if previous is not None:
            if previous > 0:
                ratio = best / previous
            else:
                # a zero baseline cannot vouch for the step, count it as a failure
                ratio = math.inf
                if log is not None:
                    log.warning("bench.zero_baseline", capacity=capacity, seconds=best)
        sample = GrowthSample(capacity=capacity, count=count, seconds=best, ratio=ratio)
        report.samples.append(sample)
        if log is not None:
            log.info(
                "bench.growth_sample",
                capacity=capacity,
                count=count,
                seconds=round(best, 6),
                ratio=None if ratio is None else round(ratio, 3),
            )
        previous = best

    return report


def measure_throughput(
    create: Callable[[], Any],
    act: Callable[[Any], object],
    *,
    duration_sec: float,
) -> int:
    """Number of completed ``act`` calls within ``duration_sec``."""
    mapping = create()
    act(mapping)  # warm-up
    count = 0
    with quiet_gc():
        deadline = time.perf_counter() + duration_sec
        while True:
            act(mapping)
            count += 1
            if time.perf_counter() >= deadline:
                break
    return count


def contains_entry_parity(
    *,
    capacity: int,
    duration_sec: float,
    max_slowdown: float,
    probe: tuple[int, int] = (1, 1),
) -> ParityReport:
    """Compare ``(key, value) in m.items()`` on the ordered map against a plain dict."""

    def act(mapping: Any) -> bool:
        return probe in mapping.items()

    ordered_ops = measure_throughput(
        lambda: create_ordered_map(capacity), act, duration_sec=duration_sec
    )
    reference_ops = measure_throughput(
        lambda: create_reference_dict(capacity), act, duration_sec=duration_sec
    )
    return ParityReport(
        ordered_ops=ordered_ops, reference_ops=reference_ops, max_slowdown=max_slowdown
    )


__all__ = [
    "SCENARIOS",
    "GrowthReport",
    "GrowthSample",
    "ParityReport",
    "Scenario",
    "capacities",
    "contains_entry_parity",
    "create_ordered_map",
    "create_reference_dict",
    "measure_growth",
    "measure_throughput",
    "populate",
]
