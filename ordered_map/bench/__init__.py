"""
Benchmark harness for the ordered map (library + ``ordered-map-bench`` CLI).
"""

from __future__ import annotations

from .timing import (
    GrowthReport,
    GrowthSample,
    ParityReport,
    Scenario,
    contains_entry_parity,
    measure_growth,
    measure_throughput,
)


__all__ = [
    "GrowthReport",
    "GrowthSample",
    "ParityReport",
    "Scenario",
    "contains_entry_parity",
    "measure_growth",
    "measure_throughput",
]
