from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
from types import SimpleNamespace

import pytest
import structlog
from typer.testing import CliRunner

from ordered_map import OrderedMap
from ordered_map.bench import timing
from ordered_map.bench.cli import app
from ordered_map.bench.timing import (
    SCENARIOS,
    GrowthReport,
    GrowthSample,
    ParityReport,
    Scenario,
    capacities,
    contains_entry_parity,
    create_ordered_map,
    create_reference_dict,
    measure_growth,
    measure_throughput,
)


@pytest.fixture(autouse=True)
def _reset_structlog() -> Iterator[None]:
    yield
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()


def _write_yaml(path: Path, text: str) -> Path:
    path.write_text(text, encoding="utf-8")
    return path


# ---- helpers ----
def test_capacities_are_geometric_and_exclusive() -> None:
    assert capacities(10, 100) == [10, 20, 40, 80]
    assert capacities(10, 80, 4) == [10, 40]
    assert capacities(10, 10) == []
    with pytest.raises(ValueError):
        capacities(0, 100)
    with pytest.raises(ValueError):
        capacities(10, 100, 1)


def test_populated_maps_match() -> None:
    ordered = create_ordered_map(50)
    reference = create_reference_dict(50)
    assert isinstance(ordered, OrderedMap)
    assert list(ordered.items()) == list(reference.items())


def test_growth_report_verdict() -> None:
    report = GrowthReport(
        max_ratio=4.0,
        samples=[GrowthSample(10, 10, 0.1), GrowthSample(20, 20, 0.2, 2.0)],
    )
    assert report.worst_ratio == 2.0
    assert report.ok
    report.samples.append(GrowthSample(40, 40, 1.0, 5.0))
    assert not report.ok
    assert GrowthReport(max_ratio=4.0).ok


def test_parity_report_verdict() -> None:
    assert ParityReport(ordered_ops=100, reference_ops=300, max_slowdown=4.0).ok
    assert not ParityReport(ordered_ops=10, reference_ops=300, max_slowdown=4.0).ok
    assert ParityReport(ordered_ops=0, reference_ops=3, max_slowdown=4.0).slowdown == 3


@pytest.mark.parametrize("scenario", list(Scenario))
def test_every_scenario_runs(scenario: Scenario) -> None:
    arrange, act = SCENARIOS[scenario]
    report = measure_growth(create_ordered_map, arrange, act, sizes=[50, 100], max_ratio=1e9)
    assert [s.capacity for s in report.samples] == [50, 100]
    assert report.samples[0].ratio is None
    assert report.samples[1].ratio is not None


def test_growth_counts_entries_after_warm_up() -> None:
    arrange, act = SCENARIOS[Scenario.REMOVE_ABSENT]
    report = measure_growth(create_ordered_map, arrange, act, sizes=[10], max_ratio=4.0)
    assert report.samples[0].count == 9


def test_remove_scenario_empties_the_map() -> None:
    maps: list[OrderedMap[int, int]] = []

    def create(capacity: int) -> OrderedMap[int, int]:
        maps.append(create_ordered_map(capacity))
        return maps[-1]

    arrange, act = SCENARIOS[Scenario.REMOVE]
    measure_growth(create, arrange, act, sizes=[20], max_ratio=4.0)
    assert len(maps[0]) == 0


def test_throughput_counts_calls() -> None:
    calls: list[int] = []
    n = measure_throughput(lambda: {}, lambda _m: calls.append(1), duration_sec=0.01)
    assert n >= 1
    assert len(calls) == n + 1  # plus warm-up


def test_zero_baseline_fails_the_check(monkeypatch: pytest.MonkeyPatch) -> None:
    # start/stop pairs: first sample takes 0s, second 1s
    ticks = iter([5.0, 5.0, 7.0, 8.0])
    monkeypatch.setattr(timing, "time", SimpleNamespace(perf_counter=lambda: next(ticks)))
    report = measure_growth(
        create_ordered_map, lambda m: None, lambda m, n: None, sizes=[10, 20], max_ratio=4.0
    )
    assert report.samples[0].seconds == 0.0
    assert report.samples[1].ratio == float("inf")
    assert not report.ok


# ---- complexity guarantees ----
@pytest.mark.perf
def test_remove_cost_does_not_grow_with_map_size() -> None:
    def act(m: OrderedMap[int, int], _count: int) -> None:
        for i in range(2_000):
            m.remove(i)

    report = measure_growth(
        create_ordered_map,
        lambda m: None,
        act,
        sizes=capacities(2_000, 200_000, 4),
        max_ratio=1e9,
        repeats=3,
    )
    first, last = report.samples[0].seconds, report.samples[-1].seconds
    assert last / first < 8


@pytest.mark.perf
@pytest.mark.parametrize("scenario", [Scenario.REMOVE, Scenario.REMOVE_ITEM])
def test_removing_everything_grows_linearly(scenario: Scenario) -> None:
    arrange, act = SCENARIOS[scenario]
    report = measure_growth(
        create_ordered_map,
        arrange,
        act,
        sizes=capacities(10_000, 100_000, 2),
        max_ratio=4.0,
        repeats=3,
    )
    assert report.ok, report.samples


@pytest.mark.perf
def test_contains_entry_is_close_to_plain_dict() -> None:
    report = contains_entry_parity(capacity=50_000, duration_sec=0.2, max_slowdown=50.0)
    assert report.ordered_ops > 0
    assert report.ok, report


# ---- CLI ----
def test_cli_growth_passes(tmp_path: Path) -> None:
    cfg = _write_yaml(tmp_path / "bench.yaml", "bench:\n  max_growth_ratio: 1000000\n")
    args = ["growth", "--scenario", "remove", "--start", "100", "--stop", "800"]
    result = CliRunner().invoke(app, [*args, "--config", str(cfg)])
    assert result.exit_code == 0, result.output
    assert "=== remove ===" in result.output


def test_cli_growth_fails_on_tight_limit(tmp_path: Path) -> None:
    cfg = _write_yaml(tmp_path / "bench.yaml", "bench:\n  max_growth_ratio: 1.0001\n")
    args = ["growth", "--scenario", "remove", "--start", "1000", "--stop", "64000"]
    result = CliRunner().invoke(app, [*args, "--config", str(cfg)])
    assert result.exit_code == 1


def test_cli_parity(tmp_path: Path) -> None:
    cfg = _write_yaml(tmp_path / "bench.yaml", "bench:\n  max_slowdown: 1000000\n")
    result = CliRunner().invoke(
        app, ["parity", "--capacity", "1000", "--duration", "0.05", "--config", str(cfg)]
    )
    assert result.exit_code == 0, result.output
    assert "slowdown" in result.output
