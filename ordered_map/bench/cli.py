from __future__ import annotations

from pathlib import Path

import typer

from ordered_map.config import AppConfig, get_settings
from ordered_map.logger import configure_logging, get_logger

from .timing import (
    SCENARIOS,
    Scenario,
    capacities,
    contains_entry_parity,
    create_ordered_map,
    measure_growth,
)


app = typer.Typer(help="Timing checks for OrderedMap complexity guarantees")


def _load_cfg(config: Path | None) -> AppConfig:
    return AppConfig.from_yaml(config) if config is not None else get_settings()


@app.command()
def growth(
    scenario: Scenario = Scenario.REMOVE,
    config: Path | None = None,
    start: int | None = None,
    stop: int | None = None,
    repeats: int | None = None,
) -> None:
    """Time one scenario across growing map sizes; fail if cost grows too fast."""
    cfg = _load_cfg(config)
    configure_logging(cfg.logging)
    log = get_logger("bench")

    bench = cfg.bench
    sizes = capacities(
        start or bench.start_capacity, stop or bench.stop_capacity, bench.growth_factor
    )
    arrange, act = SCENARIOS[scenario]
    log.info("bench.growth_start", scenario=str(scenario), sizes=len(sizes))

    report = measure_growth(
        create_ordered_map,
        arrange,
        act,
        sizes=sizes,
        max_ratio=bench.max_growth_ratio,
        repeats=repeats or bench.repeats,
        log=log,
    )

    typer.echo(f"\n=== {scenario} ===")
    for s in report.samples:
        ratio = "-" if s.ratio is None else f"{s.ratio:.2f}"
        typer.echo(f"{s.capacity:>12d} {s.seconds:12.6f}s  ratio {ratio}")
    typer.echo("=" * (len(str(scenario)) + 8))

    if not report.ok:
        log.error(
            "bench.growth_failed",
            scenario=str(scenario),
            worst_ratio=report.worst_ratio,
            max_ratio=report.max_ratio,
        )
        raise typer.Exit(code=1)


@app.command()
def parity(
    config: Path | None = None,
    capacity: int | None = None,
    duration: float | None = None,
) -> None:
    """Compare contains-entry throughput of OrderedMap against a plain dict."""
    cfg = _load_cfg(config)
    configure_logging(cfg.logging)
    log = get_logger("bench")

    bench = cfg.bench
    report = contains_entry_parity(
        capacity=capacity or bench.parity_capacity,
        duration_sec=duration or bench.parity_duration_sec,
        max_slowdown=bench.max_slowdown,
    )
    log.info(
        "bench.parity",
        ordered_ops=report.ordered_ops,
        reference_ops=report.reference_ops,
        slowdown=round(report.slowdown, 2),
    )
    typer.echo(f"OrderedMap {report.ordered_ops} ops, dict {report.reference_ops} ops")
    typer.echo(f"slowdown x{report.slowdown:.2f} (limit x{report.max_slowdown:.2f})")

    if not report.ok:
        log.error("bench.parity_failed", slowdown=report.slowdown, limit=report.max_slowdown)
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
