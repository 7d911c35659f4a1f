"""
Classification of raw call records into typed sweep descriptions.

Completeness per kind:
- Sweep0D, SweepQueue: always complete
- Sweep1D: set_param, start, stop and step all resolved
- Sweep2D: inner quadruple OR outer quadruple fully resolved
- SimulSweep: at least one parameter tuple, or an opaque dict reference
"""
from __future__ import annotations

from typing import Callable

from sweeptoc.models import (
    RawCallRecord,
    SimulParam,
    SimulSweepMetrics,
    Sweep0DMetrics,
    Sweep1DMetrics,
    Sweep2DMetrics,
    SweepDescription,
    SweepFlags,
    SweepKind,
    SweepMetrics,
    SweepQueueMetrics,
)

# Python's spelling, as the resolver keeps literals unconverted.
TRUE_LITERAL = "True"

SWEEP1D_REQUIRED = ("set_param", "start", "stop", "step")
SWEEP2D_INNER_REQUIRED = ("inner_param", "inner_start", "inner_stop", "inner_step")
SWEEP2D_OUTER_REQUIRED = ("outer_param", "outer_start", "outer_stop", "outer_step")

Classified = tuple[SweepMetrics, bool, tuple[str, ...]]


def _missing(params: dict[str, str], required: tuple[str, ...]) -> list[str]:
    return [key for key in required if not params.get(key)]


def _diagnostics(missing: list[str]) -> tuple[str, ...]:
    return tuple(f"missing {key}" for key in missing)


def extract_flags(params: dict[str, str]) -> SweepFlags:
    return SweepFlags(
        bidirectional=params.get("bidirectional") == TRUE_LITERAL,
        continual=params.get("continual") == TRUE_LITERAL,
        plot_data=params.get("plot_data") == TRUE_LITERAL,
        save_data=params.get("save_data") == TRUE_LITERAL,
    )


def format_simul_summary(simul_params: tuple[SimulParam, ...]) -> str:
    return "; ".join(f"{p.param} {p.start}→{p.stop} @{p.step}" for p in simul_params)


def _classify_sweep0d(record: RawCallRecord) -> Classified:
    p = record.params
    metrics = Sweep0DMetrics(
        max_time=p.get("max_time"),
        inter_delay=p.get("inter_delay"),
        plot_bin=p.get("plot_bin"),
        x_axis_time=p.get("x_axis_time"),
        follow_params=tuple(record.follow_params),
    )
    return metrics, True, ()


def _classify_sweep1d(record: RawCallRecord) -> Classified:
    p = record.params
    metrics = Sweep1DMetrics(
        set_param=p.get("set_param"),
        start=p.get("start"),
        stop=p.get("stop"),
        step=p.get("step"),
        x_axis_time=p.get("x_axis_time"),
        inter_delay=p.get("inter_delay"),
        follow_params=tuple(record.follow_params),
    )
    missing = _missing(p, SWEEP1D_REQUIRED)
    return metrics, not missing, _diagnostics(missing)


def _classify_sweep2d(record: RawCallRecord) -> Classified:
    p = record.params
    metrics = Sweep2DMetrics(
        inner_sweep=p.get("inner_sweep"),
        inner_param=p.get("inner_param"),
        inner_start=p.get("inner_start"),
        inner_stop=p.get("inner_stop"),
        inner_step=p.get("inner_step"),
        outer_sweep=p.get("outer_sweep"),
        outer_param=p.get("outer_param"),
        outer_start=p.get("outer_start"),
        outer_stop=p.get("outer_stop"),
        outer_step=p.get("outer_step"),
        follow_params=tuple(record.follow_params),
    )
    # Inner OR outer quadruple suffices.
    inner_missing = _missing(p, SWEEP2D_INNER_REQUIRED)
    outer_missing = _missing(p, SWEEP2D_OUTER_REQUIRED)
    complete = not inner_missing or not outer_missing
    diagnostics = () if complete else _diagnostics(inner_missing + outer_missing)
    return metrics, complete, diagnostics


def _classify_simulsweep(record: RawCallRecord) -> Classified:
    p = record.params
    common = dict(
        inter_delay=p.get("inter_delay"),
        plot_bin=p.get("plot_bin"),
        follow_params=tuple(record.follow_params),
    )

    if record.simul_params is not None:
        count = len(record.simul_params)
        metrics = SimulSweepMetrics(
            param_count=count,
            param_summary=format_simul_summary(record.simul_params) if count else None,
            simul_params=record.simul_params,
            **common,
        )
        diagnostics = () if count else ("no simultaneous parameters resolved",)
        return metrics, count > 0, diagnostics

    reference = p.get("parameter_dict")
    if reference:
        # A variable reference can't be inspected; assume it is valid.
        metrics = SimulSweepMetrics(
            param_summary=f"dict: {reference}", parameter_dict=reference, **common
        )
        return metrics, True, ()

    return SimulSweepMetrics(**common), False, _diagnostics(["parameter_dict"])


def _classify_sweepqueue(record: RawCallRecord) -> Classified:
    return SweepQueueMetrics(), True, ()


CLASSIFIERS: dict[SweepKind, Callable[[RawCallRecord], Classified]] = {
    SweepKind.SWEEP0D: _classify_sweep0d,
    SweepKind.SWEEP1D: _classify_sweep1d,
    SweepKind.SWEEP2D: _classify_sweep2d,
    SweepKind.SIMULSWEEP: _classify_simulsweep,
    SweepKind.SWEEPQUEUE: _classify_sweepqueue,
}


def classify(record: RawCallRecord) -> SweepDescription:
    """Build the typed description for one call site."""
    metrics, complete, diagnostics = CLASSIFIERS[record.kind](record)
    return SweepDescription(
        kind=record.kind,
        name=record.name,
        metrics=metrics,
        flags=extract_flags(record.params),
        complete=complete,
        diagnostics=diagnostics,
    )
