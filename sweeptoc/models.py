"""
Data model for detected sweeps.

``RawCallRecord`` is the string-keyed intermediate produced by the call-site
extractor. ``SweepDescription`` is the public result: a per-kind metrics
record, flags, and a completeness verdict.
"""
from __future__ import annotations

from dataclasses import dataclass, field, fields
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Union

# identifier -> literal source text
ConstantTable = Mapping[str, str]

EMPTY_CONSTANTS: ConstantTable = MappingProxyType({})


class SweepKind(Enum):
    """Recognized sweep constructors, keyed by their Python name."""

    SWEEP0D = "Sweep0D"
    SWEEP1D = "Sweep1D"
    SWEEP2D = "Sweep2D"
    SIMULSWEEP = "SimulSweep"
    SWEEPQUEUE = "SweepQueue"

    @property
    def key(self) -> str:
        """Lower-case identifier used by the rendering layer."""
        return self.value.lower()


SWEEP_CONSTRUCTORS: Mapping[str, SweepKind] = MappingProxyType({k.value: k for k in SweepKind})


@dataclass(frozen=True)
class SimulParam:
    """One axis of a simultaneous sweep."""

    param: str
    start: str
    stop: str
    step: str


@dataclass
class RawCallRecord:
    kind: SweepKind
    name: str  # Assigned variable
    params: dict[str, str] = field(default_factory=dict)
    # None unless the parameter dictionary was a literal; may then be empty.
    simul_params: tuple[SimulParam, ...] | None = None
    follow_params: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class Sweep0DMetrics:
    max_time: str | None = None
    inter_delay: str | None = None
    plot_bin: str | None = None
    x_axis_time: str | None = None
    follow_params: tuple[str, ...] = ()


@dataclass(frozen=True)
class Sweep1DMetrics:
    set_param: str | None = None
    start: str | None = None
    stop: str | None = None
    step: str | None = None
    x_axis_time: str | None = None
    inter_delay: str | None = None
    follow_params: tuple[str, ...] = ()


@dataclass(frozen=True)
class Sweep2DMetrics:
    inner_sweep: str | None = None  # Full text of the inner argument
    inner_param: str | None = None
    inner_start: str | None = None
    inner_stop: str | None = None
    inner_step: str | None = None
    outer_sweep: str | None = None  # Full text of the outer argument
    outer_param: str | None = None
    outer_start: str | None = None
    outer_stop: str | None = None
    outer_step: str | None = None
    follow_params: tuple[str, ...] = ()


@dataclass(frozen=True)
class SimulSweepMetrics:
    param_count: int | None = None
    param_summary: str | None = None  # "instr0.x 0→5 @0.02; instr1.x 0→10 @0.04"
    simul_params: tuple[SimulParam, ...] = ()
    parameter_dict: str | None = None  # Opaque reference when not a dict literal
    inter_delay: str | None = None
    plot_bin: str | None = None
    follow_params: tuple[str, ...] = ()


@dataclass(frozen=True)
class SweepQueueMetrics:
    pass


SweepMetrics = Union[
    Sweep0DMetrics, Sweep1DMetrics, Sweep2DMetrics, SimulSweepMetrics, SweepQueueMetrics
]


@dataclass(frozen=True)
class SweepFlags:
    bidirectional: bool = False
    continual: bool = False
    plot_data: bool = False
    save_data: bool = False


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def _json_value(value: Any) -> Any:
    if isinstance(value, SimulParam):
        return {"param": value.param, "start": value.start, "stop": value.stop, "step": value.step}
    if isinstance(value, tuple):
        return [_json_value(v) for v in value]
    return value


@dataclass(frozen=True)
class SweepDescription:
    kind: SweepKind
    name: str
    metrics: SweepMetrics
    flags: SweepFlags
    complete: bool
    diagnostics: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready form with camelCase keys; unset fields are omitted."""
        metrics: dict[str, Any] = {}
        for f in fields(self.metrics):
            value = getattr(self.metrics, f.name)
            if value is None or value == ():
                continue
            metrics[_camel(f.name)] = _json_value(value)
        flags = {_camel(f.name): True for f in fields(self.flags) if getattr(self.flags, f.name)}
        return {
            "type": self.kind.key,
            "name": self.name,
            "metrics": metrics,
            "flags": flags,
            "complete": self.complete,
            "diagnostics": list(self.diagnostics),
        }
