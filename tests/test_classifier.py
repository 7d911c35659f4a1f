"""Tests for classification into sweep descriptions."""

from sweeptoc.classifier import classify, format_simul_summary
from sweeptoc.models import (
    RawCallRecord,
    SimulParam,
    SimulSweepMetrics,
    Sweep1DMetrics,
    Sweep2DMetrics,
    SweepKind,
    SweepQueueMetrics,
)

QUAD_INNER = {"inner_param": "g", "inner_start": "0", "inner_stop": "1", "inner_step": "0.1"}
QUAD_OUTER = {"outer_param": "h", "outer_start": "0", "outer_stop": "2", "outer_step": "0.5"}


def _record(kind, **params):
    return RawCallRecord(kind=kind, name="s", params=dict(params))


class TestFlags:
    """Flags compare against Python's True spelling."""

    def test_true_flags(self):
        rec = _record(SweepKind.SWEEP0D, bidirectional="True", continual="True", plot_data="True", save_data="True")
        flags = classify(rec).flags
        assert flags.bidirectional and flags.continual and flags.plot_data and flags.save_data

    def test_other_spellings_are_false(self):
        rec = _record(SweepKind.SWEEP0D, bidirectional="true", plot_data="1", save_data="FLAG")
        flags = classify(rec).flags
        assert not flags.bidirectional
        assert not flags.plot_data
        assert not flags.save_data


class TestSweep1D:
    """Sweep1D requires all four core fields."""

    def test_complete(self):
        rec = _record(SweepKind.SWEEP1D, set_param="dmm.v", start="0", stop="1", step="0.1", inter_delay="0.05")
        sweep = classify(rec)
        assert sweep.metrics == Sweep1DMetrics(
            set_param="dmm.v", start="0", stop="1", step="0.1", inter_delay="0.05"
        )
        assert sweep.complete is True
        assert sweep.diagnostics == ()

    def test_missing_step(self):
        sweep = classify(_record(SweepKind.SWEEP1D, set_param="dmm.v", start="0", stop="1"))
        assert sweep.complete is False
        assert sweep.metrics.step is None
        assert sweep.diagnostics == ("missing step",)

    def test_empty_value_counts_as_missing(self):
        sweep = classify(_record(SweepKind.SWEEP1D, set_param="", start="0", stop="1", step="0.1"))
        assert sweep.complete is False


class TestSweep2D:
    """Sweep2D is complete when either side is complete."""

    def test_inner_only(self):
        sweep = classify(_record(SweepKind.SWEEP2D, outer_sweep="outer", **QUAD_INNER))
        assert isinstance(sweep.metrics, Sweep2DMetrics)
        assert sweep.complete is True

    def test_outer_only(self):
        assert classify(_record(SweepKind.SWEEP2D, **QUAD_OUTER)).complete is True

    def test_neither_side(self):
        sweep = classify(_record(SweepKind.SWEEP2D, inner_param="g", outer_sweep="o"))
        assert sweep.complete is False
        assert "missing inner_start" in sweep.diagnostics
        assert "missing outer_param" in sweep.diagnostics


class TestSimulSweep:
    """SimulSweep completeness depends on the parameter dictionary."""

    def test_tuples(self):
        rec = _record(SweepKind.SIMULSWEEP, inter_delay="0.1")
        rec.simul_params = (
            SimulParam("instr0.x", "0", "5", "0.02"),
            SimulParam("instr1.x", "0", "10", "0.04"),
        )
        sweep = classify(rec)
        assert sweep.metrics.param_count == 2
        assert sweep.metrics.param_summary == "instr0.x 0→5 @0.02; instr1.x 0→10 @0.04"
        assert sweep.metrics.inter_delay == "0.1"
        assert sweep.complete is True

    def test_empty_literal_dict(self):
        rec = _record(SweepKind.SIMULSWEEP)
        rec.simul_params = ()
        sweep = classify(rec)
        assert sweep.metrics.param_count == 0
        assert sweep.metrics.param_summary is None
        assert sweep.complete is False

    def test_opaque_reference_is_complete(self):
        sweep = classify(_record(SweepKind.SIMULSWEEP, parameter_dict="params"))
        assert sweep.metrics == SimulSweepMetrics(param_summary="dict: params", parameter_dict="params")
        assert sweep.complete is True

    def test_no_argument(self):
        sweep = classify(_record(SweepKind.SIMULSWEEP))
        assert sweep.complete is False
        assert sweep.diagnostics == ("missing parameter_dict",)

    def test_format_summary_empty(self):
        assert format_simul_summary(()) == ""


class TestAlwaysComplete:
    """Sweep0D and SweepQueue have no required fields."""

    def test_sweep0d(self):
        assert classify(_record(SweepKind.SWEEP0D)).complete is True

    def test_sweepqueue(self):
        sweep = classify(_record(SweepKind.SWEEPQUEUE, set_param="x"))
        assert sweep.metrics == SweepQueueMetrics()
        assert sweep.complete is True


class TestToDict:
    """JSON rendering of descriptions."""

    def test_camel_case_and_omission(self):
        rec = _record(SweepKind.SWEEP1D, set_param="dmm.v", start="0", stop="1", step="0.1", save_data="True")
        rec.follow_params = ["lockin.x"]
        data = classify(rec).to_dict()
        assert data == {
            "type": "sweep1d",
            "name": "s",
            "metrics": {
                "setParam": "dmm.v",
                "start": "0",
                "stop": "1",
                "step": "0.1",
                "followParams": ["lockin.x"],
            },
            "flags": {"saveData": True},
            "complete": True,
            "diagnostics": [],
        }

    def test_simul_params_rendered(self):
        rec = _record(SweepKind.SIMULSWEEP)
        rec.simul_params = (SimulParam("a.x", "0", "1", "0.1"),)
        metrics = classify(rec).to_dict()["metrics"]
        assert metrics["paramCount"] == 1
        assert metrics["simulParams"] == [{"param": "a.x", "start": "0", "stop": "1", "step": "0.1"}]
