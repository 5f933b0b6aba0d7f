"""Tests for the rule-based process interpretation."""

import pytest

from spcinsight.core.engine.interpretation import (
    CapabilityRating,
    DecisionRemark,
    ShiftPresence,
    SpecialCause,
    Stability,
    YesNo,
    capability_rating,
    decision_remark,
    interpret_process,
    interpret_special_causes,
    points_detected_label,
    special_cause_present,
)
from spcinsight.core.engine.run_rules import RunStats, SpecialCauseSummary, TrendStats
from spcinsight.utils.statistics import CapabilityIndices


def _indices(cp: float, cpk: float, pp: float, ppk: float | None = None) -> CapabilityIndices:
    return CapabilityIndices(
        within_std_dev=1.0,
        overall_std_dev=1.0,
        cp=cp,
        cpu=cpk,
        cpl=cpk,
        cpk=cpk,
        pp=pp,
        ppu=pp if ppk is None else ppk,
        ppl=pp if ppk is None else ppk,
        ppk=pp if ppk is None else ppk,
    )


def _signals(
    outside: int = 0, range_outside: int = 0, run: int = 0, trend: int = 0
) -> SpecialCauseSummary:
    return SpecialCauseSummary(
        xbar_points_outside=outside,
        range_points_outside=range_outside,
        runs=RunStats(max_above=run, max_below=0),
        trends=TrendStats(longest_up=trend, longest_down=0),
        violations=[],
    )


class TestThresholdTables:

    @pytest.mark.parametrize("cpk, expected", [
        (2.0, DecisionRemark.EXCELLENT),
        (1.67, DecisionRemark.EXCELLENT),
        (1.5, DecisionRemark.MORE_CAPABLE),
        (1.45, DecisionRemark.MORE_CAPABLE),
        (1.4, DecisionRemark.CAPABLE),
        (1.33, DecisionRemark.CAPABLE),
        (1.2, DecisionRemark.SLIGHTLY_CAPABLE),
        (1.0, DecisionRemark.SLIGHTLY_CAPABLE),
        (0.99, DecisionRemark.NOT_CAPABLE),
        (-1.0, DecisionRemark.NOT_CAPABLE),
    ])
    def test_decision_remark(self, cpk: float, expected: DecisionRemark):
        assert decision_remark(cpk) == expected

    @pytest.mark.parametrize("index, expected", [
        (1.33, CapabilityRating.EXCELLENT),
        (1.32, CapabilityRating.GOOD),
        (1.0, CapabilityRating.GOOD),
        (0.5, CapabilityRating.POOR),
    ])
    def test_capability_rating(self, index: float, expected: CapabilityRating):
        assert capability_rating(index) == expected

    def test_labels_are_strings(self):
        assert DecisionRemark.EXCELLENT == "Process Excellent"
        assert SpecialCause.IMPOSSIBLE == "Special Cause Detection impossible"


class TestSpecialCausePresent:

    def test_pp_at_least_cp_is_impossible(self):
        assert special_cause_present(cp=1.0, pp=1.0) == SpecialCause.IMPOSSIBLE
        assert special_cause_present(cp=1.0, pp=1.5) == SpecialCause.IMPOSSIBLE

    def test_pp_well_below_cp(self):
        assert special_cause_present(cp=2.0, pp=1.4) == SpecialCause.YES

    def test_pp_slightly_below_cp(self):
        assert special_cause_present(cp=2.0, pp=1.6) == SpecialCause.NO


class TestInterpretSpecialCauses:

    def test_shift_and_spread(self):
        analysis = interpret_special_causes(_indices(cp=0.9, cpk=0.5, pp=0.8), _signals())
        assert analysis.process_shift == YesNo.YES
        assert analysis.process_spread == YesNo.YES

    def test_no_shift_no_spread(self):
        analysis = interpret_special_causes(_indices(cp=1.5, cpk=1.4, pp=1.2), _signals())
        assert analysis.process_shift == YesNo.NO
        assert analysis.process_spread == YesNo.NO
        assert analysis.special_cause_present == SpecialCause.NO

    def test_point_labels(self):
        analysis = interpret_special_causes(
            _indices(cp=1.5, cpk=1.4, pp=1.2), _signals(outside=3, run=8, trend=6)
        )
        assert analysis.points_outside_limits == "3 Points Detected"
        assert analysis.range_points_outside_limits == "None"
        assert analysis.eight_consecutive_points == YesNo.YES
        assert analysis.six_consecutive_trend == YesNo.YES

    def test_points_detected_label(self):
        assert points_detected_label(0) == "None"
        assert points_detected_label(1) == "1 Points Detected"


class TestInterpretProcess:

    def test_stable_capable_process(self):
        verdict = interpret_process(_indices(cp=1.8, cpk=1.7, pp=1.6), _signals())
        assert verdict.decision_remark == DecisionRemark.EXCELLENT
        assert verdict.process_potential == CapabilityRating.EXCELLENT
        assert verdict.process_performance == CapabilityRating.EXCELLENT
        assert verdict.process_stability == Stability.STABLE
        assert verdict.process_shift == ShiftPresence.NOT_DETECTED

    def test_points_outside_make_unstable(self):
        verdict = interpret_process(_indices(cp=1.8, cpk=1.7, pp=1.6), _signals(outside=1))
        assert verdict.process_stability == Stability.UNSTABLE
        assert verdict.process_shift == ShiftPresence.NOT_DETECTED

    def test_run_makes_unstable_and_shifted(self):
        verdict = interpret_process(_indices(cp=1.8, cpk=1.7, pp=1.6), _signals(run=9))
        assert verdict.process_stability == Stability.UNSTABLE
        assert verdict.process_shift == ShiftPresence.PRESENT

    def test_range_points_do_not_affect_stability(self):
        verdict = interpret_process(
            _indices(cp=1.8, cpk=1.7, pp=1.6), _signals(range_outside=2)
        )
        assert verdict.process_stability == Stability.STABLE
