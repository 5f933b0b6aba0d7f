"""Rule-based interpretation of capability indices and chart signals.

Every verdict is a threshold table evaluated top-down; the first matching
row wins.
"""

from dataclasses import dataclass
from enum import Enum

from spcinsight.core.engine.run_rules import SpecialCauseSummary
from spcinsight.utils.statistics import CapabilityIndices

# Pp and Cpk are compared against this fraction of Cp
SHIFT_RATIO = 0.75


class DecisionRemark(str, Enum):
    EXCELLENT = "Process Excellent"
    MORE_CAPABLE = "Process is more capable, Scope for Further Improvement"
    CAPABLE = "Process is capable, Scope for Further Improvement"
    SLIGHTLY_CAPABLE = "Process is slightly capable, need 100% inspection"
    NOT_CAPABLE = "Stop Process change, process design"


class CapabilityRating(str, Enum):
    EXCELLENT = "Excellent"
    GOOD = "Good"
    POOR = "Poor"


class Stability(str, Enum):
    STABLE = "Stable"
    UNSTABLE = "Unstable"


class ShiftPresence(str, Enum):
    PRESENT = "Present"
    NOT_DETECTED = "Not Detected"


class YesNo(str, Enum):
    YES = "Yes"
    NO = "No"


class SpecialCause(str, Enum):
    """Special-cause verdict; IMPOSSIBLE flags Pp >= Cp as a data anomaly."""
    YES = "Yes"
    NO = "No"
    IMPOSSIBLE = "Special Cause Detection impossible"


_DECISION_TABLE: tuple[tuple[float, DecisionRemark], ...] = (
    (1.67, DecisionRemark.EXCELLENT),
    (1.45, DecisionRemark.MORE_CAPABLE),
    (1.33, DecisionRemark.CAPABLE),
    (1.0, DecisionRemark.SLIGHTLY_CAPABLE),
)

_RATING_TABLE: tuple[tuple[float, CapabilityRating], ...] = (
    (1.33, CapabilityRating.EXCELLENT),
    (1.0, CapabilityRating.GOOD),
)


@dataclass(frozen=True)
class SpecialCauseAnalysis:
    """Shift/spread/special-cause flags plus chart signal labels."""
    process_shift: YesNo
    process_spread: YesNo
    special_cause_present: SpecialCause
    points_outside_limits: str
    range_points_outside_limits: str
    eight_consecutive_points: YesNo
    six_consecutive_trend: YesNo


@dataclass(frozen=True)
class ProcessInterpretation:
    """Overall verdicts on capability and stability."""
    decision_remark: DecisionRemark
    process_potential: CapabilityRating
    process_performance: CapabilityRating
    process_stability: Stability
    process_shift: ShiftPresence


def decision_remark(cpk: float) -> DecisionRemark:
    for threshold, remark in _DECISION_TABLE:
        if cpk >= threshold:
            return remark
    return DecisionRemark.NOT_CAPABLE


def capability_rating(index: float) -> CapabilityRating:
    for threshold, rating in _RATING_TABLE:
        if index >= threshold:
            return rating
    return CapabilityRating.POOR


def special_cause_present(cp: float, pp: float) -> SpecialCause:
    """Compare overall against within capability.

    Pp >= Cp means the within-subgroup sigma is at least the overall sigma,
    which should not happen for normally distributed data; detection is then
    reported as impossible instead of guessed.
    """
    if pp >= cp:
        return SpecialCause.IMPOSSIBLE
    return SpecialCause.YES if pp < SHIFT_RATIO * cp else SpecialCause.NO


def _yes_no(flag: bool) -> YesNo:
    return YesNo.YES if flag else YesNo.NO


def points_detected_label(count: int) -> str:
    """Label for a count of out-of-limit points.

    Examples:
        >>> points_detected_label(0)
        'None'
        >>> points_detected_label(3)
        '3 Points Detected'
    """
    return f"{count} Points Detected" if count > 0 else "None"


def interpret_special_causes(
    indices: CapabilityIndices, signals: SpecialCauseSummary
) -> SpecialCauseAnalysis:
    return SpecialCauseAnalysis(
        process_shift=_yes_no(indices.cpk < SHIFT_RATIO * indices.cp),
        process_spread=_yes_no(indices.cp < 1),
        special_cause_present=special_cause_present(indices.cp, indices.pp),
        points_outside_limits=points_detected_label(signals.xbar_points_outside),
        range_points_outside_limits=points_detected_label(signals.range_points_outside),
        eight_consecutive_points=_yes_no(signals.has_eight_consecutive),
        six_consecutive_trend=_yes_no(signals.has_six_consecutive_trend),
    )


def interpret_process(
    indices: CapabilityIndices, signals: SpecialCauseSummary
) -> ProcessInterpretation:
    stable = signals.xbar_points_outside == 0 and not signals.has_eight_consecutive
    return ProcessInterpretation(
        decision_remark=decision_remark(indices.cpk),
        process_potential=capability_rating(indices.cp),
        process_performance=capability_rating(indices.cpk),
        process_stability=Stability.STABLE if stable else Stability.UNSTABLE,
        process_shift=(
            ShiftPresence.PRESENT if signals.has_eight_consecutive
            else ShiftPresence.NOT_DETECTED
        ),
    )
