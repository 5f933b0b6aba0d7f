"""Special-cause rules for X-bar and Range chart series.

Each rule is a standalone class following the SpecialCauseRule protocol and
scans a whole chart series at once:

- Rule 1: points beyond the control limits
- Rule 2: eight or more consecutive points on one side of the center line
- Rule 3: six or more consecutive points steadily increasing or decreasing

A point exactly on the center line belongs to neither side and ends any run.

References:
    - Lloyd S. Nelson, "The Shewhart Control Chart - Tests for Special Causes" (1984)
    - AIAG SPC Manual, 2nd Edition
"""

from dataclasses import dataclass
from enum import Enum
from typing import Protocol, Sequence

from spcinsight.utils.statistics import ControlLimits, XbarRLimits

RUN_LENGTH_THRESHOLD = 8
TREND_LENGTH_THRESHOLD = 6


class Severity(Enum):
    """Violation severity levels."""
    WARNING = "WARNING"
    CRITICAL = "CRITICAL"


@dataclass(frozen=True)
class ChartSeries:
    """Points of one control chart with the limits they are judged against.

    Attributes:
        values: Plotted values in process order
        limits: Center line and control limits of the chart
    """
    values: Sequence[float]
    limits: ControlLimits


@dataclass(frozen=True)
class RunStats:
    """Longest streaks of points strictly above or below the center line."""
    max_above: int
    max_below: int

    @property
    def max_run_length(self) -> int:
        return max(self.max_above, self.max_below)


@dataclass(frozen=True)
class TrendStats:
    """Longest streaks of strictly increasing or decreasing points."""
    longest_up: int
    longest_down: int

    @property
    def max_trend_length(self) -> int:
        return max(self.longest_up, self.longest_down)


@dataclass
class RuleResult:
    """Result of checking a special-cause rule.

    Attributes:
        rule_id: Rule number (1-3)
        rule_name: Human-readable rule name
        triggered: bool
        severity: Severity level (WARNING or CRITICAL)
        involved_points: 1-based chart indices that caused the violation
        message: Human-readable description of the violation
    """
    rule_id: int
    rule_name: str
    triggered: bool
    severity: Severity
    involved_points: list[int]
    message: str


def count_runs(values: Sequence[float], center_line: float) -> RunStats:
    """Find the longest runs above and below the center line.

    Examples:
        >>> count_runs([1.0, 3.0, 3.0, 2.0, 3.0], center_line=2.0)
        RunStats(max_above=2, max_below=1)
    """
    above = below = 0
    max_above = max_below = 0
    for value in values:
        if value > center_line:
            above += 1
            below = 0
            max_above = max(max_above, above)
        elif value < center_line:
            below += 1
            above = 0
            max_below = max(max_below, below)
        else:
            above = below = 0
    return RunStats(max_above=max_above, max_below=max_below)


def count_trends(values: Sequence[float]) -> TrendStats:
    """Find the longest strictly monotonic streaks, counted in points.

    A repeated value resets both streaks to 1.

    Examples:
        >>> count_trends([1.0, 2.0, 3.0, 2.0, 2.0, 1.0])
        TrendStats(longest_up=3, longest_down=2)
    """
    if len(values) == 0:
        return TrendStats(longest_up=0, longest_down=0)

    up = down = 1
    longest_up = longest_down = 1
    for prev, curr in zip(values, values[1:]):
        if curr > prev:
            up += 1
            down = 1
        elif curr < prev:
            down += 1
            up = 1
        else:
            up = down = 1
        longest_up = max(longest_up, up)
        longest_down = max(longest_down, down)
    return TrendStats(longest_up=longest_up, longest_down=longest_down)


def _streak_end(values: Sequence[float], length: int, matches) -> list[int]:
    """1-based indices of the first streak of ``length`` points satisfying ``matches``."""
    streak = 0
    for i, value in enumerate(values):
        streak = streak + 1 if matches(i, value) else 0
        if streak >= length:
            return list(range(i - streak + 2, i + 2))
    return []


class SpecialCauseRule(Protocol):
    """Protocol for special-cause rule implementations."""

    @property
    def rule_id(self) -> int:
        """Rule number."""
        ...

    @property
    def rule_name(self) -> str:
        """Human-readable rule name."""
        ...

    @property
    def severity(self) -> Severity:
        """Severity level for violations of this rule."""
        ...

    def check(self, series: ChartSeries) -> RuleResult | None:
        """Check rule against a chart series.

        Args:
            series: Chart values with their control limits

        Returns:
            RuleResult if violated, None otherwise
        """
        ...


class Rule1OutsideLimits:
    """Rule 1: Points beyond the control limits.

    The most severe signal. Every offending point is reported.
    """

    rule_id = 1
    rule_name = "Outside Limits"
    severity = Severity.CRITICAL

    def check(self, series: ChartSeries) -> RuleResult | None:
        """Check for points strictly above UCL or below LCL."""
        involved = [
            i + 1 for i, value in enumerate(series.values)
            if series.limits.is_outside(value)
        ]
        if not involved:
            return None
        return RuleResult(
            rule_id=self.rule_id,
            rule_name=self.rule_name,
            triggered=True,
            severity=self.severity,
            involved_points=involved,
            message=f"{len(involved)} points beyond control limits",
        )


class Rule2Run:
    """Rule 2: Eight points in a row on the same side of the center line.

    Indicates a shift in the process mean.
    """

    rule_id = 2
    rule_name = "Run"
    severity = Severity.WARNING

    def __init__(self, length: int = RUN_LENGTH_THRESHOLD):
        self.length = length

    def check(self, series: ChartSeries) -> RuleResult | None:
        """Check for a run of same-side points."""
        center = series.limits.center_line
        stats = count_runs(series.values, center)
        if stats.max_run_length < self.length:
            return None

        side = "above" if stats.max_above >= self.length else "below"
        if side == "above":
            involved = _streak_end(series.values, self.length, lambda _, v: v > center)
        else:
            involved = _streak_end(series.values, self.length, lambda _, v: v < center)
        return RuleResult(
            rule_id=self.rule_id,
            rule_name=self.rule_name,
            triggered=True,
            severity=self.severity,
            involved_points=involved,
            message=f"{stats.max_run_length} consecutive points {side} center line",
        )


class Rule3Trend:
    """Rule 3: Six points in a row, all increasing OR all decreasing.

    Indicates a trend in the process, such as tool wear or drift.
    """

    rule_id = 3
    rule_name = "Trend"
    severity = Severity.WARNING

    def __init__(self, length: int = TREND_LENGTH_THRESHOLD):
        self.length = length

    def check(self, series: ChartSeries) -> RuleResult | None:
        """Check for a monotonic streak of points."""
        values = series.values
        stats = count_trends(values)
        if stats.max_trend_length < self.length:
            return None

        increasing = stats.longest_up >= self.length
        direction = "increasing" if increasing else "decreasing"

        def step(i: int, value: float) -> bool:
            return value > values[i - 1] if increasing else value < values[i - 1]

        # A streak of k steps spans k + 1 points
        steps = _streak_end(values, self.length - 1, lambda i, v: i > 0 and step(i, v))
        involved = [steps[0] - 1, *steps] if steps else []
        return RuleResult(
            rule_id=self.rule_id,
            rule_name=self.rule_name,
            triggered=True,
            severity=self.severity,
            involved_points=involved,
            message=f"{stats.max_trend_length} consecutive points {direction}",
        )


class SpecialCauseRuleLibrary:
    """Aggregates and manages the special-cause rules."""

    def __init__(self):
        self._rules: dict[int, SpecialCauseRule] = {}
        self._register_default_rules()

    def _register_default_rules(self) -> None:
        for rule in (Rule1OutsideLimits(), Rule2Run(), Rule3Trend()):
            self._rules[rule.rule_id] = rule

    def check_all(
        self,
        series: ChartSeries,
        enabled_rules: set[int] | None = None,
    ) -> list[RuleResult]:
        """Check all enabled rules and return violations.

        Args:
            series: Chart values with their control limits
            enabled_rules: Set of rule IDs to check (None = check all)

        Returns:
            List of RuleResult objects for violated rules, ordered by rule ID
        """
        if enabled_rules is None:
            enabled_rules = set(self._rules.keys())

        violations = []
        for rule_id in sorted(enabled_rules):
            result = self.check_single(series, rule_id)
            if result is not None and result.triggered:
                violations.append(result)
        return violations

    def check_single(self, series: ChartSeries, rule_id: int) -> RuleResult | None:
        """Check a single rule; None if the rule is unknown or not violated."""
        rule = self._rules.get(rule_id)
        if rule is None:
            return None
        return rule.check(series)

    def get_rule(self, rule_id: int) -> SpecialCauseRule | None:
        return self._rules.get(rule_id)


@dataclass(frozen=True)
class SpecialCauseSummary:
    """Signals found on the X-bar and Range charts.

    Attributes:
        xbar_points_outside: X-bar points beyond the X-bar control limits
        range_points_outside: Range points beyond the Range control limits
        runs: Longest runs of X-bar points around the grand mean
        trends: Longest monotonic streaks of X-bar points
        violations: Triggered rules on the X-bar chart
    """
    xbar_points_outside: int
    range_points_outside: int
    runs: RunStats
    trends: TrendStats
    violations: list[RuleResult]

    @property
    def has_eight_consecutive(self) -> bool:
        return self.runs.max_run_length >= RUN_LENGTH_THRESHOLD

    @property
    def has_six_consecutive_trend(self) -> bool:
        return self.trends.max_trend_length >= TREND_LENGTH_THRESHOLD


def detect_special_causes(
    xbar_values: Sequence[float],
    range_values: Sequence[float],
    limits: XbarRLimits,
    library: SpecialCauseRuleLibrary | None = None,
) -> SpecialCauseSummary:
    """Scan both charts for out-of-limit points, runs, and trends.

    Args:
        xbar_values: Subgroup means
        range_values: Subgroup or moving ranges
        limits: X-bar and Range chart limits
        library: Rule library to use (default: all rules)

    Returns:
        SpecialCauseSummary for the two charts
    """
    library = library or SpecialCauseRuleLibrary()
    xbar = ChartSeries(values=xbar_values, limits=limits.xbar_limits)
    ranges = ChartSeries(values=range_values, limits=limits.r_limits)

    xbar_outside = library.check_single(xbar, Rule1OutsideLimits.rule_id)
    range_outside = library.check_single(ranges, Rule1OutsideLimits.rule_id)

    return SpecialCauseSummary(
        xbar_points_outside=len(xbar_outside.involved_points) if xbar_outside else 0,
        range_points_outside=len(range_outside.involved_points) if range_outside else 0,
        runs=count_runs(xbar_values, limits.xbar_limits.center_line),
        trends=count_trends(xbar_values),
        violations=library.check_all(xbar),
    )
