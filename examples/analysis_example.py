"""Example usage of the SPC analysis.

This script demonstrates how to feed inspection records through the
analysis and read back the control limits, capability indices, and
process verdicts.
"""

import json

import structlog

from spcinsight import InsufficientDataError, analyze_inspection_data, calculate_analysis
from spcinsight.core.logging import configure_logging

logger = structlog.get_logger(__name__)


def build_feed() -> list[dict[str, str]]:
    """Twenty-five widget diameters (mm) in the shape of the inspection feed."""
    diameters = [
        10.02, 9.98, 10.01, 10.00, 9.97,
        10.03, 10.00, 9.99, 10.02, 10.01,
        9.96, 10.04, 10.00, 9.98, 10.01,
        10.05, 10.06, 10.04, 10.07, 10.05,
        10.00, 9.99, "n/a", 10.02, 9.98,
    ]
    return [
        {
            "ActualSpecification": str(d),
            "FromSpecification": "9.85",
            "ToSpecification": "10.15",
        }
        for d in diameters
    ]


def main() -> None:
    configure_logging(log_format="console", log_level="DEBUG")
    records = build_feed()

    result = calculate_analysis(records, sample_size=5)
    limits = result.control_charts.limits.xbar_limits
    indices = result.metrics.indices

    print("=== X-bar chart ===")
    print(f"  UCL: {limits.ucl:.4f}  CL: {limits.center_line:.4f}  LCL: {limits.lcl:.4f}")
    for point in result.control_charts.xbar_data:
        flag = "  <-- outside" if limits.is_outside(point.y) else ""
        print(f"  subgroup {point.x}: {point.y:.4f}{flag}")

    print("\n=== Capability ===")
    print(f"  Cp={indices.cp:.2f} Cpk={indices.cpk:.2f} Pp={indices.pp:.2f} Ppk={indices.ppk:.2f}")

    print("\n=== Verdict ===")
    print(f"  {result.process_interpretation.decision_remark.value}")
    print(f"  Stability: {result.process_interpretation.process_stability.value}")
    for violation in result.signals.violations:
        print(f"  Rule {violation.rule_id} ({violation.rule_name}): {violation.message}")

    print("\n=== Dashboard payload ===")
    print(json.dumps(analyze_inspection_data(records, sample_size=5), indent=2))

    try:
        calculate_analysis(records[:3], sample_size=5)
    except InsufficientDataError as e:
        logger.error("analysis_rejected", error=e.message, **e.details)


if __name__ == "__main__":
    main()
