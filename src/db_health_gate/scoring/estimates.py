"""Implementation time buckets and cost savings pass-through."""

from __future__ import annotations

from ..models import RawReport

# (upper bound inclusive, label), evaluated in ascending order.
TIME_BUCKETS = (
    (0, "0 hours"),
    (3, "2-4 hours"),
    (8, "1-2 days"),
    (15, "3-5 days"),
)
OVERFLOW_BUCKET = "1-2 weeks"


class CostTimeEstimator:
    """Map finding volume to an implementation estimate."""

    def estimate_time(self, total_findings: int) -> str:
        if total_findings < 0:
            raise ValueError(f"total_findings must be >= 0, got {total_findings}")

        for upper_bound, label in TIME_BUCKETS:
            if total_findings <= upper_bound:
                return label
        return OVERFLOW_BUCKET

    def monthly_savings(self, report: RawReport) -> float:
        return report.monthly_savings
