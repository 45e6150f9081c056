"""Comparison of a fresh assessment against a previously stored raw report."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from ..models import HealthAssessment, TrendDelta
from ..normalization import ReportNormalizer, first_present, safe_number
from ..normalization.report_normalizer import OVERALL_SCORE_PATHS
from .aggregator import count_findings


def round_delta(value: float) -> float:
    """Round to one decimal place, halves away from zero."""

    rounded = float(Decimal(repr(value)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))
    # Collapse -0.0 so a tiny negative drift is not reported as a signed zero.
    return rounded if rounded != 0 else 0.0


class BaselineComparator:
    """Diff a :class:`HealthAssessment` against a baseline raw report.

    The baseline is untrusted: any missing or ``null`` field counts as zero or
    as an empty collection. Counts are recomputed from the baseline's raw lists
    with :func:`count_findings`, the same formula used for the current run.
    """

    def __init__(self, normalizer: ReportNormalizer | None = None) -> None:
        self._normalizer = normalizer or ReportNormalizer()

    def compare(self, current: HealthAssessment, baseline: object) -> TrendDelta:
        baseline_report = self._normalizer.normalize(baseline)
        baseline_score = safe_number(first_present(baseline, OVERALL_SCORE_PATHS))
        baseline_total, baseline_critical = count_findings(baseline_report)

        return TrendDelta(
            health_delta=round_delta(current.overall_score - baseline_score),
            total_findings_delta=current.total_findings - baseline_total,
            critical_findings_delta=current.critical_findings - baseline_critical,
        )
