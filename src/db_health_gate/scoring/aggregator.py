"""Assemble a :class:`HealthAssessment` from a component-scored raw report."""

from __future__ import annotations

import math
from typing import Tuple

from ..models import HealthAssessment, MalformedReportError, RawReport, Severity
from .estimates import CostTimeEstimator
from .recommendations import RecommendationRanker
from .risk import RiskClassifier

MIN_SCORE = 0.0
MAX_SCORE = 10.0


def count_findings(report: RawReport) -> Tuple[int, int]:
    """Return ``(total, critical)`` finding counts for ``report``.

    The baseline comparator relies on this exact formula for both sides of a
    comparison.
    """

    total = (
        len(report.security_vulnerabilities)
        + len(report.performance_issues)
        + len(report.tables_without_primary_key)
        + len(report.tables_with_bloat)
    )
    critical = sum(
        1
        for finding in (*report.security_vulnerabilities, *report.performance_issues)
        if finding.severity is Severity.CRITICAL
    )
    return total, critical


def validate_score(score: object) -> float:
    """Return ``score`` as a float or raise :class:`MalformedReportError`."""

    if score is None:
        raise MalformedReportError("Report has no overall health score", score=score)
    if isinstance(score, bool) or not isinstance(score, (int, float)):
        raise MalformedReportError(
            f"Overall health score must be a number, got {type(score).__name__}", score=score
        )

    value = float(score)
    if not math.isfinite(value):
        raise MalformedReportError(f"Overall health score is not finite: {score}", score=score)
    if not MIN_SCORE <= value <= MAX_SCORE:
        raise MalformedReportError(
            f"Overall health score {score} is outside [{MIN_SCORE:g}, {MAX_SCORE:g}]",
            score=score,
        )
    return value


class ScoreAggregator:
    """Summarize a raw report into a normalized :class:`HealthAssessment`."""

    def __init__(
        self,
        *,
        risk_classifier: RiskClassifier | None = None,
        ranker: RecommendationRanker | None = None,
        estimator: CostTimeEstimator | None = None,
    ) -> None:
        self._risk = risk_classifier or RiskClassifier()
        self._ranker = ranker or RecommendationRanker()
        self._estimator = estimator or CostTimeEstimator()

    def summarize(self, report: RawReport) -> HealthAssessment:
        score = validate_score(report.overall_score)
        total, critical = count_findings(report)

        security_risk = self._risk.classify_security(report.security_vulnerabilities)
        performance_risk = self._risk.classify_performance(
            report.performance_issues, report.bloated_table_count
        )

        recommendations = self._ranker.rank(
            report.security_vulnerabilities,
            report.performance_issues,
            report.bloated_table_count,
            report.ai_insight_hints,
        )

        return HealthAssessment(
            overall_score=score,
            total_findings=total,
            critical_findings=critical,
            security_risk=security_risk,
            performance_risk=performance_risk,
            overall_risk=self._risk.overall(security_risk, performance_risk),
            cost_savings_monthly=self._estimator.monthly_savings(report),
            implementation_estimate=self._estimator.estimate_time(total),
            top_recommendations=tuple(recommendations),
        )
