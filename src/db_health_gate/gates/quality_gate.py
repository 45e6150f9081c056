"""Pass/fail evaluation of a health assessment against configured thresholds."""

from __future__ import annotations

from ..models import GateResult, HealthAssessment, QualityGateConfig, TrendDelta


class QualityGateEvaluator:
    """Compute every quality gate predicate for a run.

    All predicates are evaluated together; callers decide how many of the
    failures to report.
    """

    def evaluate(
        self,
        assessment: HealthAssessment,
        config: QualityGateConfig,
        trend: TrendDelta | None = None,
    ) -> GateResult:
        return GateResult(
            fail_critical=config.fail_on_critical and assessment.critical_findings > 0,
            fail_min_score=config.min_score > 0 and assessment.overall_score < config.min_score,
            fail_regression=(
                config.fail_on_regression and trend is not None and trend.regression_detected
            ),
        )
