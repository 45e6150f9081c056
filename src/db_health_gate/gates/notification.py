"""Decide whether a run summary should be sent to the notifier."""

from __future__ import annotations

from ..models import GateResult, HealthAssessment, NotificationMode, TrendDelta


class NotificationPolicy:
    """Evaluate a :class:`NotificationMode` against the outcome of a run."""

    def should_notify(
        self,
        mode: NotificationMode | str | None,
        gate: GateResult,
        *,
        assessment: HealthAssessment | None = None,
        trend: TrendDelta | None = None,
    ) -> bool:
        mode = NotificationMode.parse(mode)

        if mode is NotificationMode.ALWAYS:
            return True
        if mode is NotificationMode.REGRESSION:
            return trend is not None and trend.regression_detected
        if mode is NotificationMode.CRITICAL:
            return assessment is not None and assessment.critical_findings > 0
        return gate.any_failed
