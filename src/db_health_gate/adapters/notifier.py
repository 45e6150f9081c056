"""Slack-compatible webhook delivery of run summaries."""

from __future__ import annotations

import logging
from typing import List

import requests

from ..models import GateResult, HealthAssessment, QualityGateConfig, TrendDelta

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0


class NotificationError(RuntimeError):
    """Raised when a notification could not be delivered."""


def build_notification_text(
    assessment: HealthAssessment,
    gate: GateResult,
    config: QualityGateConfig,
    *,
    trend: TrendDelta | None = None,
    report_path: str | None = None,
) -> str:
    """Render the plain-text run summary posted to the webhook."""

    lines: List[str] = [
        f"DB Health Gate: {assessment.overall_score:.1f}/10, "
        f"findings: {assessment.total_findings}, critical: {assessment.critical_findings}",
        f"Risk: sec={assessment.security_risk.value.upper()}, "
        f"perf={assessment.performance_risk.value.upper()}, "
        f"overall={assessment.overall_risk.value.upper()}",
    ]
    if report_path:
        lines.append(f"Report: {report_path}")
    if trend is not None and trend.regression_detected:
        lines.append("Regression detected vs baseline")
    gate_lines = {
        "critical": "Gate: fail-on-critical triggered",
        "min-score": f"Gate: min-score({config.min_score:g}) not met",
        "regression": "Gate: fail-on-regression triggered",
    }
    lines.extend(gate_lines[reason] for reason in gate.reasons())
    return "\n".join(lines)


class WebhookNotifier:
    """Post run summaries to a Slack-compatible incoming webhook."""

    def __init__(
        self,
        url: str,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        session: requests.Session | None = None,
    ) -> None:
        self.url = url
        self.timeout = timeout
        self._session = session or requests.Session()

    def send(self, text: str) -> None:
        try:
            response = self._session.post(self.url, json={"text": text}, timeout=self.timeout)
        except requests.RequestException as exc:
            raise NotificationError(f"Webhook request failed: {exc}") from exc

        if not response.ok:
            raise NotificationError(
                f"Webhook responded with HTTP {response.status_code}: {response.text[:200]}"
            )

        logger.info("Notification delivered to webhook")
