"""Categorical risk classification per domain and overall."""

from __future__ import annotations

from typing import Iterable, Sequence

from ..models import Finding, RiskLevel, Severity, max_severity


def _count(findings: Iterable[Finding], severity: Severity) -> int:
    return sum(1 for finding in findings if finding.severity is severity)


class RiskClassifier:
    """Map finding counts and severities to a :class:`RiskLevel`.

    Thresholds are evaluated top to bottom and the first match wins.
    """

    def classify_security(self, vulnerabilities: Sequence[Finding]) -> RiskLevel:
        if _count(vulnerabilities, Severity.CRITICAL) > 0:
            return RiskLevel.CRITICAL

        high = _count(vulnerabilities, Severity.HIGH)
        if high > 2:
            return RiskLevel.HIGH
        if high > 0 or len(vulnerabilities) > 3:
            return RiskLevel.MEDIUM
        return RiskLevel.LOW

    def classify_performance(
        self, issues: Sequence[Finding], bloated_table_count: int
    ) -> RiskLevel:
        if _count(issues, Severity.CRITICAL) > 0:
            return RiskLevel.CRITICAL

        high = _count(issues, Severity.HIGH)
        if high > 1 or bloated_table_count > 5:
            return RiskLevel.HIGH
        if high > 0 or bloated_table_count > 2:
            return RiskLevel.MEDIUM
        return RiskLevel.LOW

    def overall(self, security: RiskLevel, performance: RiskLevel) -> RiskLevel:
        return max_severity(security, performance)
