"""Assessment, trend and gate models produced by the scoring engine."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Tuple

from .finding import RiskLevel


@dataclass(frozen=True, slots=True)
class HealthAssessment:
    """Executive summary derived from a raw audit report."""

    overall_score: float
    total_findings: int
    critical_findings: int
    security_risk: RiskLevel
    performance_risk: RiskLevel
    overall_risk: RiskLevel
    cost_savings_monthly: float
    implementation_estimate: str
    top_recommendations: Tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        return {
            "overallScore": self.overall_score,
            "totalFindings": self.total_findings,
            "criticalFindings": self.critical_findings,
            "securityRisk": self.security_risk.value,
            "performanceRisk": self.performance_risk.value,
            "overallRisk": self.overall_risk.value,
            "costSavingsMonthly": self.cost_savings_monthly,
            "implementationEstimate": self.implementation_estimate,
            "topRecommendations": list(self.top_recommendations),
        }


@dataclass(frozen=True, slots=True)
class TrendDelta:
    """Difference between the current assessment and a baseline report."""

    health_delta: float
    total_findings_delta: int
    critical_findings_delta: int

    @property
    def regression_detected(self) -> bool:
        return self.health_delta < 0 or self.critical_findings_delta > 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "healthDelta": self.health_delta,
            "totalFindingsDelta": self.total_findings_delta,
            "criticalFindingsDelta": self.critical_findings_delta,
            "regressionDetected": self.regression_detected,
        }


@dataclass(frozen=True, slots=True)
class QualityGateConfig:
    """Thresholds that decide whether a run passes.

    A ``min_score`` of ``0`` disables the minimum score check.
    """

    fail_on_critical: bool = False
    min_score: float = 0.0
    fail_on_regression: bool = False

    def __post_init__(self) -> None:
        if isinstance(self.min_score, bool) or not isinstance(self.min_score, (int, float)):
            raise ValueError(f"min_score must be a number, got {self.min_score!r}")
        if not math.isfinite(self.min_score) or self.min_score < 0:
            raise ValueError(f"min_score must be a finite number >= 0, got {self.min_score!r}")


@dataclass(frozen=True, slots=True)
class GateResult:
    """Outcome of every quality gate predicate for a single run."""

    fail_critical: bool = False
    fail_min_score: bool = False
    fail_regression: bool = False

    @property
    def any_failed(self) -> bool:
        return self.fail_critical or self.fail_min_score or self.fail_regression

    def reasons(self) -> List[str]:
        """Return identifiers of the failed predicates, highest priority first."""

        failed: List[str] = []
        if self.fail_critical:
            failed.append("critical")
        if self.fail_min_score:
            failed.append("min-score")
        if self.fail_regression:
            failed.append("regression")
        return failed

    def to_dict(self) -> dict[str, Any]:
        return {
            "failCritical": self.fail_critical,
            "failMinScore": self.fail_min_score,
            "failRegression": self.fail_regression,
            "anyFailed": self.any_failed,
        }


class NotificationMode(str, Enum):
    """Condition under which a run summary is sent to the notifier."""

    ALWAYS = "always"
    REGRESSION = "regression"
    CRITICAL = "critical"
    FAIL = "fail"

    @classmethod
    def parse(cls, value: "str | NotificationMode | None") -> "NotificationMode":
        """Return the mode named by ``value``; ``None`` selects ``ALWAYS``."""

        if value is None:
            return cls.ALWAYS
        if isinstance(value, cls):
            return value
        normalized = str(value).strip().lower()
        if not normalized:
            return cls.ALWAYS
        try:
            return cls(normalized)
        except ValueError:
            valid = ", ".join(mode.value for mode in cls)
            raise ValueError(f"Unknown notification mode '{value}' (valid: {valid})") from None
