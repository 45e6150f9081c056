"""Data models for audit findings, raw reports and health assessments."""

from .assessment import (
    GateResult,
    HealthAssessment,
    NotificationMode,
    QualityGateConfig,
    TrendDelta,
)
from .finding import (
    SEVERITY_RANK,
    Finding,
    FindingCategory,
    RiskLevel,
    Severity,
    max_severity,
    severity_rank,
)
from .report import MalformedReportError, RawReport

__all__ = [
    "SEVERITY_RANK",
    "Finding",
    "FindingCategory",
    "GateResult",
    "HealthAssessment",
    "MalformedReportError",
    "NotificationMode",
    "QualityGateConfig",
    "RawReport",
    "RiskLevel",
    "Severity",
    "TrendDelta",
    "max_severity",
    "severity_rank",
]
