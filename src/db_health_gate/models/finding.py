"""Finding models shared across scoring, gating and reporting layers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Severity(str, Enum):
    """Severity levels reported by the database auditor."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


# Risk levels share the severity scale and ordering.
RiskLevel = Severity

SEVERITY_RANK = {
    Severity.LOW: 0,
    Severity.MEDIUM: 1,
    Severity.HIGH: 2,
    Severity.CRITICAL: 3,
}


class FindingCategory(str, Enum):
    """Domain a finding belongs to."""

    SECURITY = "security"
    PERFORMANCE = "performance"
    SCHEMA_BLOAT = "schema-bloat"
    SCHEMA_MISSING_KEY = "schema-missing-key"


@dataclass(frozen=True, slots=True)
class Finding:
    """A single condition detected by the upstream auditor."""

    category: FindingCategory
    severity: Severity
    description: str
    remediation: str = ""
    kind: str = ""


def severity_rank(level: Severity) -> int:
    """Return the position of ``level`` in the low < medium < high < critical order."""

    return SEVERITY_RANK[level]


def max_severity(*levels: Severity) -> Severity:
    """Return the highest of the supplied levels, ``LOW`` when none are given."""

    if not levels:
        return Severity.LOW
    return max(levels, key=severity_rank)
