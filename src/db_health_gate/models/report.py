"""Typed view over the raw report produced by the database auditor."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Tuple

from .finding import Finding


class MalformedReportError(ValueError):
    """Raised when the primary report lacks a usable overall health score."""

    def __init__(self, message: str, *, score: Any = None) -> None:
        super().__init__(message)
        self.score = score


@dataclass(frozen=True, slots=True)
class RawReport:
    """Component-scored audit report as handed over by the auditor.

    ``overall_score`` is kept exactly as found in the source document; it is
    validated when the report is summarized, not when it is normalized.
    """

    overall_score: Any = None
    security_vulnerabilities: Tuple[Finding, ...] = ()
    performance_issues: Tuple[Finding, ...] = ()
    tables_without_primary_key: Tuple[str, ...] = ()
    tables_with_bloat: Tuple[str, ...] = ()
    ai_insight_hints: Tuple[str, ...] = ()
    monthly_savings: float = 0.0

    @property
    def bloated_table_count(self) -> int:
        return len(self.tables_with_bloat)
