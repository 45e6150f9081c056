"""Conversion helpers that turn raw auditor report JSON into service models."""

from __future__ import annotations

from typing import Any, Iterable, Mapping, Tuple

from ..models import Finding, FindingCategory, RawReport, Severity
from .accessors import first_present, safe_list, safe_number

# Candidate paths per field; the auditor's nested layout comes first, then the flat one.
OVERALL_SCORE_PATHS = (("schemaHealth", "overall"), ("overallScore",))
VULNERABILITY_PATHS = (("securityAnalysis", "vulnerabilities"), ("securityVulnerabilities",))
PERFORMANCE_PATHS = (("performanceIssues",),)
MISSING_KEY_PATHS = (("tableAnalysis", "tablesWithoutPK"), ("tablesWithoutPrimaryKey",))
BLOAT_PATHS = (("tableAnalysis", "tablesWithBloat"), ("tablesWithBloat",))
AI_HINT_PATHS = (("aiInsights", "priorityRecommendations"), ("aiInsightHints",))
SAVINGS_PATHS = (("costAnalysis", "optimizationSavings", "monthly"), ("costSavingsMonthly",))

_TABLE_NAME_KEYS = ("table", "tableName", "table_name", "name")


class ReportNormalizer:
    """Normalize raw report JSON into a :class:`RawReport`.

    Missing or mistyped collections become empty tuples. The overall score is
    passed through untouched so the caller decides how strict to be about it.
    """

    def normalize(self, data: object) -> RawReport:
        """Return a :class:`RawReport` for the supplied JSON document."""

        if not isinstance(data, Mapping):
            data = {}

        return RawReport(
            overall_score=first_present(data, OVERALL_SCORE_PATHS),
            security_vulnerabilities=self._findings(
                first_present(data, VULNERABILITY_PATHS), FindingCategory.SECURITY
            ),
            performance_issues=self._findings(
                first_present(data, PERFORMANCE_PATHS), FindingCategory.PERFORMANCE
            ),
            tables_without_primary_key=self._tables(first_present(data, MISSING_KEY_PATHS)),
            tables_with_bloat=self._tables(first_present(data, BLOAT_PATHS)),
            ai_insight_hints=self._hints(first_present(data, AI_HINT_PATHS)),
            monthly_savings=max(safe_number(first_present(data, SAVINGS_PATHS)), 0.0),
        )

    # ------------------------------------------------------------------
    def _findings(self, raw: object, category: FindingCategory) -> Tuple[Finding, ...]:
        return tuple(self._finding(entry, category) for entry in safe_list(raw))

    def _finding(self, entry: object, category: FindingCategory) -> Finding:
        if not isinstance(entry, Mapping):
            # Every listed entry counts towards the totals, even when unreadable.
            return Finding(category=category, severity=Severity.LOW, description=str(entry))

        remediation = entry.get("remediation") or entry.get("recommendation") or ""
        return Finding(
            category=category,
            severity=self._normalize_severity(entry.get("severity")),
            description=str(entry.get("description") or entry.get("message") or "").strip(),
            remediation=str(remediation).strip(),
            kind=str(entry.get("type") or "").strip(),
        )

    def _normalize_severity(self, level: object) -> Severity:
        if isinstance(level, Severity):
            return level

        if isinstance(level, str):
            try:
                return Severity(level.strip().lower())
            except ValueError:
                pass

        return Severity.LOW

    def _tables(self, raw: object) -> Tuple[str, ...]:
        return tuple(self._table_name(entry) for entry in safe_list(raw))

    def _table_name(self, entry: object) -> str:
        if isinstance(entry, Mapping):
            schema = entry.get("schema") or entry.get("schemaname")
            for key in _TABLE_NAME_KEYS:
                value = entry.get(key)
                if value:
                    return f"{schema}.{value}" if schema else str(value)
            return ""
        return str(entry)

    def _hints(self, raw: object) -> Tuple[str, ...]:
        return tuple(hint for hint in _strings(safe_list(raw)) if hint)


def _strings(values: Iterable[Any]) -> Iterable[str]:
    for value in values:
        if value is None:
            continue
        yield str(value).strip()
