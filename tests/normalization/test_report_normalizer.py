from __future__ import annotations

import json
from pathlib import Path

import pytest

from db_health_gate.models import FindingCategory, Severity
from db_health_gate.normalization import ReportNormalizer, safe_get, safe_list, safe_number

FIXTURES = Path(__file__).resolve().parent.parent / "fixtures"


def load_fixture(name: str) -> dict:
    return json.loads((FIXTURES / name).read_text(encoding="utf-8"))


def test_normalizes_nested_auditor_layout():
    report = ReportNormalizer().normalize(load_fixture("report-current.json"))

    assert report.overall_score == 6.5
    assert len(report.security_vulnerabilities) == 3
    first = report.security_vulnerabilities[0]
    assert first.category is FindingCategory.SECURITY
    assert first.severity is Severity.HIGH
    assert first.kind == "weak_password"
    assert first.remediation.startswith("Switch password_encryption")

    issue = report.performance_issues[0]
    assert issue.category is FindingCategory.PERFORMANCE
    assert issue.severity is Severity.CRITICAL
    assert issue.remediation.startswith("CREATE INDEX")

    assert report.tables_without_primary_key == ("public.audit_log",)
    assert report.tables_with_bloat == ("public.orders",)
    assert report.bloated_table_count == 1
    assert report.ai_insight_hints == ("Partition the events table by month",)
    assert report.monthly_savings == 120.5


def test_normalizes_flat_layout():
    report = ReportNormalizer().normalize(load_fixture("report-healthy.json"))

    assert report.overall_score == 9.2
    assert report.security_vulnerabilities == ()
    assert len(report.performance_issues) == 1
    assert report.performance_issues[0].severity is Severity.LOW


@pytest.mark.parametrize("document", [{}, None, [], "not a report", {"schemaHealth": None}])
def test_missing_fields_default_to_empty(document):
    report = ReportNormalizer().normalize(document)

    assert report.overall_score is None
    assert report.security_vulnerabilities == ()
    assert report.performance_issues == ()
    assert report.tables_without_primary_key == ()
    assert report.tables_with_bloat == ()
    assert report.ai_insight_hints == ()
    assert report.monthly_savings == 0.0


def test_unreadable_entries_still_count():
    report = ReportNormalizer().normalize(
        {
            "securityAnalysis": {"vulnerabilities": [{"severity": "SEVERE"}, "garbage", None]},
            "performanceIssues": {"not": "a list"},
            "aiInsights": {"priorityRecommendations": ["  ", None, "Vacuum nightly"]},
            "costAnalysis": {"optimizationSavings": {"monthly": -30}},
        }
    )

    assert len(report.security_vulnerabilities) == 3
    assert all(f.severity is Severity.LOW for f in report.security_vulnerabilities)
    assert report.performance_issues == ()
    assert report.ai_insight_hints == ("Vacuum nightly",)
    assert report.monthly_savings == 0.0


def test_severity_is_case_insensitive():
    report = ReportNormalizer().normalize(
        {"performanceIssues": [{"severity": " Critical ", "description": "x"}]}
    )

    assert report.performance_issues[0].severity is Severity.CRITICAL


def test_safe_accessors_never_raise():
    data = {"a": {"b": None, "c": {"d": 3}}, "list": [1, 2]}

    assert safe_get(data, ["a", "c", "d"]) == 3
    assert safe_get(data, ["a", "b", "x"], default=0) == 0
    assert safe_get(data, ["list", "0"], default="missing") == "missing"
    assert safe_get(None, ["a"], default=[]) == []

    assert safe_number("7.5") == 7.5
    assert safe_number(True) == 0.0
    assert safe_number(float("nan")) == 0.0
    assert safe_number({"x": 1}, default=-1.0) == -1.0

    assert safe_list((1, 2)) == [1, 2]
    assert safe_list({"x": 1}) == []
