"""Tests for GitHub Actions reporting helpers."""

from __future__ import annotations

import json

from db_health_gate.cli.github_reporting import format_summary, iter_annotations, main


def _build_payload() -> dict[str, object]:
    return {
        "overallScore": 6.5,
        "totalFindings": 6,
        "criticalFindings": 1,
        "securityRisk": "medium",
        "performanceRisk": "critical",
        "overallRisk": "critical",
        "costSavingsMonthly": 120.5,
        "implementationEstimate": "1-2 days",
        "topRecommendations": ["Performance: add index", "Security: rotate password"],
        "trend": {
            "healthDelta": -0.5,
            "totalFindingsDelta": 5,
            "criticalFindingsDelta": 1,
            "regressionDetected": True,
        },
        "gate": {"failCritical": True, "failMinScore": True, "failRegression": False},
        "metadata": {"report_path": "reports/current.json"},
    }


def test_format_summary_includes_key_sections() -> None:
    """Rendered summaries should include scores, risks, trend and gate outcome."""

    summary = format_summary(_build_payload())

    assert "# Database Health Summary" in summary
    assert "**Score:** 6.5/10" in summary
    assert "**Findings:** 6 (critical: 1)" in summary
    assert "| Performance | Critical |" in summary
    assert "- **Total findings delta:** +5" in summary
    assert "- **Health score delta:** -0.5" in summary
    assert "Regression detected vs baseline" in summary
    assert "1. Performance: add index" in summary
    assert "**Failed:** fail-on-critical, min-score" in summary
    assert "- **report_path:** reports/current.json" in summary


def test_format_summary_tolerates_missing_sections() -> None:
    summary = format_summary({})

    assert "**Score:** n/a" in summary
    assert "Baseline Comparison" not in summary
    assert "Quality Gate" not in summary


def test_iter_annotations_maps_severity_levels() -> None:
    """Workflow commands should map severities to the correct annotation levels."""

    annotations = list(
        iter_annotations(
            [
                {
                    "category": "security",
                    "kind": "weak_password",
                    "severity": "critical",
                    "description": "Weak password\nfor app_user",
                    "remediation": "Rotate it",
                },
                {"category": "performance", "severity": "medium", "description": "Slow query"},
                {"severity": "low"},
            ]
        )
    )

    assert annotations[0] == (
        "::error title=Critical - security/weak_password::Weak password%0Afor app_user; Fix: Rotate it"
    )
    assert annotations[1].startswith("::warning title=Medium - performance::")
    assert annotations[2].startswith("::notice")
    assert "without description" in annotations[2]


def test_main_appends_to_step_summary(tmp_path, monkeypatch) -> None:
    payload_path = tmp_path / "summary.json"
    payload_path.write_text(json.dumps(_build_payload()), encoding="utf-8")
    step_summary = tmp_path / "step-summary.md"
    step_summary.write_text("existing\n", encoding="utf-8")
    monkeypatch.setenv("GITHUB_STEP_SUMMARY", str(step_summary))

    assert main([str(payload_path)]) == 0

    content = step_summary.read_text(encoding="utf-8")
    assert content.startswith("existing\n")
    assert "# Database Health Summary" in content


def test_main_rejects_invalid_payload(tmp_path) -> None:
    payload_path = tmp_path / "summary.json"
    payload_path.write_text("[]", encoding="utf-8")

    assert main([str(payload_path)]) == 2
