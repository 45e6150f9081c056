from __future__ import annotations

import json
import math
from pathlib import Path

import pytest

from db_health_gate.models import MalformedReportError, RawReport, RiskLevel
from db_health_gate.normalization import ReportNormalizer
from db_health_gate.scoring import ScoreAggregator, count_findings

FIXTURES = Path(__file__).resolve().parent.parent / "fixtures"


def load_report(name: str) -> RawReport:
    data = json.loads((FIXTURES / name).read_text(encoding="utf-8"))
    return ReportNormalizer().normalize(data)


def test_summarize_current_fixture():
    assessment = ScoreAggregator().summarize(load_report("report-current.json"))

    assert assessment.overall_score == 6.5
    assert assessment.total_findings == 6
    assert assessment.critical_findings == 1
    assert assessment.security_risk is RiskLevel.MEDIUM
    assert assessment.performance_risk is RiskLevel.CRITICAL
    assert assessment.overall_risk is RiskLevel.CRITICAL
    assert assessment.cost_savings_monthly == 120.5
    assert assessment.implementation_estimate == "1-2 days"
    assert assessment.top_recommendations == (
        "Performance: Sequential scans dominate reads on public.orders",
        "Security: Role app_user uses an MD5 password hash",
        "Security: PUBLIC can create objects in schema public",
        "Clean up 1 bloated tables",
        "AI Insight: Partition the events table by month",
    )


def test_summarize_is_idempotent():
    report = load_report("report-current.json")
    aggregator = ScoreAggregator()

    assert aggregator.summarize(report) == aggregator.summarize(report)


def test_counts_include_schema_defects():
    report = ReportNormalizer().normalize(
        {
            "overallScore": 9,
            "tablesWithoutPrimaryKey": ["a", "b"],
            "tablesWithBloat": ["c"],
        }
    )

    assert count_findings(report) == (3, 0)
    assessment = ScoreAggregator().summarize(report)
    assert assessment.critical_findings <= assessment.total_findings
    assert assessment.implementation_estimate == "2-4 hours"


def test_healthy_report_has_low_risk():
    assessment = ScoreAggregator().summarize(load_report("report-healthy.json"))

    assert assessment.overall_risk is RiskLevel.LOW
    assert assessment.total_findings == 1
    assert assessment.top_recommendations == ()


@pytest.mark.parametrize("score", [0, 10, 0.0, 10.0, 5])
def test_boundary_scores_are_accepted(score):
    assessment = ScoreAggregator().summarize(RawReport(overall_score=score))

    assert assessment.overall_score == float(score)
    assert assessment.implementation_estimate == "0 hours"


@pytest.mark.parametrize(
    "score", [None, -0.1, 10.01, math.inf, math.nan, "7.5", True, [7]]
)
def test_invalid_scores_raise_malformed_report_error(score):
    with pytest.raises(MalformedReportError) as excinfo:
        ScoreAggregator().summarize(RawReport(overall_score=score))

    assert excinfo.value.score is score
