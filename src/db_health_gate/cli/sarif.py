"""SARIF 2.1.0 export of raw report findings for code scanning uploads."""

from __future__ import annotations

from typing import Any, Dict

from .. import __version__
from ..models import Finding, RawReport, Severity

SARIF_SCHEMA = "https://json.schemastore.org/sarif-2.1.0.json"
SARIF_VERSION = "2.1.0"
TOOL_NAME = "db-health-gate"
ARTIFACT_URI = "database"

SARIF_LEVELS = {
    Severity.CRITICAL: "error",
    Severity.HIGH: "error",
    Severity.MEDIUM: "warning",
    Severity.LOW: "note",
}


def build_sarif(report: RawReport) -> Dict[str, Any]:
    """Return a SARIF log with one result per vulnerability and performance issue."""

    results = [
        _result(finding)
        for finding in (*report.security_vulnerabilities, *report.performance_issues)
    ]
    return {
        "$schema": SARIF_SCHEMA,
        "version": SARIF_VERSION,
        "runs": [
            {
                "tool": {"driver": {"name": TOOL_NAME, "version": __version__}},
                "results": results,
            }
        ],
    }


def _result(finding: Finding) -> Dict[str, Any]:
    rule_id = finding.category.value
    if finding.kind:
        rule_id = f"{rule_id}/{finding.kind}"

    result: Dict[str, Any] = {
        "ruleId": rule_id,
        "level": SARIF_LEVELS[finding.severity],
        "message": {"text": finding.description or rule_id},
        "locations": [{"physicalLocation": {"artifactLocation": {"uri": ARTIFACT_URI}}}],
    }
    if finding.remediation:
        result["properties"] = {"remediation": finding.remediation}
    return result
