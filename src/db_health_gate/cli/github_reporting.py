"""Helpers for publishing health gate results to GitHub Actions surfaces."""

from __future__ import annotations

import argparse
import json
import os
from pathlib import Path
from typing import Iterable, Mapping, Sequence

ANNOTATION_LEVELS = {
    "critical": "error",
    "high": "error",
    "medium": "warning",
    "low": "notice",
}
GATE_LABELS = {
    "failCritical": "fail-on-critical",
    "failMinScore": "min-score",
    "failRegression": "fail-on-regression",
}


def _format_delta(value: object) -> str:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return "-"
    if value > 0:
        return f"+{value}"
    return str(value)


def format_summary(payload: Mapping[str, object]) -> str:
    """Render a Markdown job summary for a run payload.

    ``payload`` is the document written to ``summary.json``: the assessment
    fields at the top level plus optional ``trend``, ``gate`` and ``metadata``.
    """

    score = payload.get("overallScore")
    score_display = f"{float(score):.1f}/10" if isinstance(score, (int, float)) else "n/a"
    total = int(payload.get("totalFindings") or 0)
    critical = int(payload.get("criticalFindings") or 0)
    savings = payload.get("costSavingsMonthly") or 0

    lines: list[str] = [
        "# Database Health Summary",
        "",
        f"**Score:** {score_display}",
        f"**Findings:** {total} (critical: {critical})",
        "",
        "| Domain | Risk |",
        "| --- | --- |",
        f"| Security | {str(payload.get('securityRisk', 'low')).title()} |",
        f"| Performance | {str(payload.get('performanceRisk', 'low')).title()} |",
        f"| Overall | {str(payload.get('overallRisk', 'low')).title()} |",
        "",
        f"**Monthly savings potential:** ${float(savings):.0f}",
        f"**Implementation estimate:** {payload.get('implementationEstimate', 'n/a')}",
    ]

    trend: Mapping[str, object] = payload.get("trend") or {}
    if trend:
        lines.extend(
            [
                "",
                "## Baseline Comparison",
                "",
                f"- **Health score delta:** {_format_delta(trend.get('healthDelta'))}",
                f"- **Total findings delta:** {_format_delta(trend.get('totalFindingsDelta'))}",
                f"- **Critical findings delta:** {_format_delta(trend.get('criticalFindingsDelta'))}",
            ]
        )
        if trend.get("regressionDetected"):
            lines.append("- Regression detected vs baseline")

    recommendations: Sequence[object] = payload.get("topRecommendations") or []
    if recommendations:
        lines.extend(["", "## Top Recommendations", ""])
        for index, recommendation in enumerate(recommendations, start=1):
            lines.append(f"{index}. {recommendation}")

    gate: Mapping[str, object] = payload.get("gate") or {}
    if gate:
        failed = [label for key, label in GATE_LABELS.items() if gate.get(key)]
        lines.extend(["", "## Quality Gate", ""])
        if failed:
            lines.append(f"**Failed:** {', '.join(failed)}")
        else:
            lines.append("**Passed**")

    metadata: Mapping[str, object] = payload.get("metadata") or {}
    if metadata:
        lines.extend(["", "## Metadata", ""])
        for key in sorted(metadata):
            lines.append(f"- **{key}:** {metadata[key]}")

    lines.append("")
    return "\n".join(lines)


def iter_annotations(findings: Iterable[Mapping[str, object]]) -> Iterable[str]:
    """Generate GitHub Actions workflow command annotations for raw findings.

    Each finding mapping carries ``category``, ``severity``, ``description``
    and optionally ``kind`` and ``remediation``.
    """

    for finding in findings:
        severity = str(finding.get("severity", "low")).lower()
        level = ANNOTATION_LEVELS.get(severity, "notice")
        category = str(finding.get("category", "")).strip()
        kind = str(finding.get("kind", "")).strip()
        description = str(finding.get("description", "")).strip()
        remediation = str(finding.get("remediation", "")).strip()

        title_parts = [severity.title()]
        if category:
            title_parts.append(f"{category}/{kind}" if kind else category)
        title = " - ".join(title_parts)

        body_parts = [description] if description else []
        if remediation:
            body_parts.append(f"Fix: {remediation}")
        if not body_parts:
            body_parts.append("Database finding reported without description.")

        body = "; ".join(body_parts)
        body = body.replace("%", "%25").replace("\r", "").replace("\n", "%0A")

        yield f"::{level} title={title}::{body}"


def write_summary(payload: Mapping[str, object], destination: Path | None) -> None:
    """Append the Markdown summary for ``payload`` to ``destination``."""

    if destination is None:
        return

    content = format_summary(payload)
    destination.parent.mkdir(parents=True, exist_ok=True)
    with destination.open("a", encoding="utf-8") as handle:
        handle.write(content)


def resolve_summary_path(explicit: Path | None = None) -> Path | None:
    if explicit is not None:
        return explicit
    summary_env = os.getenv("GITHUB_STEP_SUMMARY")
    if summary_env:
        return Path(summary_env)
    return None


def _load_payload(path: Path) -> Mapping[str, object]:
    raw = path.read_text(encoding="utf-8-sig")
    if not raw.strip():
        return {}

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Failed to parse summary JSON from '{path}': {exc.msg}.") from exc

    if not isinstance(data, Mapping):
        raise ValueError("Summary JSON must be an object.")
    return data


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Publish a health gate summary.json as a GitHub job summary."
    )
    parser.add_argument("summary", type=Path, help="Path to the summary.json file.")
    parser.add_argument(
        "--summary-path",
        type=Path,
        default=None,
        help="Optional explicit path for the GitHub job summary output.",
    )

    args = parser.parse_args(argv)

    try:
        payload = _load_payload(args.summary)
    except (OSError, ValueError) as exc:
        print(f"Error: {exc}")
        return 2

    write_summary(payload, resolve_summary_path(args.summary_path))
    return 0


def run() -> None:  # pragma: no cover - wrapper for console entry point
    raise SystemExit(main())


if __name__ == "__main__":  # pragma: no cover - module execution guard
    run()
