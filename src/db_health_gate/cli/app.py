"""Command-line interface implementation for the database health gate."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, List, Sequence

from ..adapters import (
    NotificationError,
    ReportLoaderError,
    WebhookNotifier,
    build_notification_text,
)
from ..config import GateConfigError, GateConfigLoader, GateSettings
from ..models import Finding, MalformedReportError, NotificationMode
from ..service import EvaluationResult, HealthGateService
from .github_reporting import iter_annotations, resolve_summary_path, write_summary
from .sarif import build_sarif

logger = logging.getLogger(__name__)

SUMMARY_JSON = "summary.json"
SUMMARY_MARKDOWN = "summary.md"


def build_payload(result: EvaluationResult) -> dict[str, Any]:
    """Return the JSON document describing a run."""

    payload = result.assessment.to_dict()
    payload["trend"] = result.trend.to_dict() if result.trend else None
    payload["gate"] = result.gate.to_dict()
    payload["shouldNotify"] = result.should_notify
    payload["warnings"] = list(result.warnings)
    payload["metadata"] = dict(result.metadata)
    return payload


def _format_delta(value: float | int) -> str:
    return f"+{value}" if value > 0 else str(value)


def render_table(result: EvaluationResult, settings: GateSettings) -> str:
    """Render the run summary as plain text for terminal output."""

    assessment = result.assessment
    rows = [
        ("Overall health score", f"{assessment.overall_score:.1f}/10"),
        ("Total findings", str(assessment.total_findings)),
        ("Critical findings", str(assessment.critical_findings)),
        ("Security risk", assessment.security_risk.value.upper()),
        ("Performance risk", assessment.performance_risk.value.upper()),
        ("Overall risk", assessment.overall_risk.value.upper()),
        ("Monthly savings potential", f"${assessment.cost_savings_monthly:.0f}"),
        ("Implementation time", assessment.implementation_estimate),
    ]
    width = max(len(label) for label, _ in rows)
    lines = ["DATABASE HEALTH SUMMARY", "=" * 60]
    lines.extend(f"{label.ljust(width)}  {value}" for label, value in rows)

    if result.trend is not None:
        trend = result.trend
        lines.extend(["", "BASELINE COMPARISON", "-" * 60])
        lines.append(f"Health score delta: {_format_delta(trend.health_delta)}")
        lines.append(f"Total findings delta: {_format_delta(trend.total_findings_delta)}")
        lines.append(f"Critical findings delta: {_format_delta(trend.critical_findings_delta)}")
        if trend.regression_detected:
            lines.append("Regression detected vs baseline")

    if assessment.top_recommendations:
        lines.extend(["", "TOP RECOMMENDATIONS", "-" * 60])
        for index, recommendation in enumerate(assessment.top_recommendations, start=1):
            lines.append(f"{index}. {recommendation}")

    lines.append("")
    lines.extend(_gate_messages(result, settings))
    return "\n".join(lines)


def _gate_messages(result: EvaluationResult, settings: GateSettings) -> List[str]:
    gate = result.gate
    assessment = result.assessment
    if not gate.any_failed:
        return ["Quality gate passed."]

    messages = {
        "critical": f"Failing due to {assessment.critical_findings} critical findings",
        "min-score": (
            f"Health score {assessment.overall_score:g} below minimum {settings.gate.min_score:g}"
        ),
        "regression": "Failing due to regression vs baseline",
    }
    return [messages[reason] for reason in gate.reasons()]


def render_markdown(result: EvaluationResult) -> str:
    assessment = result.assessment
    lines = [
        "# Database Health Summary",
        f"- Score: {assessment.overall_score:.1f}/10",
        f"- Issues: {assessment.total_findings} (critical: {assessment.critical_findings})",
        f"- Risks: security={assessment.security_risk.value.upper()}, "
        f"performance={assessment.performance_risk.value.upper()}, "
        f"overall={assessment.overall_risk.value.upper()}",
        f"- Monthly Savings Potential: ${assessment.cost_savings_monthly:.0f}",
    ]
    report_path = result.metadata.get("report_path")
    if report_path:
        lines.append(f"- Report: {report_path}")
    return "\n".join(lines) + "\n"


def build_parser() -> argparse.ArgumentParser:
    """Construct the CLI argument parser."""

    parser = argparse.ArgumentParser(
        prog="db-health-gate", description="Database health scoring and quality gates"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging on stderr."
    )
    subparsers = parser.add_subparsers(dest="command")

    evaluate_parser = subparsers.add_parser(
        "evaluate", help="Score a database audit report and apply quality gates."
    )
    evaluate_parser.add_argument(
        "report", type=Path, help="Path to the raw audit report JSON produced by the auditor."
    )
    evaluate_parser.add_argument(
        "--baseline",
        type=Path,
        default=None,
        help="Path to a previous raw audit report JSON to compare against.",
    )
    evaluate_parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to a YAML gate configuration file. Flags override file values.",
    )
    evaluate_parser.add_argument(
        "--fail-on-critical",
        action="store_true",
        default=None,
        help="Exit with an error code if critical findings are present.",
    )
    evaluate_parser.add_argument(
        "--min-score",
        type=float,
        default=None,
        help="Minimum health score required (0-10). 0 disables the check.",
    )
    evaluate_parser.add_argument(
        "--fail-on-regression",
        action="store_true",
        default=None,
        help="Exit with an error if the score drops or critical findings increase vs baseline.",
    )
    evaluate_parser.add_argument(
        "--notify-webhook",
        default=None,
        help="Slack-compatible webhook URL to send a run summary to.",
    )
    evaluate_parser.add_argument(
        "--notify-on",
        choices=[mode.value for mode in NotificationMode],
        default=None,
        help="Notify condition (default: always).",
    )
    evaluate_parser.add_argument(
        "--format",
        choices=["table", "json"],
        default="table",
        help="Output format for the run summary.",
    )
    evaluate_parser.add_argument(
        "--sarif", type=Path, default=None, help="Write SARIF JSON for code scanning."
    )
    evaluate_parser.add_argument(
        "--summary-dir",
        type=Path,
        default=None,
        help=f"Directory to write {SUMMARY_JSON} and {SUMMARY_MARKDOWN} to.",
    )
    evaluate_parser.add_argument(
        "--github-summary",
        action="store_true",
        help="Append the summary to the GitHub Actions step summary when available.",
    )
    evaluate_parser.add_argument(
        "--annotations",
        action="store_true",
        help="Print GitHub Actions workflow annotations for each finding.",
    )

    return parser


def create_service() -> HealthGateService:
    """Create a health gate service with the default engine components."""

    return HealthGateService()


def create_notifier(url: str) -> WebhookNotifier:
    return WebhookNotifier(url)


def _notify(result: EvaluationResult, settings: GateSettings) -> None:
    text = build_notification_text(
        result.assessment,
        result.gate,
        settings.gate,
        trend=result.trend,
        report_path=result.metadata.get("report_path"),
    )
    create_notifier(settings.notify_webhook or "").send(text)


def _finding_payload(finding: Finding) -> dict[str, str]:
    return {
        "category": finding.category.value,
        "severity": finding.severity.value,
        "description": finding.description,
        "remediation": finding.remediation,
        "kind": finding.kind,
    }


def _write_sarif(result: EvaluationResult, destination: Path) -> None:
    destination.parent.mkdir(parents=True, exist_ok=True)
    destination.write_text(json.dumps(build_sarif(result.report), indent=2), encoding="utf-8")
    logger.debug("Wrote SARIF to %s", destination)


def _write_summary_files(result: EvaluationResult, directory: Path) -> None:
    directory.mkdir(parents=True, exist_ok=True)
    (directory / SUMMARY_JSON).write_text(
        json.dumps(build_payload(result), indent=2), encoding="utf-8"
    )
    (directory / SUMMARY_MARKDOWN).write_text(render_markdown(result), encoding="utf-8")
    logger.debug("Wrote summary files to %s", directory)


def _run_side_channels(
    args: argparse.Namespace,
    result: EvaluationResult,
    settings: GateSettings,
) -> List[str]:
    """Run optional reporting outputs; failures become warnings."""

    warnings: List[str] = []

    if settings.notify_webhook and result.should_notify:
        try:
            _notify(result, settings)
        except NotificationError as exc:
            warnings.append(f"Notification failed: {exc}")

    if args.sarif:
        try:
            _write_sarif(result, args.sarif)
        except OSError as exc:
            warnings.append(f"Failed to write SARIF: {exc}")

    if args.summary_dir:
        try:
            _write_summary_files(result, args.summary_dir)
        except OSError as exc:
            warnings.append(f"Failed to write summary files: {exc}")

    if args.github_summary:
        destination = resolve_summary_path()
        if destination is None:
            warnings.append("GITHUB_STEP_SUMMARY is not set; skipping step summary")
        else:
            try:
                write_summary(build_payload(result), destination)
            except OSError as exc:
                warnings.append(f"Failed to write GitHub step summary: {exc}")

    return warnings


def _handle_evaluate(args: argparse.Namespace) -> int:
    try:
        settings = GateConfigLoader().load(
            args.config,
            fail_on_critical=args.fail_on_critical,
            min_score=args.min_score,
            fail_on_regression=args.fail_on_regression,
            notify_on=args.notify_on,
            notify_webhook=args.notify_webhook,
        )
    except GateConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2

    service = create_service()

    try:
        result = service.evaluate(
            args.report.resolve(),
            baseline_path=args.baseline.resolve() if args.baseline else None,
            config=settings.gate,
            notify_on=settings.notify_on,
        )
    except (ReportLoaderError, MalformedReportError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2

    result.warnings.extend(_run_side_channels(args, result, settings))

    if args.format == "json":
        print(json.dumps(build_payload(result), indent=2))
    else:
        print(render_table(result, settings))

    if args.annotations:
        findings = [
            _finding_payload(finding)
            for finding in (*result.report.security_vulnerabilities, *result.report.performance_issues)
        ]
        for command in iter_annotations(findings):
            print(command)

    for warning in result.warnings:
        print(f"warning: {warning}", file=sys.stderr)

    return 1 if result.gate.any_failed else 0


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point used by tests and the ``python -m`` invocation."""

    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command == "evaluate":
        return _handle_evaluate(args)

    parser.print_help()
    return 0


def run() -> None:  # pragma: no cover - thin wrapper for module execution
    """Execute the CLI and exit with the produced status code."""

    raise SystemExit(main())


if __name__ == "__main__":  # pragma: no cover - module execution guard
    run()
