"""Orchestration layer used by the CLI to score, compare and gate a report."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, List, Mapping, Sequence, Tuple

from .adapters import ReportLoader, ReportLoaderError
from .gates import NotificationPolicy, QualityGateEvaluator
from .models import (
    GateResult,
    HealthAssessment,
    MalformedReportError,
    NotificationMode,
    QualityGateConfig,
    RawReport,
    TrendDelta,
)
from .normalization import ReportNormalizer
from .scoring import BaselineComparator, ScoreAggregator

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class EvaluationResult:
    """Result returned by :class:`HealthGateService` runs."""

    report: RawReport
    assessment: HealthAssessment
    gate: GateResult
    should_notify: bool
    trend: TrendDelta | None = None
    warnings: List[str] = field(default_factory=list)
    metadata: Mapping[str, Any] = field(default_factory=dict)


ReportLoaderFactory = Callable[[Path], ReportLoader]


class HealthGateService:
    """High level service that runs the scoring engine around report I/O."""

    def __init__(
        self,
        *,
        report_loader_factory: ReportLoaderFactory | None = None,
        normalizer: ReportNormalizer | None = None,
        aggregator: ScoreAggregator | None = None,
        comparator: BaselineComparator | None = None,
        gate_evaluator: QualityGateEvaluator | None = None,
        notification_policy: NotificationPolicy | None = None,
    ) -> None:
        self._report_loader_factory = report_loader_factory or ReportLoader
        self._normalizer = normalizer or ReportNormalizer()
        self._aggregator = aggregator or ScoreAggregator()
        self._comparator = comparator or BaselineComparator(self._normalizer)
        self._gate_evaluator = gate_evaluator or QualityGateEvaluator()
        self._notification_policy = notification_policy or NotificationPolicy()

    # ------------------------------------------------------------------
    def evaluate(
        self,
        report_path: Path,
        *,
        baseline_path: Path | None = None,
        config: QualityGateConfig | None = None,
        notify_on: NotificationMode | str | None = None,
    ) -> EvaluationResult:
        """Score the report at ``report_path`` and gate it.

        Raises :class:`ReportLoaderError` or :class:`MalformedReportError` when
        the primary report is unusable. Baseline problems only add a warning.
        """

        data = self._report_loader_factory(report_path).load()
        baseline, warnings = self._load_baseline(baseline_path)
        return self.evaluate_data(
            data,
            baseline=baseline,
            warnings=warnings,
            config=config,
            notify_on=notify_on,
            metadata={"report_path": str(report_path)},
        )

    def evaluate_data(
        self,
        data: Mapping[str, Any],
        *,
        baseline: Mapping[str, Any] | None = None,
        config: QualityGateConfig | None = None,
        notify_on: NotificationMode | str | None = None,
        metadata: Mapping[str, Any] | None = None,
        warnings: Sequence[str] | None = None,
    ) -> EvaluationResult:
        """Run the pure engine over already parsed report documents."""

        config = config or QualityGateConfig()
        warnings = list(warnings or [])

        report = self._normalizer.normalize(data)
        assessment = self._aggregator.summarize(report)

        trend: TrendDelta | None = None
        if baseline is not None:
            trend = self._comparator.compare(assessment, baseline)
            logger.debug("Baseline trend: %s", trend)

        if config.fail_on_regression and trend is None:
            warnings.append("fail-on-regression requested but no baseline data is available")

        for message in warnings:
            logger.info("Run warning: %s", message)

        gate = self._gate_evaluator.evaluate(assessment, config, trend)
        should_notify = self._notification_policy.should_notify(
            notify_on, gate, assessment=assessment, trend=trend
        )

        return EvaluationResult(
            report=report,
            assessment=assessment,
            gate=gate,
            should_notify=should_notify,
            trend=trend,
            warnings=warnings,
            metadata=dict(metadata or {}),
        )

    # ------------------------------------------------------------------
    def _load_baseline(
        self, baseline_path: Path | None
    ) -> Tuple[Mapping[str, Any] | None, List[str]]:
        if baseline_path is None:
            return None, []

        try:
            return self._report_loader_factory(baseline_path).load(), []
        except ReportLoaderError as exc:
            return None, [f"Baseline comparison failed: {exc}"]


__all__ = [
    "EvaluationResult",
    "HealthGateService",
    "MalformedReportError",
    "ReportLoaderError",
]
