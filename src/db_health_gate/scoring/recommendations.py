"""Ranking of findings and AI hints into a short recommendation list."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence

from ..models import Finding, Severity

MAX_RECOMMENDATIONS = 5

SECURITY_PRIORITY = {Severity.CRITICAL: 10, Severity.HIGH: 8}
PERFORMANCE_PRIORITY = {Severity.CRITICAL: 9, Severity.HIGH: 7}
BLOAT_PRIORITY = 6
AI_HINT_PRIORITY = 5


@dataclass(frozen=True, slots=True)
class Recommendation:
    text: str
    priority: int


class RecommendationRanker:
    """Merge findings and AI hints into one bounded, priority-sorted list."""

    def __init__(self, limit: int = MAX_RECOMMENDATIONS) -> None:
        self.limit = limit

    def rank(
        self,
        security_findings: Sequence[Finding],
        performance_findings: Sequence[Finding],
        bloated_table_count: int,
        ai_hints: Sequence[str] | None = None,
    ) -> List[str]:
        """Return at most ``limit`` recommendation strings, highest priority first."""

        candidates = self.candidates(
            security_findings, performance_findings, bloated_table_count, ai_hints
        )
        # sorted() is stable, so equal priorities keep their insertion order.
        ranked = sorted(candidates, key=lambda item: item.priority, reverse=True)
        return [item.text for item in ranked[: self.limit]]

    def candidates(
        self,
        security_findings: Sequence[Finding],
        performance_findings: Sequence[Finding],
        bloated_table_count: int,
        ai_hints: Sequence[str] | None = None,
    ) -> List[Recommendation]:
        items: List[Recommendation] = []

        for finding in security_findings:
            priority = SECURITY_PRIORITY.get(finding.severity)
            if priority is not None:
                items.append(Recommendation(f"Security: {finding.description}", priority))

        for finding in performance_findings:
            priority = PERFORMANCE_PRIORITY.get(finding.severity)
            if priority is not None:
                items.append(Recommendation(f"Performance: {finding.description}", priority))

        if bloated_table_count > 0:
            items.append(
                Recommendation(f"Clean up {bloated_table_count} bloated tables", BLOAT_PRIORITY)
            )

        for hint in ai_hints or ():
            items.append(Recommendation(f"AI Insight: {hint}", AI_HINT_PRIORITY))

        return items
