"""Quality gate evaluation and notification policy."""

from .notification import NotificationPolicy
from .quality_gate import QualityGateEvaluator

__all__ = ["NotificationPolicy", "QualityGateEvaluator"]
