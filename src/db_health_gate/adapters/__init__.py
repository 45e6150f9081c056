"""Adapter layer for report ingestion and notification delivery."""

from .notifier import NotificationError, WebhookNotifier, build_notification_text
from .report_loader import ReportLoader, ReportLoaderError

__all__ = [
    "NotificationError",
    "ReportLoader",
    "ReportLoaderError",
    "WebhookNotifier",
    "build_notification_text",
]
