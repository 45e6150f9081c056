"""Helpers that turn untrusted report JSON into service models."""

from .accessors import first_present, safe_get, safe_list, safe_number
from .report_normalizer import ReportNormalizer

__all__ = ["ReportNormalizer", "first_present", "safe_get", "safe_list", "safe_number"]
