"""Health scoring, risk classification and quality gates for database audit reports."""

__version__ = "0.1.0"
