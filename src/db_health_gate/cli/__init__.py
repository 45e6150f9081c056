"""Command-line interface package for the database health gate."""

from .app import (
    SUMMARY_JSON,
    SUMMARY_MARKDOWN,
    build_parser,
    build_payload,
    create_service,
    main,
    render_table,
    run,
)

__all__ = [
    "SUMMARY_JSON",
    "SUMMARY_MARKDOWN",
    "build_parser",
    "build_payload",
    "create_service",
    "main",
    "render_table",
    "run",
]
