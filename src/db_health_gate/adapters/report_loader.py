from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Mapping

logger = logging.getLogger(__name__)


class ReportLoaderError(RuntimeError):
    """Exception raised when an audit report cannot be read or parsed."""


class ReportLoader:
    """Load a raw audit report (or a stored baseline) from a JSON file."""

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self.path = Path(path).resolve()

    def load(self) -> Mapping[str, Any]:
        """Return the parsed JSON object stored at :attr:`path`."""

        if not self.path.exists():
            raise ReportLoaderError(f"Report not found: {self.path}")

        try:
            raw = self.path.read_text(encoding="utf-8-sig")
        except (OSError, UnicodeDecodeError) as exc:
            raise ReportLoaderError(f"Failed to read report {self.path}: {exc}") from exc

        if not raw.strip():
            raise ReportLoaderError(f"Report is empty: {self.path}")

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise ReportLoaderError(f"Invalid JSON in report {self.path}: {exc.msg}") from exc

        if not isinstance(data, Mapping):
            raise ReportLoaderError(f"Report JSON must be an object: {self.path}")

        logger.debug("Loaded report %s", self.path)
        return data


__all__ = ["ReportLoader", "ReportLoaderError"]
