"""Utilities for loading gate configuration files and merging CLI overrides."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Mapping

import yaml

from ..models import NotificationMode, QualityGateConfig

logger = logging.getLogger(__name__)

WEBHOOK_ENV_VAR = "DB_HEALTH_GATE_WEBHOOK"

_GATE_KEYS = {"fail_on_critical", "min_score", "fail_on_regression"}
_NOTIFY_KEYS = {"mode", "webhook"}


class GateConfigError(RuntimeError):
    """Raised when a gate configuration file cannot be loaded or is invalid."""


@dataclass(frozen=True, slots=True)
class GateSettings:
    """Everything the CLI needs to gate a run and notify about it."""

    gate: QualityGateConfig = field(default_factory=QualityGateConfig)
    notify_on: NotificationMode = NotificationMode.ALWAYS
    notify_webhook: str | None = None


class GateConfigLoader:
    """Load gate settings from YAML (or JSON) and apply explicit overrides."""

    def __init__(self, env: Mapping[str, str] | None = None) -> None:
        self._env = os.environ if env is None else env

    # ------------------------------------------------------------------
    def load(
        self,
        path: Path | str | None = None,
        *,
        fail_on_critical: bool | None = None,
        min_score: float | None = None,
        fail_on_regression: bool | None = None,
        notify_on: str | None = None,
        notify_webhook: str | None = None,
    ) -> GateSettings:
        """Return settings from ``path`` with any non-``None`` override applied."""

        settings = self._from_file(Path(path)) if path else GateSettings()

        gate_overrides: dict[str, Any] = {}
        if fail_on_critical is not None:
            gate_overrides["fail_on_critical"] = fail_on_critical
        if min_score is not None:
            gate_overrides["min_score"] = min_score
        if fail_on_regression is not None:
            gate_overrides["fail_on_regression"] = fail_on_regression

        if gate_overrides:
            try:
                settings = replace(settings, gate=replace(settings.gate, **gate_overrides))
            except ValueError as exc:
                raise GateConfigError(str(exc)) from exc

        if notify_on is not None:
            settings = replace(settings, notify_on=self._parse_mode(notify_on))

        webhook = notify_webhook or settings.notify_webhook or self._env.get(WEBHOOK_ENV_VAR)
        if webhook:
            settings = replace(settings, notify_webhook=webhook.strip())

        logger.debug("Resolved gate settings: %s", settings)
        return settings

    # ------------------------------------------------------------------
    def _from_file(self, path: Path) -> GateSettings:
        data = self._load_file(path)

        gate_data = self._section(data, "gate", path)
        notify_data = self._section(data, "notify", path)

        unknown = (set(gate_data) - _GATE_KEYS) | (set(notify_data) - _NOTIFY_KEYS)
        if unknown:
            logger.warning("Ignoring unknown keys in %s: %s", path, ", ".join(sorted(unknown)))

        try:
            gate = QualityGateConfig(
                fail_on_critical=self._flag(gate_data, "fail_on_critical", path),
                min_score=gate_data.get("min_score", 0.0),
                fail_on_regression=self._flag(gate_data, "fail_on_regression", path),
            )
        except ValueError as exc:
            raise GateConfigError(f"{path}: {exc}") from exc

        webhook = notify_data.get("webhook")
        if webhook is not None and not isinstance(webhook, str):
            raise GateConfigError(f"{path}: notify.webhook must be a string")

        return GateSettings(
            gate=gate,
            notify_on=self._parse_mode(notify_data.get("mode")),
            notify_webhook=webhook or None,
        )

    def _load_file(self, path: Path) -> Mapping[str, Any]:
        if not path.exists():
            raise GateConfigError(f"Gate configuration not found: {path}")

        try:
            content = path.read_text(encoding="utf-8")
        except OSError as exc:  # pragma: no cover - filesystem errors surfaced to caller
            raise GateConfigError(f"Failed to read gate configuration {path}") from exc

        try:
            data = yaml.safe_load(content) or {}
        except yaml.YAMLError as exc:
            raise GateConfigError(f"Invalid YAML in gate configuration {path}") from exc

        if not isinstance(data, Mapping):
            raise GateConfigError(f"Gate configuration must be a mapping: {path}")

        return data

    def _section(self, data: Mapping[str, Any], name: str, path: Path) -> Mapping[str, Any]:
        section = data.get(name) or {}
        if not isinstance(section, Mapping):
            raise GateConfigError(f"{path}: '{name}' must be a mapping")
        return section

    def _flag(self, data: Mapping[str, Any], key: str, path: Path) -> bool:
        value = data.get(key, False)
        if not isinstance(value, bool):
            raise GateConfigError(f"{path}: '{key}' must be true or false")
        return value

    def _parse_mode(self, value: object) -> NotificationMode:
        try:
            return NotificationMode.parse(value)  # type: ignore[arg-type]
        except ValueError as exc:
            raise GateConfigError(str(exc)) from exc
