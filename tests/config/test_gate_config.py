from pathlib import Path

import pytest

from db_health_gate.config import GateConfigError, GateConfigLoader, GateSettings
from db_health_gate.config.gate_config import WEBHOOK_ENV_VAR
from db_health_gate.models import NotificationMode, QualityGateConfig

FIXTURES = Path(__file__).resolve().parent.parent / "fixtures"


def write_config(tmp_path: Path, content: str, name: str = "gate.yaml") -> Path:
    path = tmp_path / name
    path.write_text(content, encoding="utf-8")
    return path


def test_defaults_without_file():
    settings = GateConfigLoader(env={}).load()

    assert settings == GateSettings()
    assert settings.gate == QualityGateConfig()
    assert settings.notify_on is NotificationMode.ALWAYS
    assert settings.notify_webhook is None


def test_loads_yaml_fixture():
    settings = GateConfigLoader(env={}).load(FIXTURES / "gate-config.yaml")

    assert settings.gate == QualityGateConfig(
        fail_on_critical=True, min_score=7, fail_on_regression=False
    )
    assert settings.notify_on is NotificationMode.CRITICAL
    assert settings.notify_webhook == "https://hooks.example.com/services/T000/B000/XXXX"


def test_cli_overrides_take_precedence(tmp_path):
    path = write_config(
        tmp_path,
        "gate:\n  fail_on_critical: true\n  min_score: 7\nnotify:\n  mode: critical\n",
    )

    settings = GateConfigLoader(env={}).load(
        path,
        min_score=5.5,
        fail_on_regression=True,
        notify_on="fail",
        notify_webhook="https://override.example.com",
    )

    assert settings.gate.fail_on_critical is True
    assert settings.gate.min_score == 5.5
    assert settings.gate.fail_on_regression is True
    assert settings.notify_on is NotificationMode.FAIL
    assert settings.notify_webhook == "https://override.example.com"


def test_json_config_is_accepted(tmp_path):
    path = write_config(tmp_path, '{"gate": {"fail_on_regression": true}}', name="gate.json")

    settings = GateConfigLoader(env={}).load(path)

    assert settings.gate.fail_on_regression is True
    assert settings.gate.min_score == 0.0


def test_webhook_falls_back_to_environment():
    settings = GateConfigLoader(env={WEBHOOK_ENV_VAR: " https://env.example.com "}).load()

    assert settings.notify_webhook == "https://env.example.com"


@pytest.mark.parametrize(
    ("content", "message"),
    [
        ("- just\n- a list\n", "must be a mapping"),
        ("gate: [1, 2]\n", "'gate' must be a mapping"),
        ("gate:\n  min_score: -3\n", "min_score"),
        ("gate:\n  fail_on_critical: yes please\n", "true or false"),
        ("notify:\n  mode: sometimes\n", "Unknown notification mode"),
        ("notify:\n  webhook: 42\n", "webhook must be a string"),
        ("gate: {min_score: [\n", "Invalid YAML"),
    ],
)
def test_invalid_configs_raise(tmp_path, content, message):
    path = write_config(tmp_path, content)

    with pytest.raises(GateConfigError, match=message):
        GateConfigLoader(env={}).load(path)


def test_missing_file_raises(tmp_path):
    with pytest.raises(GateConfigError, match="not found"):
        GateConfigLoader(env={}).load(tmp_path / "missing.yaml")


def test_negative_override_raises():
    with pytest.raises(GateConfigError):
        GateConfigLoader(env={}).load(min_score=-1.0)
