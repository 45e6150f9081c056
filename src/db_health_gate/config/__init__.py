"""Quality gate configuration loading."""

from .gate_config import GateConfigError, GateConfigLoader, GateSettings

__all__ = [
    "GateConfigError",
    "GateConfigLoader",
    "GateSettings",
]
