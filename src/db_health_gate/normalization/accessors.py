"""Total accessors over arbitrary JSON documents.

Every accessor returns a default instead of raising when a path segment is
absent, ``None`` or not a mapping.
"""

from __future__ import annotations

import math
from typing import Any, List, Mapping, Sequence

_MISSING = object()


def safe_get(data: object, path: Sequence[str], default: Any = None) -> Any:
    """Follow ``path`` through nested mappings and return the value found there."""

    current: object = data
    for segment in path:
        if not isinstance(current, Mapping):
            return default
        current = current.get(segment, _MISSING)
        if current is _MISSING or current is None:
            return default
    return current


def first_present(data: object, paths: Sequence[Sequence[str]]) -> Any:
    """Return the value at the first of ``paths`` that resolves, else ``None``."""

    for path in paths:
        value = safe_get(data, path)
        if value is not None:
            return value
    return None


def safe_number(value: object, default: float = 0.0) -> float:
    """Coerce ``value`` to a finite float, falling back to ``default``."""

    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        stripped = value.strip()
        if not stripped:
            return default
        try:
            number = float(stripped)
        except ValueError:
            return default
    else:
        return default

    if not math.isfinite(number):
        return default
    return number


def safe_list(value: object) -> List[Any]:
    """Return ``value`` as a list when it is a JSON array, otherwise an empty list."""

    if isinstance(value, (list, tuple)):
        return list(value)
    return []
