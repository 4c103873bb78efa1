"""Performance sentinel budgets and payload builders."""

from __future__ import annotations

import os
from typing import Any, Dict, List


def _budget_from_env(var_name: str, default_ms: float) -> float:
    raw = os.getenv(var_name)
    if not raw:
        return default_ms
    try:
        return float(raw)
    except ValueError:
        return default_ms


MAX_WIDE_OBJECT_MS = _budget_from_env("ACTP_HASH_MAX_WIDE_OBJECT_MS", 250.0)
MAX_DEEP_NESTING_MS = _budget_from_env("ACTP_HASH_MAX_DEEP_NESTING_MS", 100.0)
MAX_FLOAT_ARRAY_MS = _budget_from_env("ACTP_HASH_MAX_FLOAT_ARRAY_MS", 250.0)


def wide_object(width: int = 5000) -> Dict[str, Any]:
    """Flat mapping with `width` keys inserted in reverse order."""
    return {f"key_{i:05d}": {"n": i, "s": f"value {i}", "ok": i % 2 == 0} for i in reversed(range(width))}


def deep_nesting(depth: int = 200) -> Dict[str, Any]:
    value: Dict[str, Any] = {"leaf": True}
    for i in range(depth):
        value = {"level": i, "child": value}
    return value


def float_array(size: int = 10000) -> List[float]:
    return [i / 7.0 for i in range(size)]
