"""Deterministic JSON helpers for conversation records."""

from __future__ import annotations

import json
import math
from typing import Any


def canonicalize(value: Any) -> Any:
    """Normalize values to a deterministic, JSON-safe representation.

    Strings are kept verbatim; entry content must round-trip unchanged.
    """
    if isinstance(value, dict):
        return {str(key): canonicalize(value[key]) for key in sorted(value, key=str)}

    if isinstance(value, (list, tuple)):
        return [canonicalize(item) for item in value]

    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            raise ValueError("NaN and infinity are not supported in canonical JSON")
        return float(f"{value:.12g}")

    return value


def canonical_json(value: Any) -> str:
    """Serialize a value to stable canonical JSON."""
    return json.dumps(
        canonicalize(value),
        ensure_ascii=True,
        separators=(",", ":"),
        sort_keys=True,
    )
