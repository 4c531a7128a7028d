"""Structural equality over JSON-like values.

Used to detect whether a block still carries its default data.  Primitives
compare strictly: ``True`` is not ``1``, ``NaN`` never equals ``NaN`` and
``0.0 == -0.0``.  Total for JSON-compatible inputs, never raises.

:func:`is_present` is the matching presence test used by the schema and
context helpers.
"""

from __future__ import annotations

import math
from typing import Any


def _kind(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (list, tuple)):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


def deep_equal(a: Any, b: Any) -> bool:
    if a is b:
        # Identity short-circuit, except NaN which is never equal to itself.
        return not (isinstance(a, float) and a != a)

    kind = _kind(a)
    if kind != _kind(b):
        return False

    if kind == "array":
        if len(a) != len(b):
            return False
        return all(deep_equal(x, y) for x, y in zip(a, b))

    if kind == "object":
        if len(a) != len(b) or a.keys() != b.keys():
            return False
        return all(deep_equal(a[key], b[key]) for key in a)

    if kind == "null":
        return True

    return bool(a == b)


def is_present(value: Any) -> bool:
    """JSON presence test: containers count even when empty, ``NaN`` does not."""
    if isinstance(value, (dict, list)):
        return True
    if isinstance(value, float) and math.isnan(value):
        return False
    return bool(value)
