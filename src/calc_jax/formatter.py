"""Digit-capped rendering of calculator values."""

from __future__ import annotations

import math

from .values import Matrix, Scalar, Value, Vector


def format_number(x: float, digit_cap: int) -> str:
    if math.isnan(x):
        return "nan"
    if math.isinf(x):
        return "inf" if x > 0 else "-inf"
    rounded = round(x, digit_cap)
    if rounded == 0:
        return "0"
    if abs(rounded) >= 1e16:
        return repr(rounded)
    if rounded.is_integer():
        return str(int(rounded))
    return f"{rounded:.{digit_cap}f}".rstrip("0").rstrip(".")


def format_value(value: Value, digit_cap: int = 9) -> str:
    if isinstance(value, Scalar):
        return format_number(value.value, digit_cap)
    if isinstance(value, Vector):
        return "[" + ", ".join(format_number(x, digit_cap) for x in value.items) + "]"
    if isinstance(value, Matrix):
        rows = value.rows()
        if not rows:
            return "[]"
        lines = ["\t" + ", ".join(format_number(x, digit_cap) for x in row) for row in rows]
        return "[\n" + "\n".join(lines) + "\n]"
    raise TypeError(f"cannot format {type(value).__name__}")
