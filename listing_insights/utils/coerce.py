import math
from typing import Optional

from ..errors import InvalidInput


def to_int(v) -> Optional[int]:
    try:
        if v is None or v == "" or str(v).lower() in ("null", "nan"):
            return None
        return int(float(v))
    except (TypeError, ValueError, OverflowError):
        return None


def to_float(v) -> Optional[float]:
    try:
        if v is None or v == "" or str(v).lower() == "null":
            return None
        result = float(v)
    except (TypeError, ValueError):
        return None
    if math.isnan(result):
        return None
    return result


def to_str(v) -> str:
    if v is None or (isinstance(v, float) and math.isnan(v)):
        return ""
    return str(v)


def positive_or_none(v) -> Optional[float]:
    """Return ``v`` as a float when it is finite and strictly positive."""

    value = to_float(v)
    if value is None or not math.isfinite(value) or value <= 0:
        return None
    return value


def require_finite(field: str, value) -> float:
    if isinstance(value, bool):
        raise InvalidInput(field, value, "expected a number")
    try:
        result = float(value)
    except (TypeError, ValueError):
        raise InvalidInput(field, value, "expected a number") from None
    if not math.isfinite(result):
        raise InvalidInput(field, value, "must be finite")
    return result


def require_non_negative(field: str, value) -> float:
    result = require_finite(field, value)
    if result < 0:
        raise InvalidInput(field, value, "must be >= 0")
    return result


def require_positive(field: str, value) -> float:
    result = require_finite(field, value)
    if result <= 0:
        raise InvalidInput(field, value, "must be > 0")
    return result
