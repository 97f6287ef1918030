"""
Input Validation

Precondition checks run at the entry point of every calculator. Each check
raises InvalidInputError naming the offending field, so degenerate inputs
never reach the floating-point arithmetic.
"""

import math
from typing import Sequence

from fincalc.errors import InvalidInputError, DegenerateResultError


def require_finite(value: float, field: str) -> float:
    """Reject NaN and infinite values."""
    if value is None or not math.isfinite(value):
        raise InvalidInputError(f"{field} must be a finite number", field=field)
    return value


def require_positive(value: float, field: str) -> float:
    """Require value > 0."""
    require_finite(value, field)
    if value <= 0:
        raise InvalidInputError(f"{field} must be greater than zero", field=field)
    return value


def require_non_negative(value: float, field: str) -> float:
    """Require value >= 0."""
    require_finite(value, field)
    if value < 0:
        raise InvalidInputError(f"{field} cannot be negative", field=field)
    return value


def require_rate(value: float, field: str) -> float:
    """
    Require a percentage rate that keeps growth factors positive.

    Rates are whole-number percentages, so anything at or below -100 would
    wipe out (or flip the sign of) a balance in one period.
    """
    require_finite(value, field)
    if value <= -100:
        raise InvalidInputError(f"{field} must be greater than -100%", field=field)
    return value


def require_whole(value: float, field: str) -> int:
    """Require a whole number (e.g. a count of years) and return it as int."""
    require_finite(value, field)
    if value != int(value):
        raise InvalidInputError(f"{field} must be a whole number", field=field)
    return int(value)


def require_between(value: float, low: float, high: float, field: str) -> float:
    """Require low <= value <= high."""
    require_finite(value, field)
    if value < low or value > high:
        raise InvalidInputError(
            f"{field} must be between {low:g} and {high:g}", field=field
        )
    return value


def require_choice(value: str, choices: Sequence[str], field: str) -> str:
    """Require value to be one of the enumerated choices."""
    if value not in choices:
        allowed = ", ".join(choices)
        raise InvalidInputError(f"{field} must be one of: {allowed}", field=field)
    return value


def require_series(values: Sequence[float], field: str, min_length: int = 1) -> Sequence[float]:
    """Require a non-empty series of finite numbers."""
    if len(values) < min_length:
        raise InvalidInputError(
            f"{field} must contain at least {min_length} value(s)", field=field
        )
    for value in values:
        require_finite(value, field)
    return values


def require_same_length(
    first: Sequence[float], second: Sequence[float], first_field: str, second_field: str
) -> None:
    """Require two paired series to have equal length."""
    if len(first) != len(second):
        raise InvalidInputError(
            f"{first_field} and {second_field} must have the same length "
            f"({len(first)} != {len(second)})",
            field=second_field,
        )


def require_nonzero_result(value: float, what: str) -> float:
    """Guard a divisor computed from otherwise valid inputs."""
    if value == 0 or not math.isfinite(value):
        raise DegenerateResultError(f"{what} is zero; the result is undefined")
    return value
