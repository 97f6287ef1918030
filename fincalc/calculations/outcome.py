"""
Tagged Calculation Outcomes

Wraps a calculator call so callers get an explicit status instead of an
exception or a silently capped value.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional

from fincalc.errors import InvalidInputError, DegenerateResultError, ConvergenceError

logger = logging.getLogger(__name__)

OK = "ok"
INVALID = "invalid"
DEGENERATE = "degenerate"
NOT_CONVERGED = "not_converged"


@dataclass
class Outcome:
    """
    Result of evaluating one calculator.

    Attributes:
        status: One of "ok", "invalid", "degenerate", "not_converged"
        result: The calculator's result record (present for "ok" and "not_converged")
        reason: Human-readable explanation for any non-ok status
        field: Input field blamed for an "invalid" status
    """

    status: str
    result: Optional[Any] = None
    reason: Optional[str] = None
    field: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == OK


def _did_not_converge(result: Any) -> bool:
    """Results flag a give-up with converged=False or paid_off=False."""
    if getattr(result, "converged", True) is False:
        return True
    if getattr(result, "paid_off", True) is False:
        return True
    return False


def evaluate(calculator: Callable[[Any], Any], inputs: Any) -> Outcome:
    """
    Run a calculator and classify its result.

    Args:
        calculator: Any ``calculate_*`` function
        inputs: The matching input record

    Returns:
        Outcome tagged with the calculation status
    """
    try:
        result = calculator(inputs)
    except InvalidInputError as e:
        logger.debug(f"{calculator.__name__} rejected input: {e.reason}")
        return Outcome(status=INVALID, reason=e.reason, field=e.field)
    except DegenerateResultError as e:
        return Outcome(status=DEGENERATE, reason=e.reason)
    except ConvergenceError as e:
        return Outcome(status=NOT_CONVERGED, reason=e.reason)

    if _did_not_converge(result):
        return Outcome(
            status=NOT_CONVERGED,
            result=result,
            reason="iteration limit reached before a solution was found",
        )

    return Outcome(status=OK, result=result)
