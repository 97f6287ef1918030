"""Custom exceptions for the calculator engine."""

from typing import Optional


class CalculatorError(Exception):
    """Base exception for calculator errors."""

    def __init__(self, reason: str, field: Optional[str] = None):
        super().__init__(reason)
        self.reason = reason
        self.field = field


class InvalidInputError(CalculatorError, ValueError):
    """Raised when an input record is semantically invalid."""
    pass


class DegenerateResultError(CalculatorError, ArithmeticError):
    """Raised when valid inputs still lead to an undefined result (e.g. zero variance)."""
    pass


class ConvergenceError(CalculatorError):
    """Raised when a bounded iterative search gives up."""
    pass
