# homeloan/core/loan/errors.py
"""
Typed errors for the amortization engine.

Exports
-------
- LoanError, OutOfRangeError, ComputationError
- LOAN_ERRORS
- loan_error_guard()
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

# =========================
# Exception types
# =========================


class LoanError(RuntimeError):
    """Base class for loan computation failures."""


class OutOfRangeError(LoanError):
    """Requested month falls outside the loan term."""

    def __init__(self, month: int, max_months: int) -> None:
        super().__init__(f"{month} is outside of max term of {max_months} months")
        self.month = month
        self.max_months = max_months


class ComputationError(LoanError):
    """The fixed monthly payment could not be computed to a finite value."""


# Selector tuple for grouped exception handling
LOAN_ERRORS = (
    OutOfRangeError,
    ComputationError,
)


@contextmanager
def loan_error_guard(context: str = "loan computation") -> Iterator[None]:
    """Normalize arithmetic failures raised inside the engine into ComputationError."""
    try:
        yield
    except LOAN_ERRORS:
        raise
    except (ZeroDivisionError, OverflowError) as exc:
        raise ComputationError(f"{context} failed: {type(exc).__name__}: {exc}") from exc


__all__ = [
    "LoanError",
    "OutOfRangeError",
    "ComputationError",
    "LOAN_ERRORS",
    "loan_error_guard",
]
