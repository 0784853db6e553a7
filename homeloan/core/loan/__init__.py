# homeloan/core/loan/__init__.py

from .amortization import (
    POINT_RATE_REDUCTION,
    annual_split,
    build_table,
    generate_schedule,
    monthly_payment,
    monthly_rate,
    paid_through_month,
    rate_with_points,
)
from .errors import (
    LOAN_ERRORS,
    ComputationError,
    LoanError,
    OutOfRangeError,
    loan_error_guard,
)
from .loan import Loan

__all__ = [
    "Loan",
    "LoanError",
    "OutOfRangeError",
    "ComputationError",
    "LOAN_ERRORS",
    "loan_error_guard",
    "POINT_RATE_REDUCTION",
    "rate_with_points",
    "monthly_rate",
    "monthly_payment",
    "generate_schedule",
    "paid_through_month",
    "annual_split",
    "build_table",
]
