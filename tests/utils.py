# tests/utils.py
"""
Single source of truth for test data and factories.
Update values here to cascade across the test suite.
"""

from __future__ import annotations

from typing import Any

from homeloan.core.loan import Loan
from homeloan.schemas.models import LoanTerm, LoanTerms, Payment

# -----------------------------
# Global defaults (edit once)
# -----------------------------

DEFAULT_HOME_PRICE = 747_500.0
DEFAULT_DOWN_PAYMENT = 75_000.0
DEFAULT_RATE = 0.0675
DEFAULT_POINTS = 0.0

POINTS_RATE = 0.07
POINTS = 1.125

# 672,500 @ 6.75% over 360 months
BASE_MONTHLY_PAYMENT = 4361.8222


def make_loan_terms(**overrides: Any) -> LoanTerms:
    data: dict[str, Any] = {
        "home_price": DEFAULT_HOME_PRICE,
        "down_payment": DEFAULT_DOWN_PAYMENT,
        "rate": DEFAULT_RATE,
        "points": DEFAULT_POINTS,
        "term": LoanTerm.THIRTY_YEARS,
    }
    data.update(overrides)
    return LoanTerms(**data)


def make_loan(**overrides: Any) -> Loan:
    return Loan.from_terms(make_loan_terms(**overrides))


def make_points_loan(**overrides: Any) -> Loan:
    data: dict[str, Any] = {"rate": POINTS_RATE, "points": POINTS}
    data.update(overrides)
    return make_loan(**data)


def replay_breakdown(loan: Loan, month: int, with_points: bool) -> Payment:
    """Recompute one month by replaying the schedule from month 1."""
    rate = loan.rate_for(with_points)
    payment = loan.get_total_payment_each_month(with_points)
    remaining = loan.principal
    interest = 0.0
    principal = 0.0
    for _ in range(1, month + 1):
        if remaining > 0:
            interest = remaining * rate
            principal = payment - interest
            remaining = remaining - principal
    return Payment(
        month=month,
        total_monthly_payment=payment,
        interest_payment=interest,
        principal_payment=principal,
        remaining_principal=remaining,
        starting_principal=loan.principal,
    )
