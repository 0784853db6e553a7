# homeloan/core/loan/amortization.py
from __future__ import annotations

import logging
import math
from collections.abc import Iterator

from homeloan.schemas.models import AmortizationTable, LoanTerm, PaidToDate, Payment

from .errors import ComputationError, OutOfRangeError, loan_error_guard

logger = logging.getLogger(__name__)

POINT_RATE_REDUCTION = 0.0025  # annual rate reduction per discount point


def rate_with_points(rate: float, points: float) -> float:
    """Annual rate after buying `points` discount points."""
    return rate - (points * POINT_RATE_REDUCTION)


def monthly_rate(annual_rate: float) -> float:
    """Simple monthly rate (annual / 12), not the compounded equivalent."""
    return annual_rate / 12.0


def monthly_payment(principal: float, rate: float, months: int) -> float:
    """
    Compute the constant monthly payment for a fully-amortizing fixed-rate loan.

    Formula (standard annuity):
        PMT = P * (r * (1 + r)^n) / ((1 + r)^n - 1)

    Where:
        P = principal (home price - down payment)
        r = monthly interest rate
        n = number of monthly payments in the term

    Args:
        principal: Starting loan balance.
        rate: Monthly rate as a fraction (e.g., 0.0675 / 12).
        months: Number of payments (120, 180 or 360 for the supported terms).

    Returns:
        The fixed monthly principal & interest payment.

    Raises:
        ComputationError: the formula cannot produce a finite payment
            (rate <= -100%, or a rate so small that (1 + r)^n == 1).
    """
    if months <= 0:
        raise ValueError("months must be > 0 for a fully-amortizing schedule.")

    if rate == 0:
        return principal / months
    if rate <= -1.0:
        raise ComputationError(f"monthly rate {rate!r} is not a usable interest rate")

    with loan_error_guard("monthly payment"):
        compound = (1.0 + rate) ** months
        payment = principal * ((rate * compound) / (compound - 1.0))

    if not math.isfinite(payment):
        raise ComputationError(f"monthly payment is not finite for rate={rate!r}, months={months}")
    logger.debug("monthly payment principal=%.2f rate=%.8f months=%d -> %.6f", principal, rate, months, payment)
    return payment


def generate_schedule(principal: float, rate: float, months: int, payment: float) -> list[Payment]:
    """
    Build the month-by-month schedule in one forward pass.

    Each month, while the balance is still positive:
        interest  = balance * rate
        principal = payment - interest
        balance  -= principal

    Once the balance is exhausted the interest/principal split stays at its
    last computed values and the balance stops moving, so every row matches
    a replay of the loop from month 1.
    """
    rows: list[Payment] = []
    remaining = principal
    interest_paid = 0.0
    principal_paid = 0.0

    for month in range(1, months + 1):
        if remaining > 0:
            interest_paid = remaining * rate
            principal_paid = payment - interest_paid
            remaining = remaining - principal_paid
        rows.append(
            Payment(
                month=month,
                total_monthly_payment=payment,
                interest_payment=interest_paid,
                principal_payment=principal_paid,
                remaining_principal=remaining,
                starting_principal=principal,
            )
        )

    logger.debug("generated %d-month schedule, final balance %.6f", months, remaining)
    return rows


def _paid_rows(rows: list[Payment]) -> Iterator[Payment]:
    """Yield only the rows in which a payment was actually applied to a positive balance."""
    balance = rows[0].starting_principal if rows else 0.0
    for row in rows:
        if balance > 0:
            yield row
        balance = row.remaining_principal


def paid_through_month(rows: list[Payment], month: int) -> PaidToDate:
    """
    Cumulative interest and principal paid from month 1 through `month`.

    Raises:
        OutOfRangeError: month is not within 1..len(rows).
    """
    if month < 1 or month > len(rows):
        raise OutOfRangeError(month, len(rows))

    upto = rows[:month]
    interest = 0.0
    principal = 0.0
    for row in _paid_rows(upto):
        interest += row.interest_payment
        principal += row.principal_payment
    return PaidToDate(
        month=month,
        interest_paid=interest,
        principal_paid=principal,
        remaining_principal=upto[-1].remaining_principal,
    )


def build_table(rows: list[Payment], *, with_points: bool, term: LoanTerm) -> AmortizationTable:
    """Wrap a schedule with totals taken over the payments actually applied."""
    interest = 0.0
    principal = 0.0
    for row in _paid_rows(rows):
        interest += row.interest_payment
        principal += row.principal_payment
    return AmortizationTable(
        with_points=with_points,
        term=term,
        total_monthly_payment=rows[0].total_monthly_payment if rows else 0.0,
        rows=rows,
        total_interest=interest,
        total_principal=principal,
    )


def annual_split(rows: list[Payment], year_index: int) -> tuple[float, float, float]:
    """
    Aggregate payments for a given 1-based loan year.

    Returns:
        (total_paid_year, interest_paid_year, principal_paid_year)

    Notes:
        - If year_index is past the end of the schedule, returns zeros.
    """
    if year_index <= 0:
        raise ValueError("year_index is 1-based (Year 1, Year 2, ...).")

    start = (year_index - 1) * 12
    if start >= len(rows):
        return (0.0, 0.0, 0.0)

    paid = {row.month for row in _paid_rows(rows)}
    window = [p for p in rows[start : year_index * 12] if p.month in paid]
    interest = sum(p.interest_payment for p in window)
    principal = sum(p.principal_payment for p in window)
    return (interest + principal, interest, principal)
