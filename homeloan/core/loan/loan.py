# homeloan/core/loan/loan.py
from __future__ import annotations

import logging

from homeloan.schemas.models import AmortizationTable, LoanTerm, LoanTerms, PaidToDate, Payment

from .amortization import build_table, generate_schedule, monthly_payment, monthly_rate, paid_through_month, rate_with_points
from .errors import OutOfRangeError

logger = logging.getLogger(__name__)


def _checked_points(points: float) -> float:
    if points < 0:
        raise ValueError("points must be >= 0")
    return float(points)


class Loan:
    """
    Amortization engine for one fixed-rate mortgage.

    Derived rates (`rate_with_points`, `monthly_rate`, `monthly_rate_with_points`)
    are computed on construction and recomputed together whenever the rate or
    points change, so they never go stale.
    """

    def __init__(
        self,
        home_price: float,
        down_payment: float,
        rate: float,
        points: float = 0.0,
        term: LoanTerm = LoanTerm.THIRTY_YEARS,
    ) -> None:
        self.home_price = float(home_price)
        self.down_payment = float(down_payment)
        self.term = LoanTerm.parse(term)
        self.rate = float(rate)
        self.points = _checked_points(points)
        self.rate_with_points = 0.0
        self.monthly_rate = 0.0
        self.monthly_rate_with_points = 0.0
        self._derive_rates()

    @classmethod
    def from_terms(cls, terms: LoanTerms) -> Loan:
        return cls(
            home_price=terms.home_price,
            down_payment=terms.down_payment,
            rate=terms.rate,
            points=terms.points,
            term=terms.term,
        )

    def __repr__(self) -> str:
        return (
            f"Loan(home_price={self.home_price!r}, down_payment={self.down_payment!r}, "
            f"rate={self.rate!r}, points={self.points!r}, term={self.term.name})"
        )

    # ---------- Rates ----------

    def _derive_rates(self) -> None:
        self.monthly_rate = monthly_rate(self.rate)
        self.rate_with_points = rate_with_points(self.rate, self.points)
        self.monthly_rate_with_points = monthly_rate(self.rate_with_points)

    def change_rate(self, rate: float) -> None:
        """Set a new nominal annual rate and re-derive every dependent rate."""
        logger.debug("rate change %.6f -> %.6f", self.rate, rate)
        self.rate = float(rate)
        self._derive_rates()

    def change_points(self, points: float) -> None:
        """Set a new number of discount points and re-derive every dependent rate."""
        logger.debug("points change %.4f -> %.4f", self.points, points)
        self.points = _checked_points(points)
        self._derive_rates()

    def rate_for(self, with_points: bool) -> float:
        """Monthly rate used for payments, with or without points applied."""
        return self.monthly_rate_with_points if with_points else self.monthly_rate

    # ---------- Amounts ----------

    @property
    def principal(self) -> float:
        return self.home_price - self.down_payment

    @property
    def term_months(self) -> int:
        return self.term.months

    def get_total_payment_each_month(self, with_points: bool) -> float:
        """Fixed monthly payment over the whole term."""
        return monthly_payment(self.principal, self.rate_for(with_points), self.term_months)

    def _check_month(self, month: int) -> None:
        if month < 1 or month > self.term_months:
            raise OutOfRangeError(month, self.term_months)

    # ---------- Schedule ----------

    def get_amortization_table(self, with_points: bool) -> list[Payment]:
        """One Payment row per month of the term, computed in a single pass."""
        payment = self.get_total_payment_each_month(with_points)
        return generate_schedule(self.principal, self.rate_for(with_points), self.term_months, payment)

    def get_amortization(self, with_points: bool) -> AmortizationTable:
        return build_table(self.get_amortization_table(with_points), with_points=with_points, term=self.term)

    def get_payment_breakdown(self, month: int, with_points: bool) -> Payment:
        """
        Interest/principal split and remaining balance for a single 1-based month.

        Raises:
            OutOfRangeError: month is outside 1..term months.
            ComputationError: the monthly payment cannot be computed.
        """
        self._check_month(month)
        return self.get_amortization_table(with_points)[month - 1]

    def get_total_paid_through_month(self, month: int, with_points: bool) -> PaidToDate:
        """Cumulative interest and principal paid from month 1 through `month`."""
        self._check_month(month)
        return paid_through_month(self.get_amortization_table(with_points), month)

    # ---------- Report ----------

    def get_loan_report(self, with_points: bool) -> str:
        """Loan details, a divider and the full amortization table as text."""
        from homeloan.reports.generator import generate_report

        return generate_report(self, with_points)
