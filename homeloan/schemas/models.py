# homeloan/schemas/models.py

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, computed_field, field_validator, model_validator

# =========================
# Loan term
# =========================


class LoanTerm(str, Enum):
    """Closed set of supported fixed-rate terms."""

    TEN_YEARS = "TEN_YEARS"
    FIFTEEN_YEARS = "FIFTEEN_YEARS"
    THIRTY_YEARS = "THIRTY_YEARS"

    @property
    def months(self) -> int:
        return _TERM_MONTHS[self]

    @property
    def years(self) -> int:
        return _TERM_MONTHS[self] // 12

    @property
    def label(self) -> str:
        return f"{self.years} Years"

    def __str__(self) -> str:
        return self.label

    @classmethod
    def parse(cls, value: Any) -> LoanTerm:
        """
        Accept the enum itself, its name, a year count (10/15/30) or a label like "30 Years".
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, bool):
            raise ValueError(f"Unsupported loan term: {value!r}")
        if isinstance(value, int):
            years = value
        else:
            text = str(value).strip().upper().replace(" ", "_")
            if text in cls.__members__:
                return cls[text]
            digits = text.split("_", 1)[0]
            if not digits.isdigit():
                raise ValueError(f"Unsupported loan term: {value!r}")
            years = int(digits)
        for term, months in _TERM_MONTHS.items():
            if months == years * 12:
                return term
        raise ValueError(f"Unsupported loan term: {value!r} (expected 10, 15 or 30 years)")


_TERM_MONTHS: dict[LoanTerm, int] = {
    LoanTerm.TEN_YEARS: 120,
    LoanTerm.FIFTEEN_YEARS: 180,
    LoanTerm.THIRTY_YEARS: 360,
}


# =========================
# Core inputs
# =========================


class LoanTerms(BaseModel):
    """
    Purchase and loan parameters for one fixed-rate mortgage. All money amounts use the same currency.
    """

    home_price: float = Field(..., ge=0, description="Contract price of the home (currency units).")
    down_payment: float = Field(..., ge=0, description="Cash paid up front; the loan principal is home_price - down_payment.")
    rate: float = Field(..., ge=0, le=1, description="Nominal annual interest rate as a fraction (e.g., 0.0675 = 6.75%).")
    points: float = Field(0.0, ge=0, description="Discount points bought at closing; each point lowers the rate by 0.25%.")
    term: LoanTerm = Field(LoanTerm.THIRTY_YEARS, description="Loan term: 10, 15 or 30 years.")

    @field_validator("term", mode="before")
    @classmethod
    def _parse_term(cls, v: Any) -> LoanTerm:
        return LoanTerm.parse(v)

    @model_validator(mode="after")
    def _check_down_payment(self) -> LoanTerms:
        if self.down_payment > self.home_price:
            raise ValueError("down_payment must not exceed home_price")
        return self

    @property
    def principal(self) -> float:
        return self.home_price - self.down_payment


# =========================
# Computed outputs
# =========================


class Payment(BaseModel):
    """One amortization-table row for a given month."""

    month: int = Field(..., ge=1, description="1-based month within the term.")
    total_monthly_payment: float = Field(..., description="Fixed payment amount, constant across the schedule.")
    interest_payment: float = Field(..., description="Interest portion of this month's payment.")
    principal_payment: float = Field(..., description="Principal portion of this month's payment.")
    remaining_principal: float = Field(..., description="Balance owed after this month's payment.")
    starting_principal: float = Field(..., description="Original loan principal (home_price - down_payment).")


class PaidToDate(BaseModel):
    """Cumulative amounts paid from month 1 through `month` (inclusive)."""

    month: int = Field(..., ge=1)
    interest_paid: float = Field(..., description="Sum of interest payments through this month.")
    principal_paid: float = Field(..., description="Sum of principal payments through this month.")
    remaining_principal: float = Field(..., description="Balance owed after this month's payment.")

    @computed_field  # type: ignore[prop-decorator]
    @property
    def total_paid(self) -> float:
        return self.interest_paid + self.principal_paid


class AmortizationTable(BaseModel):
    """
    Full schedule for one loan, with or without points applied.

    Totals cover only payments applied to a positive balance; rows repeated
    after payoff are not counted again.
    """

    with_points: bool
    term: LoanTerm
    total_monthly_payment: float = Field(..., description="Fixed monthly payment used for every row.")
    rows: list[Payment] = Field(default_factory=list, description="One row per month, in order.")
    total_interest: float = Field(0.0, description="Interest paid over the schedule.")
    total_principal: float = Field(0.0, description="Principal paid over the schedule.")

    @computed_field  # type: ignore[prop-decorator]
    @property
    def total_paid(self) -> float:
        return self.total_interest + self.total_principal
