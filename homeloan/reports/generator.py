# homeloan/reports/generator.py
from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from homeloan.core.loan.amortization import annual_split
from homeloan.schemas.models import AmortizationTable, Payment

if TYPE_CHECKING:
    from homeloan.core.loan.loan import Loan

DIVIDER = "*" * 61
_HALF_CENT = 0.005


def _fmt_currency(x: float) -> str:
    """
    Format a float as USD-style currency with thousands separators.

    Example:
        123456.789 -> $123,456.79
        -2000 -> -$2,000.00
        -1e-9 -> $0.00
    """
    if abs(x) < _HALF_CENT:
        x = 0.0
    sign = "-" if x < 0 else ""
    return f"{sign}${abs(x):,.2f}"


def _fmt_pct(x: float, digits: int = 4) -> str:
    """
    Format a fraction as a percentage.

    Example:
        0.0675 -> 6.7500%
    """
    return f"{x * 100:.{digits}f}%"


def _table_title(with_points: bool) -> str:
    return "AMORTIZATION TABLE WITH POINTS" if with_points else "AMORTIZATION TABLE WITHOUT POINTS"


# -----------------------
# Loan details
# -----------------------


def render_loan_details(loan: Loan) -> str:
    """
    Human-readable summary of the loan inputs, derived rates and both monthly payments.
    """
    lines = [
        "*****LOAN DETAILS*****",
        f"Home price: {_fmt_currency(loan.home_price)}",
        f"Down payment: {_fmt_currency(loan.down_payment)}",
        f"Principal: {_fmt_currency(loan.principal)}",
        f"Term: {loan.term.label} ({loan.term_months} months)",
        f"Rate: {_fmt_pct(loan.rate)}",
        f"Points: {loan.points:.3f}",
        f"Rate with points: {_fmt_pct(loan.rate_with_points)}",
        f"Monthly rate: {_fmt_pct(loan.monthly_rate)}",
        f"Monthly rate with points: {_fmt_pct(loan.monthly_rate_with_points)}",
        f"Monthly payment: {_fmt_currency(loan.get_total_payment_each_month(False))}",
        f"Monthly payment with points: {_fmt_currency(loan.get_total_payment_each_month(True))}",
        "***********************",
    ]
    return "\n".join(lines) + "\n"


# -----------------------
# Amortization table
# -----------------------


def _render_row(p: Payment) -> str:
    return (
        f"| {p.month} "
        f"| {_fmt_currency(p.total_monthly_payment)} "
        f"| {_fmt_currency(p.interest_payment)} "
        f"| {_fmt_currency(p.principal_payment)} "
        f"| {_fmt_currency(p.remaining_principal)} "
        f"| {_fmt_currency(p.starting_principal)} |"
    )


def render_amortization_table(table: AmortizationTable) -> str:
    """
    Render the schedule as a pipe-delimited table followed by a totals line.

    Columns:
      Month | Total Monthly Payment | Interest Payment | Principal Payment | Remaining Principal | Starting Principal
    """
    header = [
        "| Month | Total Monthly Payment | Interest Payment | Principal Payment | Remaining Principal | Starting Principal |",
        "| ---: | ---: | ---: | ---: | ---: | ---: |",
    ]
    rows = [_render_row(p) for p in table.rows]
    totals = (
        f"Totals: {len(table.rows)} payments of {_fmt_currency(table.total_monthly_payment)}, "
        f"total interest {_fmt_currency(table.total_interest)}, "
        f"total paid {_fmt_currency(table.total_paid)}"
    )
    return "\n".join(header + rows) + "\n\n" + totals + "\n"


# -----------------------
# Annual summary
# -----------------------


def render_annual_summary(table: AmortizationTable) -> str:
    """
    Render one row per loan year: payments, interest and principal for that year, and the year-end balance.
    """
    if not table.rows:
        return ""

    header = [
        "ANNUAL SUMMARY",
        "| Year | Total Paid | Interest Paid | Principal Paid | Ending Balance |",
        "| ---: | ---: | ---: | ---: | ---: |",
    ]
    rows = []
    for year in range(1, table.term.years + 1):
        total, interest, principal = annual_split(table.rows, year)
        ending = table.rows[min(year * 12, len(table.rows)) - 1].remaining_principal
        rows.append(
            f"| {year} "
            f"| {_fmt_currency(total)} "
            f"| {_fmt_currency(interest)} "
            f"| {_fmt_currency(principal)} "
            f"| {_fmt_currency(ending)} |"
        )
    return "\n".join(header + rows) + "\n"


# -----------------------
# Public API
# -----------------------


def generate_report(loan: Loan, with_points: bool) -> str:
    """
    Build the full text report: loan details, divider, table title, amortization table and annual summary.
    """
    table = loan.get_amortization(with_points)
    parts = [
        render_loan_details(loan),
        DIVIDER,
        _table_title(with_points),
        render_amortization_table(table),
        DIVIDER,
        render_annual_summary(table),
    ]
    return "\n".join(parts)


def write_report(path: str | Path, loan: Loan, with_points: bool) -> Path:
    """Render the report and write it as UTF-8 text, creating parent directories."""
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(generate_report(loan, with_points), encoding="utf-8")
    return out
