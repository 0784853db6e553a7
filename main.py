# main.py
"""
Entry Point — Mortgage Amortization Reporter

Purpose
-------
Compute a fixed-rate mortgage schedule and emit a text report:
  1) Load loan inputs (built-in scenario or --config JSON).
  2) Derive the effective rates and the fixed monthly payment.
  3) Print (or write to --out) the loan details and the full amortization table,
     or a single month's breakdown with --month.

Usage
-----
    python main.py
    python main.py --scenario points --without-points
    python main.py --config data/sample/loan.json --out report.txt
    python main.py --month 9
"""

from __future__ import annotations

import argparse
import logging

from homeloan.core.loan import LOAN_ERRORS, Loan
from homeloan.inputs.inputs import SAMPLE_SCENARIOS, AppInputs, InputsLoader
from homeloan.logs import configure_logging
from homeloan.reports.generator import DIVIDER, generate_report, write_report

logger = logging.getLogger("homeloan.cli")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments for configurable runs."""
    p = argparse.ArgumentParser(description="Fixed-rate mortgage amortization report")
    p.add_argument("--config", type=str, default=None, help="Path to JSON config (LoanTerms or AppInputs).")
    p.add_argument(
        "--scenario",
        type=str,
        default="base",
        choices=sorted(SAMPLE_SCENARIOS),
        help="Built-in loan used when --config is not given.",
    )
    p.add_argument("--out", type=str, default=None, help="Write the report to this path instead of stdout.")
    points = p.add_mutually_exclusive_group()
    points.add_argument("--with-points", dest="with_points", action="store_true", default=None)
    points.add_argument("--without-points", dest="with_points", action="store_false")
    p.add_argument("--month", type=int, default=None, help="Show one month's breakdown and totals paid to date.")
    p.add_argument("--debug", action="store_true", help="Verbose logging to stderr and logs/homeloan_debug.log.")
    return p.parse_args(argv)


def _load(args: argparse.Namespace) -> AppInputs:
    loader = InputsLoader()
    cfg = loader.load(args.config) if args.config else loader.from_scenario(args.scenario)
    return loader.with_overrides(cfg, out=args.out, with_points=args.with_points, month=args.month)


def _render_month(loan: Loan, month: int, with_points: bool) -> str:
    p = loan.get_payment_breakdown(month, with_points)
    paid = loan.get_total_paid_through_month(month, with_points)
    lines = [
        f"Month {p.month} of {loan.term_months} ({'with' if with_points else 'without'} points)",
        f"  Monthly payment:     {p.total_monthly_payment:,.2f}",
        f"  Interest payment:    {p.interest_payment:,.2f}",
        f"  Principal payment:   {p.principal_payment:,.2f}",
        f"  Remaining principal: {p.remaining_principal:,.2f}",
        DIVIDER,
        f"  Interest paid to date:  {paid.interest_paid:,.2f}",
        f"  Principal paid to date: {paid.principal_paid:,.2f}",
        f"  Total paid to date:     {paid.total_paid:,.2f}",
    ]
    return "\n".join(lines) + "\n"


def main(argv: list[str] | None = None) -> int:
    """Run the report; returns the process exit status."""
    args = parse_args(argv)
    configure_logging(args.debug or None)

    try:
        cfg = _load(args)
    except (FileNotFoundError, ValueError) as e:
        logger.error("invalid inputs: %s", e)
        return 1

    loan = Loan.from_terms(cfg.loan)
    run = cfg.run
    logger.debug("running %r with_points=%s month=%s", loan, run.with_points, run.month)

    try:
        if run.month is not None:
            text = _render_month(loan, run.month, run.with_points)
        elif run.out:
            path = write_report(run.out, loan, run.with_points)
            print(f"Report written to {path}")
            return 0
        else:
            text = generate_report(loan, run.with_points)
    except LOAN_ERRORS as e:
        logger.error("loan computation failed: %s", e)
        return 1

    print(text, end="")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
