# tests/test_amortization.py
import pytest

from homeloan.core.loan import ComputationError, Loan, OutOfRangeError
from homeloan.schemas.models import LoanTerm
from tests.utils import BASE_MONTHLY_PAYMENT, replay_breakdown


def test_derived_rates_on_construction(points_loan):
    assert points_loan.rate_with_points == pytest.approx(0.0671875, abs=1e-12)
    assert points_loan.monthly_rate == pytest.approx(0.07 / 12, abs=1e-15)
    assert points_loan.monthly_rate_with_points == pytest.approx(0.0671875 / 12, abs=1e-15)


def test_monthly_payment_base(base_loan):
    assert base_loan.principal == 672_500
    assert base_loan.get_total_payment_each_month(False) == pytest.approx(BASE_MONTHLY_PAYMENT, abs=1e-4)
    # No points: both rates coincide
    assert base_loan.get_total_payment_each_month(True) == base_loan.get_total_payment_each_month(False)


def test_points_lower_the_payment(points_loan):
    assert points_loan.get_total_payment_each_month(True) < points_loan.get_total_payment_each_month(False)


@pytest.mark.parametrize("with_points", [True, False])
def test_interest_plus_principal_equals_payment(points_loan, with_points):
    rows = points_loan.get_amortization_table(with_points)
    for p in rows:
        assert p.interest_payment + p.principal_payment == pytest.approx(p.total_monthly_payment, abs=1e-6)


def test_remaining_principal_non_increasing(base_loan):
    rows = base_loan.get_amortization_table(False)
    balances = [p.remaining_principal for p in rows if p.remaining_principal > 0]
    assert all(a >= b for a, b in zip(balances, balances[1:]))


@pytest.mark.parametrize("term", list(LoanTerm))
def test_final_month_balance_near_zero(loan_factory, term):
    loan = loan_factory(term=term)
    rows = loan.get_amortization_table(False)
    assert len(rows) == term.months
    last = loan.get_payment_breakdown(term.months, False)
    assert abs(last.remaining_principal) < 0.01
    assert rows[-1] == last


def test_month_past_term_is_out_of_range(base_loan):
    with pytest.raises(OutOfRangeError) as exc:
        base_loan.get_payment_breakdown(361, True)
    assert exc.value.max_months == 360
    assert "361 is outside of max term of 360 months" in str(exc.value)


def test_month_zero_is_out_of_range(base_loan):
    with pytest.raises(OutOfRangeError):
        base_loan.get_payment_breakdown(0, False)


def test_fifteen_year_limit(loan_factory):
    loan = loan_factory(term=LoanTerm.FIFTEEN_YEARS)
    loan.get_payment_breakdown(180, False)
    with pytest.raises(OutOfRangeError):
        loan.get_payment_breakdown(181, False)


@pytest.mark.parametrize("month", [1, 2, 9, 180, 359, 360])
def test_single_pass_matches_replay(points_loan, month):
    for with_points in (True, False):
        assert points_loan.get_payment_breakdown(month, with_points) == replay_breakdown(points_loan, month, with_points)


def test_first_month_split(base_loan):
    p = base_loan.get_payment_breakdown(1, False)
    assert p.month == 1
    assert p.interest_payment == pytest.approx(672_500 * 0.005625, abs=1e-9)
    assert p.starting_principal == 672_500
    assert p.remaining_principal == pytest.approx(672_500 - p.principal_payment, abs=1e-9)


def test_change_rate_rederives_every_field(points_loan):
    points_loan.change_rate(0.065)
    assert points_loan.rate == 0.065
    assert points_loan.monthly_rate == pytest.approx(0.065 / 12, abs=1e-15)
    assert points_loan.rate_with_points == pytest.approx(0.065 - 1.125 * 0.0025, abs=1e-12)
    assert points_loan.monthly_rate_with_points == pytest.approx((0.065 - 1.125 * 0.0025) / 12, abs=1e-15)


def test_change_points_rederives(base_loan):
    base_loan.change_points(2)
    assert base_loan.rate_with_points == pytest.approx(0.0625, abs=1e-12)
    assert base_loan.monthly_rate_with_points == pytest.approx(0.0625 / 12, abs=1e-15)
    assert base_loan.monthly_rate == pytest.approx(0.005625, abs=1e-15)
    with pytest.raises(ValueError):
        base_loan.change_points(-1)


def test_zero_rate_loan():
    loan = Loan(home_price=130_000, down_payment=10_000, rate=0.0, term=LoanTerm.TEN_YEARS)
    assert loan.get_total_payment_each_month(False) == 1_000.0
    rows = loan.get_amortization_table(False)
    assert {p.interest_payment for p in rows} == {0.0}
    assert rows[-1].remaining_principal == pytest.approx(0.0, abs=1e-6)


def test_table_propagates_computation_error():
    loan = Loan(home_price=100_000, down_payment=0, rate=1e-16)
    with pytest.raises(ComputationError):
        loan.get_amortization_table(False)


def test_paid_to_date(base_loan):
    paid = base_loan.get_total_paid_through_month(9, False)
    rows = base_loan.get_amortization_table(False)[:9]
    assert paid.month == 9
    assert paid.interest_paid == pytest.approx(sum(p.interest_payment for p in rows), abs=1e-6)
    assert paid.principal_paid == pytest.approx(sum(p.principal_payment for p in rows), abs=1e-6)
    assert paid.total_paid == pytest.approx(9 * rows[0].total_monthly_payment, abs=1e-6)
    with pytest.raises(OutOfRangeError):
        base_loan.get_total_paid_through_month(361, False)


def test_amortization_totals(base_loan):
    table = base_loan.get_amortization(False)
    assert table.term is LoanTerm.THIRTY_YEARS
    assert len(table.rows) == 360
    assert table.total_paid == pytest.approx(360 * table.total_monthly_payment, abs=1e-4)
    assert table.total_interest == pytest.approx(table.total_paid - 672_500, abs=0.01)


def test_term_accepts_year_count():
    loan = Loan(home_price=200_000, down_payment=40_000, rate=0.06, term=15)
    assert loan.term is LoanTerm.FIFTEEN_YEARS
    assert loan.term_months == 180


def test_negative_points_rejected_on_construction():
    with pytest.raises(ValueError):
        Loan(home_price=300_000, down_payment=60_000, rate=0.06, points=-0.5)
