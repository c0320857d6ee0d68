import math

import pytest

from emi_calculator.core.amortization import (
    InvalidInput,
    LoanInput,
    compute_amortization,
    fixed_monthly_payment,
)


LOANS = [
    LoanInput(100_000, 10, 12),
    LoanInput(2_500_000, 8.5, 240),
    LoanInput(750_000, 12, 37),
    LoanInput(50_000, 15, 6),
    LoanInput(200_000, 4, 300),
    LoanInput(1_000, 24, 1),
]


def test_one_year_loan_known_case():
    res = compute_amortization(LoanInput(principal=100_000, annual_rate_pct=10, tenure_months=12))
    assert res.emi == 8791.59
    # Totals come from the unrounded EMI (8791.5887...), not from 8791.59 * 12
    assert res.total_interest == pytest.approx(5499.06, abs=0.01)
    assert res.total_amount == pytest.approx(105499.06, abs=0.01)
    assert len(res.schedule) == 12

    first, last = res.schedule[0], res.schedule[-1]
    assert first.month == 1
    assert first.interest_part == 833.33
    assert first.principal_part == 7958.26
    assert first.principal_percentage == 91
    assert last.month == 12
    assert last.remaining_balance == 0.0
    assert last.principal_percentage == 99


def test_fixed_payment_known_cases():
    # 100k @5% over 20y ~ 659.96
    assert math.isclose(fixed_monthly_payment(100_000, 5, 240), 659.96, abs_tol=1e-2)
    assert compute_amortization(LoanInput(100_000, 12, 12)).emi == 8884.88


def test_tiny_rate_approaches_straight_line():
    res = compute_amortization(LoanInput(120_000, 1e-9, 12))
    assert res.emi == pytest.approx(10_000.0, abs=0.01)
    assert res.schedule[-1].remaining_balance <= 0.01


@pytest.mark.parametrize("loan", LOANS)
def test_schedule_months_are_contiguous(loan):
    res = compute_amortization(loan)
    assert len(res.schedule) == loan.tenure_months
    assert [e.month for e in res.schedule] == list(range(1, loan.tenure_months + 1))


@pytest.mark.parametrize("loan", LOANS)
def test_schedule_balances_down_to_zero(loan):
    res = compute_amortization(loan)
    assert res.schedule[-1].remaining_balance <= 0.01
    assert all(e.remaining_balance >= 0 for e in res.schedule)


@pytest.mark.parametrize("loan", LOANS)
def test_principal_parts_repay_the_loan(loan):
    res = compute_amortization(loan)
    repaid = sum(e.principal_part for e in res.schedule)
    assert abs(repaid - loan.principal) <= loan.tenure_months * 0.005


@pytest.mark.parametrize("loan", LOANS)
def test_totals_are_consistent(loan):
    res = compute_amortization(loan)
    assert abs(res.emi * loan.tenure_months - res.total_amount) <= loan.tenure_months * 0.005 + 0.01
    assert res.total_amount == pytest.approx(loan.principal + res.total_interest, abs=0.01)


@pytest.mark.parametrize("loan", LOANS)
def test_payment_split_moves_towards_principal(loan):
    res = compute_amortization(loan)
    for prev, cur in zip(res.schedule, res.schedule[1:]):
        assert cur.principal_part >= prev.principal_part
        assert cur.interest_part <= prev.interest_part
    for e in res.schedule:
        assert 0 <= e.principal_percentage <= 100
        assert e.principal_percentage + e.interest_percentage == 100


def test_identical_input_gives_identical_output():
    loan = LoanInput(2_500_000, 8.5, 240)
    assert compute_amortization(loan) == compute_amortization(loan)


@pytest.mark.parametrize(
    "loan, field",
    [
        (LoanInput(0, 10, 12), "principal"),
        (LoanInput(-100, 10, 12), "principal"),
        (LoanInput(100_000, -5, 12), "annual_rate_pct"),
        (LoanInput(100_000, 0, 12), "annual_rate_pct"),
        (LoanInput(100_000, 10, 0), "tenure_months"),
        (LoanInput(100_000, 10, 12.5), "tenure_months"),
        (LoanInput(float("nan"), 10, 12), "principal"),
        (LoanInput(float("inf"), 10, 12), "principal"),
    ],
)
def test_invalid_input_names_the_field(loan, field):
    with pytest.raises(InvalidInput) as exc:
        compute_amortization(loan)
    assert exc.value.fields == [field]


def test_invalid_input_reports_every_field():
    with pytest.raises(InvalidInput) as exc:
        compute_amortization(LoanInput(0, -5, 0))
    assert exc.value.fields == ["principal", "annual_rate_pct", "tenure_months"]
    assert "principal: must be greater than 0" in str(exc.value)


def test_fixed_payment_rejects_bad_input():
    with pytest.raises(InvalidInput):
        fixed_monthly_payment(100_000, 10, 0)


def test_huge_principal_is_computed():
    principal = 1e26
    res = compute_amortization(LoanInput(principal, 10, 12))
    assert math.isclose(res.emi, 8791.5887e21, rel_tol=1e-5)
    assert math.isclose(res.total_amount, res.emi * 12, rel_tol=1e-9)
    assert len(res.schedule) == 12
    assert res.schedule[0].principal_percentage == 91
    # float spacing at 1e26 is ~1e10, so the residue scales with the principal
    assert 0 <= res.schedule[-1].remaining_balance <= principal * 1e-9


@pytest.mark.parametrize(
    "loan, field",
    [
        (LoanInput(100_000, 5e-324, 12), "annual_rate_pct"),
        (LoanInput(5e-324, 10, 12), "principal"),
    ],
)
def test_underflowing_inputs_are_rejected(loan, field):
    with pytest.raises(InvalidInput) as exc:
        compute_amortization(loan)
    assert exc.value.fields == [field]
