from __future__ import annotations

import logging
import math
import numbers
from dataclasses import dataclass
from typing import Dict, Final, List, Tuple

import pandas as pd

from .utils import round_half_up


logger = logging.getLogger(__name__)

MONTHS_IN_YEAR: Final[int] = 12

SCHEDULE_COLUMNS: Final[List[str]] = [
    "month",
    "principal_part",
    "interest_part",
    "remaining_balance",
    "principal_percentage",
    "interest_percentage",
]


class InvalidInput(ValueError):
    """Raised when loan inputs fail validation.

    ``errors`` maps each failing field to its messages.
    """

    def __init__(self, errors: Dict[str, List[str]]):
        self.errors = {field: list(messages) for field, messages in errors.items()}
        super().__init__(
            "; ".join(f"{field}: {msg}" for field, messages in self.errors.items() for msg in messages)
        )

    @property
    def fields(self) -> List[str]:
        return list(self.errors)


@dataclass(frozen=True)
class LoanInput:
    principal: float
    annual_rate_pct: float  # percent, e.g. 10 for 10%
    tenure_months: int


@dataclass(frozen=True)
class MonthlyEntry:
    month: int
    principal_part: float
    interest_part: float
    remaining_balance: float
    principal_percentage: int

    @property
    def interest_percentage(self) -> int:
        return 100 - self.principal_percentage


@dataclass(frozen=True)
class AmortizationResult:
    emi: float
    total_interest: float
    total_amount: float
    schedule: Tuple[MonthlyEntry, ...]

    def to_frame(self) -> pd.DataFrame:
        return schedule_frame(self)


def _check_loan(loan: LoanInput) -> None:
    errors: Dict[str, List[str]] = {}

    def positive(field: str, value: object) -> None:
        if isinstance(value, bool) or not isinstance(value, numbers.Real):
            errors[field] = ["must be a number"]
        elif not math.isfinite(value):
            errors[field] = ["must be a finite number"]
        elif not value > 0:
            errors[field] = ["must be greater than 0"]

    positive("principal", loan.principal)
    positive("annual_rate_pct", loan.annual_rate_pct)
    positive("tenure_months", loan.tenure_months)
    if "tenure_months" not in errors and not isinstance(loan.tenure_months, numbers.Integral):
        errors["tenure_months"] = ["must be a whole number of months"]

    if errors:
        raise InvalidInput(errors)


def fixed_monthly_payment(principal: float, annual_rate_pct: float, tenure_months: int) -> float:
    """Unrounded EMI for a fully amortizing loan.

    Parameters
    ----------
    principal : float
        Loan amount.
    annual_rate_pct : float
        Nominal annual interest rate in percent (e.g., 10 for 10%).
    tenure_months : int
        Number of monthly installments.

    Returns
    -------
    float
        ``P * r * g / (g - 1)`` with ``r = rate / 1200`` and ``g = (1 + r) ** n``.
    """
    _check_loan(LoanInput(principal, annual_rate_pct, tenure_months))
    monthly_rate = annual_rate_pct / (MONTHS_IN_YEAR * 100)
    if monthly_rate == 0:
        raise InvalidInput({"annual_rate_pct": ["is too small to give a non-zero monthly rate"]})
    # g / (g - 1) == 1 / (1 - g**-1); log1p/expm1 keep it finite for tiny and huge rates
    emi = principal * monthly_rate / -math.expm1(-tenure_months * math.log1p(monthly_rate))
    if emi == 0:
        raise InvalidInput({"principal": ["is too small to give a non-zero installment"]})
    return emi


def compute_amortization(loan: LoanInput) -> AmortizationResult:
    """Compute the EMI, totals and the month-by-month schedule.

    The running balance is carried at full precision; each schedule entry and
    the three totals are rounded to 2 decimals (half away from zero) only when
    they are recorded.
    """
    _check_loan(loan)
    principal = float(loan.principal)
    n_months = int(loan.tenure_months)
    monthly_rate = loan.annual_rate_pct / (MONTHS_IN_YEAR * 100)

    emi = fixed_monthly_payment(principal, loan.annual_rate_pct, n_months)
    total_interest = emi * n_months - principal
    total_amount = principal + total_interest

    entries = []
    balance = principal
    for m in range(1, n_months + 1):
        interest = balance * monthly_rate
        principal_component = emi - interest
        balance -= principal_component

        entries.append(
            MonthlyEntry(
                month=m,
                principal_part=round_half_up(principal_component, 2),
                interest_part=round_half_up(interest, 2),
                remaining_balance=round_half_up(max(balance, 0.0), 2),
                principal_percentage=int(round_half_up(principal_component / emi * 100, 0)),
            )
        )

    logger.debug(
        "EMI %.6f over %d months (principal=%s, rate=%s%%)",
        emi,
        n_months,
        principal,
        loan.annual_rate_pct,
    )
    return AmortizationResult(
        emi=round_half_up(emi, 2),
        total_interest=round_half_up(total_interest, 2),
        total_amount=round_half_up(total_amount, 2),
        schedule=tuple(entries),
    )


def schedule_frame(result: AmortizationResult) -> pd.DataFrame:
    """Monthly schedule as a DataFrame.

    Columns: month, principal_part, interest_part, remaining_balance,
    principal_percentage, interest_percentage
    """
    rows = [
        {
            "month": e.month,
            "principal_part": e.principal_part,
            "interest_part": e.interest_part,
            "remaining_balance": e.remaining_balance,
            "principal_percentage": e.principal_percentage,
            "interest_percentage": e.interest_percentage,
        }
        for e in result.schedule
    ]
    return pd.DataFrame(rows, columns=SCHEDULE_COLUMNS)


def aggregate_yearly(schedule: pd.DataFrame) -> pd.DataFrame:
    """Aggregate a monthly schedule by loan year.

    Returns a DataFrame with columns: year, principal_part, interest_part, payment, end_balance
    """
    if schedule.empty:
        return pd.DataFrame(
            columns=["year", "principal_part", "interest_part", "payment", "end_balance"],
            data=[],
        )

    schedule = schedule.copy()
    schedule["year"] = (schedule["month"] - 1) // MONTHS_IN_YEAR + 1
    schedule["payment"] = schedule["principal_part"] + schedule["interest_part"]
    agg = (
        schedule.groupby("year", as_index=False)[["principal_part", "interest_part", "payment"]]
        .sum()
        .sort_values("year")
    )
    # Balance left at the last month of each year
    end_balances = (
        schedule.groupby("year", as_index=False)["remaining_balance"]
        .last()
        .rename(columns={"remaining_balance": "end_balance"})
    )
    return agg.merge(end_balances, on="year", how="left")
