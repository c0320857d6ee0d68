from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional

from ..config import (
    DEFAULT_MONTHS,
    DEFAULT_PRINCIPAL,
    DEFAULT_RATE_PCT,
    DEFAULT_YEARS,
    MAX_MONTHS_FIELD,
)
from .amortization import MONTHS_IN_YEAR, InvalidInput, LoanInput


logger = logging.getLogger(__name__)


@dataclass
class LoanForm:
    """Loan form values as entered; ``None`` marks a missing or unparsable field."""

    principal: Optional[float] = None
    years: Optional[int] = 0
    months: Optional[int] = 0
    rate: Optional[float] = None  # annual, percent


def default_form() -> LoanForm:
    return LoanForm(
        principal=DEFAULT_PRINCIPAL,
        years=DEFAULT_YEARS,
        months=DEFAULT_MONTHS,
        rate=DEFAULT_RATE_PCT,
    )


def _parse_float(text: Optional[str]) -> Optional[float]:
    if text is None or not str(text).strip():
        return None
    try:
        value = float(str(text).strip())
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def _parse_int(text: Optional[str], blank: int = 0) -> Optional[int]:
    if text is None or not str(text).strip():
        return blank
    try:
        return int(str(text).strip())
    except ValueError:
        return None


def parse_form(raw: Mapping[str, str]) -> LoanForm:
    """Read the text fields ``principal``, ``years``, ``months`` and ``rate``.

    Blank years/months count as 0. Text that is not a number becomes ``None``
    and is reported by :func:`validate_form`.
    """
    return LoanForm(
        principal=_parse_float(raw.get("principal")),
        years=_parse_int(raw.get("years")),
        months=_parse_int(raw.get("months")),
        rate=_parse_float(raw.get("rate")),
    )


def tenure_months(years: int, months: int) -> int:
    return years * MONTHS_IN_YEAR + months


def validate_form(form: LoanForm) -> Dict[str, List[str]]:
    """Field-level error messages; an empty dict means the form is valid."""
    errors: Dict[str, List[str]] = {}

    def add(field: str, message: str) -> None:
        errors.setdefault(field, []).append(message)

    if form.principal is None or form.principal <= 0:
        add("principal", "Principal amount must be positive")

    if form.years is None:
        add("years", "Years must be a whole number")
    elif form.years < 0:
        add("years", "Years must be 0 or greater")

    if form.months is None:
        add("months", "Months must be a whole number")
    elif form.months < 0 or form.months > MAX_MONTHS_FIELD:
        add("months", f"Months must be between 0 and {MAX_MONTHS_FIELD}")

    if form.years == 0 and form.months == 0:
        add("years", "Total tenure must be greater than 0")
        add("months", "Total tenure must be greater than 0")

    if form.rate is None or form.rate <= 0:
        add("rate", "Interest rate must be positive")

    return errors


def build_loan_input(form: LoanForm) -> LoanInput:
    """Validate ``form`` and convert it to engine input.

    Raises
    ------
    InvalidInput
        With the messages of :func:`validate_form`.
    """
    errors = validate_form(form)
    if errors:
        logger.info("Rejected loan form: %s", errors)
        raise InvalidInput(errors)
    return LoanInput(
        principal=float(form.principal),
        annual_rate_pct=float(form.rate),
        tenure_months=tenure_months(form.years, form.months),
    )
