from .amortization import (
    AmortizationResult,
    InvalidInput,
    LoanInput,
    MonthlyEntry,
    aggregate_yearly,
    compute_amortization,
    fixed_monthly_payment,
    schedule_frame,
)
from .inputs import LoanForm, build_loan_input, default_form, parse_form, tenure_months, validate_form
from .utils import format_compact_currency, format_currency, round_half_up, tenure_label

__all__ = [
    "AmortizationResult",
    "InvalidInput",
    "LoanInput",
    "MonthlyEntry",
    "aggregate_yearly",
    "compute_amortization",
    "fixed_monthly_payment",
    "schedule_frame",
    "LoanForm",
    "build_loan_input",
    "default_form",
    "parse_form",
    "tenure_months",
    "validate_form",
    "format_compact_currency",
    "format_currency",
    "round_half_up",
    "tenure_label",
]
