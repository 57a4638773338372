"""Loan amortization engine with interest-only support."""

from .data_models import (
    LOAN_TYPES,
    AmortizationEntry,
    CalculationResult,
    LoanInputs,
    RatePeriods,
    YearlySummary,
)
from .engine import aggregate_by_year, calculate, calculate_loan, normalize
from .exceptions import (
    DegenerateRateError,
    InvalidInputError,
    InvalidPeriodSplitError,
    LoanCalcError,
)
from .utils import build_inputs

__all__ = [
    "LOAN_TYPES",
    "AmortizationEntry",
    "CalculationResult",
    "LoanInputs",
    "RatePeriods",
    "YearlySummary",
    "aggregate_by_year",
    "build_inputs",
    "calculate",
    "calculate_loan",
    "normalize",
    "DegenerateRateError",
    "InvalidInputError",
    "InvalidPeriodSplitError",
    "LoanCalcError",
]
