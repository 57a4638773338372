"""Exception hierarchy for the amortization engine.

Every error derives from ``ValueError`` so callers that only care about "bad
input" can keep catching that, while the surfaces (CLI and web) can tell the
individual failures apart.
"""

from __future__ import annotations

from typing import Any, Optional


class LoanCalcError(ValueError):
    """Base exception for all calculation errors."""


class InvalidInputError(LoanCalcError):
    """Raised when a loan field cannot be parsed into a usable number."""

    def __init__(self, field: str, value: Any = None, reason: Optional[str] = None) -> None:
        self.field = field
        self.value = value
        message = reason or f"Invalid value for {field}: {value!r}"
        super().__init__(message)


class DegenerateRateError(LoanCalcError):
    """Raised when the annuity formula has a zero denominator for a non-zero rate."""


class InvalidPeriodSplitError(LoanCalcError):
    """Raised when the interest-only period leaves no months to amortize."""

    def __init__(self, interest_only_months: int, total_months: int) -> None:
        self.interest_only_months = interest_only_months
        self.total_months = total_months
        super().__init__(
            f"Interest-only period ({interest_only_months} months) must be shorter "
            f"than the loan term ({total_months} months)"
        )


class ConfigurationError(LoanCalcError):
    """Raised when application configuration is invalid."""
