"""Data models for the amortization engine.

This module defines dataclasses representing the entities used by the
calculator: the parsed loan inputs, the normalized rate and period counts,
individual schedule entries, the calculation result and the yearly roll-up
shown next to the monthly table. All of them are transient values; nothing
here is persisted.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional


LOAN_TYPES = {
    "conventional": "Conventional Loan",
    "sba7a": "SBA 7(a) Loan",
    "sba504": "SBA 504 Loan",
    "sbaexpress": "SBA Express Loan",
    "bridge": "Bridge Loan",
    "term": "Term Loan",
    "loc": "Business Line of Credit",
    "equipment": "Equipment Financing",
    "invoice": "Invoice Factoring",
    "working": "Working Capital Loan",
    "refinance": "Refinance",
    "usda": "USDA B&I Loan",
}

DEFAULT_LOAN_TYPE = "conventional"


@dataclass
class LoanInputs:
    """User inputs for a single calculation.

    Attributes
    ----------
    principal: Decimal
        The amount borrowed.
    annual_rate: Decimal
        Annual nominal interest rate in percent (``Decimal("6.5")`` is 6.5 %).
    term_years: int
        Loan term in whole years.
    interest_only: bool
        Whether the loan starts with an interest-only period.
    interest_only_years: int
        Length of the interest-only period. Ignored unless ``interest_only``.
    loan_type: str
        Key into ``LOAN_TYPES``. Carried through for display only.
    """

    principal: Decimal
    annual_rate: Decimal
    term_years: int
    interest_only: bool = False
    interest_only_years: int = 0
    loan_type: str = DEFAULT_LOAN_TYPE


@dataclass
class RatePeriods:
    """Monthly rate and period counts derived from ``LoanInputs``."""

    monthly_rate: Decimal
    total_months: int
    interest_only_months: int = 0

    @property
    def amortizing_months(self) -> int:
        return self.total_months - self.interest_only_months


@dataclass
class AmortizationEntry:
    """One month of the schedule.

    During the interest-only phase ``principal`` is zero and ``balance`` stays
    at the original principal.
    """

    month: int
    payment: Decimal
    principal: Decimal
    interest: Decimal
    balance: Decimal


@dataclass
class CalculationResult:
    """Aggregate figures for a calculated loan.

    ``monthly_payment`` is the fully amortizing payment. For interest-only
    loans it is the payment due after the interest-only period, and
    ``interest_only_payment`` holds the payment due during it.
    """

    monthly_payment: Decimal
    total_payment: Decimal
    total_interest: Decimal
    principal_paid: Decimal
    total_months: int
    interest_only_payment: Optional[Decimal] = None
    loan_type: str = DEFAULT_LOAN_TYPE

    @property
    def loan_type_label(self) -> str:
        return LOAN_TYPES.get(self.loan_type, self.loan_type)


@dataclass
class YearlySummary:
    """Sums over a block of up to twelve schedule entries."""

    year: int
    payment: Decimal
    principal: Decimal
    interest: Decimal
    end_balance: Decimal
