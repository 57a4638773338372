"""Core calculation engine for the loan calculator.

This module implements the financial logic required to build amortization
schedules for fully amortizing loans and for loans that start with an
interest-only period. Results are returned as a list of
``AmortizationEntry`` objects along with a ``CalculationResult``. The engine is
pure: it performs no I/O and keeps no state between calls.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation, Overflow, getcontext
from typing import Iterable, List, Optional, Tuple

from .data_models import (
    AmortizationEntry,
    CalculationResult,
    LoanInputs,
    RatePeriods,
    YearlySummary,
)
from .exceptions import DegenerateRateError, InvalidInputError, InvalidPeriodSplitError
from .logging import get_logger
from .utils import Number, build_inputs

getcontext().prec = 28  # increase precision for financial calculations

logger = get_logger(__name__)

ZERO = Decimal("0")
MONTHS_PER_YEAR = 12


def normalize(inputs: LoanInputs) -> RatePeriods:
    """Convert the annual rate and term into a monthly rate and period counts.

    Raises
    ------
    InvalidInputError
        If the term yields no payment periods.
    InvalidPeriodSplitError
        If the interest-only period is not shorter than the term.
    """
    monthly_rate = (inputs.annual_rate / Decimal(100)) / Decimal(MONTHS_PER_YEAR)
    total_months = inputs.term_years * MONTHS_PER_YEAR
    if total_months <= 0:
        raise InvalidInputError(
            "loan_term", inputs.term_years, f"loan_term must be positive; got {inputs.term_years!r}"
        )
    interest_only_months = inputs.interest_only_years * MONTHS_PER_YEAR if inputs.interest_only else 0
    if interest_only_months < 0:
        raise InvalidInputError(
            "interest_only_period",
            inputs.interest_only_years,
            f"interest_only_period must not be negative; got {inputs.interest_only_years!r}",
        )
    if interest_only_months >= total_months:
        raise InvalidPeriodSplitError(interest_only_months, total_months)
    return RatePeriods(
        monthly_rate=monthly_rate,
        total_months=total_months,
        interest_only_months=interest_only_months,
    )


def _calculate_annuity_payment(principal: Decimal, rate_per_month: Decimal, term: int) -> Decimal:
    """Return the annuity (equal installment) monthly payment for a loan.

    The formula is:

        payment = P * (i * (1 + i)^n) / ((1 + i)^n - 1)

    where ``P`` is the principal, ``i`` is the monthly interest rate and
    ``n`` is the number of payments. When the interest rate is zero, or so
    small that ``1 + i`` rounds to one, the payment simplifies to ``P / n``.
    """
    if rate_per_month == 0:
        return principal / Decimal(term)
    try:
        factor = (1 + rate_per_month) ** term
    except (Overflow, InvalidOperation) as exc:
        raise InvalidInputError(
            "interest_rate",
            rate_per_month * 1200,
            f"interest_rate is too large to amortize over {term} months",
        ) from exc
    if factor == 1:
        if rate_per_month > 0:
            return principal / Decimal(term)
        raise DegenerateRateError(
            f"Monthly rate {rate_per_month} makes the annuity formula undefined over {term} months"
        )
    return principal * (rate_per_month * factor) / (factor - 1)


def _amortize(
    balance: Decimal,
    payment: Decimal,
    rate_per_month: Decimal,
    first_month: int,
    last_month: int,
) -> List[AmortizationEntry]:
    """Apply a fixed payment to ``balance`` for months ``first_month..last_month``."""
    entries: List[AmortizationEntry] = []
    for month in range(first_month, last_month + 1):
        interest_payment = balance * rate_per_month
        principal_payment = payment - interest_payment
        balance -= principal_payment
        recorded = max(balance, ZERO)
        if month == last_month:
            # final period absorbs any residual drift
            recorded = ZERO
        entries.append(
            AmortizationEntry(
                month=month,
                payment=payment,
                principal=principal_payment,
                interest=interest_payment,
                balance=recorded,
            )
        )
    return entries


def standard_schedule(
    principal: Decimal, periods: RatePeriods
) -> Tuple[Decimal, List[AmortizationEntry]]:
    """Return the fixed payment and schedule of a fully amortizing loan."""
    payment = _calculate_annuity_payment(principal, periods.monthly_rate, periods.total_months)
    schedule = _amortize(principal, payment, periods.monthly_rate, 1, periods.total_months)
    return payment, schedule


def interest_only_schedule(
    principal: Decimal, periods: RatePeriods
) -> Tuple[Decimal, Decimal, List[AmortizationEntry]]:
    """Return the interest-only payment, the later amortizing payment and the schedule.

    The balance does not move during the interest-only phase, so the payment
    that follows amortizes the full principal over the remaining months.
    """
    rate = periods.monthly_rate
    interest_only_payment = principal * rate
    schedule = [
        AmortizationEntry(
            month=month,
            payment=interest_only_payment,
            principal=ZERO,
            interest=interest_only_payment,
            balance=principal,
        )
        for month in range(1, periods.interest_only_months + 1)
    ]
    amortizing_payment = _calculate_annuity_payment(principal, rate, periods.amortizing_months)
    schedule.extend(
        _amortize(
            principal,
            amortizing_payment,
            rate,
            periods.interest_only_months + 1,
            periods.total_months,
        )
    )
    return interest_only_payment, amortizing_payment, schedule


def calculate(inputs: LoanInputs) -> Tuple[List[AmortizationEntry], CalculationResult]:
    """Compute the amortization schedule and summary for a loan.

    Parameters
    ----------
    inputs: LoanInputs
        Parsed loan inputs.

    Returns
    -------
    schedule: List[AmortizationEntry]
        One entry per month, from month 1 to the last month of the term.
    result: CalculationResult
        Monthly payment, totals and, for interest-only loans, the
        interest-only payment.
    """
    periods = normalize(inputs)
    principal = inputs.principal

    interest_only_payment: Optional[Decimal] = None
    try:
        if periods.interest_only_months > 0:
            interest_only_payment, monthly_payment, schedule = interest_only_schedule(principal, periods)
        else:
            monthly_payment, schedule = standard_schedule(principal, periods)
        total_payment = sum((entry.payment for entry in schedule), ZERO)
        total_interest = total_payment - principal
    except (Overflow, InvalidOperation) as exc:
        raise InvalidInputError(
            "loan_amount", principal, f"loan_amount {principal} is too large to amortize"
        ) from exc

    result = CalculationResult(
        monthly_payment=monthly_payment,
        total_payment=total_payment,
        total_interest=total_interest,
        principal_paid=principal,
        total_months=periods.total_months,
        interest_only_payment=interest_only_payment,
        loan_type=inputs.loan_type,
    )
    logger.debug(
        "Calculated %s loan: principal=%s rate=%s%% months=%d interest_only_months=%d payment=%s",
        inputs.loan_type,
        principal,
        inputs.annual_rate,
        periods.total_months,
        periods.interest_only_months,
        monthly_payment,
    )
    return schedule, result


def calculate_loan(
    loan_amount: Number,
    interest_rate: Number,
    loan_term: Number,
    interest_only: bool = False,
    interest_only_period: Optional[Number] = None,
    loan_type: Optional[str] = None,
) -> Tuple[List[AmortizationEntry], CalculationResult]:
    """Parse raw calculator fields and compute the schedule in one step."""
    inputs = build_inputs(
        loan_amount,
        interest_rate,
        loan_term,
        interest_only=interest_only,
        interest_only_period=interest_only_period,
        loan_type=loan_type,
    )
    return calculate(inputs)


def aggregate_by_year(schedule: Iterable[AmortizationEntry]) -> List[YearlySummary]:
    """Roll the monthly schedule up into blocks of twelve months.

    The last block is shorter when the schedule length is not a multiple of
    twelve. The end balance of a block is the balance of its last entry.
    """
    entries = list(schedule)
    summaries: List[YearlySummary] = []
    for index in range(0, len(entries), MONTHS_PER_YEAR):
        block = entries[index:index + MONTHS_PER_YEAR]
        summaries.append(
            YearlySummary(
                year=index // MONTHS_PER_YEAR + 1,
                payment=sum((e.payment for e in block), ZERO),
                principal=sum((e.principal for e in block), ZERO),
                interest=sum((e.interest for e in block), ZERO),
                end_balance=block[-1].balance if block else ZERO,
            )
        )
    return summaries
