"""Utility functions for the amortization engine.

This module provides helpers for parsing user input into Python data types.
Inputs usually come straight from form fields or command-line options, so
every helper accepts free text as well as plain numbers and raises
``InvalidInputError`` naming the offending field when conversion fails.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation, getcontext
from typing import Any, Optional, Union

from .data_models import DEFAULT_LOAN_TYPE, LOAN_TYPES, LoanInputs
from .exceptions import InvalidInputError

getcontext().prec = 28  # increase decimal precision to avoid rounding errors

Number = Union[str, int, float, Decimal]


def decimal_from_str(value: Any, field: str = "value") -> Decimal:
    """Convert a numeric string (or number) into a finite ``Decimal``.

    The function strips whitespace and thousands separators. It raises
    ``InvalidInputError`` if conversion fails or the result is ``NaN`` or
    infinite.
    """
    if value is None or isinstance(value, bool):
        raise InvalidInputError(field, value)
    try:
        if isinstance(value, Decimal):
            result = value
        elif isinstance(value, (int, float)):
            result = Decimal(str(value))
        else:
            cleaned = str(value).strip().replace(",", "").replace("_", "")
            result = Decimal(cleaned)
    except (InvalidOperation, ValueError) as exc:
        raise InvalidInputError(field, value) from exc
    if not result.is_finite():
        raise InvalidInputError(field, value, f"{field} must be a finite number; got {value!r}")
    return result


def parse_amount(value: Any, field: str = "loan_amount") -> Decimal:
    """Parse a currency amount with optional shorthand.

    Accepts plain numbers (``"250000"``), thousands separators and a dollar
    sign (``"$250,000"``) and ``k``/``m`` suffixes (``"250k"`` meaning
    250 000).
    """
    if not isinstance(value, str):
        return decimal_from_str(value, field)
    text = value.strip().lower().lstrip("$")
    factor = Decimal(1)
    if text.endswith("k"):
        factor = Decimal(1_000)
        text = text[:-1]
    elif text.endswith("m"):
        factor = Decimal(1_000_000)
        text = text[:-1]
    return decimal_from_str(text, field) * factor if text else decimal_from_str(value, field)


def parse_percent(value: Any, field: str = "interest_rate") -> Decimal:
    """Parse an annual percentage such as ``"6.5"`` or ``"6.5%"``."""
    if isinstance(value, str):
        text = value.strip()
        if text.endswith("%"):
            text = text[:-1]
        return decimal_from_str(text, field)
    return decimal_from_str(value, field)


def parse_whole_number(value: Any, field: str, minimum: Optional[int] = None) -> int:
    """Parse an integral count of years.

    ``"20"`` and ``"20.0"`` are accepted, ``"12.5"`` is not.
    """
    number = decimal_from_str(value, field)
    if number != number.to_integral_value():
        raise InvalidInputError(field, value, f"{field} must be a whole number; got {value!r}")
    result = int(number)
    if minimum is not None and result < minimum:
        raise InvalidInputError(field, value, f"{field} must be at least {minimum}; got {value!r}")
    return result


def build_inputs(
    loan_amount: Number,
    interest_rate: Number,
    loan_term: Number,
    interest_only: bool = False,
    interest_only_period: Optional[Number] = None,
    loan_type: Optional[str] = None,
) -> LoanInputs:
    """Parse raw calculator fields into ``LoanInputs``.

    ``interest_only_period`` is only read when ``interest_only`` is set.
    """
    principal = parse_amount(loan_amount, "loan_amount")
    annual_rate = parse_percent(interest_rate, "interest_rate")
    term_years = parse_whole_number(loan_term, "loan_term", minimum=1)

    interest_only_years = 0
    if interest_only:
        interest_only_years = parse_whole_number(
            interest_only_period, "interest_only_period", minimum=0
        )

    if loan_type is not None and not isinstance(loan_type, str):
        raise InvalidInputError("loan_type", loan_type, f"Unknown loan type: {loan_type!r}")
    loan_type = (loan_type or DEFAULT_LOAN_TYPE).strip().lower()
    if loan_type not in LOAN_TYPES:
        raise InvalidInputError("loan_type", loan_type, f"Unknown loan type: {loan_type!r}")

    return LoanInputs(
        principal=principal,
        annual_rate=annual_rate,
        term_years=term_years,
        interest_only=bool(interest_only),
        interest_only_years=interest_only_years,
        loan_type=loan_type,
    )


def parse_flag(value: Any) -> bool:
    """Interpret a checkbox or JSON value as a boolean."""
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return str(value).strip().lower() in ("1", "true", "yes", "on")
