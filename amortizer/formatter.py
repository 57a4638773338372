"""Output helpers for the loan calculator.

This module provides simple functions to render calculation results,
amortization schedules and yearly summaries in a tabular text format, and to
turn them into JSON-serialisable dictionaries for exports and the web API.
Rounding happens here and only here; the engine keeps full precision.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, Iterable, List, Union

from .data_models import AmortizationEntry, CalculationResult, YearlySummary


def format_currency(value: Union[Decimal, float, int], digits: int = 2) -> str:
    """Format ``value`` as US dollars, e.g. ``$1,863.93`` or ``-$5``."""
    amount = float(value)
    sign = "-" if amount < 0 and round(abs(amount), digits) != 0 else ""
    return f"{sign}${abs(amount):,.{digits}f}"


def print_summary(result: CalculationResult) -> None:
    """Print a summary of loan metrics in a human‑readable format."""
    print("Summary")
    print("-" * 72)
    print(f"Loan type          : {result.loan_type_label}")
    print(f"Principal          : {result.principal_paid:.2f}")
    if result.interest_only_payment is not None:
        print(f"Interest-only pay. : {result.interest_only_payment:.2f}")
        print(f"P&I payment        : {result.monthly_payment:.2f}")
    else:
        print(f"Monthly payment    : {result.monthly_payment:.2f}")
    print(f"Total payment      : {result.total_payment:.2f}")
    print(f"Total interest     : {result.total_interest:.2f}")
    print(f"Payments           : {result.total_months}")
    print("-" * 72)


def print_schedule(schedule: Iterable[AmortizationEntry]) -> None:
    """Print the monthly amortization schedule as a simple table."""
    headers = ["Month", "Payment", "Principal", "Interest", "Balance"]
    print("\t".join(headers))
    for entry in schedule:
        row = [
            str(entry.month),
            f"{entry.payment:.2f}",
            f"{entry.principal:.2f}",
            f"{entry.interest:.2f}",
            f"{entry.balance:.2f}",
        ]
        print("\t".join(row))


def print_yearly(summaries: Iterable[YearlySummary]) -> None:
    """Print the yearly roll-up of a schedule."""
    print("\t".join(["Year", "Payment", "Principal", "Interest", "EndBal"]))
    for year in summaries:
        print(
            "\t".join(
                [
                    str(year.year),
                    f"{year.payment:.2f}",
                    f"{year.principal:.2f}",
                    f"{year.interest:.2f}",
                    f"{year.end_balance:.2f}",
                ]
            )
        )


def print_comparison(r1: CalculationResult, r2: CalculationResult) -> None:
    """Print a comparison of two loan results side by side.

    The difference column is scenario2 - scenario1, so a negative value means
    the second scenario is cheaper.
    """
    print("Comparison")
    print("=" * 72)
    keys = [
        "monthly_payment",
        "total_payment",
        "total_interest",
    ]
    print(f"{'Metric':20s} {'Scenario1':>15s} {'Scenario2':>15s} {'Difference':>15s}")
    for key in keys:
        v1 = getattr(r1, key)
        v2 = getattr(r2, key)
        diff = v2 - v1
        print(f"{key:20s} {v1:15.2f} {v2:15.2f} {diff:15.2f}")
    print(f"{'total_months':20s} {r1.total_months:15d} {r2.total_months:15d} {r2.total_months - r1.total_months:15d}")
    print("=" * 72)


def serialize_result(result: CalculationResult) -> Dict[str, Any]:
    data: Dict[str, Any] = {
        "loan_type": result.loan_type,
        "loan_type_label": result.loan_type_label,
        "monthly_payment": float(result.monthly_payment),
        "total_payment": float(result.total_payment),
        "total_interest": float(result.total_interest),
        "principal_paid": float(result.principal_paid),
        "total_months": result.total_months,
    }
    if result.interest_only_payment is not None:
        data["interest_only_payment"] = float(result.interest_only_payment)
    return data


def serialize_schedule(schedule: Iterable[AmortizationEntry]) -> List[Dict[str, Any]]:
    """Convert schedule entries into JSON-serialisable dictionaries."""
    return [
        {
            "month": entry.month,
            "payment": float(entry.payment),
            "principal": float(entry.principal),
            "interest": float(entry.interest),
            "balance": float(entry.balance),
        }
        for entry in schedule
    ]


def serialize_yearly(summaries: Iterable[YearlySummary]) -> List[Dict[str, Any]]:
    return [
        {
            "year": year.year,
            "payment": float(year.payment),
            "principal": float(year.principal),
            "interest": float(year.interest),
            "end_balance": float(year.end_balance),
        }
        for year in summaries
    ]
