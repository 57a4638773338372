"""Tests for output helpers."""

from decimal import Decimal

import pytest

from amortizer.engine import aggregate_by_year
from amortizer.formatter import (
    format_currency,
    print_comparison,
    print_schedule,
    print_summary,
    print_yearly,
    serialize_result,
    serialize_schedule,
    serialize_yearly,
)


@pytest.mark.parametrize(
    "value, digits, expected",
    [
        (Decimal("1863.9327"), 2, "$1,863.93"),
        (Decimal("1863.9327"), 0, "$1,864"),
        (250000, 2, "$250,000.00"),
        (-5, 2, "-$5.00"),
        (-0.001, 2, "$0.00"),
    ],
)
def test_format_currency(value, digits, expected) -> None:
    assert format_currency(value, digits) == expected


def test_print_summary_standard(standard_loan, capsys) -> None:
    _, result = standard_loan
    print_summary(result)
    out = capsys.readouterr().out

    assert "Conventional Loan" in out
    assert "Monthly payment" in out
    assert "Interest-only pay." not in out
    assert "Payments           : 240" in out


def test_print_summary_interest_only(interest_only_loan, capsys) -> None:
    _, result = interest_only_loan
    print_summary(result)
    out = capsys.readouterr().out

    assert "Interest-only pay. : 416.67" in out
    assert "P&I payment" in out


def test_print_schedule_and_yearly(interest_only_loan, capsys) -> None:
    schedule, _ = interest_only_loan
    print_schedule(schedule[:2])
    print_yearly(aggregate_by_year(schedule))
    lines = capsys.readouterr().out.splitlines()

    assert lines[0] == "Month\tPayment\tPrincipal\tInterest\tBalance"
    assert lines[1] == "1\t416.67\t0.00\t416.67\t100000.00"
    assert lines[3].startswith("Year\t")
    assert len(lines) == 3 + 1 + 10


def test_print_comparison(standard_loan, interest_only_loan, capsys) -> None:
    print_comparison(standard_loan[1], interest_only_loan[1])
    out = capsys.readouterr().out

    assert "monthly_payment" in out
    assert "total_interest" in out
    assert "total_months" in out


def test_serialize_result(standard_loan, interest_only_loan) -> None:
    standard = serialize_result(standard_loan[1])
    interest_only = serialize_result(interest_only_loan[1])

    assert "interest_only_payment" not in standard
    assert standard["total_months"] == 240
    assert isinstance(standard["monthly_payment"], float)
    assert interest_only["interest_only_payment"] == pytest.approx(416.6667, abs=1e-4)


def test_serialize_schedule_and_yearly(standard_loan) -> None:
    schedule, _ = standard_loan
    rows = serialize_schedule(schedule)
    years = serialize_yearly(aggregate_by_year(schedule))

    assert len(rows) == 240
    assert set(rows[0]) == {"month", "payment", "principal", "interest", "balance"}
    assert rows[-1]["balance"] == 0.0
    assert len(years) == 20
    assert years[0]["year"] == 1
