"""Tests for input parsing helpers."""

from decimal import Decimal

import pytest

from amortizer.exceptions import InvalidInputError
from amortizer.utils import (
    build_inputs,
    decimal_from_str,
    parse_amount,
    parse_flag,
    parse_percent,
    parse_whole_number,
)


class TestDecimalFromStr:
    def test_strips_separators(self) -> None:
        assert decimal_from_str(" 1,250.50 ") == Decimal("1250.50")

    def test_numbers(self) -> None:
        assert decimal_from_str(6.5) == Decimal("6.5")
        assert decimal_from_str(20) == Decimal(20)
        assert decimal_from_str(Decimal("3.25")) == Decimal("3.25")

    @pytest.mark.parametrize("value", ["abc", "", None, "inf", "-Infinity", "nan", float("nan"), True])
    def test_rejects(self, value) -> None:
        with pytest.raises(InvalidInputError) as excinfo:
            decimal_from_str(value, "loan_amount")
        assert excinfo.value.field == "loan_amount"
        assert excinfo.value.value is value


class TestParseAmount:
    @pytest.mark.parametrize(
        "text, expected",
        [
            ("250000", Decimal("250000")),
            ("$250,000", Decimal("250000")),
            ("250k", Decimal("250000")),
            ("1.5M", Decimal("1500000")),
        ],
    )
    def test_accepts(self, text, expected) -> None:
        assert parse_amount(text) == expected

    @pytest.mark.parametrize("text", ["k", "$", "12x"])
    def test_rejects(self, text) -> None:
        with pytest.raises(InvalidInputError):
            parse_amount(text)


def test_parse_percent() -> None:
    assert parse_percent("6.5%") == Decimal("6.5")
    assert parse_percent(" 7 ") == Decimal("7")


class TestParseWholeNumber:
    def test_integral_values(self) -> None:
        assert parse_whole_number("20", "loan_term") == 20
        assert parse_whole_number("20.0", "loan_term") == 20

    def test_fraction_rejected(self) -> None:
        with pytest.raises(InvalidInputError, match="whole number"):
            parse_whole_number("12.5", "loan_term")

    def test_minimum(self) -> None:
        with pytest.raises(InvalidInputError, match="at least 0"):
            parse_whole_number("-1", "interest_only_period", minimum=0)


class TestBuildInputs:
    def test_standard(self) -> None:
        inputs = build_inputs("250000", "6.5", "20")

        assert inputs.principal == Decimal("250000")
        assert inputs.annual_rate == Decimal("6.5")
        assert inputs.term_years == 20
        assert inputs.interest_only is False
        assert inputs.interest_only_years == 0
        assert inputs.loan_type == "conventional"

    def test_period_ignored_without_interest_only(self) -> None:
        inputs = build_inputs("250000", "6.5", "20", interest_only=False, interest_only_period="garbage")

        assert inputs.interest_only_years == 0

    def test_interest_only(self) -> None:
        inputs = build_inputs("100000", "5", "10", interest_only=True, interest_only_period="2", loan_type="Bridge")

        assert inputs.interest_only is True
        assert inputs.interest_only_years == 2
        assert inputs.loan_type == "bridge"

    @pytest.mark.parametrize("loan_type", [5, ["term"], 1.5])
    def test_non_string_loan_type(self, loan_type) -> None:
        with pytest.raises(InvalidInputError) as excinfo:
            build_inputs("100000", "5", "10", loan_type=loan_type)
        assert excinfo.value.field == "loan_type"


@pytest.mark.parametrize(
    "value, expected",
    [(True, True), (False, False), (None, False), ("1", True), ("on", True), ("true", True), ("0", False), ("", False)],
)
def test_parse_flag(value, expected) -> None:
    assert parse_flag(value) is expected
