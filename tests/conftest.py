"""Shared fixtures for the amortizer test suite."""

import logging

import pytest

from amortizer.engine import calculate_loan


def annuity(principal: float, annual_rate_percent: float, months: int) -> float:
    """Closed-form monthly payment in plain floats, for cross-checking."""
    r = annual_rate_percent / 100 / 12
    if r == 0:
        return principal / months
    factor = (1 + r) ** months
    return principal * r * factor / (factor - 1)


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Undo handler changes made by setup_logging during a test."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def standard_loan():
    """250 000 at 6.5 % over 20 years."""
    return calculate_loan("250000", "6.5", "20")


@pytest.fixture
def interest_only_loan():
    """100 000 at 5 % over 10 years, the first 2 interest-only."""
    return calculate_loan("100000", "5", "10", interest_only=True, interest_only_period="2")
