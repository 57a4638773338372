"""Command‑line interface for the loan calculator.

This module uses the ``click`` library to implement a multi‑command
interface. Users can compute full amortization schedules, view summaries or
compare two loan scenarios. Results can be printed to the terminal or
exported to JSON/CSV files.
"""

from __future__ import annotations

import csv
import json
import shlex
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import click

from .config import AppConfig, LOG_FORMATS
from .data_models import AmortizationEntry, CalculationResult, DEFAULT_LOAN_TYPE, LOAN_TYPES
from .engine import aggregate_by_year, calculate_loan
from .exceptions import InvalidInputError, LoanCalcError
from .formatter import (
    print_comparison,
    print_schedule,
    print_summary,
    print_yearly,
    serialize_result,
    serialize_schedule,
    serialize_yearly,
)
from .logging import get_logger, setup_logging

logger = get_logger(__name__)

DEFAULT_INTEREST_ONLY_YEARS = "5"

# option name in the CLI -> parameter of ``calculate_loan``
SCENARIO_OPTIONS = {
    "-p": "loan_amount",
    "--principal": "loan_amount",
    "-r": "interest_rate",
    "--rate": "interest_rate",
    "-t": "loan_term",
    "--term": "loan_term",
    "-i": "interest_only_period",
    "--interest-only-years": "interest_only_period",
    "--type": "loan_type",
}


def run_calculation(
    principal: str,
    rate: str,
    term: str,
    interest_only: bool = False,
    interest_only_years: Optional[str] = None,
    loan_type: str = DEFAULT_LOAN_TYPE,
) -> Tuple[List[AmortizationEntry], CalculationResult]:
    """Run the engine and turn calculation errors into ``click`` errors."""
    try:
        return calculate_loan(
            principal,
            rate,
            term,
            interest_only=interest_only,
            interest_only_period=interest_only_years,
            loan_type=loan_type,
        )
    except InvalidInputError as exc:
        logger.warning("Rejected input for %s: %s", exc.field, exc)
        raise click.BadParameter(str(exc), param_hint=exc.field)
    except LoanCalcError as exc:
        logger.warning("Rejected loan: %s", exc)
        raise click.UsageError(str(exc))


def export_to_json(
    path: Path, schedule: List[AmortizationEntry], result: CalculationResult
) -> None:
    """Export summary, yearly roll-up and schedule to a JSON file."""
    data = {
        "summary": serialize_result(result),
        "yearly": serialize_yearly(aggregate_by_year(schedule)),
        "schedule": serialize_schedule(schedule),
    }
    with path.open("w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)


def write_schedule_csv(stream: Any, schedule: List[AmortizationEntry]) -> None:
    """Write the schedule as CSV rows to an open text stream."""
    writer = csv.writer(stream)
    writer.writerow(["Month", "Payment", "Principal", "Interest", "Balance"])
    for e in schedule:
        writer.writerow(
            [
                e.month,
                float(e.payment),
                float(e.principal),
                float(e.interest),
                float(e.balance),
            ]
        )


def export_to_csv(path: Path, schedule: List[AmortizationEntry]) -> None:
    """Export schedule to a CSV file."""
    with path.open("w", newline="", encoding="utf-8") as f:
        write_schedule_csv(f, schedule)


def parse_scenario_opts(opts: str) -> Dict[str, Any]:
    """Convert a quoted scenario option string into ``calculate_loan`` arguments.

    Example: ``"-p 250k -r 6.5 -t 20 --interest-only -i 5"``.
    """
    tokens = shlex.split(opts)
    params: Dict[str, Any] = {
        "loan_amount": None,
        "interest_rate": None,
        "loan_term": None,
        "interest_only": False,
        "interest_only_period": DEFAULT_INTEREST_ONLY_YEARS,
        "loan_type": DEFAULT_LOAN_TYPE,
    }
    i = 0
    while i < len(tokens):
        token = tokens[i]
        if token == "--interest-only":
            params["interest_only"] = True
        elif token == "--no-interest-only":
            params["interest_only"] = False
        elif token in SCENARIO_OPTIONS:
            i += 1
            if i >= len(tokens):
                raise click.BadParameter(f"Option {token} in scenario requires a value")
            params[SCENARIO_OPTIONS[token]] = tokens[i]
        else:
            raise click.BadParameter(f"Unknown option in scenario: {token}")
        i += 1
    for name, flag in (("loan_amount", "--principal"), ("interest_rate", "--rate"), ("loan_term", "--term")):
        if params[name] is None:
            raise click.BadParameter(f"Scenario missing required option {flag}")
    return params


def loan_options(func):
    """Attach the options shared by ``schedule`` and ``summary``."""
    options = [
        click.option("--principal", "-p", "principal", required=True, help="Loan amount (e.g. 250000 or 250k)"),
        click.option("--rate", "-r", "rate", required=True, help="Annual interest rate (percent)"),
        click.option("--term", "-t", "term", required=True, help="Loan term in years"),
        click.option(
            "--interest-only/--no-interest-only",
            "interest_only",
            default=False,
            help="Start with an interest-only period",
        ),
        click.option(
            "--interest-only-years",
            "-i",
            "interest_only_years",
            default=DEFAULT_INTEREST_ONLY_YEARS,
            show_default=True,
            help="Length of the interest-only period in years",
        ),
        click.option(
            "--type",
            "loan_type",
            type=click.Choice(sorted(LOAN_TYPES)),
            default=DEFAULT_LOAN_TYPE,
            show_default=True,
            help="Loan product",
        ),
    ]
    for option in reversed(options):
        func = option(func)
    return func


@click.group()
@click.option(
    "--log-level",
    "log_level",
    default=None,
    help="Logging level (defaults to LOG_LEVEL or INFO)",
)
@click.option(
    "--log-format",
    "log_format",
    type=click.Choice(LOG_FORMATS),
    default=None,
    help="Log output format (defaults to LOG_FORMAT or standard)",
)
@click.pass_context
def cli(ctx: click.Context, log_level: Optional[str], log_format: Optional[str]) -> None:
    """A command‑line loan amortization calculator."""
    config = AppConfig.from_env()
    setup_logging(log_level or config.log_level, log_format or config.log_format)
    ctx.obj = config


@cli.command()
@loan_options
@click.option("--yearly", "yearly", is_flag=True, help="Show the yearly summary instead of monthly rows")
@click.option("--output", "output", type=str, help="Output file path (.json or .csv)")
@click.pass_obj
def schedule(
    config: AppConfig,
    principal: str,
    rate: str,
    term: str,
    interest_only: bool,
    interest_only_years: str,
    loan_type: str,
    yearly: bool,
    output: Optional[str],
) -> None:
    """Compute and print the full amortization schedule."""
    schedule_entries, result = run_calculation(
        principal, rate, term, interest_only, interest_only_years, loan_type
    )
    if output:
        path = Path(output)
        if path.suffix.lower() == ".json":
            export_to_json(path, schedule_entries, result)
            click.echo(f"Schedule exported to {path}")
        elif path.suffix.lower() == ".csv":
            export_to_csv(path, schedule_entries)
            click.echo(f"Schedule exported to {path}")
        else:
            raise click.BadParameter("Unsupported output format; use .json or .csv")
        return

    print_summary(result)
    if yearly:
        print_yearly(aggregate_by_year(schedule_entries))
        return
    # Limit schedule length printed to avoid flooding the terminal
    max_rows = config.preview_rows
    if len(schedule_entries) > max_rows:
        click.echo(f"Schedule has {len(schedule_entries)} rows; showing first {max_rows} rows.")
        print_schedule(schedule_entries[:max_rows])
    else:
        print_schedule(schedule_entries)


@cli.command()
@loan_options
@click.option("--output", "output", type=str, help="Output file path (.json)")
def summary(
    principal: str,
    rate: str,
    term: str,
    interest_only: bool,
    interest_only_years: str,
    loan_type: str,
    output: Optional[str],
) -> None:
    """Compute and print only the summary metrics for a loan."""
    _, result = run_calculation(principal, rate, term, interest_only, interest_only_years, loan_type)
    if output:
        path = Path(output)
        if path.suffix.lower() != ".json":
            raise click.BadParameter("Summary export must use .json extension")
        with path.open("w", encoding="utf-8") as f:
            json.dump({"summary": serialize_result(result)}, f, indent=2)
        click.echo(f"Summary exported to {path}")
    else:
        print_summary(result)


@cli.command()
@click.option("--scenario1", "scenario1", required=True, help="First scenario options quoted string")
@click.option("--scenario2", "scenario2", required=True, help="Second scenario options quoted string")
def compare(scenario1: str, scenario2: str) -> None:
    """Compare two loan scenarios.

    Scenarios are provided as quoted option strings, for example:

        amortizer compare --scenario1 "-p 250k -r 6.5 -t 20" --scenario2 "-p 250k -r 6.5 -t 20 --interest-only -i 5"
    """
    params1 = parse_scenario_opts(scenario1)
    params2 = parse_scenario_opts(scenario2)
    _, result1 = run_calculation(
        params1["loan_amount"],
        params1["interest_rate"],
        params1["loan_term"],
        params1["interest_only"],
        params1["interest_only_period"],
        params1["loan_type"],
    )
    _, result2 = run_calculation(
        params2["loan_amount"],
        params2["interest_rate"],
        params2["loan_term"],
        params2["interest_only"],
        params2["interest_only_period"],
        params2["loan_type"],
    )
    print_comparison(result1, result2)


if __name__ == "__main__":
    cli()
