import io

from flask import Flask, Response, jsonify, render_template, request

from amortizer.config import AppConfig
from amortizer.data_models import DEFAULT_LOAN_TYPE, LOAN_TYPES
from amortizer.engine import aggregate_by_year, calculate_loan
from amortizer.exceptions import InvalidInputError, LoanCalcError
from amortizer.formatter import format_currency, serialize_result, serialize_schedule, serialize_yearly
from amortizer.logging import get_logger, setup_logging
from amortizer.main import write_schedule_csv
from amortizer.utils import parse_flag

config = AppConfig.from_env()
setup_logging(config.log_level, config.log_format)
logger = get_logger(__name__)

app = Flask(__name__)
app.config["ASSET_VERSION"] = config.asset_version
app.config["PREVIEW_ROWS"] = config.preview_rows
app.secret_key = config.secret_key
app.jinja_env.filters["currency"] = format_currency

# Initial values of the calculator form
FORM_DEFAULTS = {
    "loanAmount": "250000",
    "interestRate": "6.5",
    "loanTerm": "20",
    "interestOnly": False,
    "interestOnlyPeriod": "5",
    "loanType": DEFAULT_LOAN_TYPE,
}


def _form_values(form) -> dict:
    values = {}
    for key in ("loanAmount", "interestRate", "loanTerm", "interestOnlyPeriod", "loanType"):
        value = form.get(key)
        values[key] = value.strip() if isinstance(value, str) else value
    values["interestOnly"] = parse_flag(form.get("interestOnly"))
    return values


def _run_calculation(values: dict):
    return calculate_loan(
        values["loanAmount"],
        values["interestRate"],
        values["loanTerm"],
        interest_only=values["interestOnly"],
        interest_only_period=values["interestOnlyPeriod"],
        loan_type=values["loanType"] or DEFAULT_LOAN_TYPE,
    )


def _error_payload(exc: LoanCalcError) -> dict:
    return {
        "error": str(exc),
        "type": type(exc).__name__,
        "field": exc.field if isinstance(exc, InvalidInputError) else None,
    }


def _request_values() -> dict:
    body = request.get_json(silent=True)
    return _form_values(body if isinstance(body, dict) else request.form)


@app.route("/", methods=["GET", "POST"])
def index():
    values = dict(FORM_DEFAULTS)
    result = None
    yearly = []
    schedule = []
    truncated = 0
    error = None
    show_full_schedule = False

    if request.method == "POST":
        values = _form_values(request.form)
        show_full_schedule = request.form.get("show_full_schedule") == "1"
        try:
            full_schedule, result = _run_calculation(values)
        except LoanCalcError as exc:
            logger.warning("Calculation rejected: %s", exc)
            error = str(exc)
        else:
            yearly = aggregate_by_year(full_schedule)
            preview_rows = app.config["PREVIEW_ROWS"]
            schedule = full_schedule
            if not show_full_schedule and len(full_schedule) > preview_rows:
                schedule = full_schedule[:preview_rows]
                truncated = len(full_schedule) - preview_rows

    return render_template(
        "index.html",
        values=values,
        loan_types=LOAN_TYPES,
        result=result,
        yearly=yearly,
        schedule=schedule,
        truncated=truncated,
        show_full_schedule=show_full_schedule,
        error=error,
        asset_version=app.config["ASSET_VERSION"],
    )


@app.post("/api/calculate")
def api_calculate():
    values = _request_values()
    try:
        full_schedule, result = _run_calculation(values)
    except LoanCalcError as exc:
        logger.warning("API calculation rejected: %s", exc)
        return jsonify(_error_payload(exc)), 400
    return jsonify(
        {
            "result": serialize_result(result),
            "yearly": serialize_yearly(aggregate_by_year(full_schedule)),
            "schedule": serialize_schedule(full_schedule),
        }
    )


@app.post("/export.csv")
def export_csv():
    values = _request_values()
    try:
        full_schedule, _ = _run_calculation(values)
    except LoanCalcError as exc:
        logger.warning("CSV export rejected: %s", exc)
        return jsonify(_error_payload(exc)), 400
    buffer = io.StringIO()
    write_schedule_csv(buffer, full_schedule)
    return Response(
        buffer.getvalue(),
        mimetype="text/csv",
        headers={"Content-Disposition": 'attachment; filename="amortization_schedule.csv"'},
    )


if __name__ == "__main__":
    logger.info("Starting loan calculator web app on %s:%d", config.host, config.port)
    app.run(host=config.host, port=config.port, debug=True)
