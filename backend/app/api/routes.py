"""HTTP routes for the Flask API."""

from http import HTTPStatus
from typing import Any, Dict

from flask import Blueprint, current_app, jsonify, request
from pydantic import TypeAdapter, ValidationError

from backend.config import Settings
from backend.core.advisor import FireAdvisor
from backend.core.ledger import Ledger
from backend.core.overview import build_hustle_list, build_overview
from backend.core.ping import build_ping
from backend.core.simulation import simulate
from backend.schemas.advice import TimeRange
from backend.schemas.finance import ExpenseCreate
from backend.schemas.simulation import SimulationRequest

api_bp = Blueprint("api", __name__)

_time_range = TypeAdapter(TimeRange)


class BadRequest(ValueError):
    """Request body could not be read as a JSON object."""


def _settings() -> Settings:
    return current_app.extensions["minifire.settings"]


def _ledger() -> Ledger:
    return current_app.extensions["minifire.ledger"]


def _advisor() -> FireAdvisor:
    return current_app.extensions["minifire.advisor"]


def _json_body() -> Dict[str, Any]:
    payload = request.get_json(force=True, silent=True)
    if not isinstance(payload, dict):
        raise BadRequest("request body must be a JSON object")
    return payload


@api_bp.errorhandler(ValidationError)
def _handle_validation_error(exc: ValidationError):
    """Convert Pydantic validation errors into JSON responses."""
    return (
        jsonify({"detail": exc.errors(include_url=False, include_context=False)}),
        HTTPStatus.UNPROCESSABLE_ENTITY,
    )


@api_bp.errorhandler(BadRequest)
def _handle_bad_request(exc: BadRequest):
    return jsonify({"detail": str(exc)}), HTTPStatus.BAD_REQUEST


@api_bp.get("/ping")
def ping() -> Any:
    """Health-check endpoint."""
    return jsonify(build_ping(_settings()).model_dump())


@api_bp.get("/profile")
def profile() -> Any:
    return jsonify(_ledger().profile(_settings()).model_dump())


@api_bp.get("/overview")
def overview() -> Any:
    """Totals, savings rate and expense breakdown for the dashboard tab."""
    return jsonify(build_overview(_ledger(), _settings()).model_dump(mode="json"))


@api_bp.get("/expenses")
def list_expenses() -> Any:
    return jsonify([expense.model_dump(mode="json") for expense in _ledger().expenses()])


@api_bp.post("/expenses")
def add_expense() -> Any:
    entry = ExpenseCreate.model_validate(_json_body())
    expense = _ledger().add_expense(entry)
    current_app.logger.info("expense added: %s %s", expense.category, expense.amount)
    return jsonify(expense.model_dump(mode="json")), HTTPStatus.CREATED


@api_bp.get("/hustles")
def list_hustles() -> Any:
    return jsonify(build_hustle_list(_ledger()).model_dump())


@api_bp.post("/simulation")
def simulation() -> Any:
    """Project assets for the simulator sliders."""
    settings = _settings()
    payload = SimulationRequest.model_validate(_json_body())

    result = simulate(
        profile=payload.profile or _ledger().profile(settings),
        annual_return_percent=(
            payload.annualReturnPercent
            if payload.annualReturnPercent is not None
            else settings.default_annual_return
        ),
        monthly_savings=payload.monthlySavings,
        horizon_months=payload.horizonMonths or settings.simulation_horizon_months,
        income_year=settings.passive_income_year,
    )
    return jsonify(result.model_dump())


@api_bp.post("/advice")
def advice() -> Any:
    """AI consultation on the current dashboard state."""
    ledger = _ledger()
    result = _advisor().fire_advice(
        ledger.profile(_settings()),
        ledger.expenses(),
        ledger.hustles(),
    )
    return jsonify(result.model_dump())


@api_bp.get("/market/insights")
def market_insights() -> Any:
    return jsonify([insight.model_dump() for insight in _advisor().market_insights()])


@api_bp.get("/market/strategy")
def market_strategy() -> Any:
    return jsonify(_advisor().national_strategy().model_dump())


@api_bp.get("/market/stocks/<code>")
def stock_detail(code: str) -> Any:
    time_range = _time_range.validate_python(request.args.get("range", "1Y"))
    name = request.args.get("name") or code
    return jsonify(_advisor().stock_detail(code, name, time_range).model_dump())
