"""HTTP routes for the Flask API."""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any, Dict

from flask import Blueprint, jsonify, request
from pydantic import ValidationError

from fincalc.codec.investment import decode_investment_params, investment_query_string
from fincalc.codec.loan import decode_loan_params, loan_query_string
from fincalc.core.format import format_inr, investment_mode_label, loan_mode_label
from fincalc.core.investment import calculate_investment, normalize_investment_inputs
from fincalc.core.loan import calculate_home_loan, normalize_loan_inputs
from fincalc.core.ping import get_ping_response
from fincalc.domain.validation import (
    InputIssuesError,
    ensure_no_issues,
    investment_issues,
    loan_issues,
)
from fincalc.schemas.investment import investment_inputs_adapter
from fincalc.schemas.loan import loan_inputs_adapter

logger = logging.getLogger(__name__)

api_bp = Blueprint("api", __name__)


@api_bp.errorhandler(ValidationError)
def _handle_validation_error(exc: ValidationError):
    """Convert Pydantic validation errors into JSON responses."""
    return (
        jsonify({"detail": exc.errors(include_url=False, include_context=False)}),
        HTTPStatus.UNPROCESSABLE_ENTITY,
    )


@api_bp.errorhandler(InputIssuesError)
def _handle_input_issues(exc: InputIssuesError):
    logger.info("rejected %s: %s", request.path, exc)
    return jsonify({"detail": exc.errors}), HTTPStatus.UNPROCESSABLE_ENTITY


@api_bp.get("/ping")
def ping() -> Any:
    """Health-check endpoint."""
    response = get_ping_response()
    return jsonify(response.model_dump())


@api_bp.route("/investment", methods=["GET", "POST"])
def investment() -> Any:
    """Investment growth schedule, from query params (GET) or a JSON body (POST)."""
    if request.method == "POST":
        raw_payload: Dict[str, Any] = request.get_json(force=True, silent=False)
        raw = investment_inputs_adapter.validate_python(raw_payload)
    else:
        raw = decode_investment_params(request.args)

    normalized = normalize_investment_inputs(raw)
    ensure_no_issues(investment_issues(normalized))

    result = calculate_investment(normalized)
    body = result.model_dump(exclude_none=True)
    body["query"] = investment_query_string(normalized)
    body["display"] = {
        "mode": investment_mode_label(normalized.mode),
        "totalInvested": format_inr(result.totalInvested),
        "maturityValue": format_inr(result.maturityValue),
        "estimatedReturns": format_inr(result.estimatedReturns),
    }
    return jsonify(body)


@api_bp.route("/loan", methods=["GET", "POST"])
def loan() -> Any:
    """Home-loan amortization, from query params (GET) or a JSON body (POST)."""
    if request.method == "POST":
        raw_payload: Dict[str, Any] = request.get_json(force=True, silent=False)
        raw = loan_inputs_adapter.validate_python(raw_payload)
    else:
        raw = decode_loan_params(request.args)

    # issues are checked on the unclamped draft
    ensure_no_issues(loan_issues(raw))
    normalized = normalize_loan_inputs(raw)

    result = calculate_home_loan(normalized)
    body = result.model_dump(exclude_none=True)
    body["query"] = loan_query_string(normalized)

    display = {
        "mode": loan_mode_label(normalized.mode),
        "emi": format_inr(result.emi),
        "totalInterest": format_inr(result.totalInterest),
        "totalPayment": format_inr(result.totalPayment),
    }
    if result.mfMaturityValue is not None:
        display["mfMaturityValue"] = format_inr(result.mfMaturityValue)
        display["mfAmountLeftAfterInterest"] = format_inr(result.mfAmountLeftAfterInterest)
    body["display"] = display
    return jsonify(body)
