"""HTTP routes for the Flask API."""

import logging
from http import HTTPStatus
from typing import Any, Dict

from flask import Blueprint, current_app, jsonify, request
from pydantic import ValidationError

from backend.core.projection import ProjectionError, project
from backend.schemas.health import PingResponse
from backend.schemas.projection import ProjectionRequest, ProjectionResponse

logger = logging.getLogger(__name__)

api_bp = Blueprint("api", __name__)


@api_bp.errorhandler(ValidationError)
def _handle_validation_error(exc: ValidationError):
    """Convert Pydantic validation errors into JSON responses."""
    logger.warning("rejected projection payload: %d error(s)", exc.error_count())
    detail = exc.errors(include_url=False, include_context=False, include_input=False)
    return jsonify({"detail": detail}), HTTPStatus.UNPROCESSABLE_ENTITY


@api_bp.errorhandler(ProjectionError)
def _handle_projection_error(exc: ProjectionError):
    logger.warning("projection refused: %s", exc)
    return jsonify({"detail": str(exc)}), HTTPStatus.BAD_REQUEST


@api_bp.get("/ping")
def ping() -> Any:
    """Health-check endpoint."""
    response = PingResponse(environment=current_app.config["SETTINGS"].app_env)
    return jsonify(response.model_dump())


@api_bp.post("/projection")
def projection() -> Any:
    """Project a growing monthly contribution under compound interest."""
    raw_payload: Dict[str, Any] = request.get_json(force=True, silent=False)
    payload = ProjectionRequest.model_validate(raw_payload)
    result = project(payload.to_parameters())
    logger.info(
        "projection: %d months, %s series, final %.2f",
        result.total_months,
        result.granularity.value,
        result.final_amount,
    )
    response = ProjectionResponse.from_result(result)
    return jsonify(response.model_dump(mode="json", exclude_none=True))
