"""
Projection API Route
POST /api/calculate -> ProjectionResult JSON, or {"message": ...} on failure
"""

import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from botmudra.core.schemas import ErrorMessage
from botmudra.tools.projection_tools import tool_compute_projection_model
from botmudra.utils.logging import get_logger, log_event
from botmudra.utils.validators import InvalidProjectionInput

router = APIRouter()
logger = get_logger("api.calculate")

INTERNAL_FAILURE_MESSAGE = "Failed to calculate investment projections"


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorMessage(message=message).model_dump())


@router.post("/calculate")
async def calculate(request: Request):
    """
    Compute the compounded projection for a total investment split across the four strategies
    """
    try:
        body = await request.json()
        payload = body if isinstance(body, dict) else {}

        result = tool_compute_projection_model(payload, reference=request.app.state.reference_data)
    except InvalidProjectionInput as e:
        log_event(logger, "projection_rejected", reason=e.message)
        return _error(400, e.message)
    except Exception:
        logger.exception("Error calculating investment projections")
        return _error(500, INTERNAL_FAILURE_MESSAGE)

    headers = {}
    if result.warnings:
        for w in result.warnings:
            log_event(
                logger, "projection_warning", logging.WARNING, code=w.code, strategy=w.strategy, msg=w.message
            )
        headers["X-Projection-Warnings"] = ",".join(f"{w.code}:{w.strategy}" for w in result.warnings)

    log_event(
        logger,
        "projection_ok",
        duration=len(result.monthly_projections) - 1,
        avg_monthly_return=result.avg_monthly_return,
        risk=result.risk_level,
    )
    return JSONResponse(content=result.to_wire(), headers=headers)
