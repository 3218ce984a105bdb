"""
FastAPI application for the profit calculator
Serves the projection engine over HTTP
"""

import uuid
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request

from botmudra.core.config import SETTINGS
from botmudra.utils.logging import get_logger, log_event, set_log_context, setup_logging
from botmudra.utils.projection_models import HistoricalReferenceData
from botmudra.utils.reference_data import get_reference_data

logger = get_logger("api")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    setup_logging(SETTINGS.log_level)

    if getattr(app.state, "reference_data", None) is None:
        app.state.reference_data = get_reference_data()

    ref: HistoricalReferenceData = app.state.reference_data
    log_event(
        logger,
        "api_started",
        env=SETTINGS.env,
        reference_version=ref.version,
        min_investment=f"{SETTINGS.min_investment:.0f}",
        duration=f"{SETTINGS.min_duration_months}-{SETTINGS.max_duration_months}",
    )
    yield
    log_event(logger, "api_stopped")


def create_app(reference: Optional[HistoricalReferenceData] = None) -> FastAPI:
    app = FastAPI(title="BOTMUDRA Profit Calculator", version="1.0.0", lifespan=lifespan)
    app.state.reference_data = reference

    @app.middleware("http")
    async def request_context(request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        set_log_context(request_id=request_id, surface="api")
        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response

    from botmudra.api.routes import calculate, health, strategies

    app.include_router(calculate.router, prefix="/api", tags=["Projection"])
    app.include_router(strategies.router, prefix="/api", tags=["Reference Data"])
    app.include_router(health.router, tags=["Health"])
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("botmudra.api.main:app", host=SETTINGS.api_host, port=SETTINGS.api_port)
