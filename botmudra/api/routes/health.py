from fastapi import APIRouter, Request

from botmudra.core.schemas import HealthStatus

router = APIRouter()


@router.get("/health", response_model=HealthStatus)
def health(request: Request):
    return HealthStatus(reference_version=request.app.state.reference_data.version)
