"""Health check endpoints. No dependencies; used for liveness and readiness probes."""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from cuisine.infrastructure.firebase.client import get_firestore_client
from cuisine.schemas.health import HealthResponse, ReadinessResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Return simple ok status for liveness."""
    return HealthResponse()


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    responses={503: {"description": "Recipe store not configured", "model": ReadinessResponse}},
)
def readiness_check(request: Request) -> ReadinessResponse | JSONResponse:
    """Return 200 when the recipe store is configured, else 503.

    The cache is reported but optional: search works without Redis.
    """
    cache = getattr(request.app.state, "cache", None)
    body = ReadinessResponse(
        firestore=get_firestore_client() is not None,
        cache=cache is not None and cache.is_available(),
    )
    if body.firestore:
        return body
    body.status = "not_ready"
    return JSONResponse(status_code=503, content=body.model_dump())
