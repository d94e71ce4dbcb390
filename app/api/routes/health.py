"""Health routes - Liveness probe with store status."""

from fastapi import APIRouter, Depends

from app.api.deps import get_store
from app.schemas.api import HealthResponse
from app.services.dedupe_store import DedupeStore

router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=HealthResponse)
def health(store: DedupeStore = Depends(get_store)):
    """
    Health check endpoint for load balancer and container probes.

    Reports how many offers are cached and whether the expiry janitor runs.
    """
    return HealthResponse(
        status="ok",
        offers_cached=len(store),
        janitor_running=store.janitor_running,
    )
