"""API dependencies"""

from fastapi import HTTPException

from app.services.dedupe_store import DedupeStore, get_dedupe_store
from app.services.ingest_service import IngestService


def get_store() -> DedupeStore:
    """Process-wide dedupe store; 503 until the lifespan has created it."""
    store = get_dedupe_store()
    if store is None:
        raise HTTPException(status_code=503, detail="dedupe store not initialized")
    return store


def get_ingest_service() -> IngestService:
    return IngestService(get_store())
