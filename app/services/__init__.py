# Services package
from app.services.dedupe_store import (
    DedupeStore,
    init_dedupe_store,
    get_dedupe_store,
    shutdown_dedupe_store,
)
from app.services.ingest_service import IngestResult, IngestService

__all__ = [
    "DedupeStore",
    "init_dedupe_store",
    "get_dedupe_store",
    "shutdown_dedupe_store",
    "IngestResult",
    "IngestService",
]
