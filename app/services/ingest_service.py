"""Normalize-then-dedupe flow shared by the HTTP route and the batch entrypoint."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Literal, Optional

from app.core.logging import get_logger
from app.normalizers import NormalizerRegistry, UnrecognizedSchemaError, get_default_registry
from app.schemas.offer import Offer
from app.services.dedupe_store import DedupeStore

log = get_logger("ingest_service")

IngestStatus = Literal["accepted", "duplicate"]


@dataclass(frozen=True)
class IngestResult:
    status: IngestStatus
    offer: Offer

    @property
    def accepted(self) -> bool:
        return self.status == "accepted"


class IngestService:
    """Turns a decoded payload into an accepted or duplicate offer.

    Responsibilities:
    - Dispatch the payload to the matching provider strategy
    - Record first sightings in the dedupe store
    - Report repeats within the retention window as duplicates

    The check and the insert happen in one ``add_if_absent`` call, so two
    concurrent identical payloads produce exactly one "accepted".
    """

    def __init__(self, store: DedupeStore, registry: Optional[NormalizerRegistry] = None):
        self.store = store
        self.registry = registry or get_default_registry()

    def ingest(self, raw: Dict[str, Any]) -> IngestResult:
        """Normalize and dedupe one payload.

        Raises:
            UnrecognizedSchemaError: If no provider strategy matches; the store
                is left untouched.
        """
        try:
            offer = self.registry.normalize(raw)
        except UnrecognizedSchemaError:
            log.warning(f"Rejected payload with unrecognized schema | keys={sorted(raw)[:10]}")
            raise

        if self.store.add_if_absent(offer):
            log.debug(f"Accepted offer {offer.offer_id} from {offer.provider_id}")
            return IngestResult(status="accepted", offer=offer)

        log.debug(f"Duplicate offer {offer.offer_id} from {offer.provider_id}")
        return IngestResult(status="duplicate", offer=offer)
