"""Offer routes - Expose the offers currently retained by the dedupe store."""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from app.api.deps import get_store
from app.schemas.offer import Offer
from app.services.dedupe_store import DedupeStore

router = APIRouter(prefix="/offers", tags=["offers"])


@router.get("", response_model=list[Offer])
def list_offers(
    provider_id: Optional[str] = Query(None, description="Exact provider match (ProviderA, ProviderB, generic)"),
    limit: int = Query(1000, ge=1, le=1000, description="Maximum number of offers to return"),
    store: DedupeStore = Depends(get_store),
):
    """
    Snapshot of all offers still inside the retention window.

    Order is not significant.
    """
    offers = store.list()
    if provider_id:
        offers = [o for o in offers if o.provider_id == provider_id]
    return offers[:limit]


@router.get("/{offer_id}", response_model=Offer)
def get_offer(offer_id: str, store: DedupeStore = Depends(get_store)):
    """Get a single retained offer by its canonical id."""
    offer = store.get(offer_id)
    if offer is None:
        raise HTTPException(status_code=404, detail=f"Offer '{offer_id}' not found")
    return offer
