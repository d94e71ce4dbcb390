"""Normalize routes - Accept one provider payload and report accepted vs duplicate."""

import json
from decimal import Decimal
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from app.api.deps import get_ingest_service
from app.core.logging import get_logger
from app.normalizers import UnrecognizedSchemaError
from app.schemas.api import NormalizeResponse
from app.services.ingest_service import IngestService

router = APIRouter(prefix="/normalize", tags=["normalize"])
log = get_logger("normalize_routes")


class EscapedJSONResponse(JSONResponse):
    """JSON response with non-ASCII escaped; payload text may hold lone surrogates."""

    def render(self, content: Any) -> bytes:
        return json.dumps(content, allow_nan=False, separators=(",", ":")).encode("ascii")


@router.post(
    "",
    response_model=NormalizeResponse,
    status_code=201,
    responses={200: {"model": NormalizeResponse, "description": "Offer already seen"}},
)
async def normalize_offer(
    request: Request,
    service: IngestService = Depends(get_ingest_service),
):
    """
    Normalize a provider payload into a canonical offer and dedupe it.

    The body is any JSON object matching one of the known provider shapes
    (ProviderA, ProviderB, or a generic object with a top-level `price`).

    Returns 201 with status "accepted" for a new offer, 200 with status
    "duplicate" when the same offer was seen within the retention window,
    and 400 for invalid JSON or an unrecognized schema.
    """
    body = await request.body()
    try:
        # Decimal keeps the payload's numeric literals exact
        raw = json.loads(body, parse_float=Decimal)
    except ValueError as exc:
        # JSONDecodeError, UnicodeDecodeError and the int digit limit
        raise HTTPException(status_code=400, detail=f"invalid json: {exc}")
    if not isinstance(raw, dict):
        raise HTTPException(status_code=400, detail="invalid json: payload must be an object")

    try:
        # The store's lock is a threading lock; keep it off the event loop
        result = await run_in_threadpool(service.ingest, raw)
    except UnrecognizedSchemaError as exc:
        raise HTTPException(status_code=400, detail=f"normalize error: {exc}")

    response = NormalizeResponse(status=result.status, offer=result.offer)
    return EscapedJSONResponse(
        status_code=201 if result.accepted else 200,
        content=response.model_dump(mode="json"),
    )
