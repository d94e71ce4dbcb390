from typing import Literal

from pydantic import BaseModel

from app.schemas.offer import Offer


class NormalizeResponse(BaseModel):
    status: Literal["accepted", "duplicate"]
    offer: Offer


class HealthResponse(BaseModel):
    status: str
    offers_cached: int
    janitor_running: bool
