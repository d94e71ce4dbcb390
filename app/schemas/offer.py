"""Canonical offer model shared by every provider schema."""

from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, field_serializer, field_validator


def _plain_json(value: Any) -> Any:
    """Render preserved-precision numbers in a raw payload back as JSON numbers."""
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, dict):
        return {k: _plain_json(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_plain_json(v) for v in value]
    return value


class Offer(BaseModel):
    """Normalized offer, independent of the provider schema it came from.

    `offer_id` is derived from provider_id, provider_ref, price and depart_at
    only. `created_at` drives expiry in the dedupe store and never feeds the
    identity. A `None` timestamp means unknown.
    """

    model_config = ConfigDict(frozen=True)

    offer_id: str
    provider_id: str
    provider_ref: str = ""
    price: float = 0.0
    currency: str = ""
    fare_class: str = ""
    depart_at: Optional[datetime] = None
    return_at: Optional[datetime] = None
    raw: dict[str, Any] = {}
    created_at: datetime

    @field_validator("depart_at", "return_at", "created_at")
    @classmethod
    def _assume_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @field_serializer("raw")
    def _serialize_raw(self, raw: dict[str, Any]) -> dict[str, Any]:
        return _plain_json(raw)
