"""ProviderA strategy.

Flat schema, tagged by ``provider_name``::

    {"provider_name": "ProviderA", "id": "abc123", "cost": "123.45",
     "currency": "USD", "depart": "2025-11-01T09:00:00Z", "class": "economy"}
"""

from __future__ import annotations

from typing import Any, Dict

from app.normalizers.base import BaseNormalizer
from app.normalizers.coercion import as_string, parse_number, parse_time
from app.schemas.offer import Offer


class ProviderANormalizer(BaseNormalizer):
    name = "ProviderA"
    marker_field = "provider_name"

    def matches(self, raw: Dict[str, Any]) -> bool:
        return raw.get(self.marker_field) == self.name

    def extract(self, raw: Dict[str, Any]) -> Offer:
        return self.build_offer(
            raw,
            provider_ref=as_string(raw.get("id")),
            price=parse_number(raw.get("cost")),
            currency=as_string(raw.get("currency")),
            fare_class=as_string(raw.get("class")),
            depart_at=parse_time(raw.get("depart")),
        )
