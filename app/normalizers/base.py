"""Abstract provider strategy interface for normalization."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from app.normalizers.identity import canonical_id
from app.schemas.offer import Offer


class UnrecognizedSchemaError(ValueError):
    """No registered strategy accepts the payload."""


class BaseNormalizer(ABC):
    """One provider schema: a dispatch predicate plus a field extractor."""

    name: str

    @abstractmethod
    def matches(self, raw: Dict[str, Any]) -> bool:
        """Return True when this strategy should handle the payload."""

    @abstractmethod
    def extract(self, raw: Dict[str, Any]) -> Offer:
        """Map the payload to an Offer. Must not raise on malformed fields."""

    def build_offer(
        self,
        raw: Dict[str, Any],
        *,
        provider_ref: str = "",
        price: float = 0.0,
        currency: str = "",
        fare_class: str = "",
        depart_at: Optional[datetime] = None,
    ) -> Offer:
        return Offer(
            offer_id=canonical_id(self.name, provider_ref, price, depart_at),
            provider_id=self.name,
            provider_ref=provider_ref,
            price=price,
            currency=currency,
            fare_class=fare_class,
            depart_at=depart_at,
            raw=raw,
            created_at=datetime.now(timezone.utc),
        )
