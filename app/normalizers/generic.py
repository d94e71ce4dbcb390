"""Fallback strategy for payloads that only carry a top-level price."""

from __future__ import annotations

from typing import Any, Dict

from app.normalizers.base import BaseNormalizer
from app.normalizers.coercion import as_string, parse_number
from app.schemas.offer import Offer


class GenericNormalizer(BaseNormalizer):
    name = "generic"

    def matches(self, raw: Dict[str, Any]) -> bool:
        return "price" in raw

    def extract(self, raw: Dict[str, Any]) -> Offer:
        return self.build_offer(
            raw,
            price=parse_number(raw.get("price")),
            currency=as_string(raw.get("currency")),
        )
