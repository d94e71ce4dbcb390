"""ProviderB strategy.

Nested schema, recognised by the presence of ``vendor``::

    {"vendor": "ProviderB", "sku": 999,
     "pricing": {"amount": 12345, "currency_code": "USD", "units": "cents"},
     "times": {"leave": 1698772345}}
"""

from __future__ import annotations

from typing import Any, Dict

from app.normalizers.base import BaseNormalizer
from app.normalizers.coercion import (
    as_mapping,
    number_to_ref,
    parse_number,
    parse_unix_seconds,
)
from app.schemas.offer import Offer

DEFAULT_CURRENCY = "USD"


class ProviderBNormalizer(BaseNormalizer):
    name = "ProviderB"
    marker_field = "vendor"

    def matches(self, raw: Dict[str, Any]) -> bool:
        return self.marker_field in raw

    def extract(self, raw: Dict[str, Any]) -> Offer:
        pricing = as_mapping(raw.get("pricing"))
        times = as_mapping(raw.get("times"))

        currency = pricing.get("currency_code")
        if not isinstance(currency, str):
            currency = DEFAULT_CURRENCY

        price = parse_number(pricing.get("amount"))
        # Stored price is always in major units
        if pricing.get("units") == "cents":
            price = price / 100.0

        return self.build_offer(
            raw,
            provider_ref=number_to_ref(raw.get("sku")),
            price=price,
            currency=currency,
            depart_at=parse_unix_seconds(times.get("leave")),
        )
