"""Ordered dispatch over provider strategies."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from app.core.logging import get_logger
from app.normalizers.base import BaseNormalizer, UnrecognizedSchemaError
from app.normalizers.generic import GenericNormalizer
from app.normalizers.provider_a import ProviderANormalizer
from app.normalizers.provider_b import ProviderBNormalizer
from app.schemas.offer import Offer

log = get_logger("normalizers.registry")


class NormalizerRegistry:
    """Evaluates strategies in priority order; the first match extracts.

    New provider shapes are added with ``register`` without touching the
    existing ones. ``before`` names a strategy the new one must outrank.
    """

    def __init__(self, normalizers: Optional[List[BaseNormalizer]] = None):
        self._normalizers: List[BaseNormalizer] = list(normalizers or [])

    def register(self, normalizer: BaseNormalizer, before: Optional[str] = None) -> None:
        if before is None:
            self._normalizers.append(normalizer)
            return
        for index, existing in enumerate(self._normalizers):
            if existing.name == before:
                self._normalizers.insert(index, normalizer)
                return
        raise ValueError(f"No normalizer registered as: {before}")

    def names(self) -> List[str]:
        return [n.name for n in self._normalizers]

    def select(self, raw: Dict[str, Any]) -> Optional[BaseNormalizer]:
        for normalizer in self._normalizers:
            if normalizer.matches(raw):
                return normalizer
        return None

    def normalize(self, raw: Dict[str, Any]) -> Offer:
        """Map a decoded payload to an Offer.

        Raises:
            UnrecognizedSchemaError: If no strategy matches the payload.
        """
        normalizer = self.select(raw)
        if normalizer is None:
            raise UnrecognizedSchemaError("unknown provider/schema")
        offer = normalizer.extract(raw)
        log.debug(f"Normalized payload via {normalizer.name} | offer_id={offer.offer_id}")
        return offer


def get_default_registry() -> NormalizerRegistry:
    """Built-in strategies in dispatch priority order."""
    return NormalizerRegistry(
        [
            ProviderANormalizer(),
            ProviderBNormalizer(),
            GenericNormalizer(),
        ]
    )


_default_registry = get_default_registry()


def normalize(raw: Dict[str, Any]) -> Offer:
    return _default_registry.normalize(raw)
