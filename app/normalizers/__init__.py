# Normalizers package
from app.normalizers.base import BaseNormalizer, UnrecognizedSchemaError
from app.normalizers.generic import GenericNormalizer
from app.normalizers.identity import canonical_id
from app.normalizers.provider_a import ProviderANormalizer
from app.normalizers.provider_b import ProviderBNormalizer
from app.normalizers.registry import NormalizerRegistry, get_default_registry, normalize

__all__ = [
    "BaseNormalizer",
    "UnrecognizedSchemaError",
    "GenericNormalizer",
    "ProviderANormalizer",
    "ProviderBNormalizer",
    "NormalizerRegistry",
    "get_default_registry",
    "normalize",
    "canonical_id",
]
