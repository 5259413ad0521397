"""Docstore URL normalization for mem, firestore, dynamodb and mongo."""

from .base import DEFAULT_KEY_NAME, DOCSTORE_REGISTRY, NormalizationOptions
from .normalizer import normalize_docstore_url

__all__ = [
    "DEFAULT_KEY_NAME",
    "DOCSTORE_REGISTRY",
    "NormalizationOptions",
    "normalize_docstore_url",
]
