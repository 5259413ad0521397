"""Blob (object store) URL normalization."""

from .normalizer import REGION_ENV_VAR, normalize_blob_url

__all__ = ["REGION_ENV_VAR", "normalize_blob_url"]
