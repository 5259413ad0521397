"""
Blob (object store) URL normalization.

Examples:
    "mem" / "mem://"      -> "mem:"
    "./data"              -> "file://./data"
    "s3://bucket"         -> "s3://bucket?region=<AWS_REGION>"
    "gs://bucket"         -> "gs://bucket"
"""

from dataclasses import replace
from typing import Optional, Sequence

from ..core.backends import BackendKind
from ..core.environment import environ_snapshot, lookup
from ..core.errors import MissingFieldError
from ..core.locator import Locator, parse_locator

REGION_ENV_VAR = "AWS_REGION"


def normalize_blob_url(src_url: str, environ: Optional[Sequence[str]] = None) -> str:
    """Normalize a blob URL.

    Args:
        src_url: URL or bare path. "mem" selects the in-memory store, any
            other bare path is treated as a local directory.
        environ: KEY=VALUE strings searched for AWS_REGION when an S3 URL has
            no region query. Defaults to a snapshot of the process environment.

    Returns:
        Canonical blob URL.

    Raises:
        MalformedLocatorError: If src_url cannot be parsed.
        MissingFieldError: If an S3 URL has no region and AWS_REGION is unset.
    """
    if environ is None:
        environ = environ_snapshot()
    locator = parse_locator(src_url)

    if not locator.scheme:
        return _normalize_bare_path(locator).to_url()
    if locator.scheme == BackendKind.OBJECT_STORAGE.scheme:
        if "region" in locator.query:
            return src_url
        return _with_environ_region(locator, environ, src_url).to_url()
    # mem:// collapses to mem:, anything else keeps its source bytes
    return locator.to_url()


def _normalize_bare_path(locator: Locator) -> Locator:
    if locator.path == BackendKind.IN_MEMORY_KV.scheme:
        return replace(locator, scheme=BackendKind.IN_MEMORY_KV.scheme, path="")
    return replace(locator, scheme="file", authority=locator.path, path="")


def _with_environ_region(locator: Locator, environ: Sequence[str], src_url: str) -> Locator:
    region = lookup(environ, REGION_ENV_VAR)
    if region is None:
        raise MissingFieldError(
            f"S3 URL doesn't have region query and no {REGION_ENV_VAR} env var", src_url
        )
    return locator.with_query(region=region)
