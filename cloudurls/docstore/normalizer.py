"""
Docstore URL normalization entry point.

Applications usually work with several collections in one database, so the
configuration names the database and the code names the collection:

    normalize_docstore_url("mem://", collection="addresses")
    # "mem://addresses/_id"

    normalize_docstore_url("firestore://my-project", collection="addresses")
    # "firestore://projects/my-project/databases/(default)/documents/addresses?name_field=_id"

    normalize_docstore_url("firestore://my-project/my-documents/addresses")
    # "firestore://projects/my-project/databases/my-documents/documents/addresses?name_field=_id"

    normalize_docstore_url("dynamodb://", collection="tasks")
    # "dynamodb://tasks?partition_key=_id"

    normalize_docstore_url("dynamodb://", collection="tasks", partition_key="job_id")
    # "dynamodb://tasks?partition_key=job_id&sort_key=_id"
"""

from typing import Any, Optional

from ..core.locator import parse_locator
from .base import DOCSTORE_REGISTRY, NormalizationOptions


def normalize_docstore_url(
    src_url: str,
    options: Optional[NormalizationOptions] = None,
    **overrides: Any,
) -> str:
    """Normalize a docstore URL.

    Args:
        src_url: Docstore URL (mem, firestore, dynamodb or mongo scheme).
        options: Normalization options.
        **overrides: Individual option fields (key_name, partition_key,
            collection, file_name, revision_field), applied over options.

    Returns:
        Canonical docstore URL.

    Raises:
        MalformedLocatorError: If src_url cannot be parsed.
        UnrecognizedSchemeError: If the scheme is not a docstore scheme.
        MissingFieldError: If a collection, project or database is required but absent.
        StructuralMismatchError: If a Firestore path has an unsupported shape.
    """
    resolved = NormalizationOptions.resolve(options, **overrides)
    locator = parse_locator(src_url)
    handler = DOCSTORE_REGISTRY.resolve(locator.scheme, src_url)
    return handler(locator, resolved, src_url)


# Import handlers to trigger self-registration via decorators
from . import dynamodb, firestore, memstore, mongo  # noqa: E402, F401
