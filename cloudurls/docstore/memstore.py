"""In-memory docstore: mem://<collection>/<key_name>."""

from dataclasses import replace

from ..core.backends import BackendKind
from ..core.errors import MissingFieldError
from ..core.locator import Locator
from .base import DEFAULT_KEY_NAME, DOCSTORE_REGISTRY, NormalizationOptions


@DOCSTORE_REGISTRY.register_decorator(BackendKind.IN_MEMORY_KV)
def normalize_memstore(locator: Locator, options: NormalizationOptions, src_url: str) -> str:
    collection = options.collection or locator.authority
    if not collection:
        raise MissingFieldError("Collection is required if source URL doesn't have a collection", src_url)

    if options.key_name:
        path = options.key_name
    elif locator.path.strip("/"):
        path = locator.path
    else:
        path = DEFAULT_KEY_NAME

    params = {}
    if options.file_name:
        params["filename"] = options.file_name
    if options.revision_field:
        params["revision_field"] = options.revision_field

    return replace(locator, authority=collection, path=path).with_query(**params).to_url()
