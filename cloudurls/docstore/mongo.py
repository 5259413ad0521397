"""MongoDB docstore: mongo://<database>/<collection>?id_field=<key>."""

from dataclasses import replace

from ..core.backends import BackendKind
from ..core.errors import MissingFieldError
from ..core.locator import Locator
from .base import DOCSTORE_REGISTRY, NormalizationOptions, resolve_field


@DOCSTORE_REGISTRY.register_decorator(BackendKind.DOCUMENT_DB_FLAT)
def normalize_mongo(locator: Locator, options: NormalizationOptions, src_url: str) -> str:
    if not locator.authority:
        raise MissingFieldError("Mongo requires hostname as a database name, but it is empty", src_url)

    path = locator.path
    if not path.strip("/"):
        if not options.collection:
            raise MissingFieldError("Collection is required if source URL doesn't have a collection", src_url)
        path = options.collection

    id_field = resolve_field(locator, "id_field", options.key_name)
    return replace(locator, path=path).with_query(id_field=id_field).to_url()
