"""DynamoDB docstore: dynamodb://<table>?partition_key=<pk>[&sort_key=<sk>]."""

from dataclasses import replace

from ..core.backends import BackendKind
from ..core.errors import MissingFieldError
from ..core.locator import Locator
from .base import DOCSTORE_REGISTRY, NormalizationOptions

PARTITION_KEY = "partition_key"
SORT_KEY = "sort_key"


@DOCSTORE_REGISTRY.register_decorator(BackendKind.WIDE_COLUMN)
def normalize_dynamodb(locator: Locator, options: NormalizationOptions, src_url: str) -> str:
    table = options.collection or locator.authority
    if not table:
        raise MissingFieldError("Collection is required if source URL doesn't have a table name", src_url)

    keys = _resolve_keys(
        partition_key=locator.query.get(PARTITION_KEY, ""),
        sort_key=locator.query.get(SORT_KEY, ""),
        options=options,
    )
    rewritten = replace(
        locator.without_query(PARTITION_KEY, SORT_KEY),
        scheme=BackendKind.WIDE_COLUMN.scheme,
        authority=table,
    )
    return rewritten.with_query(**keys).to_url()


def _resolve_keys(partition_key: str, sort_key: str, options: NormalizationOptions) -> dict:
    """Decide partition/sort keys from the URL's keys and the caller's options.

    - URL has both keys: key_name replaces the sort key, partition_key the partition key.
    - URL has only a partition key: key_name replaces it; no sort key is added.
    - Otherwise: with a partition_key option, key_name (or "_id") becomes the
      sort key; without one, key_name (or "_id") is the partition key.
    """
    if partition_key and sort_key:
        return {
            PARTITION_KEY: options.partition_key or partition_key,
            SORT_KEY: options.key_name or sort_key,
        }
    if partition_key:
        return {PARTITION_KEY: options.key_name or partition_key}
    if options.partition_key:
        return {PARTITION_KEY: options.partition_key, SORT_KEY: options.resolved_key_name}
    return {PARTITION_KEY: options.resolved_key_name}
