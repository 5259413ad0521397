"""
Shared types for the docstore normalizers.
"""

from dataclasses import dataclass, fields, replace
from typing import Any, Callable, Dict, Optional

from ..core.locator import Locator
from ..core.registry import HandlerRegistry

DEFAULT_KEY_NAME = "_id"


@dataclass(frozen=True)
class NormalizationOptions:
    """Per-call options for normalize_docstore_url().

    Every field is optional. An unset (None or empty) field means "keep the
    value already in the URL, or fall back to the backend default"; it never
    clears a value the URL carries.

    Attributes:
        key_name: Primary key field. Defaults to "_id", like MongoDB.
        partition_key: DynamoDB only. When set, key_name becomes the sort key.
        collection: Collection (table) name, overriding the one in the URL.
        file_name: mem only. Persist the in-memory collection to this file.
        revision_field: mem only. Name of the revision field.
    """

    key_name: Optional[str] = None
    partition_key: Optional[str] = None
    collection: Optional[str] = None
    file_name: Optional[str] = None
    revision_field: Optional[str] = None

    @property
    def resolved_key_name(self) -> str:
        return self.key_name or DEFAULT_KEY_NAME

    @classmethod
    def field_names(cls) -> list:
        return [f.name for f in fields(cls)]

    @classmethod
    def from_dict(cls, params: Optional[Dict[str, Any]]) -> "NormalizationOptions":
        """Build options from a plain dict, e.g. a config OPTIONS block.

        Raises:
            ValueError: If params contains an unknown option name.
        """
        params = params or {}
        unknown = set(params) - set(cls.field_names())
        if unknown:
            raise ValueError(f"Unknown docstore options: {sorted(unknown)}. Available: {cls.field_names()}")
        return cls(**params)

    @classmethod
    def resolve(cls, options: Optional["NormalizationOptions"] = None, **overrides: Any) -> "NormalizationOptions":
        """Combine an options object with keyword overrides (overrides win)."""
        base = options or cls()
        changes = {k: v for k, v in overrides.items() if v is not None}
        if not changes:
            return base
        unknown = set(changes) - set(cls.field_names())
        if unknown:
            raise TypeError(f"Unknown docstore options: {sorted(unknown)}")
        return replace(base, **changes)


DocstoreHandler = Callable[[Locator, NormalizationOptions, str], str]

# Handlers register themselves via decorator when their module is imported
DOCSTORE_REGISTRY: HandlerRegistry[DocstoreHandler] = HandlerRegistry("docstore")


def resolve_field(locator: Locator, param: str, key_name: Optional[str]) -> str:
    """Resolve a key-field query parameter.

    An explicit key_name wins, then the value already in the URL, then "_id".
    """
    if key_name:
        return key_name
    return locator.query.get(param) or DEFAULT_KEY_NAME
