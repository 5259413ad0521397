"""
cloudurls - Normalize terse cloud resource URLs into the canonical form
resource-opening APIs expect.
"""

from .blob import normalize_blob_url
from .core import (
    BackendKind,
    ConfigValidationError,
    Locator,
    LocatorError,
    MalformedLocatorError,
    MissingFieldError,
    StructuralMismatchError,
    UnrecognizedSchemeError,
    UnsupportedKeyTypeError,
    load_config,
    parse_locator,
)
from .docstore import NormalizationOptions, normalize_docstore_url
from .pubsub import normalize_pubsub_url
from .resources import resolve_resources
from .schema import (
    DynamoDBSchema,
    RecordField,
    ValueKind,
    derive_schema,
    fields_from_dataframe,
    table_command_from_config,
)

__version__ = "0.1.0"
__author__ = "eisenhauer.io"


__all__ = [
    "normalize_blob_url",
    "normalize_docstore_url",
    "normalize_pubsub_url",
    "NormalizationOptions",
    "derive_schema",
    "fields_from_dataframe",
    "table_command_from_config",
    "DynamoDBSchema",
    "RecordField",
    "ValueKind",
    "resolve_resources",
    "load_config",
    "parse_locator",
    "Locator",
    "BackendKind",
    "LocatorError",
    "MalformedLocatorError",
    "MissingFieldError",
    "StructuralMismatchError",
    "UnrecognizedSchemeError",
    "UnsupportedKeyTypeError",
    "ConfigValidationError",
]
