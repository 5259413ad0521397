"""Table key schemas derived from normalized docstore URLs."""

from .dynamodb import DynamoDBSchema, KeyField, derive_schema, table_command_from_config
from .fields import RecordField, ValueKind, fields_from_dataframe

__all__ = [
    "DynamoDBSchema",
    "KeyField",
    "RecordField",
    "ValueKind",
    "derive_schema",
    "fields_from_dataframe",
    "table_command_from_config",
]
