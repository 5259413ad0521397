"""
DynamoDB key schema derived from a docstore URL and a record field inventory.

    fields = [RecordField("name", ValueKind.STRING), RecordField("age", ValueKind.INTEGER)]
    schema = derive_schema(fields, "dynamodb://persons?partition_key=name")
    schema.create_table_command()
    # ["aws", "dynamodb", "create-table", "--table-name", "persons",
    #  "--attribute-definitions", "AttributeName=name,AttributeType=S",
    #  "--key-schema", "AttributeName=name,KeyType=HASH",
    #  "--provisioned-throughput", "ReadCapacityUnits=5,WriteCapacityUnits=5"]
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from ..core.backends import BackendKind
from ..core.errors import MissingFieldError, UnrecognizedSchemeError, UnsupportedKeyTypeError
from ..core.locator import parse_locator
from ..core.validation import load_config
from ..docstore import normalize_docstore_url
from ..docstore.dynamodb import PARTITION_KEY, SORT_KEY
from .fields import RecordField, ValueKind

logger = logging.getLogger(__name__)

DEFAULT_CAPACITY_UNITS = 5

# Kinds DynamoDB can index, by attribute type
ATTRIBUTE_TYPES = {
    ValueKind.STRING: "S",
    ValueKind.TIMESTAMP: "S",
    ValueKind.BINARY: "B",
    ValueKind.BOOL: "BOOL",
    ValueKind.INTEGER: "N",
    ValueKind.FLOAT: "N",
}


@dataclass(frozen=True)
class KeyField:
    """A key attribute: its stored name and DynamoDB attribute type."""

    name: str
    type: str


@dataclass(frozen=True)
class DynamoDBSchema:
    """Table name plus partition (HASH) and optional sort (RANGE) key."""

    collection: str
    partition_key_field: KeyField
    sort_key_field: Optional[KeyField] = None

    def create_table_command(
        self,
        read_capacity_units: int = DEFAULT_CAPACITY_UNITS,
        write_capacity_units: int = DEFAULT_CAPACITY_UNITS,
    ) -> List[str]:
        """Return the `aws dynamodb create-table` argument list for this table."""
        key_fields = [self.partition_key_field]
        key_schema = [f"AttributeName={self.partition_key_field.name},KeyType=HASH"]
        if self.sort_key_field is not None:
            key_fields.append(self.sort_key_field)
            key_schema.append(f"AttributeName={self.sort_key_field.name},KeyType=RANGE")

        return [
            "aws",
            "dynamodb",
            "create-table",
            "--table-name",
            self.collection,
            "--attribute-definitions",
            *[f"AttributeName={f.name},AttributeType={f.type}" for f in key_fields],
            "--key-schema",
            *key_schema,
            "--provisioned-throughput",
            f"ReadCapacityUnits={read_capacity_units},WriteCapacityUnits={write_capacity_units}",
        ]


def derive_schema(fields: Iterable[RecordField], url: str) -> DynamoDBSchema:
    """Derive the key schema of a DynamoDB table.

    Args:
        fields: Field inventory of the records stored in the table.
        url: DynamoDB docstore URL; it is normalized first, so shorthand
            forms like "dynamodb://tasks" are accepted.

    Returns:
        DynamoDBSchema for the table.

    Raises:
        UnrecognizedSchemeError: If the URL is not a DynamoDB URL.
        MissingFieldError: If a key named by the URL is not among the fields.
        UnsupportedKeyTypeError: If a key field's kind can't be a DynamoDB key.
    """
    locator = parse_locator(normalize_docstore_url(url))
    if locator.scheme != BackendKind.WIDE_COLUMN.scheme:
        raise UnrecognizedSchemeError(locator.scheme, "DynamoDB schema", url, [BackendKind.WIDE_COLUMN.scheme])

    partition_key = locator.query[PARTITION_KEY]
    sort_key = locator.query.get(SORT_KEY)

    partition_key_field = None
    sort_key_field = None
    for field in fields:
        if field.excluded:
            continue
        if field.stored_name == partition_key:
            partition_key_field = _key_field(field, "partition key", url)
        elif field.stored_name == sort_key:
            sort_key_field = _key_field(field, "sort key", url)

    if partition_key_field is None:
        raise MissingFieldError(f"Partition key field '{partition_key}' not found in record fields", url)
    if sort_key and sort_key_field is None:
        raise MissingFieldError(f"Sort key field '{sort_key}' not found in record fields", url)

    schema = DynamoDBSchema(
        collection=locator.authority,
        partition_key_field=partition_key_field,
        sort_key_field=sort_key_field,
    )
    logger.info(
        f"Derived schema for table '{schema.collection}': "
        f"HASH={partition_key_field.name}, RANGE={sort_key_field.name if sort_key_field else None}"
    )
    return schema


def table_command_from_config(
    fields: Iterable[RecordField],
    url: str,
    source: str | Path | Dict[str, Any] | None = None,
) -> List[str]:
    """Derive the schema for url and build its create-table command.

    Capacity units come from the SCHEMA section of the configuration, so a
    config without one gets the packaged defaults.

    Args:
        fields: Field inventory of the records stored in the table.
        url: DynamoDB docstore URL.
        source: YAML/JSON config path, pre-parsed dict, or None for defaults.

    Raises:
        ConfigValidationError: If the configuration is invalid.
        LocatorError: If the schema can't be derived.
    """
    capacities = load_config(source)["SCHEMA"]
    schema = derive_schema(fields, url)
    return schema.create_table_command(
        read_capacity_units=capacities["read_capacity_units"],
        write_capacity_units=capacities["write_capacity_units"],
    )


def _key_field(field: RecordField, role: str, url: str) -> KeyField:
    try:
        kind = ValueKind(field.kind)
    except ValueError:
        raise UnsupportedKeyTypeError(f"Field type '{field.kind}' is not supported for dynamo {role}", url) from None
    if kind not in ATTRIBUTE_TYPES:
        raise UnsupportedKeyTypeError(f"Field type '{kind.value}' is not supported for dynamo {role}", url)
    return KeyField(name=field.stored_name, type=ATTRIBUTE_TYPES[kind])
