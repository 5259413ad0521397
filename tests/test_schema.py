"""Tests for DynamoDB key schema derivation."""

import logging

import pandas as pd
import pytest

from cloudurls import (
    ConfigValidationError,
    DynamoDBSchema,
    MissingFieldError,
    RecordField,
    UnrecognizedSchemeError,
    UnsupportedKeyTypeError,
    ValueKind,
    derive_schema,
    fields_from_dataframe,
    table_command_from_config,
)
from cloudurls.schema import KeyField


@pytest.fixture
def person_fields():
    """Name stored as "name", Age as is, Hash never stored."""
    return [
        RecordField("Name", ValueKind.STRING, override_name="name"),
        RecordField("Age", ValueKind.INTEGER),
        RecordField("Hash", ValueKind.STRING, excluded=True),
    ]


class TestDeriveSchema:
    """Tests for derive_schema."""

    def test_partition_key_only(self, person_fields):
        """A URL with only a partition key gives a HASH-only table."""
        schema = derive_schema(person_fields, "dynamodb://tasks?partition_key=name")

        assert schema.collection == "tasks"
        assert schema.partition_key_field == KeyField(name="name", type="S")
        assert schema.sort_key_field is None
        assert schema.create_table_command() == [
            "aws", "dynamodb", "create-table", "--table-name", "tasks",
            "--attribute-definitions", "AttributeName=name,AttributeType=S",
            "--key-schema", "AttributeName=name,KeyType=HASH",
            "--provisioned-throughput", "ReadCapacityUnits=5,WriteCapacityUnits=5",
        ]  # fmt: skip

    def test_partition_and_sort_key(self, person_fields):
        """A sort key adds a RANGE key and its attribute definition."""
        schema = derive_schema(person_fields, "dynamodb://tasks?partition_key=name&sort_key=Age")

        assert schema.sort_key_field == KeyField(name="Age", type="N")
        assert schema.create_table_command() == [
            "aws", "dynamodb", "create-table", "--table-name", "tasks",
            "--attribute-definitions", "AttributeName=name,AttributeType=S", "AttributeName=Age,AttributeType=N",
            "--key-schema", "AttributeName=name,KeyType=HASH", "AttributeName=Age,KeyType=RANGE",
            "--provisioned-throughput", "ReadCapacityUnits=5,WriteCapacityUnits=5",
        ]  # fmt: skip

    def test_custom_capacity(self, person_fields):
        """Capacity units are configurable."""
        schema = derive_schema(person_fields, "dynamodb://tasks?partition_key=name")
        command = schema.create_table_command(read_capacity_units=10, write_capacity_units=2)
        assert command[-1] == "ReadCapacityUnits=10,WriteCapacityUnits=2"

    def test_url_is_normalized_first(self):
        """Shorthand URLs get the default _id partition key."""
        fields = [RecordField("_id", ValueKind.STRING)]
        schema = derive_schema(fields, "dynamodb://tasks")
        assert schema == DynamoDBSchema(collection="tasks", partition_key_field=KeyField(name="_id", type="S"))

    def test_kind_given_as_string(self):
        """Field kinds may be given by their string value."""
        schema = derive_schema([RecordField("id", "integer")], "dynamodb://tasks?partition_key=id")
        assert schema.partition_key_field == KeyField(name="id", type="N")

    def test_missing_partition_key_field(self, person_fields):
        """A partition key not among the fields is an error."""
        with pytest.raises(MissingFieldError, match="Partition key field '_id'"):
            derive_schema(person_fields, "dynamodb://tasks")

    def test_missing_sort_key_field(self, person_fields):
        """A sort key not among the fields is an error."""
        with pytest.raises(MissingFieldError, match="Sort key field 'created'"):
            derive_schema(person_fields, "dynamodb://tasks?partition_key=name&sort_key=created")

    def test_excluded_field_is_not_a_key(self, person_fields):
        """Excluded fields can't serve as keys."""
        with pytest.raises(MissingFieldError):
            derive_schema(person_fields, "dynamodb://tasks?partition_key=Hash")

    def test_override_name_is_matched(self, person_fields):
        """Keys match the stored name, not the field name."""
        with pytest.raises(MissingFieldError):
            derive_schema(person_fields, "dynamodb://tasks?partition_key=Name")

    @pytest.mark.parametrize("kind", [ValueKind.LIST, ValueKind.MAP, ValueKind.OTHER])
    def test_unsupported_key_kind(self, kind):
        """Kinds DynamoDB can't index are rejected."""
        fields = [RecordField("tags", kind)]
        with pytest.raises(UnsupportedKeyTypeError, match="not supported for dynamo partition key"):
            derive_schema(fields, "dynamodb://tasks?partition_key=tags")

    def test_unknown_kind_string(self):
        """A kind string outside ValueKind is an unsupported key type."""
        fields = [RecordField("id", "uuid")]
        with pytest.raises(UnsupportedKeyTypeError, match="Field type 'uuid'") as exc_info:
            derive_schema(fields, "dynamodb://tasks?partition_key=id")
        assert exc_info.value.url == "dynamodb://tasks?partition_key=id"

    def test_non_dynamodb_url(self, person_fields):
        """A docstore URL of another backend is rejected."""
        with pytest.raises(UnrecognizedSchemeError, match="DynamoDB schema"):
            derive_schema(person_fields, "mongo://my-db/tasks")

    def test_logs_derived_schema(self, person_fields, caplog):
        """The derived key layout is logged."""
        with caplog.at_level(logging.INFO, logger="cloudurls.schema.dynamodb"):
            derive_schema(person_fields, "dynamodb://tasks?partition_key=name")
        assert "Derived schema for table 'tasks'" in caplog.text


class TestAttributeTypes:
    """Tests for the value kind to DynamoDB attribute type mapping."""

    @pytest.mark.parametrize(
        "kind, expected",
        [
            (ValueKind.STRING, "S"),
            (ValueKind.TIMESTAMP, "S"),
            (ValueKind.BINARY, "B"),
            (ValueKind.BOOL, "BOOL"),
            (ValueKind.INTEGER, "N"),
            (ValueKind.FLOAT, "N"),
        ],
    )
    def test_attribute_type(self, kind, expected):
        """Each indexable kind maps to its attribute type."""
        schema = derive_schema([RecordField("key", kind)], "dynamodb://tasks?partition_key=key")
        assert schema.partition_key_field.type == expected


class TestFieldsFromDataFrame:
    """Tests for fields_from_dataframe."""

    def test_column_kinds(self):
        """Column dtypes map to value kinds."""
        df = pd.DataFrame(
            {
                "count": [1, 2],
                "score": [0.5, 1.5],
                "active": [True, False],
                "created": pd.to_datetime(["2024-01-01", "2024-01-02"]),
                "payload": [b"a", b"b"],
                "tags": [["x"], ["y"]],
                "meta": [{"k": 1}, {"k": 2}],
            }
        )
        kinds = {f.name: f.kind for f in fields_from_dataframe(df)}
        assert kinds == {
            "count": ValueKind.INTEGER,
            "score": ValueKind.FLOAT,
            "active": ValueKind.BOOL,
            "created": ValueKind.TIMESTAMP,
            "payload": ValueKind.BINARY,
            "tags": ValueKind.LIST,
            "meta": ValueKind.MAP,
        }

    def test_string_column(self):
        """Text columns are strings."""
        df = pd.DataFrame({"name": ["alice", "bob"]})
        assert fields_from_dataframe(df)[0].kind == ValueKind.STRING

    def test_all_null_object_column(self):
        """An object column with no values defaults to string."""
        df = pd.DataFrame({"note": [None, None]}, dtype=object)
        assert fields_from_dataframe(df)[0].kind == ValueKind.STRING

    def test_overrides_and_exclusions(self):
        """Overrides and exclusions are carried onto the fields."""
        df = pd.DataFrame({"Name": ["alice"], "Hash": ["abc"]})
        fields = fields_from_dataframe(df, overrides={"Name": "name"}, excluded=["Hash"])

        assert fields[0].stored_name == "name"
        assert not fields[0].excluded
        assert fields[1].stored_name == "Hash"
        assert fields[1].excluded

    def test_feeds_derive_schema(self):
        """A DataFrame inventory can drive schema derivation."""
        df = pd.DataFrame({"job_id": ["a"], "_id": [1], "secret": ["s"]})
        fields = fields_from_dataframe(df, excluded=["secret"])
        schema = derive_schema(fields, "dynamodb://tasks?partition_key=job_id&sort_key=_id")

        assert schema.partition_key_field == KeyField(name="job_id", type="S")
        assert schema.sort_key_field == KeyField(name="_id", type="N")


class TestTableCommandFromConfig:
    """Tests for table_command_from_config."""

    def test_default_capacity(self, person_fields):
        """Without a configuration the packaged capacity defaults apply."""
        command = table_command_from_config(person_fields, "dynamodb://tasks?partition_key=name")
        assert command[-1] == "ReadCapacityUnits=5,WriteCapacityUnits=5"

    def test_configured_capacity(self, person_fields):
        """SCHEMA capacity units from the configuration are used."""
        config = {"SCHEMA": {"read_capacity_units": 20}}
        command = table_command_from_config(person_fields, "dynamodb://tasks?partition_key=name", config)
        assert command[-1] == "ReadCapacityUnits=20,WriteCapacityUnits=5"

    def test_capacity_from_yaml(self, person_fields, tmp_path):
        """A YAML config file can supply the capacity units."""
        path = tmp_path / "resources.yaml"
        path.write_text("SCHEMA:\n  read_capacity_units: 3\n  write_capacity_units: 7\n")
        command = table_command_from_config(person_fields, "dynamodb://tasks?partition_key=name", path)
        assert command[-1] == "ReadCapacityUnits=3,WriteCapacityUnits=7"

    def test_invalid_capacity(self, person_fields):
        """Invalid capacity units are rejected by the configuration checks."""
        with pytest.raises(ConfigValidationError, match="SCHEMA.write_capacity_units"):
            table_command_from_config(
                person_fields, "dynamodb://tasks?partition_key=name", {"SCHEMA": {"write_capacity_units": -1}}
            )
