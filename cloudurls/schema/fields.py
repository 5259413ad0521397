"""
Record field inventory used to derive table key schemas.

A record's fields are described explicitly by the caller, or read off the
column dtypes of a pandas DataFrame that holds sample records.
"""

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional

import pandas as pd
from pandas.api import types as ptypes


class ValueKind(str, Enum):
    """Declared value kind of a record field."""

    STRING = "string"
    BOOL = "bool"
    INTEGER = "integer"
    FLOAT = "float"
    BINARY = "binary"
    TIMESTAMP = "timestamp"
    LIST = "list"
    MAP = "map"
    OTHER = "other"


@dataclass(frozen=True)
class RecordField:
    """One field of a stored record.

    Attributes:
        name: Field name in the record.
        kind: Value kind (a ValueKind or its string value).
        override_name: Attribute name used in the store instead of name.
        excluded: Field is never stored, so it can't be a key.
    """

    name: str
    kind: ValueKind
    override_name: Optional[str] = None
    excluded: bool = False

    @property
    def stored_name(self) -> str:
        return self.override_name or self.name


def fields_from_dataframe(
    df: pd.DataFrame,
    overrides: Optional[Dict[str, str]] = None,
    excluded: Optional[Iterable[str]] = None,
) -> List[RecordField]:
    """Build a field inventory from DataFrame column dtypes.

    Object columns are classified by their first non-null value, so a column
    of bytes becomes BINARY and a column of dicts becomes MAP.

    Args:
        df: DataFrame whose columns are the record fields.
        overrides: Mapping of column name to stored attribute name.
        excluded: Columns that are never stored.

    Returns:
        One RecordField per column, in column order.
    """
    overrides = overrides or {}
    excluded = set(excluded or [])
    return [
        RecordField(
            name=str(column),
            kind=_kind_of_series(df[column]),
            override_name=overrides.get(column),
            excluded=column in excluded,
        )
        for column in df.columns
    ]


def _kind_of_series(series: pd.Series) -> ValueKind:
    dtype = series.dtype
    if ptypes.is_bool_dtype(dtype):
        return ValueKind.BOOL
    if ptypes.is_integer_dtype(dtype):
        return ValueKind.INTEGER
    if ptypes.is_float_dtype(dtype):
        return ValueKind.FLOAT
    if ptypes.is_datetime64_any_dtype(dtype):
        return ValueKind.TIMESTAMP
    if ptypes.is_object_dtype(dtype):
        non_null = series.dropna()
        if non_null.empty:
            return ValueKind.STRING
        return _kind_of_value(non_null.iloc[0])
    if ptypes.is_string_dtype(dtype):
        return ValueKind.STRING
    return ValueKind.OTHER


def _kind_of_value(value: Any) -> ValueKind:
    # bool is a subclass of int, so it goes first
    if isinstance(value, bool):
        return ValueKind.BOOL
    if isinstance(value, int):
        return ValueKind.INTEGER
    if isinstance(value, float):
        return ValueKind.FLOAT
    if isinstance(value, (bytes, bytearray)):
        return ValueKind.BINARY
    if isinstance(value, (datetime, date)):
        return ValueKind.TIMESTAMP
    if isinstance(value, str):
        return ValueKind.STRING
    if isinstance(value, (list, tuple)):
        return ValueKind.LIST
    if isinstance(value, dict):
        return ValueKind.MAP
    return ValueKind.OTHER
