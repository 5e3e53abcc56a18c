"""Endpoint schemas derived from SQLAlchemy table metadata.

Only ``Table`` objects are read; no engine, session or query is involved.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Final

from sqlalchemy import (
    JSON,
    BigInteger,
    Boolean,
    Date,
    DateTime,
    Float,
    Integer,
    Numeric,
    SmallInteger,
    String,
    Text,
    Time,
    TypeDecorator,
    Uuid,
)

if TYPE_CHECKING:
    from sqlalchemy import Column, Table
    from sqlalchemy.types import TypeEngine

log = logging.getLogger(__name__)

MARSHAL_TYPE_INFO_KEY: Final[str] = "marshal_type"

# subclasses before their bases: Float < Numeric, BigInteger < Integer, Text < String
_TYPE_NAMES: Final[tuple[tuple[type[TypeEngine[object]], str], ...]] = (
    (Boolean, "boolean"),
    (BigInteger, "biginteger"),
    (SmallInteger, "smallinteger"),
    (Integer, "integer"),
    (Float, "float"),
    (Numeric, "decimal"),
    (DateTime, "datetime"),
    (Date, "date"),
    (Time, "time"),
    (Uuid, "uuid"),
    (JSON, "json"),
    (Text, "text"),
    (String, "string"),
)


class TableSchema:
    """Schema whose column types come from a SQLAlchemy ``Table``.

    A column can override its type name through ``info={"marshal_type": ...}``.
    Columns whose SQL type has no known counterpart stay untyped.
    """

    def __init__(self, table: Table) -> None:
        self._table_name = table.name
        self._columns: dict[str, str | None] = {
            column.name: column_type_name(column) for column in table.columns
        }

    @property
    def table_name(self) -> str:
        return self._table_name

    @property
    def column_names(self) -> tuple[str, ...]:
        return tuple(self._columns)

    def column_type(self, name: str) -> str | None:
        return self._columns.get(name)


def column_type_name(column: Column[object]) -> str | None:
    override = column.info.get(MARSHAL_TYPE_INFO_KEY)
    if override:
        return str(override)
    sql_type: TypeEngine[object] = column.type
    if isinstance(sql_type, TypeDecorator):
        sql_type = sql_type.impl_instance
    for type_class, name in _TYPE_NAMES:
        if isinstance(sql_type, type_class):
            return name
    log.debug("Column %s has unmapped type %s; leaving untyped", column.name, sql_type)
    return None


def primary_key_of(table: Table) -> tuple[str, ...]:
    return tuple(column.name for column in table.primary_key.columns)
