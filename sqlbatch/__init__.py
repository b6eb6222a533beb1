"""sqlbatch: multi-row INSERT assembly with literal or bound values."""

from typing import Optional

from sqlglot.dialects.dialect import DialectType

from sqlbatch.builder import InsertMultiple, SafeQuery, ValuesFlag
from sqlbatch.cache import ValueCache
from sqlbatch.config import InsertConfig, get_global_config, load_config_from_env, set_global_config
from sqlbatch.exceptions import ImproperConfigurationError, InvalidInputError, SQLBatchError, SQLBuilderError
from sqlbatch.parameters import ParameterContainer, ParameterStyle, ParameterStyleDriver
from sqlbatch.platform import SqlglotPlatform
from sqlbatch.resolution import CellResolver, resolve_column_value, resolve_sub_query, resolve_table
from sqlbatch.typing import TableIdentifier, TableRef, ValueKind

__all__ = (
    "CellResolver",
    "ImproperConfigurationError",
    "InsertConfig",
    "InsertMultiple",
    "InvalidInputError",
    "ParameterContainer",
    "ParameterStyle",
    "ParameterStyleDriver",
    "SQLBatchError",
    "SQLBuilderError",
    "SafeQuery",
    "SqlglotPlatform",
    "TableIdentifier",
    "ValueCache",
    "ValueKind",
    "ValuesFlag",
    "get_global_config",
    "insert_multiple",
    "load_config_from_env",
    "resolve_column_value",
    "resolve_sub_query",
    "resolve_table",
    "set_global_config",
)

__version__ = "0.1.0"


def insert_multiple(table: Optional[TableRef] = None, dialect: Optional[DialectType] = None) -> InsertMultiple:
    """Create a multi-row INSERT builder.

    Args:
        table: Optional target table.
        dialect: Optional SQL dialect to use for the statement.

    Returns:
        InsertMultiple: A new builder instance.
    """
    return InsertMultiple(table, dialect=dialect)
