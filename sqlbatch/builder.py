"""Multi-row INSERT builder.

This module provides a fluent builder that accumulates rows (or an
``INSERT ... SELECT`` source) and assembles them into a single statement,
either as literal SQL or as SQL with bound parameters.
"""

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Final, Optional, Union

from sqlglot.dialects.dialect import DialectType
from typing_extensions import Self

from sqlbatch.config import InsertConfig, get_global_config
from sqlbatch.exceptions import InvalidInputError
from sqlbatch.parameters import ParameterContainer, ParameterStyleDriver
from sqlbatch.platform import SqlglotPlatform
from sqlbatch.protocols import (
    DriverProtocol,
    ParameterContainerProtocol,
    PlatformProtocol,
    SubQueryResolverProtocol,
    ValueResolverProtocol,
)
from sqlbatch.resolution import CellResolver, resolve_column_value, resolve_sub_query, resolve_table
from sqlbatch.typing import TableRef, is_sub_query
from sqlbatch.utils.logging import get_logger, log_with_context

__all__ = (
    "InsertMultiple",
    "SafeQuery",
    "ValuesFlag",
)

logger = get_logger("sqlbatch.builder")

INSERT_VALUES_TEMPLATE: Final = "INSERT INTO {table} ({columns}) VALUES ({values})"


class ValuesFlag(str, Enum):
    """How :meth:`InsertMultiple.values` treats the rows it is given."""

    MERGE = "merge"
    SET = "set"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class SafeQuery:
    """An assembled SQL statement with its bound parameters."""

    sql: str
    parameters: dict[str, Any] = field(default_factory=dict)
    dialect: Optional[DialectType] = None

    @property
    def positional_parameters(self) -> tuple[Any, ...]:
        """Bound values in placeholder order, for positional parameter styles."""
        return tuple(self.parameters.values())


class InsertMultiple:
    """Builder for multi-row ``INSERT`` and ``INSERT ... SELECT`` statements.

    Rows are added either all at once with :meth:`set_rows` or one at a time
    with :meth:`merge_row`, which completes every row from the declared
    columns. Alternatively a sub-query can be installed with :meth:`select`.

    Example::

        builder = InsertMultiple("users").columns(["id", "name"])
        builder.set_rows([{"id": 1, "name": "a"}, {"id": 2, "name": "b"}])
        builder.get_sql_string()
        # INSERT INTO "users" ("id", "name") VALUES (1, 'a'), (2, 'b')
    """

    VALUES_MERGE: Final = ValuesFlag.MERGE
    VALUES_SET: Final = ValuesFlag.SET

    def __init__(
        self,
        table: Optional[TableRef] = None,
        *,
        dialect: Optional[DialectType] = None,
        config: Optional[InsertConfig] = None,
        value_resolver: ValueResolverProtocol = resolve_column_value,
        sub_query_resolver: SubQueryResolverProtocol = resolve_sub_query,
    ) -> None:
        config = config or get_global_config()
        if dialect is not None:
            config = config.replace(dialect=dialect)
        self.config = config
        self.value_resolver = value_resolver
        self.sub_query_resolver = sub_query_resolver
        self._table: Optional[TableRef] = None
        self._columns: dict[str, Any] = {}
        self._row_template: dict[str, Any] = {}
        self._rows: list[Any] = []
        self._select: Any = None
        if table:
            self.into(table)

    @property
    def dialect(self) -> Optional[DialectType]:
        return self.config.dialect

    def into(self, table: TableRef) -> Self:
        """Set target table for INSERT.

        Returns:
            The current builder instance for method chaining.
        """
        self._table = table
        return self

    def columns(self, columns: Sequence[str]) -> Self:
        """Declare the columns and rebuild the null-filled row template.

        Redeclaring replaces the previous columns entirely. Each column's
        alias slot starts out as its declared position.

        Returns:
            The current builder instance for method chaining.
        """
        if isinstance(columns, str):
            msg = "columns() expects a sequence of column names, not a single string"
            raise InvalidInputError(msg)
        names = list(dict.fromkeys(columns))
        self._columns = {name: position for position, name in enumerate(names)}
        self._row_template = dict.fromkeys(names)
        return self

    set_columns = columns

    def values(self, values: Any, flag: Union[ValuesFlag, str] = ValuesFlag.SET) -> Self:
        """Specify values to insert.

        Args:
            values: A list of row mappings, a single row mapping with the merge
                flag, or a sub-query.
            flag: :attr:`ValuesFlag.SET` replaces all rows,
                :attr:`ValuesFlag.MERGE` appends one row completed from the
                declared columns.

        Raises:
            InvalidInputError: On a sub-query with the merge flag, a value of
                the wrong shape, or a merge while a sub-query is the source.

        Returns:
            The current builder instance for method chaining.
        """
        try:
            flag = ValuesFlag(flag)
        except ValueError as exc:
            msg = f"Unknown values flag: {flag!r}"
            raise InvalidInputError(msg) from exc

        if is_sub_query(values):
            if flag is ValuesFlag.MERGE:
                msg = "A sub-query cannot be provided with the merge flag"
                raise InvalidInputError(msg)
            self._select = values
            return self

        if flag is ValuesFlag.SET:
            if not isinstance(values, (list, tuple)):
                msg = "values() expects a list of rows or a sub-query"
                raise InvalidInputError(msg)
            self._rows = list(values)
            return self

        if not isinstance(values, Mapping):
            msg = "values() expects a mapping of column values with the merge flag"
            raise InvalidInputError(msg)
        if self._select is not None:
            msg = "Values cannot be provided with the merge flag when a sub-query already exists as the value source"
            raise InvalidInputError(msg)
        row = dict(self._row_template)
        row.update((key, value) for key, value in values.items() if key in self._columns)
        self._rows.append(row)
        return self

    def set_rows(self, rows: Sequence[Mapping[str, Any]]) -> Self:
        """Replace all accumulated rows.

        Rows are checked when the statement is assembled, not here.

        Returns:
            The current builder instance for method chaining.
        """
        if is_sub_query(rows):
            msg = "set_rows() expects a list of rows; use select() for a sub-query source"
            raise InvalidInputError(msg)
        return self.values(rows, ValuesFlag.SET)

    def merge_row(self, values: Mapping[str, Any]) -> Self:
        """Append one row built from the template and the declared keys of ``values``.

        Returns:
            The current builder instance for method chaining.
        """
        return self.values(values, ValuesFlag.MERGE)

    def select(self, query: Any) -> Self:
        """Use a sub-query as the row source (``INSERT ... SELECT``).

        Returns:
            The current builder instance for method chaining.
        """
        if not is_sub_query(query):
            msg = f"select() expects a query expression, got {type(query).__name__}"
            raise InvalidInputError(msg)
        return self.values(query, ValuesFlag.SET)

    set_source = select

    def set_column_alias(self, name: str, value: Any) -> Self:
        self._columns[name] = value
        return self

    def get_column_alias(self, name: str) -> Any:
        if not self.has_column_alias(name):
            raise InvalidInputError(self._missing_column_message(name))
        return self._columns[name]

    def has_column_alias(self, name: str) -> bool:
        """A ``None`` slot counts as unset for every accessor, though the column stays declared."""
        return self._columns.get(name) is not None

    def remove_column_alias(self, name: str) -> None:
        if not self.has_column_alias(name):
            raise InvalidInputError(self._missing_column_message(name))
        del self._columns[name]

    @staticmethod
    def _missing_column_message(name: str) -> str:
        return f"The key {name} was not found in this object's column list"

    def get_raw_state(self, key: Optional[str] = None) -> Any:
        """Return the accumulated state, or one entry of it.

        Args:
            key: One of ``table``, ``columns``, ``values`` or ``select``.
                Unknown keys return the full state.

        Returns:
            The requested entry or the full state dictionary.
        """
        raw_state = {
            "table": self._table,
            "columns": list(self._columns),
            "values": list(self._rows),
            "select": self._select,
        }
        if key is not None and key in raw_state:
            return raw_state[key]
        return raw_state

    def prepare_statement(
        self,
        platform: PlatformProtocol,
        driver: Optional[DriverProtocol] = None,
        parameter_container: Optional[ParameterContainerProtocol] = None,
    ) -> str:
        """Assemble the statement with injected collaborators.

        When a parameter container is given, every scalar cell is bound into
        it and replaced by a placeholder formatted by ``driver``.

        Args:
            platform: Platform used for quoting and rendering.
            driver: Driver used to format placeholder names.
            parameter_container: Container receiving bound values.

        Returns:
            The SQL text, or an empty string when no rows were accumulated.
        """
        if self._select is not None:
            return self._process_select(platform, driver, parameter_container)
        return self._process_insert(platform, driver, parameter_container)

    def get_sql_string(self, platform: Optional[PlatformProtocol] = None) -> str:
        """Assemble the statement with every value rendered as a literal.

        Returns:
            The literal SQL text.
        """
        return self.prepare_statement(platform or SqlglotPlatform(self.dialect))

    def build(self) -> SafeQuery:
        """Build a parameterized statement using the configured dialect and style.

        Returns:
            SafeQuery: The SQL text with its bound parameters.
        """
        parameters = ParameterContainer()
        sql = self.prepare_statement(
            SqlglotPlatform(self.dialect), ParameterStyleDriver(self.config.parameter_style), parameters
        )
        return SafeQuery(sql=sql, parameters=parameters.to_dict(), dialect=self.dialect)

    def _column_order(self) -> list[str]:
        """Validate the rows and return the statement's column order.

        The first row's sorted keys define the order; every other row must
        carry exactly the same keys.
        """
        column_order: Optional[list[str]] = None
        for index, row in enumerate(self._rows):
            if not isinstance(row, Mapping):
                msg = "values must be arrays for multi-insertion"
                raise InvalidInputError(msg)
            for key in row:
                if not isinstance(key, str):
                    msg = f"Row {index} has a non-string column name: {key!r}"
                    raise InvalidInputError(msg)
            row_columns = sorted(row)
            if column_order is None:
                column_order = row_columns
            elif row_columns != column_order:
                msg = f"Row {index} has columns {row_columns}, expected {column_order}"
                raise InvalidInputError(msg)
        return column_order or []

    def _process_insert(
        self,
        platform: PlatformProtocol,
        driver: Optional[DriverProtocol],
        parameter_container: Optional[ParameterContainerProtocol],
    ) -> str:
        if not self._columns:
            msg = "values or select should be present"
            raise InvalidInputError(msg)
        if not self._rows:
            logger.debug("No rows accumulated for %s, returning empty statement", self._table)
            return ""

        column_order = self._column_order()
        table = resolve_table(self._table, platform)
        resolver = CellResolver(
            platform,
            driver,
            parameter_container,
            value_resolver=self.value_resolver,
            parameter_prefix=self.config.parameter_prefix,
            enable_cache=self.config.enable_literal_cache,
        )
        row_fragments = [
            ", ".join(resolver.resolve(column, row[column]) for column in column_order) for row in self._rows
        ]
        sql = INSERT_VALUES_TEMPLATE.format(
            table=table,
            columns=", ".join(platform.quote_identifier(column) for column in column_order),
            values="), (".join(row_fragments),
        )

        log_with_context(
            logger,
            logging.DEBUG,
            "Assembled multi-row INSERT",
            table=str(self._table),
            rows=len(row_fragments),
            columns=len(column_order),
            parameters=resolver.parameter_count,
            cache_hits=resolver.cache.hits if resolver.cache else 0,
            cache_misses=resolver.cache.misses if resolver.cache else 0,
        )
        return sql

    def _process_select(
        self,
        platform: PlatformProtocol,
        driver: Optional[DriverProtocol],
        parameter_container: Optional[ParameterContainerProtocol],
    ) -> str:
        select_sql = self.sub_query_resolver(self._select, platform, driver, parameter_container)
        parts = ["INSERT INTO", resolve_table(self._table, platform)]
        if self._columns:
            parts.append(f"({', '.join(platform.quote_identifier(column) for column in self._columns)})")
        parts.append(select_sql)
        log_with_context(logger, logging.DEBUG, "Assembled INSERT ... SELECT", table=str(self._table))
        return " ".join(parts)

    def __str__(self) -> str:
        """Return the literal SQL string representation of the statement.

        Returns:
            str: The SQL string for this statement.
        """
        return self.get_sql_string()

    def __repr__(self) -> str:
        source = "select" if self._select is not None else f"{len(self._rows)} rows"
        return f"{type(self).__name__}(table={self._table!r}, columns={list(self._columns)!r}, source={source})"
