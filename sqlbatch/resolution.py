"""Rendering of tables, cell values and sub-queries to SQL text.

``resolve_column_value`` and ``resolve_sub_query`` are the default delegated
resolvers: they turn a single value into SQL text using only the platform.
:class:`CellResolver` sits on top of them and decides, per cell, whether a
value becomes a bound placeholder, a cached literal, or a fresh delegated
rendering.
"""

from typing import Any, Final, Optional

from sqlglot import exp

from sqlbatch.cache import ValueCache
from sqlbatch.exceptions import ImproperConfigurationError, InvalidInputError
from sqlbatch.protocols import (
    DriverProtocol,
    ParameterContainerProtocol,
    PlatformProtocol,
    ValueResolverProtocol,
)
from sqlbatch.typing import TableIdentifier, ValueKind, classify_value

__all__ = (
    "DEFAULT_PARAMETER_PREFIX",
    "CellResolver",
    "resolve_column_value",
    "resolve_sub_query",
    "resolve_table",
)

DEFAULT_PARAMETER_PREFIX: Final = "insMulti"


def resolve_table(table: Any, platform: PlatformProtocol) -> str:
    """Quote a table reference.

    Args:
        table: A table name or :class:`TableIdentifier`.
        platform: Platform used for quoting.

    Raises:
        InvalidInputError: If no usable table reference was given.

    Returns:
        The quoted, possibly schema-qualified, table name.
    """
    if isinstance(table, TableIdentifier):
        quoted = platform.quote_identifier(table.name)
        if table.schema:
            return f"{platform.quote_identifier(table.schema)}.{quoted}"
        return quoted
    if isinstance(table, str) and table:
        return platform.quote_identifier(table)
    msg = "A table name or TableIdentifier is required to build an INSERT statement"
    raise InvalidInputError(msg)


def resolve_sub_query(
    query: Any,
    platform: PlatformProtocol,
    driver: Optional[DriverProtocol] = None,
    parameter_container: Optional[ParameterContainerProtocol] = None,
) -> str:
    if not isinstance(query, exp.Expression):
        msg = f"Cannot use {type(query).__name__} as a sub-query"
        raise InvalidInputError(msg)
    return platform.render_expression(query)


def resolve_column_value(
    value: Any,
    platform: PlatformProtocol,
    driver: Optional[DriverProtocol] = None,
    parameter_container: Optional[ParameterContainerProtocol] = None,
) -> str:
    """Render any cell value as SQL text.

    Nested queries are wrapped in parentheses. Expressions are rendered as-is
    and everything else goes through the platform's literal rendering.

    Returns:
        The SQL fragment for the value.
    """
    kind = classify_value(value)
    if kind is ValueKind.NULL:
        return "NULL"
    if kind is ValueKind.SUBQUERY:
        return f"({resolve_sub_query(value, platform, driver, parameter_container)})"
    if isinstance(value, exp.Expression):
        return platform.render_expression(value)
    return platform.quote_value(value)


class CellResolver:
    """Resolve row cells for one assembly pass.

    With a parameter container every scalar becomes a fresh placeholder
    named ``<prefix><n>``. Without one, scalar literals are rendered once per
    column and value and reused from :class:`ValueCache`. Anything that is not
    a scalar always goes to the delegated resolver.
    """

    __slots__ = (
        "_position",
        "cache",
        "driver",
        "parameter_container",
        "parameter_prefix",
        "platform",
        "value_resolver",
    )

    def __init__(
        self,
        platform: PlatformProtocol,
        driver: Optional[DriverProtocol] = None,
        parameter_container: Optional[ParameterContainerProtocol] = None,
        *,
        value_resolver: ValueResolverProtocol = resolve_column_value,
        parameter_prefix: str = DEFAULT_PARAMETER_PREFIX,
        enable_cache: bool = True,
    ) -> None:
        self.platform = platform
        self.driver = driver
        self.parameter_container = parameter_container
        self.value_resolver = value_resolver
        self.parameter_prefix = parameter_prefix
        self.cache: Optional[ValueCache] = ValueCache() if enable_cache else None
        self._position = 0

    @property
    def parameter_count(self) -> int:
        return self._position

    def resolve(self, column: str, value: Any) -> str:
        kind = classify_value(value)
        if kind is ValueKind.SCALAR:
            if self.parameter_container is not None:
                return self._bind(value)
            return self._resolve_literal(column, value)
        if kind in {ValueKind.NULL, ValueKind.EXPRESSION, ValueKind.SUBQUERY}:
            return self._delegate(value)
        msg = f"Unhandled value kind: {kind}"
        raise AssertionError(msg)

    def _bind(self, value: Any) -> str:
        if self.driver is None:
            msg = "A driver is required to format placeholders when a parameter container is supplied"
            raise ImproperConfigurationError(msg)
        name = f"{self.parameter_prefix}{self._position}"
        self._position += 1
        self.parameter_container.set(name, value)  # type: ignore[union-attr]
        return self.driver.format_parameter_name(name)

    def _resolve_literal(self, column: str, value: Any) -> str:
        if self.cache is None:
            return self._delegate(value)
        fragment = self.cache.get(column, value)
        if fragment is None:
            fragment = self._delegate(value)
            self.cache.put(column, value, fragment)
        return fragment

    def _delegate(self, value: Any) -> str:
        return self.value_resolver(value, self.platform, self.driver, self.parameter_container)