"""sqlglot-backed platform for identifier quoting and literal rendering."""

from typing import Any, Optional

from sqlglot import exp
from sqlglot.dialects.dialect import Dialect, DialectType

from sqlbatch.exceptions import SQLBuilderError

__all__ = ("SqlglotPlatform",)


class SqlglotPlatform:
    """Platform that renders through a sqlglot dialect.

    Args:
        dialect: Any dialect sqlglot accepts (name, class or instance). ``None``
            selects sqlglot's generic dialect.
    """

    __slots__ = ("_dialect", "dialect")

    def __init__(self, dialect: Optional[DialectType] = None) -> None:
        self.dialect = dialect
        self._dialect = Dialect.get_or_raise(dialect)

    def quote_identifier(self, name: str) -> str:
        return exp.to_identifier(name, quoted=True).sql(dialect=self._dialect)

    def quote_value(self, value: Any) -> str:
        """Render a Python value as a SQL literal.

        Binary values always render as ``x'<hex>'``; sqlglot's generic dialect
        would print them as a decimal number.

        Raises:
            SQLBuilderError: If sqlglot has no literal form for the value.

        Returns:
            The literal SQL text.
        """
        if isinstance(value, (bytes, bytearray)):
            return f"x'{bytes(value).hex()}'"
        try:
            literal = exp.convert(value)
        except ValueError as exc:
            msg = f"Cannot render value of type {type(value).__name__} as a SQL literal"
            raise SQLBuilderError(msg) from exc
        return literal.sql(dialect=self._dialect)

    def render_expression(self, expression: exp.Expression) -> str:
        return expression.sql(dialect=self._dialect)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(dialect={self.dialect!r})"
