"""Tests for the sqlglot-backed platform."""

from decimal import Decimal

import pytest
from sqlglot import exp

from sqlbatch import InsertMultiple
from sqlbatch.exceptions import SQLBuilderError
from sqlbatch.platform import SqlglotPlatform
from sqlbatch.protocols import PlatformProtocol


def test_platform_satisfies_protocol() -> None:
    assert isinstance(SqlglotPlatform(), PlatformProtocol)


@pytest.mark.parametrize(("dialect", "expected"), [(None, '"users"'), ("postgres", '"users"'), ("mysql", "`users`")])
def test_quote_identifier(dialect: str, expected: str) -> None:
    assert SqlglotPlatform(dialect).quote_identifier("users") == expected


def test_quote_value_literals() -> None:
    platform = SqlglotPlatform()
    assert platform.quote_value("abc") == "'abc'"
    assert platform.quote_value("O'Brien") == "'O''Brien'"
    assert platform.quote_value(7) == "7"
    assert platform.quote_value(1.5) == "1.5"
    assert platform.quote_value(Decimal("2.50")) == "2.50"
    assert platform.quote_value(True) == "TRUE"


def test_quote_value_rejects_unconvertible() -> None:
    with pytest.raises(SQLBuilderError, match="Cannot render value"):
        SqlglotPlatform().quote_value(object())


def test_render_expression() -> None:
    assert SqlglotPlatform().render_expression(exp.select("a").from_("b")) == "SELECT a FROM b"


def test_unknown_dialect_raises() -> None:
    with pytest.raises(ValueError):
        SqlglotPlatform("not-a-dialect")


@pytest.mark.parametrize("dialect", [None, "postgres", "mysql", "sqlite"])
@pytest.mark.parametrize("value", [b"xy", bytearray(b"xy")])
def test_quote_value_renders_binary_as_hex_literal(dialect: str, value: bytes) -> None:
    assert SqlglotPlatform(dialect).quote_value(value) == "x'7879'"


def test_binary_cell_in_statement_uses_hex_literal() -> None:
    builder = InsertMultiple("t").columns(["e"]).set_rows([{"e": b"xy"}])
    assert builder.get_sql_string() == "INSERT INTO \"t\" (\"e\") VALUES (x'7879')"
