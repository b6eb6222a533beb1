from __future__ import annotations

from collections.abc import Generator
from pathlib import Path
from typing import Any

import pytest
from sqlglot import exp

from sqlbatch.config import reset_global_config
from sqlbatch.parameters import ParameterContainer

here = Path(__file__).parent
root_path = here.parent


class IdentityPlatform:
    """Platform that leaves identifiers and literals untouched."""

    def quote_identifier(self, name: str) -> str:
        return name

    def quote_value(self, value: Any) -> str:
        return str(value)

    def render_expression(self, expression: exp.Expression) -> str:
        return expression.sql()


class ColonDriver:
    """Driver producing ``:name`` placeholders."""

    def format_parameter_name(self, name: str) -> str:
        return f":{name}"


@pytest.fixture
def platform() -> IdentityPlatform:
    return IdentityPlatform()


@pytest.fixture
def driver() -> ColonDriver:
    return ColonDriver()


@pytest.fixture
def parameter_container() -> ParameterContainer:
    return ParameterContainer()


@pytest.fixture
def sub_query() -> exp.Select:
    """Sub-query used as an INSERT ... SELECT source."""
    return exp.select("a", "b").from_("src")


@pytest.fixture(autouse=True)
def _reset_global_config() -> Generator[None, None, None]:
    reset_global_config()
    yield
    reset_global_config()
