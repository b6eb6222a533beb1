"""Tests for parameter styles, drivers and the parameter container."""

import pytest

from sqlbatch.exceptions import ImproperConfigurationError
from sqlbatch.parameters import ParameterContainer, ParameterStyle, ParameterStyleDriver
from sqlbatch.protocols import DriverProtocol, ParameterContainerProtocol


@pytest.mark.parametrize(
    ("style", "expected"),
    [
        (ParameterStyle.NAMED_COLON, ":p0"),
        (ParameterStyle.NAMED_AT, "@p0"),
        (ParameterStyle.NAMED_DOLLAR, "$p0"),
        (ParameterStyle.NAMED_PYFORMAT, "%(p0)s"),
        (ParameterStyle.QMARK, "?"),
        (ParameterStyle.POSITIONAL_PYFORMAT, "%s"),
        ("named_colon", ":p0"),
    ],
)
def test_driver_formats_placeholders(style: ParameterStyle, expected: str) -> None:
    assert ParameterStyleDriver(style).format_parameter_name("p0") == expected


def test_driver_positional_flag() -> None:
    assert ParameterStyleDriver(ParameterStyle.QMARK).is_positional
    assert not ParameterStyleDriver(ParameterStyle.NAMED_COLON).is_positional


def test_driver_rejects_unknown_style() -> None:
    with pytest.raises(ImproperConfigurationError, match="Unknown parameter style"):
        ParameterStyleDriver("bogus")


@pytest.mark.parametrize(("style", "prefix"), [(ParameterStyle.NUMERIC, "$"), (ParameterStyle.POSITIONAL_COLON, ":")])
def test_driver_numbers_placeholders_from_one(style: ParameterStyle, prefix: str) -> None:
    driver = ParameterStyleDriver(style)
    assert driver.is_positional
    assert [driver.format_parameter_name(name) for name in ("a", "b", "a", "c")] == [
        f"{prefix}1",
        f"{prefix}2",
        f"{prefix}1",
        f"{prefix}3",
    ]


def test_driver_reset_restarts_numbering() -> None:
    driver = ParameterStyleDriver("numeric")
    driver.format_parameter_name("a")
    driver.reset()
    assert driver.format_parameter_name("b") == "$1"


def test_driver_satisfies_protocol() -> None:
    assert isinstance(ParameterStyleDriver(), DriverProtocol)


def test_container_keeps_insertion_order() -> None:
    container = ParameterContainer()
    container.set("b", 2)
    container.set("a", 1)
    container["b"] = 3
    assert container.names() == ["b", "a"]
    assert container.values() == [3, 1]
    assert container.to_tuple() == (3, 1)
    assert container.to_dict() == {"b": 3, "a": 1}


def test_container_mapping_access() -> None:
    container = ParameterContainer({"x": 1})
    assert "x" in container
    assert container["x"] == 1
    assert container.get("missing", "default") == "default"
    assert len(container) == 1
    assert list(container) == ["x"]
    assert isinstance(container, ParameterContainerProtocol)


def test_container_equality_is_order_sensitive() -> None:
    first = ParameterContainer({"a": 1, "b": 2})
    second = ParameterContainer({"b": 2, "a": 1})
    assert first != second
    assert first == {"b": 2, "a": 1}
