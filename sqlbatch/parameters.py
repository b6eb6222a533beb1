"""Parameter styles, the ordered parameter container and placeholder formatting."""

from collections.abc import ItemsView, Iterator
from enum import Enum
from typing import Any, Final, Optional, Union

from sqlbatch.exceptions import ImproperConfigurationError

__all__ = (
    "NUMBERED_STYLES",
    "POSITIONAL_STYLES",
    "ParameterContainer",
    "ParameterStyle",
    "ParameterStyleDriver",
)


class ParameterStyle(str, Enum):
    """Parameter style enumeration.

    Supported parameter styles:
    - QMARK: ? placeholders
    - NUMERIC: $1, $2 placeholders
    - POSITIONAL_PYFORMAT: %s placeholders
    - NAMED_PYFORMAT: %(name)s placeholders
    - NAMED_COLON: :name placeholders
    - NAMED_AT: @name placeholders
    - NAMED_DOLLAR: $name placeholders
    - POSITIONAL_COLON: :1, :2 placeholders
    """

    QMARK = "qmark"
    NUMERIC = "numeric"
    NAMED_COLON = "named_colon"
    POSITIONAL_COLON = "positional_colon"
    NAMED_AT = "named_at"
    NAMED_DOLLAR = "named_dollar"
    NAMED_PYFORMAT = "pyformat_named"
    POSITIONAL_PYFORMAT = "pyformat_positional"

    def __str__(self) -> str:
        """String representation for better error messages.

        Returns:
            The enum value as a string.
        """
        return self.value


POSITIONAL_STYLES: Final = frozenset({
    ParameterStyle.QMARK,
    ParameterStyle.NUMERIC,
    ParameterStyle.POSITIONAL_COLON,
    ParameterStyle.POSITIONAL_PYFORMAT,
})
NUMBERED_STYLES: Final = frozenset({ParameterStyle.NUMERIC, ParameterStyle.POSITIONAL_COLON})

_PLACEHOLDER_FORMATS: Final = {
    ParameterStyle.NAMED_COLON: ":{name}",
    ParameterStyle.NAMED_AT: "@{name}",
    ParameterStyle.NAMED_DOLLAR: "${name}",
    ParameterStyle.NAMED_PYFORMAT: "%({name})s",
    ParameterStyle.QMARK: "?",
    ParameterStyle.POSITIONAL_PYFORMAT: "%s",
    ParameterStyle.NUMERIC: "${ordinal}",
    ParameterStyle.POSITIONAL_COLON: ":{ordinal}",
}


class ParameterStyleDriver:
    """Driver that formats placeholders for a single parameter style.

    Positional styles ignore the name; the order of the parameter container
    then defines the binding order. Numbered styles (``$1``, ``:1``) assign
    ordinals from 1 in the order names are first formatted, and a name seen
    again keeps its ordinal. Use a fresh driver, or :meth:`reset`, per
    statement.
    """

    __slots__ = ("_ordinals", "_template", "style")

    def __init__(self, style: Union[ParameterStyle, str] = ParameterStyle.NAMED_COLON) -> None:
        try:
            self.style = ParameterStyle(style)
        except ValueError as exc:
            msg = f"Unknown parameter style: {style!r}"
            raise ImproperConfigurationError(msg) from exc
        self._template = _PLACEHOLDER_FORMATS[self.style]
        self._ordinals: dict[str, int] = {}

    @property
    def is_positional(self) -> bool:
        return self.style in POSITIONAL_STYLES

    def format_parameter_name(self, name: str) -> str:
        if self.style in NUMBERED_STYLES:
            ordinal = self._ordinals.setdefault(name, len(self._ordinals) + 1)
            return self._template.format(ordinal=ordinal)
        return self._template.format(name=name)

    def reset(self) -> None:
        self._ordinals.clear()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(style={self.style!r})"


class ParameterContainer:
    """Ordered mapping of placeholder names to bound values.

    Re-binding an existing name replaces its value but keeps its position.
    """

    __slots__ = ("_data",)

    def __init__(self, data: Optional[dict[str, Any]] = None) -> None:
        self._data: dict[str, Any] = dict(data) if data else {}

    def set(self, name: str, value: Any) -> None:
        self._data[name] = value

    def get(self, name: str, default: Any = None) -> Any:
        return self._data.get(name, default)

    def __getitem__(self, name: str) -> Any:
        return self._data[name]

    def __setitem__(self, name: str, value: Any) -> None:
        self.set(name, value)

    def __contains__(self, name: object) -> bool:
        return name in self._data

    def __len__(self) -> int:
        return len(self._data)

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ParameterContainer):
            return list(self._data.items()) == list(other._data.items())
        if isinstance(other, dict):
            return self._data == other
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def items(self) -> ItemsView[str, Any]:
        return self._data.items()

    def names(self) -> list[str]:
        return list(self._data)

    def values(self) -> list[Any]:
        return list(self._data.values())

    def to_dict(self) -> dict[str, Any]:
        """Return the bindings as a plain dictionary for named drivers."""
        return dict(self._data)

    def to_tuple(self) -> tuple[Any, ...]:
        """Return the bound values in binding order for positional drivers."""
        return tuple(self._data.values())

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._data!r})"
