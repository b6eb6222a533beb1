"""Value and identifier types shared across sqlbatch.

Cell values handed to the builder fall into a closed set of kinds, see
:class:`ValueKind`. :func:`classify_value` maps any Python value onto that set
so resolution can dispatch on the kind instead of probing types repeatedly.
"""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any, Final, Optional, Union

from sqlglot import exp
from typing_extensions import TypeAlias

__all__ = (
    "SCALAR_TYPES",
    "TableIdentifier",
    "TableRef",
    "ValueKind",
    "classify_value",
    "is_scalar",
    "is_sub_query",
)

SCALAR_TYPES: Final = (str, int, float, bool, Decimal)


class ValueKind(str, Enum):
    """Kinds of values a row cell can hold."""

    NULL = "null"
    SCALAR = "scalar"
    EXPRESSION = "expression"
    SUBQUERY = "subquery"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class TableIdentifier:
    """A table name with an optional schema qualifier."""

    name: str
    schema: Optional[str] = None

    def __str__(self) -> str:
        if self.schema:
            return f"{self.schema}.{self.name}"
        return self.name


TableRef: TypeAlias = Union[str, TableIdentifier]


def is_scalar(value: Any) -> bool:
    """Check if a value can be bound as a parameter or rendered as a plain literal."""
    return isinstance(value, SCALAR_TYPES)


def is_sub_query(value: Any) -> bool:
    """Check if a value is a query usable as a row source or nested value."""
    return isinstance(value, exp.Query)


def classify_value(value: Any) -> ValueKind:
    """Classify a cell value.

    Args:
        value: The raw cell value.

    Returns:
        The kind of the value. Anything that is neither null, scalar nor a
        query is treated as an expression for the delegated resolver.
    """
    if value is None:
        return ValueKind.NULL
    if is_scalar(value):
        return ValueKind.SCALAR
    if is_sub_query(value):
        return ValueKind.SUBQUERY
    return ValueKind.EXPRESSION
