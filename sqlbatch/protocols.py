"""Runtime-checkable protocols for the collaborators injected at assembly time.

The builder never quotes identifiers, renders literals or names placeholders on
its own. It delegates to objects satisfying these protocols, which keeps the
assembly logic independent of any particular database dialect or driver.
"""

from typing import TYPE_CHECKING, Any, Optional, Protocol, runtime_checkable

if TYPE_CHECKING:
    from sqlglot import exp

__all__ = (
    "DriverProtocol",
    "ParameterContainerProtocol",
    "PlatformProtocol",
    "SubQueryResolverProtocol",
    "ValueResolverProtocol",
)


@runtime_checkable
class PlatformProtocol(Protocol):
    """Protocol for dialect-aware quoting and rendering."""

    def quote_identifier(self, name: str) -> str:
        """Quote a table or column identifier."""
        ...

    def quote_value(self, value: Any) -> str:
        """Render a scalar as a SQL literal."""
        ...

    def render_expression(self, expression: "exp.Expression") -> str:
        """Render an expression or query as SQL text."""
        ...


@runtime_checkable
class DriverProtocol(Protocol):
    """Protocol for drivers that name placeholders."""

    def format_parameter_name(self, name: str) -> str:
        """Return the placeholder token for a parameter name."""
        ...


@runtime_checkable
class ParameterContainerProtocol(Protocol):
    """Protocol for ordered parameter sinks."""

    def set(self, name: str, value: Any) -> None:
        """Bind a value to a parameter name."""
        ...

    def __len__(self) -> int:
        """Get number of bound parameters."""
        ...


@runtime_checkable
class ValueResolverProtocol(Protocol):
    """Protocol for callables that render a single cell value."""

    def __call__(
        self,
        value: Any,
        platform: PlatformProtocol,
        driver: Optional[DriverProtocol] = None,
        parameter_container: Optional[ParameterContainerProtocol] = None,
    ) -> str: ...


@runtime_checkable
class SubQueryResolverProtocol(Protocol):
    """Protocol for callables that render a sub-query source."""

    def __call__(
        self,
        query: Any,
        platform: PlatformProtocol,
        driver: Optional[DriverProtocol] = None,
        parameter_container: Optional[ParameterContainerProtocol] = None,
    ) -> str: ...
