from typing import ClassVar, Optional

__all__ = (
    "ImproperConfigurationError",
    "InvalidInputError",
    "SQLBatchError",
    "SQLBuilderError",
)


class SQLBatchError(Exception):
    """Base exception class from which all sqlbatch exceptions inherit.

    ``detail`` holds the message, falling back to the class's
    ``default_detail`` when none is given.
    """

    default_detail: ClassVar[str] = ""

    def __init__(self, detail: Optional[str] = None) -> None:
        self.detail = str(detail) if detail else self.default_detail
        super().__init__(self.detail)

    def __repr__(self) -> str:
        if self.detail:
            return f"{type(self).__name__} - {self.detail}"
        return type(self).__name__

    def __str__(self) -> str:
        return self.detail


class SQLBuilderError(SQLBatchError):
    """Issues Building or Generating SQL statements."""

    default_detail = "Issues building SQL statement."


class InvalidInputError(SQLBuilderError):
    """Invalid rows, sources or columns were handed to a builder."""

    default_detail = "Invalid input for SQL statement."


class ImproperConfigurationError(SQLBatchError):
    """Raised when the builder is asked to do something its configuration or
    injected collaborators cannot support.
    """
