from sqlbatch.exceptions import ImproperConfigurationError, InvalidInputError, SQLBatchError, SQLBuilderError


def test_exception_hierarchy():
    """Test exception classes inherit correctly."""
    assert issubclass(InvalidInputError, SQLBuilderError)
    assert issubclass(SQLBuilderError, SQLBatchError)
    assert issubclass(ImproperConfigurationError, SQLBatchError)


def test_exception_messages():
    """Test exceptions render their message or a default."""
    assert str(InvalidInputError("bad rows")) == "bad rows"
    assert str(InvalidInputError()) == "Invalid input for SQL statement."
    assert str(SQLBuilderError()) == "Issues building SQL statement."
    assert repr(InvalidInputError("bad rows")) == "InvalidInputError - bad rows"


def test_exception_chaining():
    """Test exceptions support chaining with 'from'."""
    try:
        try:
            raise ValueError("Original error")
        except ValueError as e:
            raise ImproperConfigurationError("Wrapped error") from e
    except ImproperConfigurationError as exc:
        assert str(exc) == "Wrapped error"
        assert isinstance(exc.__cause__, ValueError)


def test_exception_detail_falls_back_to_class_default():
    """Test ``detail`` mirrors the message or the class default."""
    assert InvalidInputError("bad rows").detail == "bad rows"
    assert InvalidInputError().detail == "Invalid input for SQL statement."
    assert str(ImproperConfigurationError()) == ""
    assert repr(ImproperConfigurationError()) == "ImproperConfigurationError"
    assert InvalidInputError("bad rows").args == ("bad rows",)
