"""
Unit tests for custom exceptions.
"""
from core.exceptions import (
    BatchReadFailure,
    CardImportException,
    ConfigurationError,
)


def test_base_exception():
    """Test base exception class."""
    exc = CardImportException("Test error", details={"key": "value"})
    assert str(exc) == "Test error"
    assert exc.message == "Test error"
    assert exc.details == {"key": "value"}


def test_exception_hierarchy():
    """Test exception inheritance."""
    assert issubclass(BatchReadFailure, CardImportException)
    assert issubclass(ConfigurationError, CardImportException)


def test_exception_with_details():
    """Test exception with details dictionary."""
    details = {"filename": "statement.csv", "error": "disk error"}
    exc = BatchReadFailure("Failed to read uploaded file", details=details)
    assert exc.message == "Failed to read uploaded file"
    assert exc.details["filename"] == "statement.csv"


def test_exception_without_details():
    """Test exception without details."""
    exc = ConfigurationError("Bad port")
    assert exc.message == "Bad port"
    assert exc.details == {}
