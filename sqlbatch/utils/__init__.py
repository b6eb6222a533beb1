"""Utility functions and classes for sqlbatch."""

from sqlbatch.utils.logging import configure_logging, get_logger

__all__ = ("configure_logging", "get_logger")
