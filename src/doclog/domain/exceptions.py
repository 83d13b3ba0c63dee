"""Exceptions raised by the document store."""

from __future__ import annotations


class DocLogError(Exception):
    """Base error for the document store."""


class StorageIOError(DocLogError):
    """The log file is missing, unreadable or unwritable."""


class LogParseError(DocLogError):
    """A non-blank log line does not carry a valid JSON payload."""

    def __init__(self, message: str, line_number: int | None = None) -> None:
        super().__init__(message)
        self.line_number = line_number


class InvalidQueryShapeError(DocLogError):
    """A filter, operator or options value has no recognized shape."""


class InvalidStoreConfigError(DocLogError):
    """Store construction parameters are inconsistent."""
