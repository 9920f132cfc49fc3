"""Exception types shared across jsonconv."""

from __future__ import annotations

from typing import Optional


class JsonConvError(Exception):
    """Base error for jsonconv operations."""


class ParseError(JsonConvError):
    """Raised when the input file is missing, unreadable or not valid JSON."""

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        line: Optional[int] = None,
        column: Optional[int] = None,
    ):
        super().__init__(message)
        self.path = path
        self.line = line
        self.column = column


class ConversionError(JsonConvError):
    """Raised when a single conversion cannot be produced."""

    def __init__(self, message: str, format_key: Optional[str] = None):
        super().__init__(message)
        self.format_key = format_key
