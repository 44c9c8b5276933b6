# -*- encoding: utf-8 -*-
"""
FSP Exceptions.

Custom exceptions for building and running filter, sort and page engines.

All client-input problems (unknown fields, empty field names, bad page
windows) are raised while the engines are constructed, never while they
run over elements.
"""

from typing import Optional


class FSPError(Exception):
    """Base exception for all FSP errors."""

    def to_dict(self) -> dict:
        """Convert exception to dictionary representation."""
        return {
            "error": type(self).__name__,
            "message": str(self),
        }


class ParameterParseError(FSPError):
    """
    Raised when an FSP clause expression cannot be parsed.

    Attributes:
        text: The expression that failed to parse
        line: Line of the offending token, if known
        column: Column of the offending token, if known
    """

    def __init__(
        self,
        message: str,
        text: str = "",
        line: Optional[int] = None,
        column: Optional[int] = None,
    ):
        super().__init__(message)
        self.text = text
        self.line = line
        self.column = column

    def to_dict(self) -> dict:
        d = super().to_dict()
        d.update({
            "text": self.text,
            "line": self.line,
            "column": self.column,
        })
        return d


class UnknownFieldError(FSPError, ValueError):
    """
    Raised when a parameter names a field that has no registered factory.

    This is a client-input error: the request is rejected, not retried.

    Attributes:
        field_name: Normalized name of the unknown field
        operation: "filtering" or "sorting"

    Usage:
        try:
            engine = FilterEngine(params, factories)
        except UnknownFieldError as e:
            return 400, e.to_dict()
    """

    def __init__(self, field_name: str, operation: str = "filtering"):
        super().__init__(f"Field '{field_name}' is not valid for {operation}!")
        self.field_name = field_name
        self.operation = operation

    def to_dict(self) -> dict:
        d = super().to_dict()
        d.update({
            "field_name": self.field_name,
            "operation": self.operation,
        })
        return d


class EmptyFieldNameError(FSPError, ValueError):
    """Raised when a field name is empty or is only an inclusion/exclusion sigil."""

    def __init__(self, raw_name: Optional[str] = None):
        super().__init__("field name must not be empty")
        self.raw_name = raw_name


class InvalidPageParameterError(FSPError, ValueError):
    """Raised when a page window has a negative start or limit."""
    pass


class UnrecognizedMatchTypeError(FSPError):
    """
    Raised when a string criterion is evaluated with an unknown match type.

    Factories only accept StringMatchType members, so this signals a broken
    invariant rather than bad client input.
    """

    def __init__(self, match_type: object):
        super().__init__(f"Found unknown match type {match_type}")
        self.match_type = match_type
