"""
Data reader exception hierarchy.

All exceptions inherit from ``DataReaderError`` and provide
``to_dict()`` for API-friendly error responses.
"""

from __future__ import annotations

from difflib import get_close_matches
from typing import Any


class DataReaderError(Exception):
    """Base exception for all data reader errors."""

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.__class__.__name__,
            "message": str(self),
        }


class InvalidArgumentError(DataReaderError, ValueError):
    """A reader or query was configured with an unusable argument."""

    def __init__(self, message: str, argument: str | None = None) -> None:
        self.message = message
        self.argument = argument
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "INVALID_ARGUMENT",
            "message": self.message,
            "argument": self.argument,
        }


class UnsupportedOperatorError(DataReaderError):
    """
    Filter operator has no registered processor.

    Provides fuzzy-matched suggestions for likely intended operators.
    """

    def __init__(self, operator: str, supported_operators: list[str]) -> None:
        self.operator = operator
        self.supported_operators = supported_operators
        self.suggestions = get_close_matches(
            operator, supported_operators, n=3, cutoff=0.6
        )

        message = f'Filter operator "{operator}" is not supported.'
        if self.suggestions:
            message += f" Did you mean: {', '.join(self.suggestions)}?"
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "UNSUPPORTED_OPERATOR",
            "operator": self.operator,
            "suggestions": self.suggestions,
            "supported_operators": sorted(self.supported_operators),
        }
