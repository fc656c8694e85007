"""
Error taxonomy for the Event Timeline Plotter.

``LoadError`` and ``ParseError`` abort a load and leave the view in its
loading state.  ``RowValidationError`` describes one rejected CSV row;
the normaliser returns it as a value instead of raising it so sibling
rows are unaffected.
"""

from typing import Any, Optional


class TimelinePlotterError(Exception):
    """Base class for all plotter errors."""


class LoadError(TimelinePlotterError, OSError):
    """The CSV resource could not be fetched (missing file, network error)."""

    def __init__(self, locator: str, reason: str):
        self.locator = locator
        self.reason = reason
        super().__init__(f"Could not load '{locator}': {reason}")


class ParseError(TimelinePlotterError, ValueError):
    """The fetched content is not well-formed CSV."""

    def __init__(self, message: str, line_number: Optional[int] = None):
        self.line_number = line_number
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)


class RowValidationError(TimelinePlotterError, ValueError):
    """A single CSV row could not be turned into a record.

    Parameters
    ----------
    line_number : int
        Row number counted from the header, which is row 1.
    field : str
        Column that failed validation, e.g. ``"date"``.
    raw_value : object
        The offending cell, ``None`` when the cell was missing.
    reason : str
        Short human-readable cause.
    """

    def __init__(self, line_number: int, field: str, raw_value: Any, reason: str):
        self.line_number = line_number
        self.field = field
        self.raw_value = raw_value
        self.reason = reason
        super().__init__(
            f"line {line_number}: {field} {raw_value!r} {reason}"
        )

    def __eq__(self, other):
        if not isinstance(other, RowValidationError):
            return NotImplemented
        return (
            self.line_number == other.line_number
            and self.field == other.field
            and self.raw_value == other.raw_value
            and self.reason == other.reason
        )

    def __hash__(self):
        return hash((self.line_number, self.field, repr(self.raw_value), self.reason))
