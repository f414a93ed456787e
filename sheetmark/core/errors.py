from __future__ import annotations


class SheetmarkError(Exception):
    """Base class for errors that abort a job."""


class ValidationFailed(SheetmarkError):
    """Raised when the sheet fails the header or date checks."""


class InvalidSortSpec(SheetmarkError):
    """Raised for malformed sort fields or out-of-range sort columns."""


class InvalidSearchSpec(SheetmarkError):
    """Raised for malformed job fields."""


class MatcherFailure(SheetmarkError):
    """Raised when the multi-pattern matcher cannot search a cell."""


class IOFailure(SheetmarkError):
    """Raised when a workbook cannot be read or written."""


class EntryNotFound(SheetmarkError):
    """Raised when no uploaded file is registered under an id."""
