"""
Error taxonomy of the import pipeline.

Hard errors abort an import before anything reaches the calendar store.
Cells with an unresolved weekday or time axis are not errors at all: they
are dropped by the assembler and never show up here.
"""

from __future__ import annotations


class TimetableImportError(Exception):
    """Base class; the message is meant to be shown to the user as-is."""


class ConversionError(TimetableImportError):
    """The document could not be converted into markup."""


class NoTableFound(TimetableImportError):
    """The converted markup contains no table."""

    def __init__(self, message: str = "No table found in the document") -> None:
        super().__init__(message)


class EmptyScheduleError(TimetableImportError):
    """A table was found but no course survived assembly."""

    def __init__(self, message: str = "The table is empty or no course could be parsed") -> None:
        super().__init__(message)
