"""Shared exceptions for the pwreport package.

Absence (no detail entry, no attachment, no trace) is never an exception.
These errors are reserved for bundles that cannot be decoded.
"""

from __future__ import annotations


class ReportExtractionError(Exception):
    """Base class for all report extraction errors."""


class MalformedBundle(ReportExtractionError):
    """The HTML report has no usable embedded archive."""


class MalformedContainer(ReportExtractionError):
    """A byte buffer could not be opened as a zip archive."""


class MissingReportEntry(ReportExtractionError):
    """The report archive has no report.json entry."""

    def __init__(self, entry_name: str = "report.json") -> None:
        self.entry_name = entry_name
        super().__init__(f"Could not find {entry_name} in report archive")


class AttachmentReadFailure(ReportExtractionError):
    """A declared attachment payload could not be read."""

    def __init__(self, message: str, path: str | None = None) -> None:
        self.path = path
        super().__init__(message)


class TraceDecodeFailure(ReportExtractionError):
    """A trace archive or one of its event lines is corrupt."""

    def __init__(self, message: str, line_number: int | None = None) -> None:
        self.line_number = line_number
        if line_number is not None:
            message = f"{message} (line {line_number})"
        super().__init__(message)


class InvalidResultId(ReportExtractionError):
    """A result ID string is not of the form {testId}x{retry}."""
