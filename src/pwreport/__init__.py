"""pwreport - extract failures, traces and screenshots from Playwright HTML reports."""

__version__ = "0.1.0"

from pwreport.core.exceptions import (
    AttachmentReadFailure,
    InvalidResultId,
    MalformedBundle,
    MissingReportEntry,
    ReportExtractionError,
    TraceDecodeFailure,
)
from pwreport.models import FailingResult, Report, ResultId, TestCase, TestResult
from pwreport.parser import ReportParser
from pwreport.trace import Trace

__all__ = [
    "ReportParser",
    "Report",
    "TestCase",
    "TestResult",
    "FailingResult",
    "ResultId",
    "Trace",
    "ReportExtractionError",
    "MalformedBundle",
    "MissingReportEntry",
    "AttachmentReadFailure",
    "TraceDecodeFailure",
    "InvalidResultId",
]
