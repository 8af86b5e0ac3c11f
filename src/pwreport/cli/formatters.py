"""JSON output shapes for pwreport CLI commands."""

from __future__ import annotations

import base64
import json
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from pwreport.models import FailingResult, Report, ResultId
    from pwreport.trace import Trace


def to_json(data: Any) -> str:
    """Render command output as indented JSON."""
    return json.dumps(data, indent=2)


def format_stats(report: Report) -> dict[str, Any]:
    """Format report-level statistics."""
    return {
        "duration": report.duration,
        "errors": report.errors,
        "projectNames": report.project_names,
        "startTime": report.start_time,
        "stats": report.stats.to_dict(),
    }


def format_files(report: Report) -> list[dict[str, Any]]:
    """Format per-file statistics."""
    return [
        {
            "fileId": file.file_id,
            "fileName": file.file_name,
            "stats": file.stats.to_dict(),
            "testCount": len(file.tests),
        }
        for file in report.files
    ]


def format_failure(failing: FailingResult) -> dict[str, Any]:
    """Format one failing attempt."""
    test, result = failing.test, failing.result
    return {
        "duration": result.duration,
        "errors": [e.to_dict() for e in result.errors],
        "location": test.location.to_dict() if test.location else None,
        "path": test.path,
        "projectName": test.project_name,
        "resultId": str(failing.result_id),
        "retry": result.retry,
        "status": result.status,
        "tags": test.tags,
        "testId": test.test_id,
        "title": test.title,
    }


def format_failures(failing_results: list[FailingResult]) -> list[dict[str, Any]]:
    return [format_failure(f) for f in failing_results]


def format_trace(result_id: ResultId, trace: Trace) -> dict[str, Any]:
    """Format decoded trace events."""
    return {
        "eventCount": len(trace.events),
        "events": [event.to_json_dict() for event in trace.events],
        "resultId": str(result_id),
    }


def format_screenshots(result_id: ResultId, written: list[dict[str, str]]) -> dict[str, Any]:
    return {
        "files": written,
        "resultId": str(result_id),
        "screenshotCount": len(written),
    }


def format_error_context(
    result_id: ResultId, content_type: str, payload: bytes, is_text: bool
) -> dict[str, Any]:
    """Format an error-context payload as text or base64."""
    if is_text:
        content = payload.decode("utf-8", errors="replace")
    else:
        content = base64.b64encode(payload).decode("ascii")
    return {
        "content": content,
        "contentType": content_type,
        "encoding": "utf-8" if is_text else "base64",
        "resultId": str(result_id),
    }
