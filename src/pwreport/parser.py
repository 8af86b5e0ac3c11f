"""Extraction engine for Playwright HTML reports."""

from __future__ import annotations

from pathlib import Path

from pwreport.attachments import ERROR_CONTEXT, SCREENSHOT, AttachmentHandle, AttachmentResolver
from pwreport.bundle import load_bundle, resolve_report_path
from pwreport.container import Container
from pwreport.models import FailingResult, Report, ResultId, TestResult
from pwreport.reader import ReportReader
from pwreport.selector import select_failing
from pwreport.trace import Trace, TraceDecoder


class ReportParser:
    """Read-only access to one parsed HTML report.

    All methods are functions of the loaded archive and their arguments;
    nothing is cached between calls.
    """

    def __init__(self, html_path: Path, container: Container) -> None:
        self.html_path = html_path
        self.reader = ReportReader(container)
        self.resolver = AttachmentResolver(html_path.parent)
        self.trace_decoder = TraceDecoder(self.resolver)

    @classmethod
    async def parse(cls, html_path: str | Path) -> ReportParser:
        """Load an HTML report and open its embedded archive.

        Args:
            html_path: Path to the report's index.html, or the report
                directory containing it.

        Raises:
            FileNotFoundError: If the report file doesn't exist.
            MalformedBundle: If the embedded archive cannot be decoded.
        """
        path = resolve_report_path(html_path)
        container = await load_bundle(path)
        return cls(path, container)

    def get_report(self) -> Report:
        """Return the report summary."""
        return self.reader.read_report()

    def get_failing_results(self, report: Report) -> list[FailingResult]:
        """Return every failed or timed-out attempt, in stable order."""
        return select_failing(report, self.reader)

    def find_failing_result(self, report: Report, result_id: str | ResultId) -> FailingResult | None:
        """Find one failing attempt by its ``{testId}x{retry}`` identifier.

        Raises:
            InvalidResultId: If ``result_id`` is a malformed string.
        """
        if isinstance(result_id, str):
            result_id = ResultId.parse(result_id)
        for failing in self.get_failing_results(report):
            if failing.result_id == result_id:
                return failing
        return None

    async def get_trace(self, result: TestResult) -> Trace | None:
        """Decode the result's trace, or None if it has none."""
        return await self.trace_decoder.decode(result)

    def get_screenshots(self, result: TestResult) -> list[AttachmentHandle]:
        """List the result's screenshots without reading them."""
        return self.resolver.handles_by_name(result, SCREENSHOT)

    def get_error_context(self, result: TestResult) -> AttachmentHandle | None:
        """Return the result's first error-context attachment, if any."""
        handles = self.resolver.handles_by_name(result, ERROR_CONTEXT)
        return handles[0] if handles else None
