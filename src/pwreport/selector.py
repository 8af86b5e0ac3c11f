"""Selection of failing results from a report."""

from __future__ import annotations

from pwreport.core.logging import get_logger
from pwreport.models import FailingResult, Report
from pwreport.reader import ReportReader

logger = get_logger(__name__)


def select_failing(report: Report, reader: ReportReader) -> list[FailingResult]:
    """Collect every failed or timed-out attempt in the report.

    Files whose detail entry is missing are skipped. Output order is file
    order, then test order, then attempt order, so the same bundle always
    yields the same sequence.

    Args:
        report: Report summary listing the files.
        reader: Reader over the same archive, used to load file details.

    Returns:
        Failing results in stable order.
    """
    failing: list[FailingResult] = []

    for file in report.files:
        detail = reader.read_file_detail(file.file_id)
        if detail is None:
            logger.debug("file_detail_missing", file_id=file.file_id, file_name=file.file_name)
            continue

        for test in detail.tests:
            for result in test.results:
                if result.is_failure:
                    failing.append(FailingResult(test=test, result=result, file_id=file.file_id))

    return failing
