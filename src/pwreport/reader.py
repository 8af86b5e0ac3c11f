"""Reads the report model out of a report archive."""

from __future__ import annotations

import json
from typing import Any

from pwreport.container import Container
from pwreport.core.exceptions import MalformedBundle, MissingReportEntry
from pwreport.models import Report, TestFile

REPORT_JSON = "report.json"
JSON_EXT = ".json"


class ReportReader:
    """Decodes report.json and per-file detail entries from a Container.

    Nothing is cached: every call re-reads and re-decodes the entry.
    """

    def __init__(self, container: Container) -> None:
        self.container = container

    def read_report(self) -> Report:
        """Read the top-level report summary.

        Raises:
            MissingReportEntry: If the archive has no report.json.
            MalformedBundle: If report.json is not valid JSON.
        """
        data = self._read_json(REPORT_JSON)
        if data is None:
            raise MissingReportEntry(REPORT_JSON)
        return Report.from_dict(data)

    def read_file_detail(self, file_id: str) -> TestFile | None:
        """Read the detail entry for a file, or None if the archive has none."""
        data = self._read_json(f"{file_id}{JSON_EXT}")
        if data is None:
            return None
        return TestFile.from_dict(data)

    def _read_json(self, name: str) -> Any:
        raw = self.container.get_entry(name)
        if raw is None:
            return None
        try:
            return json.loads(raw.decode("utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise MalformedBundle(f"Invalid JSON in {name}: {e}") from e
