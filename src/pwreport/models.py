"""Data model for Playwright HTML report archives.

The report archive stores a ``report.json`` summary plus one
``{fileId}.json`` detail entry per test file. These dataclasses mirror
that layout and are built with ``from_dict`` from the decoded JSON.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from pwreport.core.exceptions import InvalidResultId

# Result statuses that count as failures. "interrupted" and "skipped" are
# runner artifacts, not assertion failures.
FAILING_STATUSES = frozenset({"failed", "timedOut"})

RESULT_ID_SEPARATOR = "x"


@dataclass(frozen=True)
class Stats:
    """Aggregate outcome counts for a report or a file."""

    total: int = 0
    passed: int = 0
    failed: int = 0
    flaky: int = 0
    skipped: int = 0
    ok: bool = True

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Stats:
        """Create Stats from Playwright stats dict (expected/unexpected keys)."""
        return cls(
            total=data.get("total", 0),
            passed=data.get("expected", 0),
            failed=data.get("unexpected", 0),
            flaky=data.get("flaky", 0),
            skipped=data.get("skipped", 0),
            ok=data.get("ok", True),
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize using passed/failed naming."""
        return {
            "failed": self.failed,
            "flaky": self.flaky,
            "ok": self.ok,
            "passed": self.passed,
            "skipped": self.skipped,
            "total": self.total,
        }


@dataclass(frozen=True)
class Location:
    """Source location of a test or step."""

    file: str = ""
    line: int = 0
    column: int = 0

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> Location | None:
        if not data:
            return None
        return cls(
            file=data.get("file", ""),
            line=data.get("line", 0),
            column=data.get("column", 0),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"column": self.column, "file": self.file, "line": self.line}


@dataclass(frozen=True)
class Annotation:
    """Test annotation such as ``skip`` or ``issue``."""

    type: str
    description: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Annotation:
        return cls(type=data.get("type", ""), description=data.get("description"))


@dataclass(frozen=True)
class ErrorDetail:
    """Represents one error raised during a test attempt."""

    message: str
    codeframe: str | None = None
    stack: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ErrorDetail:
        """Create ErrorDetail from Playwright error dict."""
        return cls(
            message=data.get("message", ""),
            codeframe=data.get("codeframe"),
            stack=data.get("stack"),
        )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"message": self.message}
        if self.codeframe is not None:
            data["codeframe"] = self.codeframe
        if self.stack is not None:
            data["stack"] = self.stack
        return data


@dataclass(frozen=True)
class Attachment:
    """Attachment descriptor.

    This is metadata only: the payload is either inline (``body``, base64)
    or on disk relative to the report directory (``path``), and must be
    resolved separately.
    """

    name: str
    content_type: str
    path: str | None = None
    body: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Attachment:
        return cls(
            name=data.get("name", ""),
            content_type=data.get("contentType", "application/octet-stream"),
            path=data.get("path"),
            body=data.get("body"),
        )


@dataclass(frozen=True)
class TestStep:
    """A recorded step of a test attempt; steps nest."""

    __test__ = False

    title: str
    duration: float = 0
    start_time: str | None = None
    error: str | None = None
    skipped: bool = False
    location: Location | None = None
    snippet: str | None = None
    count: int = 1
    steps: list[TestStep] = field(default_factory=list)
    attachments: list[int] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TestStep:
        return cls(
            title=data.get("title", ""),
            duration=data.get("duration", 0),
            start_time=data.get("startTime"),
            error=data.get("error"),
            skipped=data.get("skipped", False),
            location=Location.from_dict(data.get("location")),
            snippet=data.get("snippet"),
            count=data.get("count", 1),
            steps=[cls.from_dict(s) for s in data.get("steps", [])],
            attachments=[a for a in data.get("attachments", []) if isinstance(a, int)],
        )


@dataclass(frozen=True)
class TestResult:
    """The outcome of one attempt (retry) of a test."""

    __test__ = False

    retry: int
    status: str
    duration: float = 0
    start_time: str | None = None
    errors: list[ErrorDetail] = field(default_factory=list)
    steps: list[TestStep] = field(default_factory=list)
    attachments: list[Attachment] = field(default_factory=list)
    annotations: list[Annotation] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TestResult:
        return cls(
            retry=data.get("retry", 0),
            status=data.get("status", "passed"),
            duration=data.get("duration", 0),
            start_time=data.get("startTime"),
            errors=[ErrorDetail.from_dict(e) for e in data.get("errors", [])],
            steps=[TestStep.from_dict(s) for s in data.get("steps", [])],
            attachments=[Attachment.from_dict(a) for a in data.get("attachments", [])],
            annotations=[Annotation.from_dict(a) for a in data.get("annotations", [])],
        )

    @property
    def is_failure(self) -> bool:
        """Check if this attempt failed or timed out."""
        return self.status in FAILING_STATUSES

    def attachments_named(self, name: str) -> list[Attachment]:
        """Return attachments with the given name, in declaration order."""
        return [a for a in self.attachments if a.name == name]


def _summary_fields(data: dict[str, Any]) -> dict[str, Any]:
    """Fields shared by test summaries and detailed test cases."""
    return {
        "test_id": data.get("testId", ""),
        "title": data.get("title", ""),
        "path": list(data.get("path", [])),
        "project_name": data.get("projectName", ""),
        "location": Location.from_dict(data.get("location")),
        "duration": data.get("duration", 0),
        "outcome": data.get("outcome", "expected"),
        "ok": data.get("ok", True),
        "tags": list(data.get("tags", [])),
        "annotations": [Annotation.from_dict(a) for a in data.get("annotations", [])],
    }


@dataclass(frozen=True)
class TestSummary:
    """Shallow test entry as listed in report.json."""

    __test__ = False

    test_id: str
    title: str
    path: list[str] = field(default_factory=list)
    project_name: str = ""
    location: Location | None = None
    duration: float = 0
    outcome: str = "expected"
    ok: bool = True
    tags: list[str] = field(default_factory=list)
    annotations: list[Annotation] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TestSummary:
        return cls(**_summary_fields(data))


@dataclass(frozen=True)
class TestCase(TestSummary):
    """Detailed test entry with every recorded attempt."""

    results: list[TestResult] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TestCase:
        return cls(
            **_summary_fields(data),
            results=[TestResult.from_dict(r) for r in data.get("results", [])],
        )


@dataclass(frozen=True)
class FileSummary:
    """Per-file entry in report.json."""

    file_id: str
    file_name: str
    stats: Stats = field(default_factory=Stats)
    tests: list[TestSummary] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> FileSummary:
        return cls(
            file_id=data.get("fileId", ""),
            file_name=data.get("fileName", ""),
            stats=Stats.from_dict(data.get("stats", {})),
            tests=[TestSummary.from_dict(t) for t in data.get("tests", [])],
        )


@dataclass(frozen=True)
class TestFile:
    """Per-file detail entry ({fileId}.json)."""

    __test__ = False

    file_id: str
    file_name: str
    tests: list[TestCase] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TestFile:
        return cls(
            file_id=data.get("fileId", ""),
            file_name=data.get("fileName", ""),
            tests=[TestCase.from_dict(t) for t in data.get("tests", [])],
        )


@dataclass(frozen=True)
class Report:
    """Top-level report summary (report.json)."""

    title: str | None
    start_time: float
    duration: float
    stats: Stats
    project_names: list[str] = field(default_factory=list)
    files: list[FileSummary] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Report:
        options = data.get("options") or {}
        return cls(
            title=options.get("title"),
            start_time=data.get("startTime", 0),
            duration=data.get("duration", 0),
            stats=Stats.from_dict(data.get("stats", {})),
            project_names=list(data.get("projectNames", [])),
            files=[FileSummary.from_dict(f) for f in data.get("files", [])],
            errors=list(data.get("errors", [])),
            metadata=dict(data.get("metadata") or {}),
        )


@dataclass(frozen=True)
class ResultId:
    """Stable reference to one attempt of one test.

    Rendered as ``{testId}x{retry}``. Parsing splits on the rightmost
    separator; since the retry part is digits only, any test ID
    (including one containing ``x``) is recovered exactly.
    """

    test_id: str
    retry: int

    def __str__(self) -> str:
        return f"{self.test_id}{RESULT_ID_SEPARATOR}{self.retry}"

    @classmethod
    def parse(cls, text: str) -> ResultId:
        """Parse a ``{testId}x{retry}`` string.

        Raises:
            InvalidResultId: If the separator is missing or retry is not a
                non-negative integer.
        """
        test_id, sep, retry = text.rpartition(RESULT_ID_SEPARATOR)
        if not sep:
            raise InvalidResultId(
                f'Invalid result ID format: "{text}". Expected format: {{testId}}x{{retry}}'
            )
        if not (retry.isascii() and retry.isdigit()):
            raise InvalidResultId(f'Invalid retry number in result ID: "{text}"')
        return cls(test_id=test_id, retry=int(retry))


@dataclass(frozen=True)
class FailingResult:
    """A failed or timed-out attempt, with enough identity to address it later."""

    test: TestCase
    result: TestResult
    file_id: str

    @property
    def result_id(self) -> ResultId:
        return ResultId(test_id=self.test.test_id, retry=self.result.retry)
