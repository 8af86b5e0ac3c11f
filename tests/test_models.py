"""Tests for the report data model."""

from __future__ import annotations

import pytest

from pwreport import models
from pwreport.models import (
    Attachment,
    FailingResult,
    FileSummary,
    Report,
    ResultId,
    Stats,
    TestCase,
    TestResult,
    TestStep,
)
from tests.factories import make_attachment, make_result, make_stats, make_test


class TestStats:
    """Tests for Stats mapping from expected/unexpected naming."""

    def test_from_dict_maps_expected_and_unexpected(self):
        stats = Stats.from_dict(make_stats(expected=3, unexpected=2, flaky=1, skipped=4))

        assert stats.passed == 3
        assert stats.failed == 2
        assert stats.flaky == 1
        assert stats.skipped == 4
        assert stats.total == 10
        assert stats.ok is False

    def test_to_dict_uses_passed_failed_naming(self):
        stats = Stats(total=2, passed=1, failed=1, ok=False)

        assert stats.to_dict() == {
            "failed": 1,
            "flaky": 0,
            "ok": False,
            "passed": 1,
            "skipped": 0,
            "total": 2,
        }

    def test_missing_keys_default_to_zero(self):
        assert Stats.from_dict({}) == Stats()


class TestTestResult:
    """Tests for TestResult decoding."""

    def test_from_dict_decodes_errors_steps_and_attachments(self):
        data = make_result(
            "failed",
            retry=1,
            errors=["boom"],
            attachments=[make_attachment("trace", "application/zip", path="data/t.zip")],
        )

        result = TestResult.from_dict(data)

        assert result.retry == 1
        assert result.status == "failed"
        assert result.errors[0].message == "boom"
        assert result.errors[0].codeframe == "> 3 | boom"
        assert result.errors[0].stack.startswith("Error: boom")
        assert result.steps[0].title == "expect.toBe"
        assert result.steps[0].location.line == 3
        assert result.attachments == [
            Attachment(name="trace", content_type="application/zip", path="data/t.zip")
        ]

    def test_is_failure_only_for_failed_and_timed_out(self):
        statuses = {
            s: TestResult(retry=0, status=s).is_failure
            for s in ("passed", "failed", "timedOut", "skipped", "interrupted")
        }

        assert statuses == {
            "passed": False,
            "failed": True,
            "timedOut": True,
            "skipped": False,
            "interrupted": False,
        }

    def test_attachments_named_keeps_declaration_order(self):
        result = TestResult(
            retry=0,
            status="failed",
            attachments=[
                Attachment("screenshot", "image/png", path="a.png"),
                Attachment("trace", "application/zip", path="t.zip"),
                Attachment("screenshot", "image/png", path="b.png"),
            ],
        )

        assert [a.path for a in result.attachments_named("screenshot")] == ["a.png", "b.png"]
        assert result.attachments_named("video") == []

    def test_error_detail_to_dict_omits_missing_fields(self):
        result = TestResult.from_dict({"retry": 0, "status": "failed", "errors": [{"message": "m"}]})

        assert result.errors[0].to_dict() == {"message": "m"}


class TestTestStep:
    """Tests for recursive steps."""

    def test_nested_steps_are_decoded(self):
        step = TestStep.from_dict(
            {
                "title": "outer",
                "duration": 10,
                "steps": [{"title": "inner", "duration": 3, "error": "failed", "steps": []}],
                "attachments": [0, 2],
            }
        )

        assert step.steps[0].title == "inner"
        assert step.steps[0].error == "failed"
        assert step.attachments == [0, 2]


class TestReportModel:
    """Tests for report.json and file decoding."""

    def test_report_from_dict(self):
        report = Report.from_dict(
            {
                "startTime": 1700000000000,
                "duration": 99.5,
                "projectNames": ["chromium", "firefox"],
                "stats": make_stats(expected=1),
                "files": [
                    {
                        "fileId": "f1",
                        "fileName": "a.test.ts",
                        "stats": make_stats(expected=1),
                        "tests": [make_test("t1", "works", [make_result()])],
                    }
                ],
                "errors": ["global setup failed"],
                "metadata": {"actualWorkers": 1},
                "options": {"title": "My run"},
            }
        )

        assert report.title == "My run"
        assert report.project_names == ["chromium", "firefox"]
        assert report.errors == ["global setup failed"]
        assert report.files[0].file_id == "f1"
        assert report.files[0].tests[0].test_id == "t1"
        assert report.metadata == {"actualWorkers": 1}

    def test_report_without_options_has_no_title(self):
        report = Report.from_dict({"stats": {}, "files": []})

        assert report.title is None
        assert report.files == []

    def test_file_summary_tests_are_shallow(self):
        summary = FileSummary.from_dict(
            {"fileId": "f1", "fileName": "a.test.ts", "tests": [make_test("t1", "x", [])]}
        )

        assert not hasattr(summary.tests[0], "results")

    def test_test_case_carries_summary_fields_and_results(self):
        test = TestCase.from_dict(
            make_test("t1", "title", [make_result("failed"), make_result("passed", retry=1)])
        )

        assert test.project_name == "chromium"
        assert test.path == ["suite"]
        assert test.tags == ["@smoke"]
        assert test.location.file == "a.test.ts"
        assert [r.retry for r in test.results] == [0, 1]


class TestFailingResult:
    """Tests for FailingResult identity."""

    def test_result_id_combines_test_id_and_retry(self):
        test = TestCase(test_id="abc123", title="t")
        failing = FailingResult(test=test, result=TestResult(retry=2, status="failed"), file_id="f")

        assert failing.result_id == ResultId("abc123", 2)
        assert str(failing.result_id) == "abc123x2"


class TestPytestCollection:
    """Report model classes named Test* are not test classes."""

    @pytest.mark.parametrize("name", ["TestStep", "TestResult", "TestSummary", "TestCase", "TestFile"])
    def test_not_collected(self, name):
        assert getattr(models, name).__test__ is False
