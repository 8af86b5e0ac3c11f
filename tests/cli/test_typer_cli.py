"""Tests for the Typer-based CLI."""

from __future__ import annotations

import base64
import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from pwreport.cli.app import app
from tests.factories import PNG_SIGNATURE

runner = CliRunner()


def _error(result) -> str:
    return json.loads(result.stderr)["error"]


class TestHelpCommands:
    """Tests for help output."""

    def test_main_help(self) -> None:
        result = runner.invoke(app, ["--help"])

        assert result.exit_code == 0
        for command in (
            "get-stats",
            "get-files",
            "get-failures",
            "get-traces",
            "get-screenshots",
            "get-error-context",
        ):
            assert command in result.stdout

    def test_screenshots_help(self) -> None:
        result = runner.invoke(app, ["get-screenshots", "--help"])

        assert result.exit_code == 0
        assert "--result-id" in result.stdout
        assert "--output" in result.stdout


class TestErrors:
    """Tests for JSON errors on stderr."""

    def test_missing_report_option(self) -> None:
        result = runner.invoke(app, ["get-stats"])

        assert result.exit_code == 1
        assert _error(result) == "Missing required option: --report <path>"

    def test_missing_result_id(self, sample_bundle: Path) -> None:
        result = runner.invoke(app, ["get-traces", "--report", str(sample_bundle)])

        assert result.exit_code == 1
        assert _error(result) == "Missing required option: --result-id <id>"

    def test_invalid_result_id(self, sample_bundle: Path) -> None:
        result = runner.invoke(
            app, ["get-traces", "--report", str(sample_bundle), "--result-id", "nosep"]
        )

        assert result.exit_code == 1
        assert "Invalid result ID format" in _error(result)

    def test_unknown_result_id(self, sample_bundle: Path) -> None:
        result = runner.invoke(
            app, ["get-traces", "--report", str(sample_bundle), "--result-id", "t-passx0"]
        )

        assert result.exit_code == 1
        assert _error(result) == 'No failing test result found for result ID: "t-passx0"'

    def test_report_not_found(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["get-stats", "--report", str(tmp_path / "missing")])

        assert result.exit_code == 1
        assert "index.html" in _error(result)

    def test_malformed_report(self, tmp_path: Path) -> None:
        (tmp_path / "index.html").write_text("<html></html>")

        result = runner.invoke(app, ["get-stats", "--report", str(tmp_path)])

        assert result.exit_code == 1
        assert "playwrightReportBase64" in _error(result)


class TestCommands:
    """Tests for command output."""

    def test_get_stats(self, sample_bundle: Path) -> None:
        result = runner.invoke(app, ["get-stats", "--report", str(sample_bundle.parent)])

        assert result.exit_code == 0
        assert json.loads(result.stdout) == {
            "duration": 1234.5,
            "errors": [],
            "projectNames": ["chromium"],
            "startTime": 1700000000000,
            "stats": {
                "failed": 3,
                "flaky": 1,
                "ok": False,
                "passed": 2,
                "skipped": 1,
                "total": 7,
            },
        }

    def test_get_files(self, sample_bundle: Path) -> None:
        result = runner.invoke(app, ["get-files", "--report", str(sample_bundle)])

        assert result.exit_code == 0
        files = json.loads(result.stdout)
        assert [(f["fileId"], f["fileName"], f["testCount"]) for f in files] == [
            ("f1", "a.test.ts", 5),
            ("f2", "b.test.ts", 1),
            ("f3", "c.test.ts", 1),
        ]
        assert files[0]["stats"]["failed"] == 2

    def test_get_failures(self, sample_bundle: Path) -> None:
        result = runner.invoke(app, ["get-failures", "--report", str(sample_bundle)])

        assert result.exit_code == 0
        failures = json.loads(result.stdout)
        assert [f["resultId"] for f in failures] == [
            "t-failx0",
            "t-flakyx0",
            "abcx1x0",
            "abcx1x1",
            "abcx1x2",
        ]
        first = failures[0]
        assert first["title"] == "failing test"
        assert first["status"] == "failed"
        assert first["projectName"] == "chromium"
        assert first["location"] == {"column": 7, "file": "a.test.ts", "line": 3}
        assert len(first["errors"]) == 3
        assert first["errors"][0]["message"] == "Expected: 2"

    def test_get_traces(self, sample_bundle: Path) -> None:
        result = runner.invoke(
            app, ["get-traces", "--report", str(sample_bundle), "--result-id", "t-failx0"]
        )

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["resultId"] == "t-failx0"
        assert data["eventCount"] == 7
        assert data["events"][1]["class"] == "Test"
        assert data["events"][-1] == {"type": "future-kind", "payload": {"anything": True}}

    def test_get_traces_without_trace(self, sample_bundle: Path) -> None:
        result = runner.invoke(
            app, ["get-traces", "--report", str(sample_bundle), "--result-id", "abcx1x0"]
        )

        assert result.exit_code == 1
        assert _error(result) == 'No trace found for result ID: "abcx1x0"'

    @pytest.mark.parametrize("result_id", ["t-failx0", "abcx1x2"])
    def test_get_screenshots(self, sample_bundle: Path, tmp_path: Path, result_id: str) -> None:
        output = tmp_path / "shots"

        result = runner.invoke(
            app,
            [
                "get-screenshots",
                "--report",
                str(sample_bundle),
                "--result-id",
                result_id,
                "--output",
                str(output),
            ],
        )

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["screenshotCount"] == 1
        written = Path(data["files"][0]["path"])
        assert written == output / f"{result_id}-0.png"
        assert written.read_bytes().startswith(PNG_SIGNATURE)

    def test_get_screenshots_default_output_from_settings(
        self, sample_bundle: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("PWREPORT_SCREENSHOT_DIR", str(tmp_path / "from-env"))

        result = runner.invoke(
            app,
            ["get-screenshots", "--report", str(sample_bundle), "--result-id", "t-failx0"],
        )

        assert result.exit_code == 0
        assert (tmp_path / "from-env" / "t-failx0-0.png").exists()

    def test_get_screenshots_none(self, sample_bundle: Path) -> None:
        result = runner.invoke(
            app, ["get-screenshots", "--report", str(sample_bundle), "--result-id", "t-flakyx0"]
        )

        assert result.exit_code == 1
        assert _error(result) == 'No screenshots found for result ID: "t-flakyx0"'

    def test_get_error_context_as_text(self, sample_bundle: Path) -> None:
        result = runner.invoke(
            app,
            ["get-error-context", "--report", str(sample_bundle), "--result-id", "t-failx0"],
        )

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["encoding"] == "utf-8"
        assert data["contentType"] == "text/markdown"
        assert data["content"].startswith("# Page snapshot")

    def test_get_error_context_missing(self, sample_bundle: Path) -> None:
        result = runner.invoke(
            app,
            ["get-error-context", "--report", str(sample_bundle), "--result-id", "abcx1x2"],
        )

        assert result.exit_code == 1
        assert _error(result) == 'No error context found for result ID: "abcx1x2"'


class TestFormatErrorContext:
    """Tests for binary error-context encoding."""

    def test_binary_payload_is_base64(self) -> None:
        from pwreport.cli.formatters import format_error_context
        from pwreport.models import ResultId

        data = format_error_context(ResultId("t", 0), "image/png", PNG_SIGNATURE, is_text=False)

        assert data["encoding"] == "base64"
        assert base64.b64decode(data["content"]) == PNG_SIGNATURE
