"""Main Typer CLI application for pwreport.

All command output is JSON on stdout. Errors are printed as
``{"error": "..."}`` on stderr with exit code 1.
"""

from __future__ import annotations

import asyncio
import json
from collections.abc import Awaitable
from pathlib import Path
from typing import Annotated, Any

import typer

from pwreport.bundle import resolve_report_path
from pwreport.cli import formatters
from pwreport.core.config import get_settings
from pwreport.core.exceptions import ReportExtractionError
from pwreport.core.logging import configure_logging
from pwreport.models import FailingResult, ResultId
from pwreport.parser import ReportParser

app = typer.Typer(
    name="pwreport",
    help="Extract failures, traces and screenshots from Playwright HTML reports",
    no_args_is_help=True,
)

ReportOption = Annotated[
    Path | None,
    typer.Option(
        "--report",
        help="Path to Playwright HTML report (file or directory)",
    ),
]

ResultIdOption = Annotated[
    str | None,
    typer.Option(
        "--result-id",
        help="Result ID from get-failures, e.g. abc123x0",
    ),
]


class CommandError(Exception):
    """Error reported to the user as JSON on stderr."""


@app.callback()
def main_callback(
    log_level: Annotated[
        str | None,
        typer.Option(
            "--log-level",
            help="Log level for diagnostics on stderr",
        ),
    ] = None,
) -> None:
    """Extract structured data from Playwright HTML reports."""
    settings = get_settings()
    configure_logging(
        log_level=log_level or settings.log_level,
        json_format=settings.log_json_format,
    )


def _run(command: Awaitable[Any]) -> None:
    """Run a command coroutine and print its result or error."""
    try:
        data = asyncio.run(command)
    except (CommandError, ReportExtractionError, OSError) as e:
        typer.echo(json.dumps({"error": str(e)}), err=True)
        raise typer.Exit(code=1) from e
    typer.echo(formatters.to_json(data))


def _require_report(report: Path | None) -> Path:
    if report is None:
        raise CommandError("Missing required option: --report <path>")
    return resolve_report_path(report)


def _require_result_id(result_id: str | None) -> ResultId:
    if not result_id:
        raise CommandError("Missing required option: --result-id <id>")
    return ResultId.parse(result_id)


async def _open(report: Path | None) -> ReportParser:
    return await ReportParser.parse(_require_report(report))


async def _find(
    report: Path | None, result_id: str | None
) -> tuple[ReportParser, ResultId, FailingResult]:
    """Open the report and locate one failing attempt."""
    parser = await _open(report)
    rid = _require_result_id(result_id)
    failing = parser.find_failing_result(parser.get_report(), rid)
    if failing is None:
        raise CommandError(f'No failing test result found for result ID: "{rid}"')
    return parser, rid, failing


@app.command("get-stats")
def get_stats(report: ReportOption = None) -> None:
    """Get report statistics (total, passed, failed, flaky, skipped)."""

    async def command() -> dict[str, Any]:
        parser = await _open(report)
        return formatters.format_stats(parser.get_report())

    _run(command())


@app.command("get-files")
def get_files(report: ReportOption = None) -> None:
    """List all test files with per-file statistics."""

    async def command() -> list[dict[str, Any]]:
        parser = await _open(report)
        return formatters.format_files(parser.get_report())

    _run(command())


@app.command("get-failures")
def get_failures(report: ReportOption = None) -> None:
    """Get all failing tests with error messages and result IDs."""

    async def command() -> list[dict[str, Any]]:
        parser = await _open(report)
        return formatters.format_failures(parser.get_failing_results(parser.get_report()))

    _run(command())


@app.command("get-traces")
def get_traces(report: ReportOption = None, result_id: ResultIdOption = None) -> None:
    """Get trace events for a specific test result."""

    async def command() -> dict[str, Any]:
        parser, rid, failing = await _find(report, result_id)
        trace = await parser.get_trace(failing.result)
        if trace is None:
            raise CommandError(f'No trace found for result ID: "{rid}"')
        return formatters.format_trace(rid, trace)

    _run(command())


@app.command("get-screenshots")
def get_screenshots(
    report: ReportOption = None,
    result_id: ResultIdOption = None,
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            help="Output directory for screenshots (default: ./screenshots)",
        ),
    ] = None,
) -> None:
    """Save screenshots for a specific test result to disk."""

    async def command() -> dict[str, Any]:
        parser, rid, failing = await _find(report, result_id)
        screenshots = parser.get_screenshots(failing.result)
        if not screenshots:
            raise CommandError(f'No screenshots found for result ID: "{rid}"')

        output_dir = output or get_settings().screenshot_dir
        output_dir.mkdir(parents=True, exist_ok=True)
        written: list[dict[str, str]] = []

        for i, screenshot in enumerate(screenshots):
            payload = await screenshot.read()
            if payload is None:
                continue
            filepath = output_dir / f"{rid}-{i}.png"
            filepath.write_bytes(payload)
            written.append({"contentType": screenshot.content_type, "path": str(filepath)})

        return formatters.format_screenshots(rid, written)

    _run(command())


@app.command("get-error-context")
def get_error_context(report: ReportOption = None, result_id: ResultIdOption = None) -> None:
    """Get error context attachment for a specific test result."""

    async def command() -> dict[str, Any]:
        parser, rid, failing = await _find(report, result_id)
        error_context = parser.get_error_context(failing.result)
        if error_context is None:
            raise CommandError(f'No error context found for result ID: "{rid}"')

        payload = await error_context.read()
        if payload is None:
            raise CommandError(f'Failed to read error context for result ID: "{rid}"')

        return formatters.format_error_context(
            rid, error_context.content_type, payload, error_context.is_text
        )

    _run(command())


def main() -> None:
    """Entry point for the Typer CLI."""
    app()
