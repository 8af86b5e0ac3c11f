"""Decoding of Playwright trace attachments.

A trace attachment is itself a zip archive. Its ``test.trace`` entry is
newline-delimited JSON, one event per line, in chronological order.
Screencast frames and other blobs live under ``resources/<sha1>``.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field

from pydantic import ValidationError

from pwreport.attachments import TRACE, AttachmentResolver
from pwreport.container import Container
from pwreport.core.exceptions import MalformedContainer, TraceDecodeFailure
from pwreport.core.logging import get_logger
from pwreport.models import TestResult
from pwreport.trace_events import (
    AfterActionEvent,
    BeforeActionEvent,
    TraceEvent,
    parse_trace_event,
)

logger = get_logger(__name__)

TRACE_ENTRY = "test.trace"
RESOURCES_DIR = "resources/"


@dataclass(frozen=True)
class ActionSpan:
    """A ``before`` event paired with its ``after`` event, if one was recorded."""

    before: BeforeActionEvent
    after: AfterActionEvent | None = None

    @property
    def call_id(self) -> str:
        return self.before.call_id

    @property
    def title(self) -> str:
        return self.before.title or f"{self.before.class_}.{self.before.method}"

    @property
    def duration_ms(self) -> float | None:
        if self.after is None:
            return None
        return self.after.end_time - self.before.start_time

    @property
    def error_message(self) -> str | None:
        if self.after is None or self.after.error is None:
            return None
        return self.after.error.message


@dataclass(frozen=True)
class Trace:
    """Decoded trace of one test attempt."""

    events: list[TraceEvent] = field(default_factory=list)
    container: Container | None = None

    def resource(self, sha1: str) -> bytes | None:
        """Return a resource blob (e.g. a screencast frame) by its sha1."""
        if self.container is None:
            return None
        return self.container.get_entry(f"{RESOURCES_DIR}{sha1}")

    def actions(self) -> list[ActionSpan]:
        """Pair before/after events by call ID, in start order."""
        afters = {e.call_id: e for e in self.events if isinstance(e, AfterActionEvent)}
        return [
            ActionSpan(before=e, after=afters.get(e.call_id))
            for e in self.events
            if isinstance(e, BeforeActionEvent)
        ]


def decode_trace_events(text: str) -> list[TraceEvent]:
    """Decode NDJSON trace text into typed events.

    Blank lines are ignored. Any other line that is not a valid event fails
    the whole trace.

    Raises:
        TraceDecodeFailure: On the first undecodable line.
    """
    events: list[TraceEvent] = []

    for line_number, line in enumerate(text.split("\n"), start=1):
        if not line.strip():
            continue

        try:
            data = json.loads(line)
        except json.JSONDecodeError as e:
            raise TraceDecodeFailure(f"Invalid JSON in trace: {e.msg}", line_number) from e

        if not isinstance(data, dict):
            raise TraceDecodeFailure("Trace event is not a JSON object", line_number)

        try:
            events.append(parse_trace_event(data))
        except ValidationError as e:
            raise TraceDecodeFailure(
                f"Invalid {data.get('type')!r} trace event: {e.error_count()} field error(s)",
                line_number,
            ) from e

    return events


def read_trace_archive(data: bytes) -> Trace | None:
    """Decode a trace archive, or return None if it has no test.trace entry.

    Raises:
        TraceDecodeFailure: If the archive or any event line is corrupt.
    """
    try:
        container = Container.from_bytes(data)
        raw = container.get_entry(TRACE_ENTRY)
    except MalformedContainer as e:
        raise TraceDecodeFailure(f"Trace attachment is not a valid archive: {e}") from e

    if raw is None:
        return None

    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise TraceDecodeFailure(f"Trace is not valid UTF-8: {e}") from e

    return Trace(events=decode_trace_events(text), container=container)


class TraceDecoder:
    """Locates and decodes the trace attachment of a result."""

    def __init__(self, resolver: AttachmentResolver) -> None:
        self.resolver = resolver

    async def decode(self, result: TestResult) -> Trace | None:
        """Decode the result's trace.

        Returns:
            The decoded Trace, or None if the result has no trace
            attachment, the attachment has no payload, or the archive has
            no test.trace entry.

        Raises:
            AttachmentReadFailure: If the declared trace file cannot be read.
            TraceDecodeFailure: If the trace is corrupt.
        """
        attachments = result.attachments_named(TRACE)
        if not attachments:
            return None

        data = await self.resolver.resolve(attachments[0])
        if data is None:
            return None

        trace = read_trace_archive(data)
        if trace is not None:
            logger.debug("trace_decoded", retry=result.retry, events=len(trace.events))
        return trace
