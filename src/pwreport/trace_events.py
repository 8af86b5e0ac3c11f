"""Typed Playwright trace events.

Each line of ``test.trace`` is one JSON object tagged by ``type``. Every
known tag maps to its own model so that required fields are checked when
the line is decoded; tags this module does not know become
``UnknownTraceEvent`` instead of failing. Fields not declared on a model
are kept as extras, so ``to_json_dict()`` gives back the original shape.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class TraceEventBase(BaseModel):
    """Common configuration for trace event models."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
        frozen=True,
    )

    type: str

    def to_json_dict(self) -> dict[str, Any]:
        """Serialize back to the trace's camelCase JSON shape."""
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)


class SerializedErrorInfo(BaseModel):
    """Error payload carried by ``after`` events."""

    model_config = ConfigDict(extra="allow", frozen=True)

    message: str = ""
    stack: str | None = None
    name: str | None = None


class ContextOptionsEvent(TraceEventBase):
    type: Literal["context-options"]
    version: int
    browser_name: str = ""
    platform: str = ""
    wall_time: float = 0
    monotonic_time: float = 0
    origin: str | None = None
    options: dict[str, Any] = Field(default_factory=dict)
    channel: str | None = None
    title: str | None = None
    context_id: str | None = None
    sdk_language: str | None = None
    test_id_attribute_name: str | None = None


class ScreencastFrameEvent(TraceEventBase):
    type: Literal["screencast-frame"]
    page_id: str
    sha1: str
    width: int
    height: int
    timestamp: float
    frame_swap_wall_time: float | None = None


class BeforeActionEvent(TraceEventBase):
    """Start of an API call or test step."""

    type: Literal["before"]
    call_id: str
    start_time: float
    class_: str = Field(alias="class")
    method: str
    params: dict[str, Any] = Field(default_factory=dict)
    title: str | None = None
    page_id: str | None = None
    parent_id: str | None = None
    step_id: str | None = None
    group: str | None = None
    before_snapshot: str | None = None
    stack: list[dict[str, Any]] | None = None


class InputActionEvent(TraceEventBase):
    type: Literal["input"]
    call_id: str
    input_snapshot: str | None = None
    point: dict[str, float] | None = None


class AfterActionEvent(TraceEventBase):
    """End of an API call or test step, with its error if it failed."""

    type: Literal["after"]
    call_id: str
    end_time: float
    after_snapshot: str | None = None
    error: SerializedErrorInfo | None = None
    result: Any = None
    attachments: list[dict[str, Any]] | None = None
    annotations: list[dict[str, Any]] | None = None
    point: dict[str, float] | None = None


class ActionEvent(TraceEventBase):
    """Combined before/after record used by older trace versions."""

    type: Literal["action"]
    call_id: str
    start_time: float = 0
    end_time: float = 0
    class_: str = Field(default="", alias="class")
    method: str = ""
    params: dict[str, Any] = Field(default_factory=dict)
    title: str | None = None
    page_id: str | None = None
    error: SerializedErrorInfo | None = None


class EventTraceEvent(TraceEventBase):
    """Protocol event such as a page navigation or dialog."""

    type: Literal["event"]
    method: str
    time: float
    class_: str = Field(default="", alias="class")
    params: Any = None
    page_id: str | None = None


class LogEvent(TraceEventBase):
    type: Literal["log"]
    call_id: str
    message: str
    time: float


class ConsoleEvent(TraceEventBase):
    type: Literal["console"]
    message_type: str
    text: str
    time: float
    location: dict[str, Any] | None = None
    args: list[dict[str, Any]] | None = None
    page_id: str | None = None


class ResourceSnapshotEvent(TraceEventBase):
    """Network resource as a HAR entry."""

    type: Literal["resource-snapshot"]
    snapshot: dict[str, Any]


class FrameSnapshotEvent(TraceEventBase):
    """Serialized DOM snapshot; kept opaque."""

    type: Literal["frame-snapshot"]
    snapshot: dict[str, Any]


class StdioEvent(TraceEventBase):
    type: Literal["stdout", "stderr"]
    timestamp: float
    text: str | None = None
    base64: str | None = None


class ErrorEvent(TraceEventBase):
    type: Literal["error"]
    message: str
    stack: list[dict[str, Any]] | None = None


class UnknownTraceEvent(TraceEventBase):
    """Any event whose type tag is not modelled here."""


TraceEvent = (
    ContextOptionsEvent
    | ScreencastFrameEvent
    | BeforeActionEvent
    | InputActionEvent
    | AfterActionEvent
    | ActionEvent
    | EventTraceEvent
    | LogEvent
    | ConsoleEvent
    | ResourceSnapshotEvent
    | FrameSnapshotEvent
    | StdioEvent
    | ErrorEvent
    | UnknownTraceEvent
)

TRACE_EVENT_TYPES: MappingProxyType[str, type[TraceEventBase]] = MappingProxyType(
    {
        "context-options": ContextOptionsEvent,
        "screencast-frame": ScreencastFrameEvent,
        "before": BeforeActionEvent,
        "input": InputActionEvent,
        "after": AfterActionEvent,
        "action": ActionEvent,
        "event": EventTraceEvent,
        "log": LogEvent,
        "console": ConsoleEvent,
        "resource-snapshot": ResourceSnapshotEvent,
        "frame-snapshot": FrameSnapshotEvent,
        "stdout": StdioEvent,
        "stderr": StdioEvent,
        "error": ErrorEvent,
    }
)


def parse_trace_event(data: dict[str, Any]) -> TraceEvent:
    """Validate one decoded trace line into its event model.

    Raises:
        pydantic.ValidationError: If a known event type is missing required
            fields, or the line has no string ``type``.
    """
    event_type = data.get("type")
    model = UnknownTraceEvent
    if isinstance(event_type, str):
        model = TRACE_EVENT_TYPES.get(event_type, UnknownTraceEvent)
    return model.model_validate(data)
