"""Lazy resolution of result attachments.

Listing attachments is pure metadata. Bytes are only produced when a
handle's ``read()`` is awaited, using this policy:

1. inline ``body`` (base64) wins, it needs no filesystem access;
2. otherwise ``path`` is read relative to the report directory;
3. otherwise there is no payload and ``None`` is returned.
"""

from __future__ import annotations

import asyncio
import base64
import binascii
from dataclasses import dataclass
from pathlib import Path

from pwreport.core.exceptions import AttachmentReadFailure
from pwreport.models import Attachment, TestResult

SCREENSHOT = "screenshot"
ERROR_CONTEXT = "error-context"
TRACE = "trace"


class AttachmentResolver:
    """Resolves attachment descriptors to bytes."""

    def __init__(self, base_dir: Path) -> None:
        """Initialize resolver.

        Args:
            base_dir: Directory containing the HTML report; attachment
                paths are relative to it.
        """
        self.base_dir = base_dir

    async def resolve(self, attachment: Attachment) -> bytes | None:
        """Resolve a descriptor to its payload.

        Returns:
            The payload bytes, or None if the descriptor carries neither an
            inline body nor a path.

        Raises:
            AttachmentReadFailure: If the inline body is not base64 or the
                declared path cannot be read.
        """
        if attachment.body is not None:
            try:
                return base64.b64decode(attachment.body, validate=True)
            except (binascii.Error, ValueError) as e:
                raise AttachmentReadFailure(
                    f"Attachment {attachment.name!r} has an invalid inline body: {e}"
                ) from e

        if attachment.path:
            target = self.base_dir / attachment.path
            try:
                return await asyncio.to_thread(target.read_bytes)
            except OSError as e:
                raise AttachmentReadFailure(
                    f"Could not read attachment {attachment.name!r} at {target}: {e}",
                    path=str(target),
                ) from e

        return None

    def handles_by_name(self, result: TestResult, name: str) -> list[AttachmentHandle]:
        """List deferred handles for a result's attachments with the given name."""
        return [AttachmentHandle(a, self) for a in result.attachments_named(name)]


@dataclass(frozen=True)
class AttachmentHandle:
    """An attachment whose payload has not been read yet."""

    descriptor: Attachment
    resolver: AttachmentResolver

    @property
    def name(self) -> str:
        return self.descriptor.name

    @property
    def content_type(self) -> str:
        return self.descriptor.content_type

    @property
    def is_text(self) -> bool:
        """Check if the payload should be presented as text."""
        return self.content_type.startswith("text/") or "markdown" in self.content_type

    async def read(self) -> bytes | None:
        """Resolve the payload now. Each call re-reads it."""
        return await self.resolver.resolve(self.descriptor)
