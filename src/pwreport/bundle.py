"""Loader for the archive embedded in a Playwright HTML report.

The HTML reporter inlines its data as a base64 zip inside
``<script id="playwrightReportBase64">``. The payload may carry a
``data:application/zip;base64,`` prefix.
"""

from __future__ import annotations

import asyncio
import base64
import binascii
import re
from pathlib import Path

from pwreport.container import Container
from pwreport.core.exceptions import MalformedBundle, MalformedContainer
from pwreport.core.logging import get_logger

logger = get_logger(__name__)

INDEX_HTML = "index.html"
BUNDLE_ELEMENT_ID = "playwrightReportBase64"
DATA_URI_PREFIX = "data:application/zip;base64,"

_BUNDLE_SCRIPT_PATTERN = re.compile(
    rf'<script id="{BUNDLE_ELEMENT_ID}"[^>]*>(.*?)</script>',
    re.DOTALL,
)


def resolve_report_path(report_path: str | Path) -> Path:
    """Resolve a report location to its HTML file.

    A path ending in ``.html`` is used as-is; anything else is treated as
    the report directory containing ``index.html``.
    """
    path = Path(report_path)
    if path.suffix == ".html":
        return path
    return path / INDEX_HTML


def extract_payload(html: str) -> bytes:
    """Extract and decode the embedded zip payload from report HTML.

    Args:
        html: Full text of the HTML report.

    Returns:
        Raw zip bytes.

    Raises:
        MalformedBundle: If the element is missing, empty, or not base64.
    """
    match = _BUNDLE_SCRIPT_PATTERN.search(html)
    content = match.group(1).strip() if match else ""
    if not content:
        raise MalformedBundle(f"Could not find {BUNDLE_ELEMENT_ID} element in HTML")

    data = "".join(content.removeprefix(DATA_URI_PREFIX).split())
    try:
        return base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError) as e:
        raise MalformedBundle(f"Embedded report payload is not valid base64: {e}") from e


def open_bundle(html: str) -> Container:
    """Open the embedded report archive from report HTML."""
    payload = extract_payload(html)
    try:
        return Container.from_bytes(payload)
    except MalformedContainer as e:
        raise MalformedBundle(f"Embedded report payload is not a zip archive: {e}") from e


async def load_bundle(html_path: Path) -> Container:
    """Read an HTML report from disk and open its embedded archive.

    Args:
        html_path: Path to the HTML report file.

    Returns:
        Container over the embedded report archive.

    Raises:
        FileNotFoundError: If the report file doesn't exist.
        MalformedBundle: If the report has no decodable embedded archive.
    """
    html = await asyncio.to_thread(html_path.read_text, encoding="utf-8")
    container = open_bundle(html)
    logger.debug("bundle_loaded", path=str(html_path), entries=len(container.names()))
    return container
