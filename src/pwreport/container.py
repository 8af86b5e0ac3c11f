"""In-memory zip container with named-entry lookup.

The same abstraction is used for the report archive embedded in the HTML
bundle and for trace archives resolved from result attachments.
"""

from __future__ import annotations

import io
import zipfile
import zlib

from pwreport.core.exceptions import MalformedContainer


class Container:
    """Read-only view over a zip archive held entirely in memory."""

    def __init__(self, zip_file: zipfile.ZipFile) -> None:
        self._zip = zip_file
        self._names = frozenset(zip_file.namelist())

    @classmethod
    def from_bytes(cls, data: bytes) -> Container:
        """Open a zip archive from raw bytes.

        Args:
            data: Raw bytes of the zip archive.

        Returns:
            Container over the archive.

        Raises:
            MalformedContainer: If the bytes are not a readable zip archive.
        """
        try:
            return cls(zipfile.ZipFile(io.BytesIO(data), "r"))
        except zipfile.BadZipFile as e:
            raise MalformedContainer(f"Invalid zip archive: {e}") from e

    def names(self) -> list[str]:
        """Return entry names in archive order."""
        return self._zip.namelist()

    def __contains__(self, name: object) -> bool:
        return name in self._names

    def get_entry(self, name: str) -> bytes | None:
        """Return the raw bytes of a named entry, or None if it does not exist."""
        if name not in self._names:
            return None
        try:
            return self._zip.read(name)
        except (zipfile.BadZipFile, zlib.error) as e:
            raise MalformedContainer(f"Corrupt zip entry {name!r}: {e}") from e
