"""Shared input type and interface for metadata extraction strategies."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from userlib_cleaner.models import ArchiveRecord


@dataclass(frozen=True, slots=True)
class ExtractionSource:
    """What a strategy gets to look at for one archive.

    ``text`` holds the decoded content of one candidate metadata entry and is
    ``None`` when a strategy runs against the archive as a whole.
    """

    archive_path: Path
    text: str | None = None
    entry_names: tuple[str, ...] = ()


class MetadataExtractor(Protocol):
    """Strategy that tries to derive an identity-bearing record."""

    name: str

    def attempt(self, source: ExtractionSource) -> ArchiveRecord | None:
        """Return a resolved record, or ``None`` when no identity was found."""
        ...
