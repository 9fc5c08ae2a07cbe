"""Last-resort identity guess from the file name and class layout."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

from userlib_cleaner.extract.base import ExtractionSource
from userlib_cleaner.models import ArchiveRecord

CLASS_ENTRY_RE = re.compile(r"^(org|com)/.*\.class$")


def version_from_path(archive_path: Path, archive_suffix: str = ".jar") -> str:
    """Take the text after the last ``-`` in the path, minus the archive suffix.

    ``libs/junit-4.11.jar`` gives ``4.11``; a path without ``-`` gives ``""``.
    """

    tokens = str(archive_path).split("-")
    if len(tokens) < 2:
        return ""
    return tokens[-1].replace(archive_suffix, "", 1)


def identity_from_entries(entry_names: tuple[str, ...]) -> str:
    """Derive a dotted package prefix from the first ``org/`` or ``com/`` class entry."""

    for entry_name in entry_names:
        if not CLASS_ENTRY_RE.match(entry_name):
            continue
        segments = entry_name.split("/")
        if len(segments) > 3:
            # org/example/hello/MyClass.class
            segments = segments[:3]
        elif len(segments) > 2:
            # org/example/MyClass.class
            segments = segments[:2]
        else:
            segments = segments[:1]
        return ".".join(segments)
    return ""


@dataclass(frozen=True, slots=True)
class OptimisticExtractor:
    """Guess identity and version when the archive carries no usable metadata."""

    archive_suffix: str = ".jar"
    name: str = "optimistic"

    def attempt(self, source: ExtractionSource) -> ArchiveRecord | None:
        identity = identity_from_entries(source.entry_names)
        if not identity:
            return None
        return ArchiveRecord.build(
            source.archive_path,
            package_identity=identity,
            version=version_from_path(source.archive_path, self.archive_suffix),
            source=self.name,
        )
