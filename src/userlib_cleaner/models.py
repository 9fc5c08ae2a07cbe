"""Record types shared by the inspector, resolver, and cleanup stages."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from userlib_cleaner.versioning import normalize_version


@dataclass(frozen=True, slots=True)
class ArchiveRecord:
    """Identity and version metadata resolved for one archive."""

    file_path: Path
    package_identity: str = ""
    version: str = ""
    version_number: int = 0
    display_name: str = ""
    vendor: str = ""
    license: str = ""
    source: str = ""

    @classmethod
    def build(
        cls,
        file_path: Path,
        *,
        package_identity: str,
        version: str = "",
        display_name: str = "",
        vendor: str = "",
        license: str = "",
        source: str = "",
    ) -> "ArchiveRecord":
        """Create a record, deriving the version number from the version text."""

        return cls(
            file_path=file_path,
            package_identity=package_identity,
            version=version,
            version_number=normalize_version(version),
            display_name=display_name,
            vendor=vendor,
            license=license,
            source=source,
        )

    @classmethod
    def unresolved(cls, file_path: Path) -> "ArchiveRecord":
        """Marker record for an archive no strategy could identify."""

        return cls(file_path=file_path)

    @property
    def file_name(self) -> str:
        return self.file_path.name

    @property
    def is_resolved(self) -> bool:
        return self.package_identity != ""


@dataclass(frozen=True, slots=True)
class ScanResult:
    """Archives found in one directory, split by resolution outcome."""

    records: tuple[ArchiveRecord, ...]
    unresolved: tuple[Path, ...]

    @property
    def total(self) -> int:
        return len(self.records) + len(self.unresolved)


KeepSet = Mapping[str, ArchiveRecord]
