"""Identity extraction from Maven ``pom.properties`` files."""

from __future__ import annotations

from userlib_cleaner.extract.base import ExtractionSource
from userlib_cleaner.models import ArchiveRecord

POM_PROPERTIES_NAME = "pom.properties"


def parse_pom_properties(text: str) -> tuple[str, str, str]:
    """Return ``(group_id, artifact_id, version)``; the last assignment of a key wins."""

    group_id = ""
    artifact_id = ""
    version = ""
    for raw_line in text.split("\n"):
        parts = raw_line.strip().split("=")
        if len(parts) < 2:
            continue
        key, value = parts[0], parts[1]
        if key == "groupId":
            group_id = value
        elif key == "artifactId":
            artifact_id = value
        elif key == "version":
            version = value
    return group_id, artifact_id, version


class PomPropertiesExtractor:
    """Build a ``groupId.artifactId`` identity from embedded Maven metadata."""

    name = "pom"

    def attempt(self, source: ExtractionSource) -> ArchiveRecord | None:
        if source.text is None:
            return None
        group_id, artifact_id, version = parse_pom_properties(source.text)
        if not group_id or not artifact_id:
            return None
        return ArchiveRecord.build(
            source.archive_path,
            package_identity=f"{group_id}.{artifact_id}",
            version=version,
            source=self.name,
        )
