"""Identity extraction from ``META-INF/MANIFEST.MF`` headers."""

from __future__ import annotations

from userlib_cleaner.extract.base import ExtractionSource
from userlib_cleaner.models import ArchiveRecord

MANIFEST_ENTRY = "META-INF/MANIFEST.MF"
HEADER_SEPARATOR = ": "

IDENTITY_KEYS = frozenset({"Bundle-SymbolicName", "Extension-Name"})
NAMED_IDENTITY_KEYS = frozenset({"Bundle-Name", "Implementation-Title"})
VERSION_KEYS = frozenset({"Bundle-Version", "Implementation-Version"})
VENDOR_KEYS = frozenset({"Bundle-Vendor", "Implementation-Vendor"})
LICENSE_KEYS = frozenset({"Bundle-License"})


def parse_manifest_headers(text: str) -> dict[str, str]:
    """Collect recognized manifest values; later lines overwrite earlier ones."""

    fields = {"identity": "", "display_name": "", "version": "", "vendor": "", "license": ""}
    for raw_line in text.split("\n"):
        parts = raw_line.strip().split(HEADER_SEPARATOR)
        if len(parts) < 2:
            continue

        key, value = parts[0], parts[1]
        if key in IDENTITY_KEYS:
            fields["identity"] = value
        elif key in VERSION_KEYS:
            fields["version"] = value
        elif key in VENDOR_KEYS:
            fields["vendor"] = value
        elif key in LICENSE_KEYS:
            fields["license"] = value
        elif key in NAMED_IDENTITY_KEYS:
            fields["display_name"] = value
            fields["identity"] = value
    return fields


class ManifestExtractor:
    """Read bundle/implementation headers from a JAR manifest."""

    name = "manifest"

    def attempt(self, source: ExtractionSource) -> ArchiveRecord | None:
        if source.text is None:
            return None
        fields = parse_manifest_headers(source.text)
        if not fields["identity"]:
            return None
        return ArchiveRecord.build(
            source.archive_path,
            package_identity=fields["identity"],
            version=fields["version"],
            display_name=fields["display_name"],
            vendor=fields["vendor"],
            license=fields["license"],
            source=self.name,
        )
