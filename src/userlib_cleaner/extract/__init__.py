"""Metadata extraction strategies, in the order the inspector tries them."""

from userlib_cleaner.extract.base import ExtractionSource, MetadataExtractor
from userlib_cleaner.extract.manifest import MANIFEST_ENTRY, ManifestExtractor, parse_manifest_headers
from userlib_cleaner.extract.optimistic import OptimisticExtractor, identity_from_entries, version_from_path
from userlib_cleaner.extract.pom import POM_PROPERTIES_NAME, PomPropertiesExtractor, parse_pom_properties

ENTRY_EXTRACTORS: tuple[MetadataExtractor, ...] = (ManifestExtractor(), PomPropertiesExtractor())

__all__ = [
    "ENTRY_EXTRACTORS",
    "ExtractionSource",
    "MetadataExtractor",
    "MANIFEST_ENTRY",
    "ManifestExtractor",
    "parse_manifest_headers",
    "POM_PROPERTIES_NAME",
    "PomPropertiesExtractor",
    "parse_pom_properties",
    "OptimisticExtractor",
    "identity_from_entries",
    "version_from_path",
]
