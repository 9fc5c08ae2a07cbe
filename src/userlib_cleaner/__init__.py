"""Find duplicate JAR archives by package identity and keep the newest."""

from userlib_cleaner.models import ArchiveRecord, KeepSet, ScanResult
from userlib_cleaner.versioning import normalize_version

__version__ = "0.1.0"

__all__ = [
    "ArchiveRecord",
    "KeepSet",
    "ScanResult",
    "normalize_version",
]
