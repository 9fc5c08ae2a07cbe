"""Pick one archive to keep per package identity."""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Iterable, Sequence

from userlib_cleaner.models import ArchiveRecord, KeepSet

LOGGER = logging.getLogger(__name__)


def group_by_identity(records: Iterable[ArchiveRecord]) -> dict[str, tuple[ArchiveRecord, ...]]:
    """Group resolved records by identity, keeping first-seen and input order."""

    groups: dict[str, list[ArchiveRecord]] = {}
    for record in records:
        if not record.is_resolved:
            continue
        groups.setdefault(record.package_identity, []).append(record)
    return {identity: tuple(members) for identity, members in groups.items()}


def is_cleanly_named(record: ArchiveRecord, archive_suffix: str = ".jar") -> bool:
    """True when the path ends with the record's own version, e.g. ``foo-1.2.jar``."""

    return str(record.file_path).endswith(f"{record.version}{archive_suffix}")


def prefers_candidate(
    current: ArchiveRecord,
    candidate: ArchiveRecord,
    archive_suffix: str = ".jar",
) -> bool:
    """Decide whether ``candidate`` should replace the current keep record.

    Equal version numbers go to a candidate whose file name embeds its
    version; otherwise the strictly higher version number wins.
    """

    if candidate.version_number == current.version_number and is_cleanly_named(candidate, archive_suffix):
        return True
    return candidate.version_number > current.version_number


def select_keep(
    group: Sequence[ArchiveRecord],
    archive_suffix: str = ".jar",
    logger: logging.Logger | None = None,
) -> ArchiveRecord:
    """Fold one identity group down to the record to keep.

    Every member is compared against every other member, always against the
    best record found so far.
    """

    effective_logger = logger or LOGGER
    if not group:
        raise ValueError("Cannot select a keep record from an empty group.")

    best = group[0]
    for outer in group:
        for candidate in group:
            if candidate.file_path == outer.file_path or candidate.file_path == best.file_path:
                continue
            if not prefers_candidate(best, candidate, archive_suffix):
                continue
            if candidate.version_number == best.version_number:
                effective_logger.info("Preferring file %s over %s", candidate.file_name, best.file_name)
            else:
                effective_logger.info("Found newer %s over %s", candidate.file_name, best.file_name)
            best = candidate
    return best


def compute_keep_set(
    records: Iterable[ArchiveRecord],
    archive_suffix: str = ".jar",
    logger: logging.Logger | None = None,
) -> KeepSet:
    """Return a read-only mapping of identity to the archive to keep."""

    effective_logger = logger or LOGGER
    effective_logger.info("Computing duplicates")
    keep = {
        identity: select_keep(group, archive_suffix, logger=effective_logger)
        for identity, group in group_by_identity(records).items()
    }
    return MappingProxyType(keep)
