"""Report or remove archives that lost duplicate resolution."""

from __future__ import annotations

import logging
from typing import Iterable

from userlib_cleaner.models import ArchiveRecord, KeepSet

LOGGER = logging.getLogger(__name__)


def is_duplicate(record: ArchiveRecord, keep_set: KeepSet) -> bool:
    """True when a resolved record is not the one kept for its identity."""

    keep = keep_set.get(record.package_identity)
    return record.is_resolved and keep is not None and keep.file_path != record.file_path


def clean_duplicates(
    records: Iterable[ArchiveRecord],
    keep_set: KeepSet,
    *,
    remove: bool = False,
    logger: logging.Logger | None = None,
) -> int:
    """Count duplicates still on disk, deleting them when ``remove`` is set."""

    effective_logger = logger or LOGGER
    effective_logger.info("Cleaning...")
    count = 0
    for record in records:
        if not record.is_resolved:
            continue
        if not is_duplicate(record, keep_set):
            effective_logger.debug("Keeping jar: %s", record)
            continue
        if not record.file_path.exists():
            continue
        if remove:
            effective_logger.warning("Removing duplicate of %s: %s", record.package_identity, record.file_name)
            record.file_path.unlink()
        else:
            effective_logger.warning("Would remove duplicate of %s: %s", record.package_identity, record.file_name)
        count += 1
    return count
