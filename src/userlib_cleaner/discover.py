"""Discover archives in a target directory and inspect each one."""

from __future__ import annotations

import logging
from pathlib import Path

from userlib_cleaner.inspector import MODE_AUTO, inspect_archive
from userlib_cleaner.models import ArchiveRecord, ScanResult

LOGGER = logging.getLogger(__name__)


def discover_archives(
    target_dir: Path,
    archive_suffix: str = ".jar",
    logger: logging.Logger | None = None,
) -> list[Path]:
    """List regular files directly under ``target_dir`` ending with the suffix.

    The listing is not recursive. A missing or unreadable directory raises
    ``OSError``.
    """

    effective_logger = logger or LOGGER
    archives = sorted(
        (child for child in target_dir.iterdir() if child.name.endswith(archive_suffix) and child.is_file()),
        key=lambda path: path.name,
    )
    effective_logger.debug("discover.archives target_dir=%s count=%s", target_dir, len(archives))
    return archives


def scan_directory(
    target_dir: Path,
    mode: str = MODE_AUTO,
    *,
    archive_suffix: str = ".jar",
    logger: logging.Logger | None = None,
) -> ScanResult:
    """Inspect every archive in ``target_dir`` and split resolved from unresolved."""

    effective_logger = logger or LOGGER
    effective_logger.info("Finding and parsing JARs")
    records: list[ArchiveRecord] = []
    unresolved: list[Path] = []
    for archive_path in discover_archives(target_dir, archive_suffix, logger=effective_logger):
        effective_logger.debug("Processing JAR: %s", archive_path.name)
        record = inspect_archive(
            archive_path,
            mode,
            archive_suffix=archive_suffix,
            logger=effective_logger,
        )
        if record.is_resolved:
            records.append(record)
        else:
            unresolved.append(archive_path)
    return ScanResult(records=tuple(records), unresolved=tuple(unresolved))
