"""End-to-end cleaner run: scan, resolve duplicates, clean, report."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

import polars as pl

from userlib_cleaner.cleanup import clean_duplicates
from userlib_cleaner.config import AppSettings
from userlib_cleaner.discover import scan_directory
from userlib_cleaner.inspector import MODE_AUTO
from userlib_cleaner.models import KeepSet, ScanResult
from userlib_cleaner.report import build_inventory, write_inventory
from userlib_cleaner.resolve import compute_keep_set

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CleanerRunOptions:
    """Runtime options for one cleaner run."""

    target_dir: Path
    clean: bool = False
    mode: str = MODE_AUTO
    archive_suffix: str = ".jar"
    report_path: Path | None = None

    @classmethod
    def from_settings(cls, settings: AppSettings, report_path: Path | None = None) -> "CleanerRunOptions":
        return cls(
            target_dir=settings.paths.target_dir,
            clean=settings.cleaner.clean,
            mode=settings.cleaner.mode,
            archive_suffix=settings.cleaner.archive_suffix,
            report_path=report_path,
        )


@dataclass(frozen=True, slots=True)
class CleanerRunResult:
    """Return object for cleaner run outcomes."""

    scan: ScanResult
    keep_set: KeepSet
    duplicate_count: int
    clean: bool
    inventory: pl.DataFrame
    report_path: Path | None


def run_cleaner(options: CleanerRunOptions, logger: logging.Logger | None = None) -> CleanerRunResult:
    """Run the whole cleaner over ``options.target_dir``."""

    effective_logger = logger or LOGGER
    scan = scan_directory(
        options.target_dir,
        options.mode,
        archive_suffix=options.archive_suffix,
        logger=effective_logger,
    )
    keep_set = compute_keep_set(scan.records, options.archive_suffix, logger=effective_logger)
    inventory = build_inventory(scan, keep_set)
    count = clean_duplicates(scan.records, keep_set, remove=options.clean, logger=effective_logger)

    if options.clean:
        effective_logger.info("Total files removed: %d", count)
    else:
        effective_logger.info("Would have removed: %d files", count)
        effective_logger.info("Use --clean to actually remove above file(s)")

    report_path: Path | None = None
    if options.report_path is not None:
        report_path = write_inventory(inventory, options.report_path)
        effective_logger.info("Inventory written: %s rows=%s", report_path, inventory.height)

    return CleanerRunResult(
        scan=scan,
        keep_set=keep_set,
        duplicate_count=count,
        clean=options.clean,
        inventory=inventory,
        report_path=report_path,
    )
