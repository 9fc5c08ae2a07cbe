"""Resolve identity metadata for a single archive."""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
import zipfile
import zlib
from contextlib import contextmanager
from pathlib import Path, PurePosixPath
from typing import Iterator, Sequence

from userlib_cleaner.extract import (
    ENTRY_EXTRACTORS,
    MANIFEST_ENTRY,
    POM_PROPERTIES_NAME,
    ExtractionSource,
    MetadataExtractor,
    OptimisticExtractor,
)
from userlib_cleaner.models import ArchiveRecord

LOGGER = logging.getLogger(__name__)

MODE_AUTO = "auto"
MODE_STRICT = "strict"

# Failures reading one entry; the archive itself opened fine.
ENTRY_READ_ERRORS: tuple[type[BaseException], ...] = (OSError, zipfile.BadZipFile, RuntimeError, zlib.error)


def is_metadata_entry(entry_name: str) -> bool:
    """Return True for the manifest path or any file named ``pom.properties``."""

    return entry_name == MANIFEST_ENTRY or PurePosixPath(entry_name).name == POM_PROPERTIES_NAME


@contextmanager
def _extracted_entry(archive: zipfile.ZipFile, info: zipfile.ZipInfo) -> Iterator[Path]:
    """Copy one archive entry to a temp file that is removed on exit."""

    fd, temp_name = tempfile.mkstemp(prefix="jar")
    temp_path = Path(temp_name)
    try:
        with os.fdopen(fd, "wb") as handle, archive.open(info) as entry:
            shutil.copyfileobj(entry, handle)
        yield temp_path
    finally:
        temp_path.unlink(missing_ok=True)


def _read_entry_text(
    archive: zipfile.ZipFile,
    info: zipfile.ZipInfo,
    archive_path: Path,
    logger: logging.Logger,
) -> str | None:
    try:
        with _extracted_entry(archive, info) as temp_path:
            payload = temp_path.read_bytes()
    except ENTRY_READ_ERRORS as exc:
        logger.warning("Unable to read %s from %s: %s", info.filename, archive_path, exc)
        return None
    return payload.decode("utf-8", errors="replace")


def _first_match(
    extractors: Sequence[MetadataExtractor],
    source: ExtractionSource,
    logger: logging.Logger,
) -> ArchiveRecord | None:
    for extractor in extractors:
        record = extractor.attempt(source)
        if record is not None:
            logger.debug("Parsed properties from %s: %s", extractor.name, record)
            return record
    return None


def inspect_archive(
    archive_path: Path,
    mode: str = MODE_AUTO,
    *,
    archive_suffix: str = ".jar",
    entry_extractors: Sequence[MetadataExtractor] = ENTRY_EXTRACTORS,
    logger: logging.Logger | None = None,
) -> ArchiveRecord:
    """Return the resolved record for one archive, or an unresolved marker.

    Opening the archive is not guarded: a missing or corrupt file raises and
    is meant to stop the run.
    """

    effective_logger = logger or LOGGER
    with zipfile.ZipFile(archive_path) as archive:
        infos = archive.infolist()
        for info in infos:
            if not is_metadata_entry(info.filename):
                continue
            text = _read_entry_text(archive, info, archive_path, effective_logger)
            if text is None:
                continue
            source = ExtractionSource(archive_path=archive_path, text=text)
            record = _first_match(entry_extractors, source, effective_logger)
            if record is not None:
                return record

        if mode == MODE_AUTO:
            source = ExtractionSource(
                archive_path=archive_path,
                entry_names=tuple(info.filename for info in infos),
            )
            fallback: tuple[MetadataExtractor, ...] = (OptimisticExtractor(archive_suffix=archive_suffix),)
            record = _first_match(fallback, source, effective_logger)
            if record is not None:
                return record

    effective_logger.warning("Failed to parse metadata from %s", archive_path)
    return ArchiveRecord.unresolved(archive_path)
