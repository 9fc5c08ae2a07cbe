"""Tabular inventory of scanned archives and their keep decisions."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Literal
from uuid import uuid4

import polars as pl

from userlib_cleaner.cleanup import is_duplicate
from userlib_cleaner.models import KeepSet, ScanResult

Decision = Literal["KEEP", "DUPLICATE", "UNRESOLVED"]
DECISION_VALUES: tuple[Decision, ...] = ("KEEP", "DUPLICATE", "UNRESOLVED")


def _inventory_schema() -> dict[str, pl.DataType]:
    """Stable schema for inventory frames."""

    return {
        "file_path": pl.String,
        "file_name": pl.String,
        "package_identity": pl.String,
        "version": pl.String,
        "version_number": pl.Int64,
        "display_name": pl.String,
        "vendor": pl.String,
        "license": pl.String,
        "source": pl.String,
        "decision": pl.String,
    }


def empty_inventory() -> pl.DataFrame:
    """Return an empty inventory frame with stable schema."""

    return pl.DataFrame(schema=_inventory_schema())


def build_inventory(scan: ScanResult, keep_set: KeepSet) -> pl.DataFrame:
    """One row per scanned archive, resolved rows first in scan order."""

    rows: list[dict[str, object]] = []
    for record in scan.records:
        decision: Decision = "DUPLICATE" if is_duplicate(record, keep_set) else "KEEP"
        rows.append(
            {
                "file_path": str(record.file_path),
                "file_name": record.file_name,
                "package_identity": record.package_identity,
                "version": record.version,
                "version_number": record.version_number,
                "display_name": record.display_name,
                "vendor": record.vendor,
                "license": record.license,
                "source": record.source,
                "decision": decision,
            }
        )
    for path in scan.unresolved:
        rows.append(
            {
                "file_path": str(path),
                "file_name": path.name,
                "package_identity": "",
                "version": "",
                "version_number": 0,
                "display_name": "",
                "vendor": "",
                "license": "",
                "source": "",
                "decision": "UNRESOLVED",
            }
        )

    if not rows:
        return empty_inventory()
    return pl.DataFrame(rows, schema_overrides=_inventory_schema())


def decision_counts(inventory: pl.DataFrame) -> dict[str, int]:
    """Return KEEP/DUPLICATE/UNRESOLVED counts from an inventory frame."""

    counts = {decision: 0 for decision in DECISION_VALUES}
    if inventory.height == 0 or "decision" not in inventory.columns:
        return counts

    for row in inventory.group_by("decision").len(name="count").to_dicts():
        decision = str(row["decision"])
        if decision in counts:
            counts[decision] = int(row["count"])
    return counts


def _atomic_temp_path(target_path: Path) -> Path:
    """Create a temp path in the same directory for atomic replacement."""

    return target_path.parent / f".{target_path.name}.{uuid4().hex}.tmp"


def write_inventory(inventory: pl.DataFrame, output_path: Path) -> Path:
    """Write the inventory atomically; ``.parquet`` paths get Parquet, others CSV."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    temp_path = _atomic_temp_path(output_path)
    try:
        if output_path.suffix.lower() == ".parquet":
            inventory.write_parquet(temp_path)
        else:
            inventory.write_csv(temp_path)
        os.replace(temp_path, output_path)
    finally:
        if temp_path.exists():
            temp_path.unlink()
    return output_path
