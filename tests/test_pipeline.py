"""End-to-end tests for a cleaner run over a real folder."""

import logging
import zipfile
from pathlib import Path

import polars as pl
import pytest

from userlib_cleaner.config import AppSettings
from userlib_cleaner.inspector import MODE_STRICT
from userlib_cleaner.pipeline import CleanerRunOptions, run_cleaner


@pytest.fixture
def two_versions(make_jar, userlib: Path) -> Path:
    make_jar("lib-1.0.jar", manifest={"Bundle-SymbolicName": "com.example.lib", "Bundle-Version": "1.0"})
    make_jar("lib-2.0.jar", manifest={"Bundle-SymbolicName": "com.example.lib", "Bundle-Version": "2.0"})
    return userlib


class TestRunCleaner:
    def test_dry_run_reports_older_copy(self, two_versions: Path, caplog) -> None:
        caplog.set_level(logging.INFO, logger="userlib_cleaner")

        result = run_cleaner(CleanerRunOptions(target_dir=two_versions))

        assert result.keep_set["com.example.lib"].file_name == "lib-2.0.jar"
        assert result.duplicate_count == 1
        assert (two_versions / "lib-1.0.jar").exists()
        assert "Would remove duplicate of com.example.lib: lib-1.0.jar" in caplog.text
        assert "Would have removed: 1 files" in caplog.text
        assert "Use --clean to actually remove above file(s)" in caplog.text

    def test_clean_run_removes_older_copy(self, two_versions: Path, caplog) -> None:
        caplog.set_level(logging.INFO, logger="userlib_cleaner")

        result = run_cleaner(CleanerRunOptions(target_dir=two_versions, clean=True))

        assert result.duplicate_count == 1
        assert sorted(p.name for p in two_versions.iterdir()) == ["lib-2.0.jar"]
        assert "Total files removed: 1" in caplog.text

    def test_second_run_finds_nothing(self, two_versions: Path) -> None:
        run_cleaner(CleanerRunOptions(target_dir=two_versions, clean=True))
        assert run_cleaner(CleanerRunOptions(target_dir=two_versions, clean=True)).duplicate_count == 0

    def test_unresolved_archives_are_left_alone(self, two_versions: Path, make_jar) -> None:
        make_jar("guess-1.0.jar", entries={"com/acme/guess/A.class": b""})
        make_jar("guess-0.5.jar", entries={"com/acme/guess/A.class": b""})

        result = run_cleaner(CleanerRunOptions(target_dir=two_versions, clean=True, mode=MODE_STRICT))

        assert len(result.scan.unresolved) == 2
        assert (two_versions / "guess-1.0.jar").exists()
        assert (two_versions / "guess-0.5.jar").exists()

    def test_auto_mode_deduplicates_guessed_archives(self, userlib: Path, make_jar) -> None:
        make_jar("guess-1.0.jar", entries={"com/acme/guess/A.class": b""})
        make_jar("guess-0.5.jar", entries={"com/acme/guess/A.class": b""})

        result = run_cleaner(CleanerRunOptions(target_dir=userlib, clean=True))

        assert result.duplicate_count == 1
        assert sorted(p.name for p in userlib.iterdir()) == ["guess-1.0.jar"]

    def test_report_written(self, two_versions: Path, tmp_path: Path) -> None:
        report = tmp_path / "out" / "inventory.csv"

        result = run_cleaner(CleanerRunOptions(target_dir=two_versions, report_path=report))

        assert result.report_path == report
        frame = pl.read_csv(report)
        assert sorted(frame.get_column("decision").to_list()) == ["DUPLICATE", "KEEP"]

    def test_corrupt_archive_aborts_before_cleanup(self, two_versions: Path) -> None:
        (two_versions / "broken.jar").write_bytes(b"garbage")

        with pytest.raises(zipfile.BadZipFile):
            run_cleaner(CleanerRunOptions(target_dir=two_versions, clean=True))
        assert (two_versions / "lib-1.0.jar").exists()

    def test_options_from_settings(self, tmp_path: Path) -> None:
        settings = AppSettings.model_validate(
            {"paths": {"target_dir": str(tmp_path)}, "cleaner": {"clean": True, "mode": "strict"}}
        )
        options = CleanerRunOptions.from_settings(settings)

        assert options.target_dir == tmp_path
        assert options.clean is True
        assert options.mode == "strict"
        assert options.archive_suffix == ".jar"
