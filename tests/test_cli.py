"""CLI tests through Typer's runner."""

import logging
from pathlib import Path

import pytest
import yaml
from typer.testing import CliRunner

from userlib_cleaner import cli
from userlib_cleaner.logging_utils import LOGGER_NAME

runner = CliRunner()


@pytest.fixture(autouse=True)
def quiet_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the CLI from replacing root handlers during tests."""

    def _configure(log_file=None, level=logging.INFO):
        return logging.getLogger(LOGGER_NAME)

    monkeypatch.setattr(cli, "configure_logging", _configure)


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    path = tmp_path / "configs" / "settings.yaml"
    path.parent.mkdir()
    path.write_text(yaml.safe_dump({"cleaner": {"mode": "auto"}}), encoding="utf-8")
    return path


@pytest.fixture
def two_versions(make_jar, userlib: Path) -> Path:
    make_jar("lib-1.0.jar", manifest={"Bundle-SymbolicName": "com.example.lib", "Bundle-Version": "1.0"})
    make_jar("lib-2.0.jar", manifest={"Bundle-SymbolicName": "com.example.lib", "Bundle-Version": "2.0"})
    return userlib


def test_clean_dry_run(two_versions: Path, config_file: Path) -> None:
    result = runner.invoke(
        cli.app,
        ["clean", "--target", str(two_versions), "--config-file", str(config_file)],
    )

    assert result.exit_code == 0, result.output
    assert "would_remove: 1" in result.output
    assert "kept: 1" in result.output
    assert (two_versions / "lib-1.0.jar").exists()


def test_clean_removes(two_versions: Path, config_file: Path) -> None:
    result = runner.invoke(
        cli.app,
        ["clean", "--target", str(two_versions), "--clean", "--config-file", str(config_file)],
    )

    assert result.exit_code == 0, result.output
    assert "removed: 1" in result.output
    assert not (two_versions / "lib-1.0.jar").exists()


def test_clean_writes_report(two_versions: Path, config_file: Path, tmp_path: Path) -> None:
    report = tmp_path / "inventory.csv"
    result = runner.invoke(
        cli.app,
        [
            "clean",
            "--target",
            str(two_versions),
            "--report",
            str(report),
            "--config-file",
            str(config_file),
        ],
    )

    assert result.exit_code == 0, result.output
    assert report.exists()
    assert f"report: {report}" in result.output


def test_clean_fails_on_corrupt_archive(two_versions: Path, config_file: Path) -> None:
    (two_versions / "broken.jar").write_bytes(b"garbage")

    result = runner.invoke(
        cli.app,
        ["clean", "--target", str(two_versions), "--clean", "--config-file", str(config_file)],
    )

    assert result.exit_code != 0
    assert isinstance(result.exception, RuntimeError)
    assert (two_versions / "lib-1.0.jar").exists()


def test_rejects_empty_suffix(two_versions: Path, config_file: Path) -> None:
    result = runner.invoke(
        cli.app,
        ["clean", "--target", str(two_versions), "--suffix", ".", "--config-file", str(config_file)],
    )
    assert result.exit_code != 0


def test_inspect_prints_record(make_jar, config_file: Path) -> None:
    jar = make_jar("junit-4.11.jar", pom=("junit", "junit", "4.11"))

    result = runner.invoke(cli.app, ["inspect", "--file", str(jar), "--config-file", str(config_file)])

    assert result.exit_code == 0, result.output
    assert "package_identity: junit.junit" in result.output
    assert "version_number: 4011" in result.output
    assert "source: pom" in result.output


def test_inspect_strict_leaves_unresolved(make_jar, config_file: Path) -> None:
    jar = make_jar("guess-1.0.jar", entries={"com/acme/guess/A.class": b""})

    result = runner.invoke(
        cli.app,
        ["inspect", "--file", str(jar), "--mode", "strict", "--config-file", str(config_file)],
    )

    assert result.exit_code == 0, result.output
    assert "resolved: False" in result.output


def test_show_config(config_file: Path) -> None:
    result = runner.invoke(cli.app, ["show-config", "--config-file", str(config_file)])

    assert result.exit_code == 0, result.output
    rendered = yaml.safe_load(result.output)
    assert rendered["cleaner"]["mode"] == "auto"
