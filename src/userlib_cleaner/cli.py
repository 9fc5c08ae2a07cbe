"""Typer CLI entrypoint for userlib_cleaner."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import typer
import yaml

from userlib_cleaner.config import AppSettings, load_settings
from userlib_cleaner.inspector import inspect_archive
from userlib_cleaner.logging_utils import LOGGER_NAME, configure_logging, level_for_verbosity
from userlib_cleaner.pipeline import CleanerRunOptions, run_cleaner
from userlib_cleaner.report import decision_counts

app = typer.Typer(
    add_completion=False,
    help="Find and remove duplicate JARs from a userlib folder.",
    no_args_is_help=True,
)

LOG_FILE_NAME = "userlib_cleaner.log"


def _load_and_optionally_configure_logger(
    config_file: Path | None,
    configure: bool,
    verbose: bool | None = None,
) -> tuple[AppSettings, logging.Logger]:
    settings = load_settings(config_file=config_file)
    if verbose is not None:
        settings = settings.model_copy(
            update={"cleaner": settings.cleaner.model_copy(update={"verbose": verbose})}
        )
    if configure:
        log_file = settings.paths.logs_root / LOG_FILE_NAME if settings.paths.log_to_file else None
        logger = configure_logging(log_file, level=level_for_verbosity(settings.cleaner.verbose))
    else:
        logger = logging.getLogger(LOGGER_NAME)
    return settings, logger


def _normalize_suffix(value: str | None) -> str | None:
    if value is None:
        return None
    cleaned = value.strip()
    if cleaned in {"", "."}:
        raise typer.BadParameter("suffix must name an extension, for example .jar")
    return cleaned if cleaned.startswith(".") else f".{cleaned}"


def _config_file_option() -> Any:
    return typer.Option(
        None,
        "--config-file",
        help="Optional settings YAML path.",
        exists=False,
        file_okay=True,
        dir_okay=False,
        readable=True,
    )


@app.command("show-config")
def show_config(config_file: Path | None = _config_file_option()) -> None:
    """Print the effective configuration after env overrides."""

    settings, _ = _load_and_optionally_configure_logger(config_file, configure=False)
    rendered = yaml.safe_dump(settings.as_dict(), sort_keys=False)
    typer.echo(rendered)


@app.command("clean")
def clean_cmd(
    target: Path | None = typer.Option(
        None,
        "--target",
        help="Path to userlib. Defaults to paths.target_dir from settings.",
        file_okay=False,
        dir_okay=True,
    ),
    clean: bool = typer.Option(
        False,
        "--clean",
        help="Turn on to actually remove the duplicate JARs.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        help="Turn on to see debug information.",
    ),
    mode: str | None = typer.Option(
        None,
        "--mode",
        help="JAR parsing mode. Supported options: auto, strict.",
    ),
    suffix: str | None = typer.Option(
        None,
        "--suffix",
        help="Archive file extension to scan for.",
    ),
    report: Path | None = typer.Option(
        None,
        "--report",
        help="Optional inventory output (.csv or .parquet).",
        file_okay=True,
        dir_okay=False,
    ),
    config_file: Path | None = _config_file_option(),
) -> None:
    """Scan a folder of JARs, keep the newest per package, and remove the rest."""

    settings, logger = _load_and_optionally_configure_logger(
        config_file,
        configure=True,
        verbose=True if verbose else None,
    )
    defaults = CleanerRunOptions.from_settings(settings, report_path=report)
    options = CleanerRunOptions(
        target_dir=target if target is not None else defaults.target_dir,
        clean=clean or defaults.clean,
        mode=mode if mode is not None else defaults.mode,
        archive_suffix=_normalize_suffix(suffix) or defaults.archive_suffix,
        report_path=defaults.report_path,
    )

    try:
        result = run_cleaner(options, logger=logger)
    except Exception as exc:
        logger.exception("clean.failed target=%s mode=%s", options.target_dir, options.mode)
        raise RuntimeError(f"clean failed for target {options.target_dir}: {exc}") from exc

    counts = decision_counts(result.inventory)
    typer.echo(f"target: {options.target_dir}")
    typer.echo(f"mode: {options.mode}")
    typer.echo(f"kept: {counts['KEEP']}")
    typer.echo(f"unresolved: {counts['UNRESOLVED']}")
    if result.clean:
        typer.echo(f"removed: {result.duplicate_count}")
    else:
        typer.echo(f"would_remove: {result.duplicate_count}")
    if result.report_path is not None:
        typer.echo(f"report: {result.report_path}")


@app.command("inspect")
def inspect_cmd(
    file: Path = typer.Option(
        ...,
        "--file",
        help="Path to one JAR file.",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    mode: str | None = typer.Option(
        None,
        "--mode",
        help="JAR parsing mode. Supported options: auto, strict.",
    ),
    config_file: Path | None = _config_file_option(),
) -> None:
    """Show the identity and version resolved for one archive."""

    settings, logger = _load_and_optionally_configure_logger(config_file, configure=True)
    selected_mode = mode if mode is not None else settings.cleaner.mode
    try:
        record = inspect_archive(
            file,
            selected_mode,
            archive_suffix=settings.cleaner.archive_suffix,
            logger=logger,
        )
    except Exception as exc:
        logger.exception("inspect.failed file=%s", file)
        raise RuntimeError(f"inspect failed for file {file}: {exc}") from exc

    typer.echo(f"file: {record.file_path}")
    typer.echo(f"resolved: {record.is_resolved}")
    typer.echo(f"source: {record.source or 'none'}")
    typer.echo(f"package_identity: {record.package_identity}")
    typer.echo(f"version: {record.version}")
    typer.echo(f"version_number: {record.version_number}")
    typer.echo(f"display_name: {record.display_name}")
    typer.echo(f"vendor: {record.vendor}")
    typer.echo(f"license: {record.license}")


def main() -> None:
    """CLI script entrypoint."""

    app()


if __name__ == "__main__":
    main()
