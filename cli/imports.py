#!/usr/bin/env python3

import asyncio
import sys
from pathlib import Path

from pydantic import ValidationError

from errors import ChatportError
from models.import_file import load_data_file, load_pg_file, load_settings_file
from models.import_result import ImportCallbacks, ImportFailure, UploadProgressReport
from logger import get_logger

logger = get_logger()


class ConsoleProgress:
    """Import callbacks that log stage changes, progress and the outcome."""

    def __init__(self):
        self.failure = None

    def on_stage_change(self, stage):
        logger.info(f"Stage: {stage.value}")

    def on_file_uploading(self, report: UploadProgressReport):
        logger.info(
            f"  Uploaded {report.progress}% "
            f"({report.speed:.1f} KB/s, ~{report.rest_time:.0f}s left)"
        )

    def on_success(self, results, duration):
        logger.info(f"✓ Import finished in {duration}ms")
        if isinstance(results, dict):
            for name, summary in results.items():
                logger.info(f"  {name}: {summary}")
        elif results is not None:
            logger.info(f"  Results: {results}")

    def on_error(self, failure: ImportFailure):
        self.failure = failure
        logger.error(
            f"Import failed [{failure.code} {failure.http_status}] "
            f"at {failure.path}: {failure.message}"
        )

    def callbacks(self) -> ImportCallbacks:
        return ImportCallbacks(
            on_stage_change=self.on_stage_change,
            on_error=self.on_error,
            on_success=self.on_success,
            on_file_uploading=self.on_file_uploading,
        )


def _require_file(path_arg: str) -> Path:
    path = Path(path_arg)
    if not path.exists():
        logger.error(f"File not found: {path_arg}")
        sys.exit(1)
    return path


def _run(coro, progress: ConsoleProgress):
    """Run an import coroutine, exiting with 1 on any reported or raised failure."""
    try:
        asyncio.run(coro)
    except ChatportError as e:
        logger.error(f"Import failed: {e}")
        sys.exit(1)

    if progress.failure is not None:
        sys.exit(1)


def cmd_data(args, services):
    """Import chat data (messages, sessions, session groups, topics) from a JSON export.

    Args:
        args: Parsed command-line arguments with file and with_settings
        services: Services container with the import service
    """
    path = _require_file(args.file)

    try:
        data_file = load_data_file(path)
    except (ValueError, ValidationError) as e:
        logger.error(f"Invalid export file {path}: {e}")
        sys.exit(1)

    dataset = data_file.to_dataset()
    logger.info(f"Loaded {dataset.unit_count()} record(s) from {path}")

    if args.with_settings and data_file.settings:
        asyncio.run(services.imports.import_settings(data_file.settings))

    progress = ConsoleProgress()
    _run(services.imports.import_data(dataset, progress.callbacks()), progress)


def cmd_pg(args, services):
    """Import relational table rows from a JSON export."""
    path = _require_file(args.file)

    try:
        dataset = load_pg_file(path)
    except (ValueError, ValidationError) as e:
        logger.error(f"Invalid export file {path}: {e}")
        sys.exit(1)

    logger.info(
        f"Loaded {dataset.unit_count()} row(s) across {len(dataset.data)} table(s)"
    )

    progress = ConsoleProgress()
    _run(
        services.imports.import_pg_data(dataset, callbacks=progress.callbacks()),
        progress,
    )


def cmd_settings(args, services):
    """Import application settings from a settings file or config export."""
    path = _require_file(args.file)

    try:
        settings = load_settings_file(path)
    except (ValueError, ValidationError) as e:
        logger.error(f"Invalid settings file {path}: {e}")
        sys.exit(1)

    asyncio.run(services.imports.import_settings(settings))
    logger.info(f"✓ Settings imported from {path}")


def setup_parser(subparsers):
    """Setup import subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "import",
        help="Import exported data",
        description="Send exported chat data, table rows or settings to the importer",
    )

    import_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available import commands",
        dest="subcommand",
        required=True,
    )

    # import data
    data_parser = import_subparsers.add_parser(
        "data", help="Import messages, sessions, session groups and topics"
    )
    data_parser.add_argument("file", help="Path to the JSON export file")
    data_parser.add_argument(
        "--with-settings",
        action="store_true",
        help="Also import settings found in a config export",
    )
    data_parser.set_defaults(func=cmd_data)

    # import pg
    pg_parser = import_subparsers.add_parser("pg", help="Import relational table rows")
    pg_parser.add_argument("file", help="Path to the JSON export file")
    pg_parser.set_defaults(func=cmd_pg)

    # import settings
    settings_parser = import_subparsers.add_parser(
        "settings", help="Import application settings"
    )
    settings_parser.add_argument("file", help="Path to the settings or export file")
    settings_parser.set_defaults(func=cmd_settings)
