"""Shared types and helpers for CLI commands.

This module provides the option types and service construction used by
several command modules.
"""

from enum import Enum
from pathlib import Path
from typing import Annotated

import typer

from edgepurge.core.config import PurgeConfig, PurgeConfigError, load_config
from edgepurge.purge.records import JsonRecordSource, RecordSourceError
from edgepurge.service import CloudflarePurgeService
from edgepurge.utils.formatting import print_error


class OutputFormat(str, Enum):
    """Output format options."""

    TABLE = "table"
    JSON = "json"


RecordsOption = Annotated[
    Path | None,
    typer.Option(
        "--records",
        "-r",
        help="JSON export of file records to purge alongside scanned files.",
        exists=True,
        dir_okay=False,
    ),
]


def get_config(ctx: typer.Context) -> PurgeConfig:
    """Load the configuration selected by the global --config option.

    Raises:
        typer.Exit: If the configuration cannot be loaded.
    """
    obj = ctx.obj or {}
    config_path: Path | None = obj.get("config_path")
    try:
        return load_config(config_path)
    except PurgeConfigError as e:
        print_error(str(e))
        print_error("Run 'edgepurge config init' to create a configuration file.")
        raise typer.Exit(code=1) from e


def get_service(
    ctx: typer.Context,
    records: Path | None = None,
    config: PurgeConfig | None = None,
) -> CloudflarePurgeService:
    """Build a purge service from the CLI context.

    Args:
        ctx: Typer context carrying global options.
        records: Optional JSON record export.
        config: Configuration to use instead of loading it.

    Raises:
        typer.Exit: If the configuration or record file is invalid.
    """
    if config is None:
        config = get_config(ctx)

    return CloudflarePurgeService(config, record_source=get_record_source(records))


def get_record_source(records: Path | None) -> JsonRecordSource | None:
    """Load the record export given with --records, if any.

    Raises:
        typer.Exit: If the record file is invalid.
    """
    if records is None:
        return None
    try:
        return JsonRecordSource(records)
    except RecordSourceError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
