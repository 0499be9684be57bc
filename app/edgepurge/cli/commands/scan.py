"""Scan command implementation.

Lists the purge targets for a set of extensions without contacting the
CDN.
"""

import json
from typing import Annotated

import typer

from edgepurge.cli.types import (
    OutputFormat,
    RecordsOption,
    get_config,
    get_record_source,
    get_service,
)
from edgepurge.utils.formatting import console, create_target_table, print_info


def scan_targets(
    ctx: typer.Context,
    extensions: Annotated[
        list[str] | None,
        typer.Argument(help="File extensions to look for (default: css js json)."),
    ] = None,
    records: RecordsOption = None,
    no_blacklist: Annotated[
        bool,
        typer.Option(
            "--no-blacklist",
            help="Include files under vendor/framework directories.",
        ),
    ] = False,
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format: table or json.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TABLE,
    limit: Annotated[
        int | None,
        typer.Option(
            "--limit",
            "-n",
            help="Limit number of targets to display.",
        ),
    ] = None,
) -> None:
    """Show the purge set for the given extensions.

    Filesystem matches are listed first, sorted, followed by record
    links in record order.

    Examples:
        edgepurge scan                       # CSS, JavaScript and JSON
        edgepurge scan png jpg --no-blacklist
    """
    config = get_config(ctx)
    if no_blacklist:
        config = config.model_copy(update={"disable_default_blacklist_absolute_pathnames": True})

    wanted = [ext.lstrip(".") for ext in extensions] if extensions else ["css", "js", "json"]

    record_source = get_record_source(records)
    with get_service(ctx, config=config) as service:
        scanned = sorted(
            service.files_to_purge_by_extensions(wanted, include_record_source=False)
        )
        roots = [str(root) for root in service.scan_roots()]
    from_records = record_source.links_by_extensions(wanted) if record_source else []
    targets = scanned + from_records

    display_targets = targets[:limit] if limit else targets

    if output_format == OutputFormat.JSON:
        console.print_json(
            json.dumps(
                {
                    "extensions": wanted,
                    "roots": roots,
                    "targets": display_targets,
                }
            )
        )
        return

    if not targets:
        print_info("No files match the given extensions.")
        return

    table = create_target_table(f"Purge Targets ({', '.join(wanted)})")
    for index, target in enumerate(display_targets, start=1):
        table.add_row(str(index), target)
    console.print(table)

    summary = f"Showing {len(display_targets)} of {len(targets)} targets"
    summary += f" ({len(scanned)} scanned, {len(from_records)} from records)"
    console.print(f"\n[dim]{summary}[/]")
