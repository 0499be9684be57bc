"""Purge commands.

Issues purge requests for the whole zone, explicit URLs, or categories
of asset files.
"""

from collections.abc import Callable
from typing import Annotated

import typer

from edgepurge.cli.display import print_result_summary
from edgepurge.cli.types import RecordsOption, get_service
from edgepurge.core.errors import PurgeClientError
from edgepurge.purge.models import PurgeResult
from edgepurge.utils.formatting import print_error, print_warning

app = typer.Typer(
    help="Purge cached content from the CDN.",
    no_args_is_help=True,
)


def _run(
    operation: Callable[[], PurgeResult | None],
    action: str,
    whole_zone: bool = False,
) -> None:
    """Run a purge operation and report its outcome.

    Exits with code 1 if any batch failed or the CDN response could not
    be interpreted.
    """
    try:
        result = operation()
    except PurgeClientError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if result is None:
        print_warning("Purging is disabled or not configured; nothing was purged.")
        return

    print_result_summary(result, action, whole_zone)
    if result.failed:
        raise typer.Exit(code=1)


@app.command("all")
def purge_all(ctx: typer.Context) -> None:
    """Purge every cached entry in the zone."""
    with get_service(ctx) as service:
        _run(service.purge_all, "Purged zone", whole_zone=True)


@app.command("urls")
def purge_urls(
    ctx: typer.Context,
    urls: Annotated[
        list[str],
        typer.Argument(help="Absolute URLs or paths relative to the base URL."),
    ],
) -> None:
    """Purge a list of URLs.

    Examples:
        edgepurge purge urls /about https://example.com/contact/
    """
    with get_service(ctx) as service:
        _run(lambda: service.purge_urls(urls), "Purged URLs")


@app.command("images")
def purge_images(ctx: typer.Context, records: RecordsOption = None) -> None:
    """Purge all image files."""
    with get_service(ctx, records) as service:
        _run(service.purge_images, "Purged images")


@app.command("assets")
def purge_assets(ctx: typer.Context, records: RecordsOption = None) -> None:
    """Purge all CSS, JavaScript and JSON files."""
    with get_service(ctx, records) as service:
        _run(service.purge_css_and_javascript, "Purged CSS and JavaScript")


@app.command("files")
def purge_files(
    ctx: typer.Context,
    extensions: Annotated[
        list[str],
        typer.Argument(help="File extensions to purge, without the leading dot."),
    ],
    records: RecordsOption = None,
) -> None:
    """Purge all files with the given extensions.

    Examples:
        edgepurge purge files woff woff2
    """
    cleaned = [ext.lstrip(".") for ext in extensions]
    with get_service(ctx, records) as service:
        _run(lambda: service.purge_files_by_extensions(cleaned), "Purged files")
