"""Display helpers for purge results."""

import json

from rich.markup import escape
from rich.table import Table

from edgepurge.purge.models import ErrorDetail, PurgeResult
from edgepurge.utils.formatting import console, print_success


def _error_fields(error: ErrorDetail) -> tuple[str, str]:
    """Extract (code, message) from an opaque error object."""
    if isinstance(error, dict):
        code = error.get("code")
        message = error.get("message", json.dumps(error, default=str))
        return ("" if code is None else str(code), str(message))
    return ("", str(error))


def create_errors_table(errors: tuple[ErrorDetail, ...] | list[ErrorDetail]) -> Table:
    """Create a Rich table listing CDN errors.

    Args:
        errors: Errors as returned by the CDN client.

    Returns:
        Rich Table with Code and Message columns.
    """
    table = Table(
        title="Errors",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Code", width=8, justify="right")
    table.add_column("Message")

    for error in errors:
        code, message = _error_fields(error)
        table.add_row(f"[error]{escape(code)}[/error]", f"[muted]{escape(message)}[/muted]")

    return table


def print_result_summary(result: PurgeResult, action: str, whole_zone: bool = False) -> None:
    """Print the outcome of a purge operation.

    Args:
        result: The purge result.
        action: Human-readable description, e.g. "Purged images".
        whole_zone: The result comes from a zone-wide purge.
    """
    target_text = "entire zone" if whole_zone else f"{len(result.requested)} target(s)"

    if result.success:
        print_success(f"{action}: {target_text} purged successfully.")
        return

    console.print(create_errors_table(result.errors))
    console.print(
        f"\n[error]{action}: {len(result.errors)} error(s)[/error] "
        f"[muted]while purging {target_text}[/muted]"
    )
