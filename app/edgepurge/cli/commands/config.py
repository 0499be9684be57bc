"""Configuration commands.

Shows the active configuration and creates a default configuration file.
"""

import json
from typing import Annotated

import typer

from edgepurge.cli.types import get_config
from edgepurge.core.config import PurgeConfigError, get_default_config, save_config
from edgepurge.core.paths import get_config_path
from edgepurge.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Show or create the purge configuration.",
    no_args_is_help=True,
)

# Shown instead of secret values
MASK = "********"


@app.command()
def show(
    ctx: typer.Context,
    reveal: Annotated[
        bool,
        typer.Option("--reveal", help="Show the auth key instead of masking it."),
    ] = False,
) -> None:
    """Print the active configuration as JSON."""
    config = get_config(ctx)
    data = config.model_dump(mode="json")
    if data["auth_key"] and not reveal:
        data["auth_key"] = MASK
    console.print_json(json.dumps(data))


@app.command()
def init(
    ctx: typer.Context,
    force: Annotated[
        bool,
        typer.Option("--force", help="Overwrite an existing configuration file."),
    ] = False,
) -> None:
    """Write a default configuration file.

    Purging stays disabled until 'enabled = true' and the credentials are
    filled in.
    """
    obj = ctx.obj or {}
    path = obj.get("config_path") or get_config_path()

    if path.exists() and not force:
        print_error(f"Configuration already exists: {path}")
        print_info("Use --force to overwrite.")
        raise typer.Exit(code=1)

    try:
        saved = save_config(get_default_config(), path)
    except PurgeConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Configuration written to {saved}")
