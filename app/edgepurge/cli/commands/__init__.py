"""CLI commands for edgepurge.

This package contains all subcommand implementations.
"""

from edgepurge.cli.commands import config, purge, scan

__all__ = ["config", "purge", "scan"]
