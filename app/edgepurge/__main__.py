"""Allow running edgepurge with ``python -m edgepurge``."""

from edgepurge.cli.main import app

app()
