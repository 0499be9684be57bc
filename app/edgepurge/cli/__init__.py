"""Command-line interface for edgepurge."""
