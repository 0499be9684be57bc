"""Utility modules for edgepurge."""
