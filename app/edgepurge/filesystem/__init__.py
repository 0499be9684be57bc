"""Filesystem discovery of purgeable asset files."""

from edgepurge.filesystem.blacklist import PathFilter, get_extension
from edgepurge.filesystem.scanner import FileScanner

__all__ = ["FileScanner", "PathFilter", "get_extension"]
