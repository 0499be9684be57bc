"""Purge set assembly.

Combines filesystem discovery with persisted file records. Filesystem
results come first, record links follow. Nothing is deduplicated or
sorted: the two sources may legitimately disagree (remotely hosted files
only exist as records), and a file found under two scan roots is purged
twice.
"""

import logging
from collections.abc import Collection, Iterable
from pathlib import Path

from edgepurge.filesystem.scanner import FileScanner
from edgepurge.purge.records import RecordSource

logger = logging.getLogger(__name__)


class PurgeSetBuilder:
    """Builds the list of purge targets for a set of extensions.

    Args:
        scanner: Filesystem scanner.
        record_source: Optional record store. Without one the record step
            contributes nothing.
        blacklist_enabled: Apply the scanner's path blacklist.
    """

    def __init__(
        self,
        scanner: FileScanner,
        record_source: RecordSource | None = None,
        *,
        blacklist_enabled: bool = True,
    ) -> None:
        self._scanner = scanner
        self._record_source = record_source
        self._blacklist_enabled = blacklist_enabled

    def build(
        self,
        extensions: Collection[str],
        scan_roots: Iterable[Path | str],
        include_record_source: bool = True,
    ) -> list[str]:
        """Collect purge targets for the given extensions.

        Args:
            extensions: Extensions without a leading dot.
            scan_roots: Directories to scan, in order.
            include_record_source: Append links from the record source.

        Returns:
            Filesystem paths followed by record links.
        """
        targets = list(
            self._scanner.scan(
                scan_roots,
                extensions,
                blacklist_enabled=self._blacklist_enabled,
            )
        )
        scanned = len(targets)

        if include_record_source and self._record_source is not None:
            targets.extend(self._record_source.links_by_extensions(extensions))

        logger.debug(
            "Built purge set: %d scanned, %d from records",
            scanned,
            len(targets) - scanned,
        )
        return targets
