"""Recursive asset file discovery.

Walks one or more root directories and yields every regular file whose
extension is requested and whose absolute path passes the blacklist.
"""

import logging
from collections.abc import Collection, Iterable, Iterator
from pathlib import Path

from edgepurge.filesystem.blacklist import PathFilter

logger = logging.getLogger(__name__)


class FileScanner:
    """Finds purgeable asset files below a set of root directories.

    Missing roots are skipped silently. Directories that cannot be read
    are skipped with a warning. Symlinked directories are not descended
    into; symlinked files are reported like regular files.

    Args:
        path_filter: Filter applied to every candidate. Defaults to a
            PathFilter with the default blacklist.

    Example:
        >>> scanner = FileScanner()
        >>> for path in scanner.scan([Path("/srv/site")], {"css", "js"}):
        ...     print(path)
    """

    def __init__(self, path_filter: PathFilter | None = None) -> None:
        self._filter = path_filter or PathFilter()

    @property
    def path_filter(self) -> PathFilter:
        return self._filter

    def scan(
        self,
        roots: Iterable[Path | str],
        extensions: Collection[str],
        *,
        blacklist_enabled: bool = True,
    ) -> Iterator[str]:
        """Yield absolute paths of matching files under each root.

        Traversal order is filesystem-dependent; sort the results if a
        stable order is needed.

        Args:
            roots: Directories to search recursively.
            extensions: Extensions (without dot) to include.
            blacklist_enabled: Apply the path blacklist.

        Yields:
            Absolute path strings.
        """
        for root in roots:
            target = Path(root).absolute()
            if not target.is_dir():
                logger.debug("Skipping missing scan root: %s", target)
                continue
            yield from self._scan_directory(target, extensions, blacklist_enabled)

    def _scan_directory(
        self,
        directory: Path,
        extensions: Collection[str],
        blacklist_enabled: bool,
    ) -> Iterator[str]:
        try:
            entries = list(directory.iterdir())
        except PermissionError:
            logger.warning("Permission denied scanning directory: %s", directory)
            return
        except OSError as exc:
            logger.warning("Cannot read directory %s: %s", directory, exc)
            return

        for entry in entries:
            try:
                if entry.is_dir():
                    if entry.is_symlink():
                        continue
                    # Every descendant would contain the same fragment
                    if not self._filter.accepts(f"{entry}/", blacklist_enabled):
                        continue
                    yield from self._scan_directory(entry, extensions, blacklist_enabled)
                    continue
                if not entry.is_file():
                    continue
            except OSError:
                logger.warning("Cannot determine type of: %s", entry)
                continue

            path = str(entry)
            if self._filter.matches(path, extensions, blacklist_enabled):
                yield path
