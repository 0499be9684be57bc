"""Path eligibility rules for asset discovery.

Asset bundlers and the CMS framework ship their own CSS/JS inside
vendor and module directories. Those files are never served under a
purgeable public URL, so scans exclude any absolute path that contains
one of the blacklisted fragments.

The default fragments are matched below the project root only, so a
project deployed under e.g. /var/www/cms/site is still scanned. Other
rules are matched against the whole absolute path.
"""

from collections.abc import Collection, Iterable
from pathlib import Path

from edgepurge.core.config import DEFAULT_BLACKLIST_ABSOLUTE_PATHNAMES


def get_extension(path: str) -> str:
    """Return the suffix after the last dot of the final path component.

    Args:
        path: Filesystem path.

    Returns:
        Extension without the dot, or "" if the name has none.
    """
    name = path.replace("\\", "/").rsplit("/", 1)[-1]
    if "." not in name:
        return ""
    return name.rsplit(".", 1)[1]


class PathFilter:
    """Decides whether a discovered path is eligible for purging.

    Args:
        blacklist: Absolute path fragments that exclude a path. Defaults to
            DEFAULT_BLACKLIST_ABSOLUTE_PATHNAMES.
        root: Project root. When given, default fragments only match the
            part of a path below it.

    Example:
        >>> path_filter = PathFilter(root="/srv/cms/site")
        >>> path_filter.accepts("/srv/cms/site/vendor/lib/style.css")
        False
        >>> path_filter.accepts("/srv/cms/site/themes/main/style.css")
        True
        >>> path_filter.accepts("/srv/cms/site/vendor/lib/style.css", blacklist_enabled=False)
        True
    """

    def __init__(
        self,
        blacklist: Iterable[str] | None = None,
        root: Path | str | None = None,
    ) -> None:
        if blacklist is None:
            blacklist = DEFAULT_BLACKLIST_ABSOLUTE_PATHNAMES
        self._blacklist: tuple[str, ...] = tuple(rule for rule in blacklist if rule)
        self._root = str(Path(root).absolute()).rstrip("/") if root is not None else None

    @property
    def blacklist(self) -> tuple[str, ...]:
        """Active blacklist fragments."""
        return self._blacklist

    @property
    def root(self) -> str | None:
        """Absolute project root, without a trailing slash."""
        return self._root

    def _below_root(self, path: str) -> str:
        """Strip the project root from a path, keeping the leading slash."""
        if self._root is None:
            return path
        if path.startswith(f"{self._root}/"):
            return path[len(self._root) :]
        return path

    def is_blacklisted(self, path: str) -> bool:
        """Check if a path contains any blacklisted fragment."""
        below_root = self._below_root(path)
        return any(
            rule in (below_root if rule in DEFAULT_BLACKLIST_ABSOLUTE_PATHNAMES else path)
            for rule in self._blacklist
        )

    def accepts(self, path: str, blacklist_enabled: bool = True) -> bool:
        """Check if a path passes the blacklist stage.

        Args:
            path: Absolute filesystem path.
            blacklist_enabled: When False every path passes.

        Returns:
            True if the path may be purged.
        """
        if not blacklist_enabled:
            return True
        return not self.is_blacklisted(path)

    @staticmethod
    def has_extension(path: str, extensions: Collection[str]) -> bool:
        """Check if the path's extension is in the given set.

        The comparison is case-sensitive; callers pass extensions in the
        casing used on disk.
        """
        extension = get_extension(path)
        return bool(extension) and extension in extensions

    def matches(
        self,
        path: str,
        extensions: Collection[str],
        blacklist_enabled: bool = True,
    ) -> bool:
        """Check extension and blacklist together."""
        return self.has_extension(path, extensions) and self.accepts(path, blacklist_enabled)
