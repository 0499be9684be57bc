"""Cache purge orchestration.

CloudflarePurgeService is the public entry point: it turns a page, a
category of asset files or a list of URLs into purge targets and hands
them to the batcher. Every operation returns None when purging is
disabled.
"""

import logging
from collections.abc import Iterable
from pathlib import Path

from edgepurge.core.config import PurgeConfig
from edgepurge.filesystem.blacklist import PathFilter
from edgepurge.filesystem.scanner import FileScanner
from edgepurge.purge.batcher import PurgeBatcher
from edgepurge.purge.builder import PurgeSetBuilder
from edgepurge.purge.client import CachePurgeClient
from edgepurge.purge.cloudflare import CloudflareClient
from edgepurge.purge.models import PurgeResult
from edgepurge.purge.pages import PageRef, join_links, links_to_purge
from edgepurge.purge.records import RecordSource

logger = logging.getLogger(__name__)

CSS_AND_JAVASCRIPT_EXTENSIONS: tuple[str, ...] = ("css", "js", "json")

URL_SCHEMES: tuple[str, ...] = ("http://", "https://")


def is_absolute_url(url: str) -> bool:
    """Check if the value already contains an http(s) scheme."""
    return any(scheme in url for scheme in URL_SCHEMES)


def unique(values: Iterable[str]) -> list[str]:
    """Deduplicate while keeping first-seen order."""
    return list(dict.fromkeys(values))


class CloudflarePurgeService:
    """Purges CDN cache entries for pages, asset files and URLs.

    Args:
        config: Purge configuration.
        client: CDN client. When omitted and purging is enabled, a
            CloudflareClient is created from the configured credentials.
        record_source: Optional store of persisted file records.
        scanner: Filesystem scanner. Defaults to one using the configured
            blacklist.
        batcher: Batch dispatcher.
    """

    def __init__(
        self,
        config: PurgeConfig,
        client: CachePurgeClient | None = None,
        *,
        record_source: RecordSource | None = None,
        scanner: FileScanner | None = None,
        batcher: PurgeBatcher | None = None,
    ) -> None:
        self._config = config
        self._client: CachePurgeClient | None = None
        self._owned_client: CloudflareClient | None = None
        if config.enabled:
            if client is None:
                client = self._owned_client = CloudflareClient(
                    config.email,
                    config.auth_key,
                    api_url=config.api_url,
                    timeout=config.timeout_seconds,
                )
            self._client = client
        self._scanner = scanner or FileScanner(
            PathFilter(config.blacklist_absolute_pathnames, root=config.base_folder)
        )
        self._builder = PurgeSetBuilder(
            self._scanner,
            record_source,
            blacklist_enabled=config.blacklist_enabled,
        )
        self._batcher = batcher or PurgeBatcher()

    def __enter__(self) -> "CloudflarePurgeService":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        """Close the CloudflareClient created by this service.

        Clients passed in by the caller are left open.
        """
        if self._owned_client is not None:
            self._owned_client.close()
            self._owned_client = None

    @property
    def config(self) -> PurgeConfig:
        return self._config

    @property
    def enabled(self) -> bool:
        """True when a client is available to purge with."""
        return self._client is not None

    def get_zone_identifier(self) -> str:
        return self._config.zone_id

    def purge_page(self, page: PageRef) -> PurgeResult | None:
        """Purge the cached copies of a page.

        Args:
            page: The changed page.

        Returns:
            PurgeResult, or None if purging is disabled.
        """
        if self._client is None:
            return None
        targets = links_to_purge(page, self._config.base_url)
        return self._batcher.purge(self._client, self.get_zone_identifier(), targets)

    def purge_all(self) -> PurgeResult | None:
        """Purge every cached entry in the zone.

        Returns:
            PurgeResult with an empty requested list, or None if disabled.
        """
        if self._client is None:
            return None
        return self._batcher.purge_all(self._client, self.get_zone_identifier())

    def purge_images(self) -> PurgeResult | None:
        """Purge image files found on disk and in the record store.

        The image category extensions are combined with the additional
        configured image extensions. An empty category still purges the
        additional extensions.

        Returns:
            PurgeResult, or None if disabled or the image category is not
            configured.
        """
        category = self._config.image_category_extensions
        if category is None:
            logger.warning("Missing image category extensions in configuration")
            return None
        extensions = unique([*category, *self._config.image_file_extensions])
        return self.purge_files_by_extensions(extensions)

    def purge_css_and_javascript(self) -> PurgeResult | None:
        """Purge CSS, JavaScript and JSON files."""
        return self.purge_files_by_extensions(CSS_AND_JAVASCRIPT_EXTENSIONS)

    def purge_files_by_extensions(self, extensions: Iterable[str]) -> PurgeResult | None:
        """Purge every file with one of the given extensions.

        Args:
            extensions: Extensions without a leading dot.

        Returns:
            PurgeResult, or None if purging is disabled.
        """
        if self._client is None:
            return None
        targets = self.files_to_purge_by_extensions(extensions)
        return self._batcher.purge(self._client, self.get_zone_identifier(), targets)

    def purge_urls(self, urls: Iterable[str]) -> PurgeResult | None:
        """Purge a list of absolute or relative URLs.

        Relative URLs are joined onto the base URL; absolute URLs pass
        through unchanged.

        Returns:
            PurgeResult, or None if purging is disabled.
        """
        if self._client is None:
            return None
        targets = self.absolute_urls(urls)
        return self._batcher.purge(self._client, self.get_zone_identifier(), targets)

    def absolute_urls(self, urls: Iterable[str]) -> list[str]:
        """Convert relative URLs to absolute ones using the base URL."""
        base_url = self._config.effective_base_url
        return [url if is_absolute_url(url) else join_links(base_url, url) for url in urls]

    def scan_roots(self) -> list[Path]:
        """Directories searched for asset files, in order."""
        return [self._config.combined_assets_folder, self._config.base_folder]

    def files_to_purge_by_extensions(
        self,
        extensions: Iterable[str],
        include_record_source: bool = True,
    ) -> list[str]:
        """Collect the targets for the given extensions without purging.

        Args:
            extensions: Extensions without a leading dot.
            include_record_source: Append links from the record store.

        Returns:
            Filesystem paths followed by record links.
        """
        return self._builder.build(
            frozenset(extensions),
            self.scan_roots(),
            include_record_source=include_record_source,
        )
