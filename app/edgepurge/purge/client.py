"""Abstract base class for CDN purge clients.

This module defines the CachePurgeClient interface that the purge
batcher talks to.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence

from edgepurge.purge.models import PurgeResponse


class CachePurgeClient(ABC):
    """Abstract base class for CDN cache purge clients.

    Clients own authentication, transport and timeouts. They report
    provider failures through the returned PurgeResponse rather than by
    raising.

    Example:
        >>> client = CloudflareClient(email, auth_key)
        >>> response = client.purge_files(zone_id, ["https://example.com/"])
        >>> response.success
        True
    """

    @abstractmethod
    def purge_zone(self, zone_id: str) -> PurgeResponse:
        """Purge every cached entry in a zone.

        Args:
            zone_id: CDN zone identifier.

        Returns:
            PurgeResponse describing the outcome.
        """

    @abstractmethod
    def purge_files(self, zone_id: str, urls: Sequence[str]) -> PurgeResponse:
        """Purge a bounded list of cache keys in a zone.

        Args:
            zone_id: CDN zone identifier.
            urls: At most MAX_PURGE_PER_REQUEST cache keys.

        Returns:
            PurgeResponse describing the outcome.
        """
