"""Cloudflare implementation of the purge client.

Posts to the zone ``purge_cache`` endpoint and maps the JSON envelope
(``{"success": bool, "errors": [...]}``) onto PurgeResponse. Transport
failures are reported as single-message responses.
"""

import logging
from collections.abc import Sequence
from typing import Any

import httpx

from edgepurge.core.config import DEFAULT_API_URL
from edgepurge.purge.client import CachePurgeClient
from edgepurge.purge.models import MAX_PURGE_PER_REQUEST, PurgeResponse

logger = logging.getLogger(__name__)


class CloudflareClient(CachePurgeClient):
    """Purges Cloudflare zone caches over the v4 API.

    Args:
        email: Account email (X-Auth-Email header).
        auth_key: Global API key (X-Auth-Key header).
        api_url: API root.
        timeout: Request timeout in seconds.
        http_client: Pre-configured httpx.Client, mainly for tests.
    """

    def __init__(
        self,
        email: str,
        auth_key: str,
        *,
        api_url: str = DEFAULT_API_URL,
        timeout: float = 30.0,
        http_client: httpx.Client | None = None,
    ) -> None:
        self._api_url = api_url.rstrip("/")
        self._http = http_client or httpx.Client(timeout=timeout)
        self._headers = {
            "X-Auth-Email": email,
            "X-Auth-Key": auth_key,
            "Content-Type": "application/json",
        }

    def purge_zone(self, zone_id: str) -> PurgeResponse:
        return self._post(zone_id, {"purge_everything": True})

    def purge_files(self, zone_id: str, urls: Sequence[str]) -> PurgeResponse:
        if len(urls) > MAX_PURGE_PER_REQUEST:
            msg = (
                f"Cannot purge more than {MAX_PURGE_PER_REQUEST} files per request, "
                f"got {len(urls)}"
            )
            raise ValueError(msg)
        return self._post(zone_id, {"files": list(urls)})

    def close(self) -> None:
        """Close the underlying HTTP connection pool."""
        self._http.close()

    def _post(self, zone_id: str, payload: dict[str, Any]) -> PurgeResponse:
        endpoint = f"{self._api_url}/zones/{zone_id}/purge_cache"
        try:
            response = self._http.post(endpoint, headers=self._headers, json=payload)
        except httpx.HTTPError as exc:
            logger.warning("Purge request to %s failed: %s", endpoint, exc)
            return PurgeResponse.failed_message(str(exc))

        try:
            body = response.json()
        except ValueError:
            return PurgeResponse.failed_message(
                f"Unexpected response ({response.status_code}): {response.text[:200]}"
            )

        if not isinstance(body, dict):
            return PurgeResponse.failed_message(f"Unexpected response body: {body!r}")

        if body.get("success"):
            return PurgeResponse.ok()

        errors = body.get("errors")
        if isinstance(errors, list) and errors:
            return PurgeResponse.failed(errors)
        return PurgeResponse.failed_message(
            str(body.get("error") or f"Purge failed with HTTP {response.status_code}")
        )
