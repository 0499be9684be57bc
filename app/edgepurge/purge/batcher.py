"""Batched purge dispatch.

Splits a target list into provider-sized chunks, sends one request per
chunk and folds the responses into a single PurgeResult. A failed chunk
never stops the chunks after it.
"""

import logging
from collections.abc import Iterator, Sequence

from edgepurge.core.errors import PurgeClientError
from edgepurge.purge.client import CachePurgeClient
from edgepurge.purge.models import (
    MAX_PURGE_PER_REQUEST,
    ErrorDetail,
    PurgeResponse,
    PurgeResult,
)

logger = logging.getLogger(__name__)


def chunked(items: Sequence[str], size: int = MAX_PURGE_PER_REQUEST) -> Iterator[list[str]]:
    """Yield contiguous chunks of at most ``size`` items, in order.

    Raises:
        ValueError: If size is not positive.
    """
    if size < 1:
        msg = f"Chunk size must be positive, got {size}"
        raise ValueError(msg)
    for start in range(0, len(items), size):
        yield list(items[start : start + size])


def response_errors(response: PurgeResponse) -> list[ErrorDetail]:
    """Extract the error list from a failed response.

    A response carrying only a single message is turned into one error
    entry so that it is reported like any other failure.

    Raises:
        PurgeClientError: If the response carries no error information.
    """
    if response.errors:
        return list(response.errors)
    if response.error:
        return [{"code": None, "message": response.error}]
    msg = "Purge request failed without any error details"
    raise PurgeClientError(msg)


class PurgeBatcher:
    """Dispatches purge targets to a client in capped batches.

    Args:
        batch_size: Maximum targets per request.
    """

    def __init__(self, batch_size: int = MAX_PURGE_PER_REQUEST) -> None:
        if not 1 <= batch_size <= MAX_PURGE_PER_REQUEST:
            msg = f"Batch size must be between 1 and {MAX_PURGE_PER_REQUEST}, got {batch_size}"
            raise ValueError(msg)
        self._batch_size = batch_size

    @property
    def batch_size(self) -> int:
        return self._batch_size

    def purge(
        self,
        client: CachePurgeClient,
        zone: str,
        targets: Sequence[str],
    ) -> PurgeResult:
        """Purge targets in batches and aggregate the outcome.

        Args:
            client: CDN client.
            zone: Zone identifier.
            targets: Every target to purge.

        Returns:
            PurgeResult whose requested list is the full input.

        Raises:
            PurgeClientError: If a failed response has no error information.
        """
        errors: list[ErrorDetail] = []
        batches = list(chunked(targets, self._batch_size))

        for index, batch in enumerate(batches, start=1):
            logger.debug("Purging batch %d/%d (%d targets)", index, len(batches), len(batch))
            response = client.purge_files(zone, batch)
            if not response.success:
                batch_errors = response_errors(response)
                logger.warning(
                    "Batch %d/%d failed with %d error(s)", index, len(batches), len(batch_errors)
                )
                errors.extend(batch_errors)

        logger.info(
            "Purged %d target(s) in %d batch(es), %d error(s)",
            len(targets),
            len(batches),
            len(errors),
        )
        return PurgeResult(requested=tuple(targets), errors=tuple(errors))

    def purge_all(self, client: CachePurgeClient, zone: str) -> PurgeResult:
        """Purge the whole zone with a single request.

        Returns:
            PurgeResult with an empty requested list.
        """
        response = client.purge_zone(zone)
        errors: list[ErrorDetail] = []
        if not response.success:
            errors = response_errors(response)
            logger.warning("Zone purge failed with %d error(s)", len(errors))
        else:
            logger.info("Purged entire zone %s", zone)
        return PurgeResult(requested=(), errors=tuple(errors))
