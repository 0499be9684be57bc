"""Purge domain models.

Defines the immutable records exchanged between the batcher and the
CDN client: the per-request response and the aggregated result of an
orchestrator operation.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

# Cloudflare can only purge 500 files per request
MAX_PURGE_PER_REQUEST = 500

# Opaque error object as returned by the CDN client
ErrorDetail = Any


@dataclass(frozen=True, slots=True)
class PurgeResponse:
    """Response of a single CDN purge request.

    Attributes:
        success: Whether the CDN accepted the request.
        errors: Structured error list, or None when the client only
            reported a single message.
        error: Single error message (legacy response shape).
    """

    success: bool
    errors: tuple[ErrorDetail, ...] | None = ()
    error: str | None = None

    @classmethod
    def ok(cls) -> "PurgeResponse":
        """Create a successful response."""
        return cls(success=True)

    @classmethod
    def failed(cls, errors: Iterable[ErrorDetail]) -> "PurgeResponse":
        """Create a failed response with a structured error list."""
        return cls(success=False, errors=tuple(errors))

    @classmethod
    def failed_message(cls, message: str) -> "PurgeResponse":
        """Create a failed response carrying only a message."""
        return cls(success=False, errors=None, error=message)


@dataclass(frozen=True, slots=True)
class PurgeResult:
    """Outcome of one purge operation.

    Attributes:
        requested: Every target passed in, in order, regardless of which
            batches failed.
        errors: Errors from all failed batches, in batch order.
    """

    requested: tuple[str, ...] = ()
    errors: tuple[ErrorDetail, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        # Accept lists from callers but store tuples
        object.__setattr__(self, "requested", tuple(self.requested))
        object.__setattr__(self, "errors", tuple(self.errors))

    @property
    def success(self) -> bool:
        """True when no batch reported an error."""
        return not self.errors

    @property
    def failed(self) -> bool:
        return not self.success
