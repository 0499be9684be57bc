"""Purge set assembly, batching and CDN clients."""

from edgepurge.purge.batcher import PurgeBatcher, chunked
from edgepurge.purge.builder import PurgeSetBuilder
from edgepurge.purge.client import CachePurgeClient
from edgepurge.purge.cloudflare import CloudflareClient
from edgepurge.purge.models import (
    MAX_PURGE_PER_REQUEST,
    ErrorDetail,
    PurgeResponse,
    PurgeResult,
)
from edgepurge.purge.records import (
    FileRecord,
    InMemoryRecordSource,
    JsonRecordSource,
    RecordSource,
    RecordSourceError,
)

__all__ = [
    "MAX_PURGE_PER_REQUEST",
    "CachePurgeClient",
    "CloudflareClient",
    "ErrorDetail",
    "FileRecord",
    "InMemoryRecordSource",
    "JsonRecordSource",
    "PurgeBatcher",
    "PurgeResponse",
    "PurgeResult",
    "PurgeSetBuilder",
    "RecordSource",
    "RecordSourceError",
    "chunked",
]
