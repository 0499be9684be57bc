"""Persisted file records.

The CMS keeps a record for every uploaded file. Files may be hosted
remotely (object storage) and never appear on the local filesystem, so
the record store is the only place their public links can be found.
"""

import json
import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from edgepurge.core.errors import EdgePurgeError

logger = logging.getLogger(__name__)


class FileRecord(BaseModel):
    """A persisted file record.

    Attributes:
        id: Record identifier.
        filename: Stored filename, used for suffix matching.
        link: Public link of the file.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: Annotated[int | str, Field(description="Record identifier")]
    filename: Annotated[str, Field(min_length=1, description="Stored filename")]
    link: Annotated[str, Field(min_length=1, description="Public link")]


class RecordSourceError(EdgePurgeError):
    """Raised when a record source cannot be read."""


class RecordSource(ABC):
    """Queryable store of file records."""

    @abstractmethod
    def find_by_suffixes(self, suffixes: Iterable[str]) -> Iterator[FileRecord]:
        """Yield records whose filename ends with any of the suffixes.

        Args:
            suffixes: Filename suffixes, e.g. ".css".

        Yields:
            Matching FileRecord instances.
        """

    def links_by_extensions(self, extensions: Iterable[str]) -> list[str]:
        """Return public links of records matching the extensions.

        Args:
            extensions: Extensions without a leading dot.

        Returns:
            Links in record order.
        """
        suffixes = [f".{ext}" for ext in extensions]
        if not suffixes:
            return []
        return [record.link for record in self.find_by_suffixes(suffixes)]


class InMemoryRecordSource(RecordSource):
    """Record source backed by a list of records."""

    def __init__(self, records: Iterable[FileRecord] = ()) -> None:
        self._records = list(records)

    def find_by_suffixes(self, suffixes: Iterable[str]) -> Iterator[FileRecord]:
        suffix_tuple = tuple(suffixes)
        if not suffix_tuple:
            return
        for record in self._records:
            if record.filename.endswith(suffix_tuple):
                yield record


_RECORDS_ADAPTER = TypeAdapter(list[FileRecord])


class JsonRecordSource(InMemoryRecordSource):
    """Record source loaded from a JSON export of the file table.

    The file holds a list of objects with ``id``, ``filename`` and
    ``link`` keys.

    Raises:
        RecordSourceError: If the file is missing or malformed.
    """

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(self._load(path))

    @staticmethod
    def _load(path: Path) -> list[FileRecord]:
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except FileNotFoundError as e:
            raise RecordSourceError(f"Record file not found: {path}") from e
        except json.JSONDecodeError as e:
            raise RecordSourceError(f"Invalid JSON in record file {path}: {e}") from e
        except OSError as e:
            raise RecordSourceError(f"Failed to read record file {path}: {e}") from e

        try:
            records = _RECORDS_ADAPTER.validate_python(data)
        except ValidationError as e:
            raise RecordSourceError(f"Invalid record file content: {e}") from e

        logger.debug("Loaded %d file records from %s", len(records), path)
        return records
