"""Log Storage port for the tagged record log.

This outbound port defines the contract for persisting the document log.
The log is a sequence of tagged entries; tags are rewritten in place of
removing lines.

References:
    - doclog.domain.entities.log_entry (line format)
"""

from __future__ import annotations

from abc import abstractmethod
from enum import Enum
from pathlib import Path
from typing import Any, Protocol, Sequence

from doclog.domain.entities import LogEntry


class SyncMode(Enum):
    """Sync modes applied after each log write.

    FSYNC: Full durability - sync file and metadata (safest)
    FDATASYNC: Data durability - sync file data only
    NONE: No sync - rely on OS buffering (fastest, but unsafe)
    """

    FSYNC = "fsync"
    FDATASYNC = "fdatasync"
    NONE = "none"


class LogStorage(Protocol):
    """Protocol for reading and writing the document log.

    Implementations are synchronous; the store moves calls off the event
    loop.

    Thread Safety:
        Concurrent reads are allowed. Writes must be serialized externally
        (the store's mutation gate).
    """

    @property
    @abstractmethod
    def path(self) -> Path:
        """Return the location of the log."""
        ...

    @abstractmethod
    def read(self) -> list[LogEntry]:
        """Read every entry of the log, in file order.

        Blank and whitespace-only lines are skipped.

        Returns:
            The entries, tombstones included.

        Raises:
            StorageIOError: If the log cannot be opened or read.
            LogParseError: If a non-blank line has an invalid JSON payload.
        """
        ...

    @abstractmethod
    def write(self, entries: Sequence[LogEntry]) -> None:
        """Replace the whole log with ``entries``.

        Not atomic: a crash mid-write can leave the log truncated.

        Raises:
            StorageIOError: If the log cannot be written.
        """
        ...

    @abstractmethod
    def append(self, record: dict[str, Any]) -> LogEntry:
        """Append one live entry without reading prior content.

        Returns:
            The entry written.

        Raises:
            StorageIOError: If the log cannot be written.
        """
        ...
