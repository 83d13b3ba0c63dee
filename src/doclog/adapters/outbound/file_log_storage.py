"""File-based Log Storage implementation.

This adapter implements the LogStorage protocol over a single UTF-8 text
file, one tagged record per line.

File Format:
    E{"name":"a","age":3}
    D{"name":"b","age":1}

    - First character: tag (``E`` live, anything else reads as ``D``)
    - Remainder: JSON object
    - Blank lines are skipped on read and never written

Thread Safety:
    Reads may run concurrently with each other. Writes and appends must be
    serialized by the caller.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import IO, TYPE_CHECKING, Any, Sequence

from doclog.domain.entities import EntryTag, LogEntry
from doclog.domain.exceptions import LogParseError, StorageIOError
from doclog.infrastructure.config import get_config
from doclog.infrastructure.logging import get_logger
from doclog.ports.outbound.log_storage import SyncMode

if TYPE_CHECKING:
    from doclog.infrastructure.metrics import MetricsRegistry

logger = get_logger(__name__)


class FileLogStorage:
    """File-based implementation of the LogStorage protocol.

    Attributes:
        path: Location of the log file.
        sync_mode: How writes are synced to disk.
    """

    def __init__(
        self,
        path: str | Path,
        sync_mode: SyncMode | None = None,
        create: bool | None = None,
        encoding: str | None = None,
        metrics: MetricsRegistry | None = None,
    ) -> None:
        """Initialize the log storage.

        Args:
            path: Path to the log file.
            sync_mode: Sync mode for durability (default from config).
            create: Create an empty log if none exists (default from config).
            encoding: Text encoding of the file (default from config).
            metrics: Optional metrics registry.

        Raises:
            StorageIOError: If the log file cannot be created.
        """
        config = get_config().storage
        self._path = Path(path)
        self._sync_mode = sync_mode or SyncMode(config.sync_mode)
        self._encoding = encoding or config.encoding
        self._metrics = metrics

        if config.create_if_missing if create is None else create:
            self._create_if_missing()

    @property
    def path(self) -> Path:
        """Return the log file path."""
        return self._path

    @property
    def sync_mode(self) -> SyncMode:
        """Return the current sync mode."""
        return self._sync_mode

    def _create_if_missing(self) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.touch(exist_ok=True)
        except OSError as e:
            raise StorageIOError(f"Cannot create log file {self._path}: {e}") from e

    def read(self) -> list[LogEntry]:
        """Read and parse every non-blank line of the log."""
        try:
            text = self._path.read_text(encoding=self._encoding)
        except OSError as e:
            raise StorageIOError(f"Cannot read log file {self._path}: {e}") from e
        except UnicodeDecodeError as e:
            raise LogParseError(f"Log file {self._path} is not valid {self._encoding}: {e}") from e

        entries: list[LogEntry] = []
        for line_number, line in enumerate(text.split("\n"), start=1):
            if not line.strip():
                continue
            entries.append(self._parse_line(line, line_number))

        if self._metrics is not None:
            self._metrics.log_lines_read_total.inc(len(entries))
        logger.debug("log_read", path=str(self._path), entries=len(entries))
        return entries

    def _parse_line(self, line: str, line_number: int) -> LogEntry:
        payload = line[1:].rstrip("\r")
        try:
            record = json.loads(payload)
        except json.JSONDecodeError as e:
            raise LogParseError(
                f"Invalid JSON payload at {self._path}:{line_number}: {e.msg}",
                line_number=line_number,
            ) from e
        if not isinstance(record, dict):
            raise LogParseError(
                f"Payload at {self._path}:{line_number} is not a JSON object",
                line_number=line_number,
            )
        return LogEntry(tag=EntryTag.from_line(line), payload=payload, record=record)

    def write(self, entries: Sequence[LogEntry]) -> None:
        """Overwrite the log with ``entries``, one line each."""
        data = "".join(entry.to_line() for entry in entries)
        self._write(data, mode="w")
        logger.debug("log_rewritten", path=str(self._path), entries=len(entries))

    def append(self, record: dict[str, Any]) -> LogEntry:
        """Append ``record`` as a live entry."""
        entry = LogEntry.live(record)
        self._write(entry.to_line(), mode="a")
        return entry

    def _write(self, data: str, mode: str) -> None:
        try:
            with open(self._path, mode, encoding=self._encoding, newline="") as fh:
                fh.write(data)
                fh.flush()
                self._sync(fh)
        except OSError as e:
            raise StorageIOError(f"Cannot write log file {self._path}: {e}") from e

        if self._metrics is not None:
            self._metrics.log_bytes_written_total.labels(
                mode="append" if mode == "a" else "rewrite"
            ).inc(len(data.encode(self._encoding)))

    def _sync(self, fh: IO[str]) -> None:
        if self._sync_mode == SyncMode.FSYNC:
            os.fsync(fh.fileno())
        elif self._sync_mode == SyncMode.FDATASYNC:
            # fdatasync is not available on every platform
            getattr(os, "fdatasync", os.fsync)(fh.fileno())
        # SyncMode.NONE - no sync
