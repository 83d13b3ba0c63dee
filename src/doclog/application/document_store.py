"""Document Store - unified entry point for the document log.

This module provides the DocumentStore class that wires the filter
parser, the predicate compiler, the result shaper and the log storage
behind an asyncio API.

Usage:
    from doclog import DocumentStore

    store = DocumentStore("data/people.log", full_text_fields=["notes"])

    await store.insert({"name": "a", "age": 3, "notes": "a foo bar"})
    adults = await store.find({"age": {"$gt": 1}}, {"sort": {"age": -1}})
    removed = await store.delete({"$text": "foo"})

Concurrency:
    insert and delete queue on a FIFO mutation gate and run one at a time.
    find takes no lock: a find that overlaps a delete may observe the log
    before or after the rewrite. Every call re-reads the file; nothing is
    cached between calls.
"""

from __future__ import annotations

import asyncio
import time
from contextlib import asynccontextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any, AsyncIterator, Generic, Iterable, Mapping

from pydantic import BaseModel

from doclog.adapters.inbound.filter_parser import FilterParser
from doclog.adapters.outbound.file_log_storage import FileLogStorage
from doclog.domain.entities import LogEntry
from doclog.domain.exceptions import InvalidStoreConfigError
from doclog.domain.services.mutation_gate import MutationGate
from doclog.domain.services.query_compiler import PredicateCompiler, RecordTest
from doclog.domain.services.result_shaper import shape_results
from doclog.domain.value_objects import QueryOptions
from doclog.infrastructure.config import Config, get_config
from doclog.infrastructure.logging import get_logger
from doclog.infrastructure.metrics import MetricsRegistry, get_metrics
from doclog.infrastructure.tracing import trace_span
from doclog.ports.inbound.document_store import FilterInput, OptionsInput, RecordT
from doclog.ports.outbound.log_storage import SyncMode

if TYPE_CHECKING:
    from doclog.ports.outbound.log_storage import LogStorage


@dataclass(frozen=True)
class StoreStats:
    """Entry counts of the log at the time of the call."""

    live: int
    tombstoned: int

    @property
    def total(self) -> int:
        return self.live + self.tombstoned


class DocumentStore(Generic[RecordT]):
    """Embedded document store over an append-only tagged log.

    Attributes:
        path: Location of the log file.
        full_text_fields: Fields scanned by ``$text`` search.
        fields: Declared record fields, if a record shape was supplied.
    """

    def __init__(
        self,
        path: str | Path,
        full_text_fields: Iterable[str] = (),
        *,
        fields: Iterable[str] | None = None,
        config: Config | None = None,
        metrics: MetricsRegistry | None = None,
        storage: LogStorage | None = None,
    ) -> None:
        """Open a store.

        Args:
            path: Path to the log file.
            full_text_fields: Fields that ``$text`` searches.
            fields: Record field names. When given, every full-text field
                must be one of them.
            config: Store configuration (default: global config).
            metrics: Metrics registry (default: global registry).
            storage: Log storage to use instead of a FileLogStorage at
                ``path``.

        Raises:
            InvalidStoreConfigError: If a full-text field is not declared.
            StorageIOError: If the log file cannot be created.
        """
        self._config = config or get_config()
        self._metrics = metrics or get_metrics()
        self.full_text_fields = tuple(full_text_fields)
        self.fields = tuple(fields) if fields is not None else None

        if self.fields is not None:
            undeclared = [f for f in self.full_text_fields if f not in self.fields]
            if undeclared:
                raise InvalidStoreConfigError(
                    f"Full-text fields {undeclared} are not record fields {list(self.fields)}"
                )

        storage_config = self._config.storage
        self._storage = storage or FileLogStorage(
            path,
            sync_mode=SyncMode(storage_config.sync_mode),
            create=storage_config.create_if_missing,
            encoding=storage_config.encoding,
            metrics=self._metrics,
        )
        self.path = self._storage.path

        strict = self._config.query.strict
        self._parser = FilterParser(strict=strict)
        self._compiler = PredicateCompiler(
            self.full_text_fields,
            strict=strict,
            on_invalid=self._on_invalid_node,
        )
        self._gate = MutationGate(self._metrics)
        self._logger = get_logger(__name__, path=str(self.path))

    @classmethod
    def for_model(
        cls,
        path: str | Path,
        model: type[BaseModel],
        full_text_fields: Iterable[str] = (),
        **kwargs: Any,
    ) -> "DocumentStore[Any]":
        """Open a store whose record fields are those of a pydantic model."""
        return cls(path, full_text_fields, fields=model.model_fields.keys(), **kwargs)

    @property
    def gate(self) -> MutationGate:
        """The gate serializing inserts and deletes."""
        return self._gate

    # --- operations ----------------------------------------------------

    async def find(
        self,
        query: FilterInput,
        options: OptionsInput = None,
    ) -> list[dict[str, Any]]:
        """Return live records matching ``query``.

        Args:
            query: Filter tree or its mapping form. ``{}`` matches all.
            options: Optional ``sort`` / ``projection``.

        Returns:
            Matching records; partial records when a projection is given.
        """
        async with self._operation("find"):
            shaping = QueryOptions.coerce(options)
            matches = self.compile(query)
            entries = await asyncio.to_thread(self._storage.read)
            records = [e.record for e in entries if e.is_live and matches(e.record)]
            results = shape_results(records, shaping)

        self._metrics.records_returned_total.inc(len(results))
        return results

    async def insert(self, record: RecordT | BaseModel) -> None:
        """Append ``record`` as a live entry.

        No uniqueness or schema check is made.
        """
        data = self._to_record(record)
        async with self._operation("insert"):
            async with self._gate.hold():
                await asyncio.to_thread(self._storage.append, data)
        self._logger.debug("record_inserted")

    async def delete(self, query: FilterInput) -> int:
        """Tombstone every live record matching ``query``.

        Matching entries keep their line; only the tag changes. All other
        lines are written back unchanged.

        Returns:
            The number of records tombstoned.
        """
        async with self._operation("delete"):
            matches = self.compile(query)
            async with self._gate.hold():
                entries = await asyncio.to_thread(self._storage.read)
                rewritten, removed = _tombstone_matches(entries, matches)
                if removed:
                    await asyncio.to_thread(self._storage.write, rewritten)

        if removed:
            self._metrics.records_tombstoned_total.inc(removed)
            self._logger.info("records_tombstoned", count=removed)
        return removed

    async def stats(self) -> StoreStats:
        """Count live and tombstoned entries of the log."""
        async with self._operation("stats"):
            entries = await asyncio.to_thread(self._storage.read)
        live = sum(1 for e in entries if e.is_live)
        return StoreStats(live=live, tombstoned=len(entries) - live)

    def compile(self, query: FilterInput) -> RecordTest:
        """Parse and compile a filter into a record test."""
        return self._compiler.compile(self._parser.parse(query))

    # --- internal helpers ----------------------------------------------

    @asynccontextmanager
    async def _operation(self, name: str) -> AsyncIterator[None]:
        """Trace, time and count one store operation."""
        started = time.perf_counter()
        with trace_span(f"doclog.{name}", {"doclog.path": str(self.path)}):
            try:
                yield
            except Exception as e:
                self._metrics.operations_total.labels(operation=name, status="error").inc()
                self._logger.warning(
                    "operation_failed", operation=name, error=type(e).__name__, detail=str(e)
                )
                raise
            else:
                self._metrics.operations_total.labels(operation=name, status="success").inc()
            finally:
                self._metrics.operation_latency_seconds.labels(operation=name).observe(
                    time.perf_counter() - started
                )

    def _on_invalid_node(self, node: Any) -> None:
        self._metrics.invalid_query_nodes_total.inc()
        self._logger.warning("invalid_query_shape", node=str(node))

    @staticmethod
    def _to_record(record: Any) -> dict[str, Any]:
        if isinstance(record, BaseModel):
            return record.model_dump(mode="json")
        if isinstance(record, Mapping):
            return dict(record)
        raise TypeError(f"Record must be a mapping or a pydantic model, got {type(record).__name__}")


def _tombstone_matches(
    entries: list[LogEntry],
    matches: RecordTest,
) -> tuple[list[LogEntry], int]:
    """Tag matching live entries as deleted, by position in the log."""
    rewritten: list[LogEntry] = []
    removed = 0
    for entry in entries:
        if entry.is_live and matches(entry.record):
            rewritten.append(entry.tombstoned())
            removed += 1
        else:
            rewritten.append(entry)
    return rewritten, removed
