"""Document Store port - the API offered to callers.

References:
    - doclog.application.document_store (implementation)
"""

from __future__ import annotations

from abc import abstractmethod
from typing import Any, Mapping, Protocol, TypeVar, Union

from doclog.domain.entities import Predicate
from doclog.domain.value_objects import QueryOptions

RecordT = TypeVar("RecordT", bound=Mapping[str, Any])

FilterInput = Union[Predicate, Mapping[str, Any]]
OptionsInput = Union[QueryOptions, Mapping[str, Any], None]


class DocumentStorePort(Protocol[RecordT]):
    """Protocol for an asynchronous document store.

    Records are JSON objects. Filters are either predicate trees or their
    mapping form, e.g. ``{"$or": [{"age": {"$gt": 30}}, {"$text": "x"}]}``.
    """

    @abstractmethod
    async def find(
        self,
        query: FilterInput,
        options: OptionsInput = None,
    ) -> list[dict[str, Any]]:
        """Return live records matching ``query``, sorted and projected.

        Raises:
            StorageIOError: If the log cannot be read.
            LogParseError: If the log is corrupt.
            InvalidQueryShapeError: If options are malformed, or the filter
                is malformed and strict queries are enabled.
        """
        ...

    @abstractmethod
    async def insert(self, record: RecordT) -> None:
        """Append ``record`` as a live entry.

        Raises:
            StorageIOError: If the log cannot be written.
        """
        ...

    @abstractmethod
    async def delete(self, query: FilterInput) -> int:
        """Tombstone every live record matching ``query``.

        Returns:
            The number of records tombstoned.

        Raises:
            StorageIOError: If the log cannot be read or written.
            LogParseError: If the log is corrupt.
        """
        ...
