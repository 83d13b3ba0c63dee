"""
doclog - Embedded JSON document store

Records are JSON objects kept in an append-only, line-oriented log file.
Queries use a small Mongo-style operator language ($eq, $gt, $lt, $in,
$and, $or, $text) and deletes are logical: the entry's tag flips from
``E`` to ``D`` and the line stays in the file.
"""

__version__ = "0.1.0"

from doclog.application import DocumentStore, StoreStats
from doclog.domain.exceptions import (
    DocLogError,
    InvalidQueryShapeError,
    InvalidStoreConfigError,
    LogParseError,
    StorageIOError,
)
from doclog.domain.value_objects import QueryOptions

__all__ = [
    "DocumentStore",
    "StoreStats",
    "QueryOptions",
    "DocLogError",
    "StorageIOError",
    "LogParseError",
    "InvalidQueryShapeError",
    "InvalidStoreConfigError",
]
