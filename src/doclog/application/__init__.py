"""Application layer for the document store.

The application layer orchestrates domain logic to fulfill use cases:
find, insert and delete against one log file.

Exports:
    - DocumentStore: Main entry point for the store
    - StoreStats: Live / tombstoned entry counts
"""

from doclog.application.document_store import DocumentStore, StoreStats

__all__ = [
    "DocumentStore",
    "StoreStats",
]
