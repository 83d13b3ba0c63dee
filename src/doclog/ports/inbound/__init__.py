"""Inbound ports - APIs offered to clients."""

from doclog.ports.inbound.document_store import (
    DocumentStorePort,
    FilterInput,
    OptionsInput,
    RecordT,
)

__all__ = [
    "DocumentStorePort",
    "FilterInput",
    "OptionsInput",
    "RecordT",
]
