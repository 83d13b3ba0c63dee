"""Outbound adapters - concrete implementations of outbound ports."""

from doclog.adapters.outbound.file_log_storage import FileLogStorage

__all__ = [
    "FileLogStorage",
]
