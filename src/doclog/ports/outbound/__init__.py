"""Outbound ports - interfaces for external dependencies.

Outbound ports define contracts for the systems the document store
depends on, such as the log file.
"""

from doclog.ports.outbound.log_storage import LogStorage, SyncMode

__all__ = [
    "LogStorage",
    "SyncMode",
]
