"""Ports layer - interface definitions following Hexagonal Architecture.

Ports are abstract interfaces (protocols) that define contracts:
- Inbound ports: APIs offered to clients (DocumentStorePort)
- Outbound ports: Dependencies on external systems (LogStorage)

Adapters implement these ports with concrete functionality.
"""

from doclog.ports.inbound import DocumentStorePort, FilterInput, OptionsInput
from doclog.ports.outbound import LogStorage, SyncMode

__all__ = [
    # Inbound ports
    "DocumentStorePort",
    "FilterInput",
    "OptionsInput",
    # Outbound ports
    "LogStorage",
    "SyncMode",
]
