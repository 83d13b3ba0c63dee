"""Adapters layer - concrete implementations of port interfaces.

Adapters provide the actual implementations:
- Inbound adapters: Convert caller input (mapping filters) to domain objects
- Outbound adapters: Implement external dependencies (the log file)
"""

from doclog.adapters.inbound import FilterParser
from doclog.adapters.outbound import FileLogStorage

__all__ = [
    # Inbound adapters
    "FilterParser",
    # Outbound adapters
    "FileLogStorage",
]
