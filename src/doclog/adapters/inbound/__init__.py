"""Inbound adapters for the document store.

Inbound adapters convert caller input into domain objects.

Exports:
    - FilterParser: Converts mapping filters into predicate trees
"""

from doclog.adapters.inbound.filter_parser import FilterParser

__all__ = [
    "FilterParser",
]
