"""Value objects for the document store domain.

Exports:
    - QueryOptions: Sort and projection for ``find``
    - SortDirection: ASCENDING (1) / DESCENDING (-1)
"""

from doclog.domain.value_objects.query_options import QueryOptions, SortDirection

__all__ = [
    "QueryOptions",
    "SortDirection",
]
