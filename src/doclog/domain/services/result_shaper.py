"""Result shaping for ``find``: sort passes and field projection."""

from __future__ import annotations

import json
from typing import Any, Mapping

from doclog.domain.value_objects.query_options import QueryOptions, SortDirection

# Cross-type ordering: missing/null < numbers < strings < objects < arrays < booleans
_NULL, _NUMBER, _STRING, _OBJECT, _ARRAY, _BOOLEAN = range(6)


def sort_key(value: Any) -> tuple[int, Any]:
    """Total-order key for a field value.

    Values of the same kind compare with ``>`` / ``<``. Objects and arrays
    compare by their canonical JSON text.
    """
    if value is None:
        return (_NULL, 0)
    if isinstance(value, bool):
        return (_BOOLEAN, value)
    if isinstance(value, (int, float)):
        return (_NUMBER, value)
    if isinstance(value, str):
        return (_STRING, value)
    if isinstance(value, Mapping):
        return (_OBJECT, json.dumps(value, sort_keys=True, default=str))
    if isinstance(value, (list, tuple)):
        return (_ARRAY, json.dumps(value, sort_keys=True, default=str))
    return (_STRING, str(value))


def sort_records(
    records: list[dict[str, Any]],
    sort: Mapping[str, SortDirection],
) -> list[dict[str, Any]]:
    """Apply one stable sort pass per field, in mapping order.

    Later passes dominate, so the last field listed is the primary key and
    earlier fields only break its ties. Missing and null values sort first
    when ascending and last when descending.
    """
    result = list(records)
    for name, direction in sort.items():
        result.sort(
            key=lambda record: sort_key(record.get(name)),
            reverse=int(direction) < 0,
        )
    return result


def project_records(
    records: list[dict[str, Any]],
    projection: Mapping[str, Any],
) -> list[dict[str, Any]]:
    """Keep only truthy-flagged fields, in projection order.

    Fields missing from a record are left out of its projection.
    """
    selected = [name for name, include in projection.items() if include]
    return [
        {name: record[name] for name in selected if name in record}
        for record in records
    ]


def shape_results(
    records: list[dict[str, Any]],
    options: QueryOptions,
) -> list[dict[str, Any]]:
    """Sort, then project, according to ``options``."""
    if options.sort:
        records = sort_records(records, options.sort)
    if options.projection is not None:
        records = project_records(records, options.projection)
    return records
