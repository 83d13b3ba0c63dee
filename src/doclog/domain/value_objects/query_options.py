"""Options controlling the shape of ``find`` results."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Mapping

from doclog.domain.exceptions import InvalidQueryShapeError


class SortDirection(IntEnum):
    """Sort direction, as written in a ``sort`` mapping."""

    ASCENDING = 1
    DESCENDING = -1


@dataclass(frozen=True)
class QueryOptions:
    """Optional sort and projection for a ``find`` call.

    Attributes:
        sort: Field name -> direction. Applied as one stable pass per field
            in mapping order, so the last field listed is the primary key.
        projection: Field name -> inclusion flag. Truthy flags select fields.
    """

    sort: Mapping[str, SortDirection] | None = None
    projection: Mapping[str, Any] | None = None

    def __post_init__(self) -> None:
        if self.sort is not None:
            object.__setattr__(
                self,
                "sort",
                {name: _direction(name, value) for name, value in self.sort.items()},
            )

    @classmethod
    def coerce(cls, options: "QueryOptions | Mapping[str, Any] | None") -> "QueryOptions":
        """Build options from ``None``, a ``QueryOptions`` or a plain mapping."""
        if options is None:
            return cls()
        if isinstance(options, QueryOptions):
            return options
        if not isinstance(options, Mapping):
            raise InvalidQueryShapeError(f"Query options must be a mapping, got {options!r}")
        unknown = set(options) - {"sort", "projection"}
        if unknown:
            raise InvalidQueryShapeError(f"Unknown query options: {sorted(unknown)}")
        return cls(sort=options.get("sort"), projection=options.get("projection"))


def _direction(name: str, value: Any) -> SortDirection:
    if isinstance(value, bool):
        raise InvalidQueryShapeError(f"Sort direction for '{name}' must be 1 or -1, got {value!r}")
    try:
        return SortDirection(value)
    except ValueError as e:
        raise InvalidQueryShapeError(
            f"Sort direction for '{name}' must be 1 or -1, got {value!r}"
        ) from e
