"""Filter predicate variants.

A filter is a closed tree of the node types below. Field-level operators
(:class:`Eq`, :class:`Gt`, :class:`Lt`, :class:`In`) live under a
:class:`FieldQuery`; :class:`And`, :class:`Or` and :class:`Text` combine or
replace field queries at any depth.

``InvalidOperator`` and ``InvalidPredicate`` stand for input that matched no
recognized shape. They evaluate to ``False``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Union


# --- Field operators -------------------------------------------------------


@dataclass(frozen=True)
class Eq:
    """Strict equality against ``value``."""

    value: Any

    def __str__(self) -> str:
        return f"$eq {self.value!r}"


@dataclass(frozen=True)
class Gt:
    """Numeric greater-than."""

    bound: Any

    def __str__(self) -> str:
        return f"$gt {self.bound!r}"


@dataclass(frozen=True)
class Lt:
    """Numeric less-than."""

    bound: Any

    def __str__(self) -> str:
        return f"$lt {self.bound!r}"


@dataclass(frozen=True)
class In:
    """Membership in a candidate list."""

    candidates: tuple[Any, ...]

    def __str__(self) -> str:
        return f"$in {list(self.candidates)!r}"


@dataclass(frozen=True)
class InvalidOperator:
    """An operator object with no recognized key."""

    raw: Any = None

    def __str__(self) -> str:
        return f"<invalid operator {self.raw!r}>"


Operator = Union[Eq, Gt, Lt, In, InvalidOperator]


# --- Predicate tree --------------------------------------------------------


@dataclass(frozen=True)
class FieldQuery:
    """Field name -> operator; every term must match."""

    terms: Mapping[str, Operator] = field(default_factory=dict)

    def __str__(self) -> str:
        if not self.terms:
            return "{}"
        return " AND ".join(f"{name} {op}" for name, op in self.terms.items())


@dataclass(frozen=True)
class And:
    """All children match. Empty matches everything."""

    children: tuple["Predicate", ...] = ()

    def __str__(self) -> str:
        return f"({' AND '.join(str(c) for c in self.children)})"


@dataclass(frozen=True)
class Or:
    """Any child matches. Empty matches nothing."""

    children: tuple["Predicate", ...] = ()

    def __str__(self) -> str:
        return f"({' OR '.join(str(c) for c in self.children)})"


@dataclass(frozen=True)
class Text:
    """Whole-word, case-insensitive search over the full-text fields."""

    search: str

    def __str__(self) -> str:
        return f"$text {self.search!r}"


@dataclass(frozen=True)
class InvalidPredicate:
    """A filter node with no recognized shape."""

    raw: Any = None

    def __str__(self) -> str:
        return f"<invalid predicate {self.raw!r}>"


Predicate = Union[FieldQuery, And, Or, Text, InvalidPredicate]
