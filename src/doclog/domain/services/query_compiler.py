"""Query compiler - turns filter trees into record matchers.

Compilation happens once per call; the resulting closures are applied to
every record of the log without re-inspecting the tree.

Layers:
    - compile_operator: one field operator -> test on a field value
    - compile_query: FieldQuery -> test on a record (AND across fields)
    - PredicateCompiler: full tree ($and / $or / $text / FieldQuery)

Invalid nodes fail closed (evaluate to False) unless the compiler is
strict, in which case they raise InvalidQueryShapeError.
"""

from __future__ import annotations

import json
import re
from typing import Any, Callable, Iterable, Mapping

from doclog.domain.entities.predicates import (
    And,
    Eq,
    FieldQuery,
    Gt,
    In,
    InvalidOperator,
    InvalidPredicate,
    Lt,
    Operator,
    Or,
    Predicate,
    Text,
)
from doclog.domain.exceptions import InvalidQueryShapeError

Record = Mapping[str, Any]
ValueTest = Callable[[Any], bool]
RecordTest = Callable[[Record], bool]
InvalidNodeHook = Callable[[Any], None]


def is_number(value: Any) -> bool:
    """True for ints and floats. Booleans are not numbers here."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def strict_equals(left: Any, right: Any) -> bool:
    """Equality that never equates a boolean with a number."""
    if isinstance(left, bool) != isinstance(right, bool):
        return False
    return left == right


def _never(_: Any) -> bool:
    return False


def compile_operator(
    op: Operator,
    strict: bool = False,
    on_invalid: InvalidNodeHook | None = None,
) -> ValueTest:
    """Compile a field operator into a test on a single field value."""
    if isinstance(op, Eq):
        expected = op.value
        return lambda value: strict_equals(value, expected)

    if isinstance(op, Lt):
        bound = op.bound
        if not is_number(bound):
            return _never
        return lambda value: is_number(value) and value < bound

    if isinstance(op, Gt):
        bound = op.bound
        if not is_number(bound):
            return _never
        return lambda value: is_number(value) and value > bound

    if isinstance(op, In):
        candidates = op.candidates
        return lambda value: any(strict_equals(value, c) for c in candidates)

    return _invalid(op, strict, on_invalid)


def compile_query(
    query: FieldQuery,
    strict: bool = False,
    on_invalid: InvalidNodeHook | None = None,
) -> RecordTest:
    """Compile a field query. An empty query matches every record."""
    tests = [
        (name, compile_operator(op, strict, on_invalid))
        for name, op in query.terms.items()
    ]

    def matches(record: Record) -> bool:
        return all(test(record.get(name)) for name, test in tests)

    return matches


class PredicateCompiler:
    """Compiles predicate trees against a fixed set of full-text fields.

    Attributes:
        full_text_fields: Fields scanned by ``$text`` search.
        strict: Raise on invalid nodes instead of failing closed.
    """

    def __init__(
        self,
        full_text_fields: Iterable[str] = (),
        strict: bool = False,
        on_invalid: InvalidNodeHook | None = None,
    ) -> None:
        self.full_text_fields = tuple(full_text_fields)
        self.strict = strict
        self._on_invalid = on_invalid

    def compile(self, predicate: Predicate) -> RecordTest:
        """Compile a predicate tree into a record test."""
        if isinstance(predicate, And):
            children = [self.compile(child) for child in predicate.children]
            return lambda record: all(test(record) for test in children)

        if isinstance(predicate, Or):
            children = [self.compile(child) for child in predicate.children]
            return lambda record: any(test(record) for test in children)

        if isinstance(predicate, Text):
            return self._compile_text(predicate)

        if isinstance(predicate, FieldQuery):
            return compile_query(predicate, self.strict, self._on_invalid)

        return _invalid(predicate, self.strict, self._on_invalid)

    def _compile_text(self, predicate: Text) -> RecordTest:
        # The search string is a pattern fragment; callers escape untrusted input.
        try:
            pattern = re.compile(rf"\b{predicate.search}\b", re.IGNORECASE)
        except re.error as e:
            raise InvalidQueryShapeError(
                f"$text search {predicate.search!r} is not a valid pattern: {e}"
            ) from e

        fields = self.full_text_fields

        def matches(record: Record) -> bool:
            for name in fields:
                text = _as_text(record.get(name))
                if text is not None and pattern.search(text):
                    return True
            return False

        return matches


def _as_text(value: Any) -> str | None:
    """String form of a full-text field; non-strings read as their JSON text."""
    if value is None:
        return None
    if isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False)


def _invalid(
    node: InvalidOperator | InvalidPredicate | Any,
    strict: bool,
    on_invalid: InvalidNodeHook | None,
) -> Callable[[Any], bool]:
    if strict:
        raise InvalidQueryShapeError(f"Unrecognized filter node: {node}")
    if on_invalid is not None:
        on_invalid(node)
    return _never
