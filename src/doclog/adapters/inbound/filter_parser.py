"""Filter parser - mapping filters to predicate trees.

Callers write filters as plain mappings, Mongo style:

    {"age": {"$gt": 30}}
    {"$and": [{"name": {"$eq": "a"}}, {"$text": "foo"}]}
    {"$or": [{"tags": {"$in": ["x", "y"]}}, {}]}

The parser converts them into the closed variant types of
doclog.domain.entities.predicates. Predicate objects passed in directly
are returned unchanged.

Resolution rules:
    - Node shape priority: $and, $or, $text, then a plain field query.
    - Operator priority: $eq, $lt, $gt, $in.
    - A node or operator with several recognized keys takes the first one
      in priority order.
    - Anything else becomes InvalidPredicate / InvalidOperator.

In strict mode, unrecognized and ambiguous shapes raise
InvalidQueryShapeError instead.
"""

from __future__ import annotations

from typing import Any, Mapping

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

COMBINATOR_KEYS = ("$and", "$or", "$text")
OPERATOR_KEYS = ("$eq", "$lt", "$gt", "$in")

_PREDICATE_TYPES = (FieldQuery, And, Or, Text, InvalidPredicate)
_OPERATOR_TYPES = (Eq, Gt, Lt, In, InvalidOperator)


class FilterParser:
    """Parser that converts mapping filters into predicate trees.

    Example:
        parser = FilterParser()
        tree = parser.parse({"age": {"$gt": 1}})
        # FieldQuery(terms={"age": Gt(bound=1)})
    """

    def __init__(self, strict: bool = False) -> None:
        """Initialize the parser.

        Args:
            strict: Raise on unrecognized or ambiguous shapes.
        """
        self.strict = strict

    def parse(self, node: Any) -> Predicate:
        """Parse a filter node.

        Args:
            node: A mapping filter or an existing predicate.

        Returns:
            The predicate tree.

        Raises:
            InvalidQueryShapeError: In strict mode, for malformed input.
        """
        if isinstance(node, _PREDICATE_TYPES):
            return node
        if not isinstance(node, Mapping):
            return self._invalid_predicate(node, "filter must be a mapping")

        present = [key for key in COMBINATOR_KEYS if key in node]
        if present:
            if len(node) > 1:
                self._ambiguous(node, present[0])
            return self._parse_combinator(present[0], node[present[0]], node)

        return self._parse_field_query(node)

    def parse_operator(self, value: Any) -> Operator:
        """Parse a field operator such as ``{"$gt": 3}``."""
        if isinstance(value, _OPERATOR_TYPES):
            return value
        if not isinstance(value, Mapping):
            return self._invalid_operator(value, "operator must be a mapping")

        present = [key for key in OPERATOR_KEYS if key in value]
        if not present:
            return self._invalid_operator(value, "no recognized operator key")
        if len(value) > 1:
            self._ambiguous(value, present[0])

        key = present[0]
        arg = value[key]
        if key == "$eq":
            return Eq(arg)
        if key == "$lt":
            return Lt(arg)
        if key == "$gt":
            return Gt(arg)
        if not isinstance(arg, (list, tuple)):
            return self._invalid_operator(value, "$in expects a list")
        return In(tuple(arg))

    def _parse_combinator(self, key: str, arg: Any, node: Mapping[str, Any]) -> Predicate:
        if key == "$text":
            if not isinstance(arg, str):
                return self._invalid_predicate(node, "$text expects a string")
            return Text(arg)

        if not isinstance(arg, (list, tuple)):
            return self._invalid_predicate(node, f"{key} expects a list")
        children = tuple(self.parse(child) for child in arg)
        if key == "$and":
            return And(children)
        return Or(children)

    def _parse_field_query(self, node: Mapping[str, Any]) -> Predicate:
        terms: dict[str, Operator] = {}
        for name, value in node.items():
            if not isinstance(name, str) or name.startswith("$"):
                return self._invalid_predicate(node, f"unknown filter key {name!r}")
            terms[name] = self.parse_operator(value)
        return FieldQuery(terms)

    def _ambiguous(self, node: Mapping[str, Any], chosen: str) -> None:
        if self.strict:
            raise InvalidQueryShapeError(
                f"Filter node {dict(node)!r} has more than one key; expected only {chosen!r}"
            )

    def _invalid_predicate(self, node: Any, reason: str) -> InvalidPredicate:
        if self.strict:
            raise InvalidQueryShapeError(f"Invalid filter {node!r}: {reason}")
        return InvalidPredicate(node)

    def _invalid_operator(self, value: Any, reason: str) -> InvalidOperator:
        if self.strict:
            raise InvalidQueryShapeError(f"Invalid operator {value!r}: {reason}")
        return InvalidOperator(value)
