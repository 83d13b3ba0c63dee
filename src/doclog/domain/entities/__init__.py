"""Domain entities for the document store.

Exports:
    Log entries:
        - EntryTag: ``E`` (live) / ``D`` (tombstone) line tag
        - LogEntry: One tagged record of the log
        - serialize_record: Compact JSON payload for a record

    Predicates:
        - Eq, Gt, Lt, In, InvalidOperator: Field-level operators
        - FieldQuery, And, Or, Text, InvalidPredicate: Filter tree nodes
"""

from doclog.domain.entities.log_entry import EntryTag, LogEntry, serialize_record
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

__all__ = [
    # Log entries
    "EntryTag",
    "LogEntry",
    "serialize_record",
    # Operators
    "Operator",
    "Eq",
    "Gt",
    "Lt",
    "In",
    "InvalidOperator",
    # Predicates
    "Predicate",
    "FieldQuery",
    "And",
    "Or",
    "Text",
    "InvalidPredicate",
]
