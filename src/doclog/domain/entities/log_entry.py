"""Log entries - the on-disk unit of the document log.

Line format:
    <tag><json payload>\\n

    - tag ``E``: live entry
    - tag ``D``: tombstone (logically deleted, physically present)

Entries keep the raw payload text next to the decoded record so that a
rewrite only ever touches the tag character of a line.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any


class EntryTag(str, Enum):
    """One-character tag at the start of every log line."""

    ENTRY = "E"
    DELETED = "D"

    @classmethod
    def from_line(cls, line: str) -> "EntryTag":
        """Classify a line; anything not starting with ``E`` is a tombstone."""
        return cls.ENTRY if line.startswith(cls.ENTRY.value) else cls.DELETED


def serialize_record(record: dict[str, Any]) -> str:
    """Serialize a record to its compact JSON payload."""
    return json.dumps(record, separators=(",", ":"), ensure_ascii=False)


@dataclass(frozen=True)
class LogEntry:
    """A single tagged record of the log."""

    tag: EntryTag
    payload: str
    record: dict[str, Any]

    @classmethod
    def live(cls, record: dict[str, Any]) -> "LogEntry":
        return cls(tag=EntryTag.ENTRY, payload=serialize_record(record), record=record)

    @property
    def is_live(self) -> bool:
        return self.tag is EntryTag.ENTRY

    def tombstoned(self) -> "LogEntry":
        """Return a copy of this entry tagged as deleted."""
        return replace(self, tag=EntryTag.DELETED)

    def to_line(self) -> str:
        return f"{self.tag.value}{self.payload}\n"
