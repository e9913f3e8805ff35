"""
Typed line records for .env documents.

EnvLine is a closed union of four frozen dataclasses. Code that consumes
lines dispatches with isinstance over exactly these cases.
"""

from dataclasses import dataclass
from typing import Literal, Optional, Union


@dataclass(frozen=True)
class Blank:
    """A line that is empty after trimming whitespace."""

    kind: Literal["blank"] = "blank"

    def to_dict(self) -> dict:
        return {"kind": self.kind}


@dataclass(frozen=True)
class Comment:
    """
    A line starting with ``#`` or ``;`` after trimming.

    Attributes:
        raw: Line text with the trailing carriage return stripped. Leading
            whitespace and the marker are preserved.
    """

    raw: str
    kind: Literal["comment"] = "comment"

    def to_dict(self) -> dict:
        return {"kind": self.kind, "raw": self.raw}


@dataclass(frozen=True)
class Kv:
    """
    A ``KEY=value`` assignment, optionally prefixed with ``export``.

    Attributes:
        key: Variable name ([A-Za-z_][A-Za-z0-9_]*)
        value: Everything after ``=`` and following whitespace, verbatim
            (quotes and escapes are not processed)
        has_export: True if the line started with ``export``
        raw: Original line text, or None for lines built by an edit. Lines
            with a raw value render back exactly as read.
    """

    key: str
    value: str
    has_export: bool = False
    raw: Optional[str] = None
    kind: Literal["kv"] = "kv"

    def to_dict(self) -> dict:
        data = {
            "kind": self.kind,
            "key": self.key,
            "value": self.value,
            "hasExport": self.has_export,
        }
        if self.raw is not None:
            data["raw"] = self.raw
        return data


@dataclass(frozen=True)
class Unknown:
    """A line matching none of the other rules, kept verbatim."""

    raw: str
    kind: Literal["unknown"] = "unknown"

    def to_dict(self) -> dict:
        return {"kind": self.kind, "raw": self.raw}


EnvLine = Union[Blank, Comment, Kv, Unknown]


@dataclass(frozen=True)
class KvChange:
    """
    One key-level difference between two versions of a document.

    Attributes:
        key: Variable name
        change: 'added', 'updated' or 'removed'
        before: Previous value (None when added)
        after: New value (None when removed)
    """

    key: str
    change: Literal["added", "updated", "removed"]
    before: Optional[str] = None
    after: Optional[str] = None

    def to_dict(self) -> dict:
        data: dict = {"key": self.key, "change": self.change}
        if self.before is not None:
            data["before"] = self.before
        if self.after is not None:
            data["after"] = self.after
        return data
