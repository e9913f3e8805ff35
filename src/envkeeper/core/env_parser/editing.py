"""
Editing helpers that operate on parsed EnvLine sequences.

All helpers are pure: they return new lists and never mutate their input.
Lines that are not touched keep their raw text, so lines_to_raw reproduces
them byte for byte.
"""

from typing import Iterable, Sequence

from .models import Blank, Comment, EnvLine, Kv, KvChange, Unknown
from .parser import KEY_GRAMMAR, is_valid_key


def render_line(line: EnvLine) -> str:
    """Render a single line back to text."""
    if isinstance(line, Blank):
        return ""
    if isinstance(line, (Comment, Unknown)):
        return line.raw
    if line.raw is not None:
        return line.raw
    prefix = "export " if line.has_export else ""
    return f"{prefix}{line.key}={line.value}"


def lines_to_raw(lines: Iterable[EnvLine]) -> str:
    """Join rendered lines with line feeds."""
    return "\n".join(render_line(line) for line in lines)


def kv_lines(lines: Iterable[EnvLine]) -> list[Kv]:
    """Return only the assignment lines, in order."""
    return [line for line in lines if isinstance(line, Kv)]


def filter_kv_lines(lines: Iterable[EnvLine], query: str) -> list[Kv]:
    """Return assignments whose key contains query, ignoring case."""
    needle = query.lower()
    return [line for line in kv_lines(lines) if needle in line.key.lower()]


def kv_map(lines: Iterable[EnvLine]) -> dict[str, str]:
    """Map keys to values. A key assigned more than once keeps its last value."""
    return {line.key: line.value for line in kv_lines(lines)}


def validate_assignment(key: str, value: str) -> None:
    """
    Check that a key and value render as exactly one assignment line.

    Raises:
        ValueError: If the key is not a valid variable name, or the value
            contains a line break
    """
    if not is_valid_key(key):
        raise ValueError(f"Invalid key {key!r}: must match {KEY_GRAMMAR}")
    if "\n" in value or "\r" in value:
        raise ValueError(f"Value for {key} must not contain line breaks")


def set_value(lines: Sequence[EnvLine], key: str, value: str) -> list[EnvLine]:
    """
    Set a key's value.

    Every existing assignment of the key is updated and loses its raw text so
    it renders from the new value. A new key is inserted right after the last
    assignment in the document, or appended when there is none.

    Raises:
        ValueError: If the key or value fails validate_assignment
    """
    validate_assignment(key, value)
    updated = False
    result: list[EnvLine] = []
    for line in lines:
        if isinstance(line, Kv) and line.key == key:
            result.append(Kv(key=key, value=value, has_export=line.has_export))
            updated = True
        else:
            result.append(line)

    if updated:
        return result

    new_line = Kv(key=key, value=value)
    last_kv = max((i for i, line in enumerate(result) if isinstance(line, Kv)), default=None)
    if last_kv is None:
        result.append(new_line)
    else:
        result.insert(last_kv + 1, new_line)
    return result


def remove_key(lines: Sequence[EnvLine], key: str) -> list[EnvLine]:
    """Drop every assignment of a key."""
    return [line for line in lines if not (isinstance(line, Kv) and line.key == key)]


def find_duplicate_keys(lines: Iterable[EnvLine]) -> list[str]:
    """Return keys assigned more than once, in the order they repeat."""
    seen: set[str] = set()
    duplicates: list[str] = []
    for line in kv_lines(lines):
        if line.key in seen and line.key not in duplicates:
            duplicates.append(line.key)
        seen.add(line.key)
    return duplicates


def diff_kv(before: Iterable[EnvLine], after: Iterable[EnvLine]) -> list[KvChange]:
    """
    Compare two documents key by key.

    Args:
        before: Lines of the original document
        after: Lines of the edited document

    Returns:
        Added, updated and removed keys sorted by key name
    """
    before_map = kv_map(before)
    after_map = kv_map(after)
    changes: list[KvChange] = []

    for key, old in before_map.items():
        if key not in after_map:
            changes.append(KvChange(key=key, change="removed", before=old))
        elif after_map[key] != old:
            changes.append(KvChange(key=key, change="updated", before=old, after=after_map[key]))

    for key, new in after_map.items():
        if key not in before_map:
            changes.append(KvChange(key=key, change="added", after=new))

    return sorted(changes, key=lambda c: c.key)


def mask_value(value: str, visible: int = 2) -> str:
    """Hide a value for display, keeping a short prefix on long values."""
    if not value:
        return ""
    if len(value) <= visible * 2:
        return "*" * len(value)
    return value[:visible] + "*" * (len(value) - visible)
