"""
Parser module for envkeeper.

Classifies .env text into typed lines and provides pure helpers to edit and
render those lines.
"""

from .editing import (
    diff_kv,
    filter_kv_lines,
    find_duplicate_keys,
    kv_lines,
    kv_map,
    lines_to_raw,
    mask_value,
    remove_key,
    render_line,
    set_value,
    validate_assignment,
)
from .models import Blank, Comment, EnvLine, Kv, KvChange, Unknown
from .parser import (
    KEY_PATTERN,
    KV_PATTERN,
    WHITESPACE,
    classify_line,
    is_valid_key,
    parse_env_lines,
)

__all__ = [
    # Line model
    "Blank",
    "Comment",
    "EnvLine",
    "Kv",
    "KvChange",
    "Unknown",
    # Parsing
    "KEY_PATTERN",
    "KV_PATTERN",
    "WHITESPACE",
    "classify_line",
    "is_valid_key",
    "parse_env_lines",
    # Editing
    "diff_kv",
    "filter_kv_lines",
    "find_duplicate_keys",
    "kv_lines",
    "kv_map",
    "lines_to_raw",
    "mask_value",
    "remove_key",
    "render_line",
    "set_value",
    "validate_assignment",
]
