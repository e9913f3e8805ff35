"""
Line classifier for .env file content.

parse_env_lines is total: every physical line maps to exactly one EnvLine
and no input raises.
"""

import re

from .models import Blank, Comment, EnvLine, Kv, Unknown

COMMENT_MARKERS = ("#", ";")

# Unicode White_Space only; str.isspace() also accepts \x1c-\x1f
WHITESPACE = "\t\n\x0b\x0c\r \x85\xa0" + "".join(
    chr(code)
    for code in (0x1680, *range(0x2000, 0x200B), 0x2028, 0x2029, 0x202F, 0x205F, 0x3000)
)
_WS = f"[{WHITESPACE}]"

KEY_GRAMMAR = r"[A-Za-z_][A-Za-z0-9_]*"

# Compiled at import so a bad literal fails immediately
KEY_PATTERN = re.compile(KEY_GRAMMAR)
KV_PATTERN = re.compile(rf"^{_WS}*(export{_WS}+)?({KEY_GRAMMAR}){_WS}*={_WS}*(.*)$")


def is_valid_key(key: str) -> bool:
    """Check if a name can be written as the key of an assignment."""
    return KEY_PATTERN.fullmatch(key) is not None


def classify_line(line: str) -> EnvLine:
    """
    Classify one physical line (without its line feed).

    Args:
        line: Raw line text, possibly ending in a carriage return

    Returns:
        The EnvLine record for the line
    """
    trimmed = line.strip(WHITESPACE)
    line = line.rstrip("\r")

    if not trimmed:
        return Blank()

    if trimmed.startswith(COMMENT_MARKERS):
        return Comment(raw=line)

    match = KV_PATTERN.match(line)
    if match:
        return Kv(
            key=match.group(2),
            value=match.group(3),
            has_export=match.group(1) is not None,
            raw=line,
        )

    return Unknown(raw=line)


def parse_env_lines(text: str) -> list[EnvLine]:
    """
    Split text on line feeds and classify each line.

    The result has one entry per physical line, so text ending in a newline
    produces a trailing Blank. Windows line endings are tolerated.
    """
    return [classify_line(line) for line in text.split("\n")]
