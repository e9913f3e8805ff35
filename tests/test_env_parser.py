"""
Unit tests for the .env line classifier.

Covers each line kind, Windows line endings, and values taken verbatim.
"""

from envkeeper.core.env_parser import (
    Blank,
    Comment,
    Kv,
    Unknown,
    classify_line,
    is_valid_key,
    parse_env_lines,
)


class TestDocumentClassification:
    """Classification of whole documents."""

    def test_mixed_document(self):
        """Header comment, blank, assignments and garbage keep physical order."""
        text = "# header\n\nAPI_KEY=abc123\nexport DEBUG=true\ngarbage line\n"

        lines = parse_env_lines(text)

        assert lines == [
            Comment(raw="# header"),
            Blank(),
            Kv(key="API_KEY", value="abc123", has_export=False, raw="API_KEY=abc123"),
            Kv(key="DEBUG", value="true", has_export=True, raw="export DEBUG=true"),
            Unknown(raw="garbage line"),
            Blank(),
        ]

    def test_trailing_newline_produces_trailing_blank(self):
        assert parse_env_lines("A=1\n")[-1] == Blank()
        assert parse_env_lines("A=1") == [Kv(key="A", value="1", raw="A=1")]

    def test_empty_text_is_one_blank_line(self):
        assert parse_env_lines("") == [Blank()]

    def test_windows_line_endings(self):
        """Carriage returns are stripped from stored raw text."""
        lines = parse_env_lines("# c\r\nKEY=v\r\n\r\nbad\r\n")

        assert lines == [
            Comment(raw="# c"),
            Kv(key="KEY", value="v", raw="KEY=v"),
            Blank(),
            Unknown(raw="bad"),
            Blank(),
        ]


class TestLineClassification:
    """Classification of single lines."""

    def test_whitespace_only_is_blank(self):
        assert classify_line("   \t ") == Blank()
        assert classify_line("\r") == Blank()

    def test_unicode_whitespace_is_trimmed(self):
        """No-break and ideographic spaces count as whitespace."""
        assert classify_line("\xa0\u3000\t") == Blank()
        assert classify_line("\u2003# note") == Comment(raw="\u2003# note")

    def test_information_separators_are_not_whitespace(self):
        """Control characters 0x1c-0x1f are kept, not trimmed away."""
        for raw in ["\x1c", "\x1f\x1e", "\x1d# note", "\x1cKEY=v", "KEY\x1f=v"]:
            assert classify_line(raw) == Unknown(raw=raw), repr(raw)

    def test_separator_after_equals_stays_in_value(self):
        line = classify_line("KEY=\x1cv")

        assert line == Kv(key="KEY", value="\x1cv", raw="KEY=\x1cv")

    def test_semicolon_comment(self):
        assert classify_line("; legacy") == Comment(raw="; legacy")

    def test_comment_keeps_leading_whitespace(self):
        assert classify_line("   # indented  ") == Comment(raw="   # indented  ")

    def test_value_is_verbatim(self):
        """Quotes, inline comments and escapes are not processed."""
        line = classify_line('URL="http://x?a=1" # note \\n')

        assert isinstance(line, Kv)
        assert line.key == "URL"
        assert line.value == '"http://x?a=1" # note \\n'

    def test_whitespace_around_equals(self):
        line = classify_line("  KEY  =   spaced value  ")

        assert line == Kv(
            key="KEY", value="spaced value  ", raw="  KEY  =   spaced value  "
        )

    def test_empty_value(self):
        assert classify_line("EMPTY=") == Kv(key="EMPTY", value="", raw="EMPTY=")

    def test_export_requires_whitespace(self):
        """'export=1' assigns a key named export."""
        line = classify_line("export=1")

        assert line == Kv(key="export", value="1", has_export=False, raw="export=1")

    def test_export_with_tab(self):
        line = classify_line("export\tTOKEN=x")

        assert isinstance(line, Kv)
        assert line.has_export
        assert line.key == "TOKEN"

    def test_invalid_keys_are_unknown(self):
        for raw in ["1KEY=value", "KEY-NAME=value", "=value", "KEY value", "export KEY"]:
            assert classify_line(raw) == Unknown(raw=raw), raw

    def test_unknown_keeps_raw_text(self):
        assert classify_line("  what is this  ") == Unknown(raw="  what is this  ")

    def test_to_dict_uses_wire_names(self):
        line = classify_line("export A=b")

        assert line.to_dict() == {
            "kind": "kv",
            "key": "A",
            "value": "b",
            "hasExport": True,
            "raw": "export A=b",
        }
        assert Blank().to_dict() == {"kind": "blank"}


class TestKeyNames:
    def test_valid_keys(self):
        for key in ["A", "_PRIVATE", "db_host", "KEY_2"]:
            assert is_valid_key(key), key

    def test_invalid_keys(self):
        for key in ["", "1BAD", "BAD KEY", "A-B", "A=B", "A\n", "export A"]:
            assert not is_valid_key(key), repr(key)
