"""Unit tests for the block parser."""

# Standard Library
import logging

import pytest

from sqlset.errors import InvalidSyntaxError, LineTooLongError
from sqlset.meta import CollectionMeta
from sqlset.parser import MAX_LINE_LENGTH, parse

pytestmark = pytest.mark.unit

USERS_SQL = """\
--META
{"name": "User Queries"}
--end

--SQL:GetUserByID
SELECT 1;
--end
"""


# --- Valid Sources ---


class TestParseValid:
    """Tests for parsing well-formed sources."""

    def test_metadata_and_statement(self):
        """Decode metadata and register the statement body."""

        collection = parse("users.sql", USERS_SQL)
        assert collection.meta == CollectionMeta(
            id="users", name="User Queries", description=""
        )
        assert collection.get("GetUserByID") == "SELECT 1;"

    def test_default_meta_from_file_name(self):
        """Derive id and name from the file name without a metadata block."""

        collection = parse("Reports.SQL", "--SQL:q\nSELECT 1;\n--end\n")
        assert collection.meta.id == "reports"
        assert collection.meta.name == "reports"

    def test_multiline_body(self):
        """Join body lines with newlines and trim the final one only."""

        content = "--SQL:q\nSELECT id,\n  name\nFROM users;\n--end"
        assert parse("a.sql", content).get("q") == "SELECT id,\nname\nFROM users;"

    def test_body_excludes_delimiters(self):
        """Keep opener and closer lines out of the body."""

        body = parse("a.sql", "--SQL:q\nSELECT 1;\n--end").get("q")
        assert "--" not in body

    def test_blank_lines_and_comments_skipped(self):
        """Skip blank lines and plain comments inside a block."""

        content = "--SQL:q\nSELECT 1\n\n-- filter below\n   \nWHERE x = 1;\n--end"
        assert parse("a.sql", content).get("q") == "SELECT 1\nWHERE x = 1;"

    def test_content_outside_blocks_ignored(self):
        """Discard content lines when no block is open."""

        content = "SELECT 'stray';\n--SQL:q\nSELECT 1;\n--end\nSELECT 'after';"
        collection = parse("a.sql", content)
        assert collection.statement_ids() == ["q"]
        assert collection.get("q") == "SELECT 1;"

    def test_crlf_line_endings(self):
        """Accept CRLF files and produce the same text as LF files."""

        lf = "--SQL:q\nSELECT 1,\n2;\n--end\n"
        crlf = lf.replace("\n", "\r\n")
        assert parse("a.sql", crlf).get("q") == parse("a.sql", lf).get("q")

    def test_empty_statement(self):
        """Register an empty string for a block with no body."""

        assert parse("a.sql", "--SQL:q\n--end").get("q") == ""

    def test_empty_source(self):
        """Produce an empty collection from empty content."""

        collection = parse("empty.sql", "")
        assert len(collection) == 0
        assert collection.meta.id == "empty"

    def test_redefined_statement_last_wins(self, caplog):
        """Keep the later body and warn when an id is reused."""

        content = "--SQL:q\nSELECT 1;\n--end\n--SQL:q\nSELECT 2;\n--end"
        with caplog.at_level(logging.WARNING, logger="sqlset.parser"):
            collection = parse("a.sql", content)
        assert collection.get("q") == "SELECT 2;"
        assert "redefined" in caplog.text

    def test_deterministic(self):
        """Return equal results for identical input."""

        first = parse("users.sql", USERS_SQL)
        second = parse("users.sql", USERS_SQL)
        assert first.meta == second.meta
        assert dict(first.statements) == dict(second.statements)

    def test_line_at_max_length_accepted(self):
        """Accept a line of exactly the maximum length."""

        line = "x" * MAX_LINE_LENGTH
        assert parse("a.sql", f"--SQL:q\n{line}\n--end").get("q") == line


# --- Invalid Sources ---


class TestParseInvalid:
    """Tests for parse failures."""

    @pytest.mark.parametrize(
        "content",
        [
            "--SQL:a\n--SQL:b\n--end",
            "--SQL:a\n--META\n--end",
            "--META\n--SQL:a\n--end",
            "--META\n--META\n--end",
        ],
    )
    def test_open_inside_open_block(self, content):
        """Reject any opener while a block is already open."""

        with pytest.raises(InvalidSyntaxError, match="Unexpected") as exc_info:
            parse("a.sql", content)
        assert exc_info.value.line == 2

    def test_message_names_open_block(self):
        """Name the open block in the error message."""

        with pytest.raises(InvalidSyntaxError, match="SQL:a is open"):
            parse("a.sql", "--SQL:a\n--META\n--end")

    def test_second_metadata_block(self):
        """Reject a second metadata block after the first closed."""

        content = '--META\n{"name": "a"}\n--end\n--META\n{}\n--end'
        with pytest.raises(InvalidSyntaxError, match="multiple metadata") as exc_info:
            parse("a.sql", content)
        assert exc_info.value.line == 4

    def test_close_without_open(self):
        """Reject a close directive with nothing open."""

        with pytest.raises(InvalidSyntaxError, match="no open block"):
            parse("a.sql", "SELECT 1;\n--end")

    @pytest.mark.parametrize(
        "content, expected",
        [
            ("--SQL:orphan\nSELECT 1;", "SQL:orphan"),
            ("--META\n{}", "META"),
        ],
    )
    def test_unterminated_block(self, content, expected):
        """Reject end of input while a block is open."""

        with pytest.raises(InvalidSyntaxError, match="No closing tag") as exc_info:
            parse("a.sql", content)
        assert expected in str(exc_info.value)
        assert exc_info.value.line == 1

    def test_missing_statement_identifier(self):
        """Report the line of an opener without identifier."""

        with pytest.raises(InvalidSyntaxError) as exc_info:
            parse("a.sql", "-- header\n--SQL: \nSELECT 1;\n--end")
        assert exc_info.value.line == 2
        assert str(exc_info.value).startswith("a.sql:2:")

    def test_bad_metadata_carries_source(self):
        """Wrap metadata decoding errors with the source name."""

        with pytest.raises(InvalidSyntaxError, match="Invalid metadata") as exc_info:
            parse("users.sql", "--META\nnot json\n--end")
        assert exc_info.value.source == "users.sql"
        assert exc_info.value.line is None

    def test_line_too_long(self):
        """Fail with LineTooLongError on an over-long line."""

        content = "--SQL:q\n" + "x" * (MAX_LINE_LENGTH + 1) + "\n--end"
        with pytest.raises(LineTooLongError) as exc_info:
            parse("a.sql", content)
        assert exc_info.value.line == 2

    def test_line_too_long_outside_block(self):
        """Check line length even where the line would be ignored."""

        with pytest.raises(LineTooLongError):
            parse("a.sql", "-- " + "x" * MAX_LINE_LENGTH)

    def test_line_length_counts_bytes(self):
        """Measure line length in UTF-8 bytes, not characters."""

        line = "é" * (MAX_LINE_LENGTH // 2 + 1)
        with pytest.raises(LineTooLongError):
            parse("a.sql", f"--SQL:q\n{line}\n--end")

    def test_line_too_long_is_not_syntax_error(self):
        """Keep the corruption guard distinct from syntax errors."""

        assert not issubclass(LineTooLongError, InvalidSyntaxError)
