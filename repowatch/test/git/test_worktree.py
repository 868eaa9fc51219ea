"""Tests for git/worktree.py."""

from __future__ import annotations

import pytest

from repowatch.core.result import Err, Ok
from repowatch.git.errors import MalformedStatusLine
from repowatch.git.worktree import (
    FileStatusCode,
    parse_status_line,
    parse_status_output,
    unquote_path,
)


class TestParseStatusLine:
    """Tests for single porcelain lines."""

    @pytest.mark.parametrize(
        ("line", "code", "path"),
        [
            (" M src/x.go", FileStatusCode.MODIFIED, "src/x.go"),
            ("M  staged.py", FileStatusCode.MODIFIED, "staged.py"),
            ("MM both.py", FileStatusCode.MODIFIED, "both.py"),
            ("D  old.txt", FileStatusCode.DELETED, "old.txt"),
            (" D gone.txt", FileStatusCode.DELETED, "gone.txt"),
            ("?? new.txt", FileStatusCode.UNTRACKED, "new.txt"),
        ],
    )
    def test_valid_lines(self, line: str, code: FileStatusCode, path: str) -> None:
        assert parse_status_line(line) == Ok((code, path))

    def test_quoted_path_is_unquoted(self) -> None:
        assert parse_status_line('?? "a b.txt"') == Ok((FileStatusCode.UNTRACKED, "a b.txt"))

    def test_escapes_inside_quotes_are_kept(self) -> None:
        result = parse_status_line(' M "tab\\there.txt"')
        assert result == Ok((FileStatusCode.MODIFIED, "tab\\there.txt"))

    def test_both_unchanged_is_rejected(self) -> None:
        result = parse_status_line("   both-spaces")
        assert isinstance(result, Err)
        assert result.error == MalformedStatusLine("   both-spaces", "no status code")

    def test_two_different_codes_are_rejected(self) -> None:
        result = parse_status_line("MD file.txt")
        assert isinstance(result, Err)
        assert result.error.reason == "ambiguous status"
        assert result.error.line == "MD file.txt"

    def test_unknown_code_is_rejected(self) -> None:
        result = parse_status_line("A  added.py")
        assert isinstance(result, Err)
        assert "unknown file status" in result.error.reason
        assert result.error.line == "A  added.py"

    def test_rename_is_rejected(self) -> None:
        result = parse_status_line("R  old.py -> new.py")
        assert isinstance(result, Err)

    def test_truncated_line_is_rejected(self) -> None:
        result = parse_status_line("??")
        assert isinstance(result, Err)
        assert result.error.reason == "truncated status line"


class TestUnquotePath:
    def test_plain(self) -> None:
        assert unquote_path("a.txt") == "a.txt"

    def test_quoted(self) -> None:
        assert unquote_path('"a b.txt"') == "a b.txt"

    def test_single_quote_char_untouched(self) -> None:
        assert unquote_path('"') == '"'


class TestParseStatusOutput:
    def test_buckets(self) -> None:
        output = " M a.py\nD  b.py\n?? c.py\n?? d.py\n\n"
        result = parse_status_output(output)

        assert isinstance(result, Ok)
        buckets = result.value
        assert buckets[FileStatusCode.MODIFIED] == frozenset({"a.py"})
        assert buckets[FileStatusCode.DELETED] == frozenset({"b.py"})
        assert buckets[FileStatusCode.UNTRACKED] == frozenset({"c.py", "d.py"})

    def test_empty_output(self) -> None:
        result = parse_status_output("")
        assert isinstance(result, Ok)
        assert all(not paths for paths in result.value.values())

    def test_first_malformed_line_aborts(self) -> None:
        result = parse_status_output(" M a.py\nXY b.py\n?? c.py\n")
        assert isinstance(result, Err)
        assert result.error.line == "XY b.py"
