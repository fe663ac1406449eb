"""Tests for the line rules."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from yamlscope.rules import new_lines

Check = Callable[[str, str], list[tuple[int, int]]]


class TestTrailingSpaces:
    CONF = "rules:\n  trailing-spaces: enable\n"

    def test_clean(self, check: Check) -> None:
        assert check("a: 1\nb: 2\n", self.CONF) == []

    def test_spaces_and_tabs(self, check: Check) -> None:
        assert check("a: 1 \nb: 2\t\n", self.CONF) == [(1, 5), (2, 5)]

    def test_whitespace_only_line(self, check: Check) -> None:
        assert check("a: 1\n   \nb: 2\n", self.CONF) == [(2, 1)]

    def test_crlf_is_not_trailing(self, check: Check) -> None:
        assert check("a: 1\r\nb: 2\r\n", self.CONF) == []


class TestNewLineAtEndOfFile:
    CONF = "rules:\n  new-line-at-end-of-file: enable\n"

    def test_present(self, check: Check) -> None:
        assert check("a: 1\n", self.CONF) == []

    def test_missing(self, check: Check) -> None:
        assert check("a: 1\nb: 22", self.CONF) == [(2, 6)]

    def test_empty_file(self, check: Check) -> None:
        assert check("", self.CONF) == []


class TestNewLines:
    def test_unix(self, check: Check) -> None:
        conf = "rules:\n  new-lines: {type: unix}\n"
        assert check("a: 1\nb: 2\n", conf) == []
        assert check("a: 1\r\nb: 2\n", conf) == [(1, 5)]

    def test_dos(self, check: Check) -> None:
        conf = "rules:\n  new-lines: {type: dos}\n"
        assert check("a: 1\r\nb: 2\r\n", conf) == []
        assert check("a: 1\nb: 2\r\n", conf) == [(1, 5)]

    def test_platform(self, check: Check, monkeypatch: pytest.MonkeyPatch) -> None:
        conf = "rules:\n  new-lines: {type: platform}\n"
        monkeypatch.setattr(new_lines.os, "linesep", "\r\n")
        assert check("a: 1\n", conf) == [(1, 5)]
        monkeypatch.setattr(new_lines.os, "linesep", "\n")
        assert check("a: 1\n", conf) == []


class TestEmptyLines:
    CONF = "rules:\n  empty-lines: enable\n"

    def test_within_limit(self, check: Check) -> None:
        assert check("a: 1\n\n\nb: 2\n", self.CONF) == []

    def test_too_many_in_the_middle(self, check: Check) -> None:
        assert check("a: 1\n\n\n\nb: 2\n", self.CONF) == [(4, 1)]

    def test_at_start(self, check: Check) -> None:
        assert check("\na: 1\n", self.CONF) == [(1, 1)]

    def test_at_end(self, check: Check) -> None:
        assert check("a: 1\n\n", self.CONF) == [(2, 1)]

    def test_single_line_break_file(self, check: Check) -> None:
        assert check("\n", self.CONF) == []

    def test_custom_limits(self, check: Check) -> None:
        conf = "rules:\n  empty-lines: {max: 0, max-start: 1, max-end: 1}\n"
        assert check("\na: 1\n\nb: 2\n\n", conf) == [(3, 1)]

    def test_crlf(self, check: Check) -> None:
        assert check("a: 1\r\n\r\n\r\n\r\nb: 2\r\n", self.CONF) == [(4, 1)]


class TestLineLength:
    CONF = "rules:\n  line-length: {max: 10}\n"

    def test_short_lines(self, check: Check) -> None:
        assert check("a: 1\nbb: 22\n", self.CONF) == []

    def test_long_line(self, check: Check) -> None:
        assert check("key: a b c d e f\n", self.CONF) == [(1, 11)]

    def test_non_breakable_word(self, check: Check) -> None:
        assert check("- " + "x" * 20 + "\n", self.CONF) == []
        assert check("# " + "x" * 20 + "\n", self.CONF) == []
        assert check("x" * 20 + "\n", self.CONF) == []

    def test_non_breakable_words_disallowed(self, check: Check) -> None:
        conf = "rules:\n  line-length: {max: 10, allow-non-breakable-words: false}\n"
        assert check("x" * 20 + "\n", conf) == [(1, 11)]

    def test_inline_mapping(self, check: Check) -> None:
        source = "key: " + "x" * 20 + "\n"
        assert check(source, self.CONF) == [(1, 11)]
        conf = "rules:\n  line-length: {max: 10, allow-non-breakable-inline-mappings: true}\n"
        assert check(source, conf) == []

    def test_default_limit(self, check: Check) -> None:
        conf = "rules:\n  line-length: enable\n"
        assert check("a: " + "word " * 20 + "\n", conf) == [(1, 81)]
