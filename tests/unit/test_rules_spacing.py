"""Tests for the spacing rules: hyphens, colons, commas, braces, brackets."""

from __future__ import annotations

from collections.abc import Callable

Check = Callable[[str, str], list[tuple[int, int]]]


class TestHyphens:
    CONF = "rules:\n  hyphens: {max-spaces-after: 1}\n"

    def test_single_space(self, check: Check) -> None:
        assert check("---\n- a\n- b\n", self.CONF) == []

    def test_too_many_spaces(self, check: Check) -> None:
        assert check("---\n- a\n-  b\n", self.CONF) == [(3, 3)]

    def test_nested_entries(self, check: Check) -> None:
        assert check("-   - a\n", self.CONF) == [(1, 4)]

    def test_larger_limit(self, check: Check) -> None:
        conf = "rules:\n  hyphens: {max-spaces-after: 3}\n"
        assert check("-   a\n-    b\n", conf) == [(2, 5)]


class TestColons:
    CONF = "rules:\n  colons: enable\n"

    def test_clean(self, check: Check) -> None:
        assert check("key: value\nother:\n  - a\n", self.CONF) == []

    def test_spaces_before(self, check: Check) -> None:
        assert check("key : value\n", self.CONF) == [(1, 4)]

    def test_spaces_after(self, check: Check) -> None:
        assert check("key:  value\n", self.CONF) == [(1, 5)]

    def test_explicit_key(self, check: Check) -> None:
        assert check("?  key\n: value\n", self.CONF) == [(1, 3)]

    def test_relaxed_limits(self, check: Check) -> None:
        conf = "rules:\n  colons: {max-spaces-before: -1, max-spaces-after: -1}\n"
        assert check("key   :    value\n", conf) == []

    def test_flow_mapping(self, check: Check) -> None:
        assert check("{a:  1}\n", self.CONF) == [(1, 5)]


class TestCommas:
    CONF = "rules:\n  commas: enable\n"

    def test_clean(self, check: Check) -> None:
        assert check("[a, b, c]\n", self.CONF) == []

    def test_space_before_and_none_after(self, check: Check) -> None:
        assert check("[a ,b]\n", self.CONF) == [(1, 3), (1, 5)]

    def test_too_many_after(self, check: Check) -> None:
        assert check("[a,  b]\n", self.CONF) == [(1, 5)]

    def test_comma_on_next_line(self, check: Check) -> None:
        assert check("[a\n, b]\n", self.CONF) == [(2, 1)]


class TestBrackets:
    CONF = "rules:\n  brackets: enable\n"

    def test_clean(self, check: Check) -> None:
        assert check("a: [1, 2]\nb: []\n", self.CONF) == []

    def test_spaces_inside(self, check: Check) -> None:
        assert check("[ a ]\n", self.CONF) == [(1, 2), (1, 4)]

    def test_empty_with_space(self, check: Check) -> None:
        assert check("[ ]\n", self.CONF) == [(1, 2)]

    def test_min_spaces_inside(self, check: Check) -> None:
        conf = "rules:\n  brackets: {min-spaces-inside: 1, max-spaces-inside: 1}\n"
        assert check("[a]\n", conf) == [(1, 2), (1, 3)]
        assert check("[ a ]\n", conf) == []

    def test_forbid(self, check: Check) -> None:
        conf = "rules:\n  brackets: {forbid: true}\n"
        assert check("a: [1]\nb: []\n", conf) == [(1, 5), (2, 5)]

    def test_forbid_non_empty(self, check: Check) -> None:
        conf = "rules:\n  brackets: {forbid: non-empty}\n"
        assert check("a: []\nb: [1]\n", conf) == [(2, 5)]

    def test_empty_limits_override(self, check: Check) -> None:
        conf = "rules:\n  brackets: {min-spaces-inside-empty: 1, max-spaces-inside-empty: 1}\n"
        assert check("a: []\nb: [ ]\n", conf) == [(1, 5)]


class TestBraces:
    CONF = "rules:\n  braces: enable\n"

    def test_clean(self, check: Check) -> None:
        assert check("a: {b: 1}\nc: {}\n", self.CONF) == []

    def test_spaces_inside(self, check: Check) -> None:
        assert check("{ a: 1 }\n", self.CONF) == [(1, 2), (1, 7)]

    def test_min_spaces_inside(self, check: Check) -> None:
        conf = "rules:\n  braces: {min-spaces-inside: 1, max-spaces-inside: 1}\n"
        assert check("{a: 1}\n", conf) == [(1, 2), (1, 6)]

    def test_forbid(self, check: Check) -> None:
        conf = "rules:\n  braces: {forbid: true}\n"
        assert check("a: {b: 1}\n", conf) == [(1, 5)]

    def test_brackets_are_not_braces(self, check: Check) -> None:
        assert check("[ a ]\n", self.CONF) == []
