"""Tests for the indentation rule."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from yamlscope.config import YamlLintConfig, YamlLintConfigError

Check = Callable[[str, str], list[tuple[int, int]]]


class TestIndentation:
    CONF = "rules:\n  indentation: enable\n"

    def test_consistent_nesting(self, check: Check) -> None:
        source = "---\nobj:\n  key: 1\n  list:\n    - a\n    - b\n  nested:\n    - - c\n      - d\n"
        assert check(source, self.CONF) == []

    def test_width_taken_from_first_indent(self, lint) -> None:
        source = "---\nobj:\n  a: 1\nother:\n    b: 2\n"
        problems = lint(source, self.CONF)
        assert [(p.line, p.column) for p in problems] == [(5, 5)]
        assert problems[0].desc == "wrong indentation: expected 2 but found 4"
        assert problems[0].rule == "indentation"

    def test_fixed_width(self, check: Check) -> None:
        conf = "rules:\n  indentation: {spaces: 4}\n"
        assert check("---\nobj:\n  a: 1\n", conf) == [(3, 3)]
        assert check("---\nobj:\n    a: 1\n", conf) == []

    def test_sequence_in_mapping_entry(self, check: Check) -> None:
        assert check("---\n- a: 1\n  b: 2\n- c\n", self.CONF) == []

    def test_unindented_sequence_with_unknown_width(self, lint) -> None:
        problems = lint("---\nlist:\n- a\n", self.CONF)
        assert [(p.line, p.column) for p in problems] == [(3, 1)]
        assert problems[0].desc == "wrong indentation: expected at least 1"

    def test_unindented_sequence_with_known_width(self, check: Check) -> None:
        conf = "rules:\n  indentation: {spaces: 2}\n"
        assert check("---\nlist:\n- a\n", conf) == [(3, 1)]

    def test_sequences_not_indented(self, check: Check) -> None:
        conf = "rules:\n  indentation: {indent-sequences: false}\n"
        assert check("---\nlist:\n- a\n", conf) == []
        assert check("---\nlist:\n  - a\n", conf) == [(3, 3)]

    def test_sequences_whatever(self, check: Check) -> None:
        conf = "rules:\n  indentation: {indent-sequences: whatever}\n"
        assert check("---\na:\n  - 1\nb:\n- 2\n", conf) == []

    def test_sequences_consistent(self, check: Check) -> None:
        conf = "rules:\n  indentation: {indent-sequences: consistent}\n"
        assert check("---\na:\n  - 1\nb:\n  - 2\n", conf) == []
        assert check("---\na:\n- 1\nb:\n- 2\n", conf) == []
        assert check("---\na:\n  - 1\nb:\n- 2\n", conf) == [(5, 1)]

    def test_multi_line_flow_sequence(self, check: Check) -> None:
        assert check("---\nlist: [\n  a,\n  b\n]\n", self.CONF) == []
        assert check("---\nlist: [\n  a,\n  b\n  ]\n", self.CONF) == [(5, 3)]

    def test_multi_line_strings(self, check: Check) -> None:
        source = "---\nkey:\n  this is\n   multi-line\n"
        assert check(source, self.CONF) == []
        conf = "rules:\n  indentation: {check-multi-line-strings: true}\n"
        assert check(source, conf) == [(4, 4)]
        assert check("---\nkey:\n  this is\n  multi-line\n", conf) == []

    def test_contexts_are_per_document_run(self, check: Check) -> None:
        # The detected width does not leak from one run to the next
        assert check("---\na:\n    b: 1\n", self.CONF) == []
        assert check("---\na:\n  b: 1\n", self.CONF) == []

    def test_invalid_option(self) -> None:
        with pytest.raises(YamlLintConfigError, match="indentation"):
            YamlLintConfig(content="rules:\n  indentation: {spaces: wide}\n")
