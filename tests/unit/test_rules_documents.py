"""Tests for the document marker rules."""

from __future__ import annotations

from collections.abc import Callable

Check = Callable[[str, str], list[tuple[int, int]]]


class TestDocumentStart:
    CONF = "rules:\n  document-start: enable\n"
    FORBIDDEN = "rules:\n  document-start: {present: false}\n"

    def test_missing(self, check: Check) -> None:
        assert check("a: 1\n", self.CONF) == [(1, 1)]

    def test_present(self, check: Check) -> None:
        assert check("---\na: 1\n", self.CONF) == []

    def test_empty_and_comment_only_streams(self, check: Check) -> None:
        assert check("", self.CONF) == []
        assert check("# only a comment\n", self.CONF) == []

    def test_after_directive(self, check: Check) -> None:
        assert check("%YAML 1.2\n---\na: 1\n", self.CONF) == []

    def test_missing_after_document_end(self, lint) -> None:
        problems = lint("---\na\n...\nb\n", self.CONF)
        # The parser rejects the bare document as well, at the same position
        assert [(p.line, p.column, p.rule) for p in problems] == [(4, 1, "syntax")]
        assert problems[0].desc.startswith("syntax error: expected '<document start>'")

    def test_forbidden(self, check: Check) -> None:
        assert check("---\na: 1\n", self.FORBIDDEN) == [(1, 1)]
        assert check("a: 1\n", self.FORBIDDEN) == []

    def test_forbidden_on_every_document(self, check: Check) -> None:
        assert check("a\n...\n---\nb\n", self.FORBIDDEN) == [(3, 1)]


class TestDocumentEnd:
    CONF = "rules:\n  document-end: enable\n"
    FORBIDDEN = "rules:\n  document-end: {present: false}\n"

    def test_missing_at_stream_end(self, check: Check) -> None:
        assert check("---\na: 1\n", self.CONF) == [(2, 1)]

    def test_present(self, check: Check) -> None:
        assert check("---\na: 1\n...\n", self.CONF) == []

    def test_empty_stream(self, check: Check) -> None:
        assert check("", self.CONF) == []

    def test_missing_between_documents(self, check: Check) -> None:
        assert check("---\na\n---\nb\n...\n", self.CONF) == [(3, 1)]

    def test_forbidden(self, check: Check) -> None:
        assert check("---\na\n...\n", self.FORBIDDEN) == [(3, 1)]
        assert check("---\na\n", self.FORBIDDEN) == []
