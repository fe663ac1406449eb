"""Tests for the CLI output formats."""

from __future__ import annotations

import io
import sys

import pytest

from yamlscope.cli.formatters import Format, resolve_format, show_problems, supports_color
from yamlscope.models.problems import LintProblem, ProblemLevel

ERROR = LintProblem(
    line=1, column=11, desc="trailing spaces", rule="trailing-spaces", level=ProblemLevel.ERROR
)
WARNING = LintProblem(
    line=1,
    column=1,
    desc='missing document start "---"',
    rule="document-start",
    level=ProblemLevel.WARNING,
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("NO_COLOR", "FORCE_COLOR", "GITHUB_ACTIONS", "GITHUB_WORKFLOW"):
        monkeypatch.delenv(name, raising=False)


class TestFormat:
    def test_parsable(self) -> None:
        assert Format.parsable(ERROR, "a.yaml") == (
            "a.yaml:1:11: [error] trailing spaces (trailing-spaces)"
        )

    def test_standard(self) -> None:
        assert Format.standard(ERROR, "a.yaml") == (
            "  1:11      error    trailing spaces  (trailing-spaces)"
        )
        assert Format.standard(WARNING, "a.yaml") == (
            '  1:1       warning  missing document start "---"  (document-start)'
        )

    def test_standard_without_rule(self) -> None:
        problem = LintProblem(line=2, column=3, desc="syntax", level=ProblemLevel.ERROR)
        assert Format.standard(problem, "a.yaml") == "  2:3       error    syntax"

    def test_standard_color(self) -> None:
        line = Format.standard_color(WARNING, "a.yaml")
        assert "\033[33mwarning\033[0m" in line
        assert line.endswith("\033[2m(document-start)\033[0m")

    def test_github(self) -> None:
        assert Format.github(ERROR, "a.yaml") == (
            "::error file=a.yaml,line=1,col=11::1:11 [trailing-spaces] trailing spaces"
        )


class TestResolveFormat:
    def test_explicit_format_wins(self) -> None:
        assert resolve_format("parsable") == "parsable"

    def test_auto_without_tty(self) -> None:
        assert resolve_format("auto", io.StringIO()) == "standard"

    def test_auto_on_github_actions(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GITHUB_ACTIONS", "true")
        monkeypatch.setenv("GITHUB_WORKFLOW", "lint")
        assert resolve_format("auto", io.StringIO()) == "github"

    def test_color_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FORCE_COLOR", "1")
        assert supports_color(io.StringIO())
        assert resolve_format("auto", io.StringIO()) == "colored"
        monkeypatch.setenv("NO_COLOR", "1")
        assert not supports_color(sys.stdout)


class TestShowProblems:
    def test_standard_block(self) -> None:
        out = io.StringIO()
        rank = show_problems([WARNING, ERROR], "a.yaml", "standard", stream=out)
        assert rank == 2
        assert out.getvalue().splitlines() == [
            "a.yaml",
            '  1:1       warning  missing document start "---"  (document-start)',
            "  1:11      error    trailing spaces  (trailing-spaces)",
            "",
        ]

    def test_parsable_has_no_header(self) -> None:
        out = io.StringIO()
        show_problems([ERROR], "a.yaml", "parsable", stream=out)
        assert out.getvalue() == "a.yaml:1:11: [error] trailing spaces (trailing-spaces)\n"

    def test_github_groups(self) -> None:
        out = io.StringIO()
        show_problems([ERROR], "a.yaml", "github", stream=out)
        lines = out.getvalue().splitlines()
        assert lines[0] == "::group::a.yaml"
        assert lines[-2] == "::endgroup::"

    def test_no_warnings(self) -> None:
        out = io.StringIO()
        rank = show_problems([WARNING], "a.yaml", "standard", no_warn=True, stream=out)
        assert rank == 1
        assert out.getvalue() == ""

    def test_no_problems(self) -> None:
        out = io.StringIO()
        assert show_problems([], "a.yaml", "standard", stream=out) == 0
        assert out.getvalue() == ""
