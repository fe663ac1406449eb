"""Integration tests for the ``yamlscope`` command line."""

from __future__ import annotations

import io
import sys
from pathlib import Path

import pytest

from yamlscope.cli.main import main
from yamlscope.rules.trailing_spaces import TrailingSpacesRule


@pytest.fixture
def workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """An isolated working directory without project or user configs."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(Path, "home", lambda: tmp_path)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    for name in ("YAMLSCOPE_CONFIG_FILE", "YAMLSCOPE_FILE_ENCODING", "GITHUB_ACTIONS"):
        monkeypatch.delenv(name, raising=False)
    return tmp_path


def run_cli(argv: list[str]) -> int:
    with pytest.raises(SystemExit) as exc_info:
        main(argv)
    return exc_info.value.code


class TestOutputFormats:
    def test_parsable(self, workdir: Path, capsys: pytest.CaptureFixture[str]) -> None:
        (workdir / "bad.yaml").write_text("---\nkey: value \n")
        assert run_cli(["-f", "parsable", "bad.yaml"]) == 1
        assert capsys.readouterr().out == (
            "bad.yaml:2:11: [error] trailing spaces (trailing-spaces)\n"
        )

    def test_standard(self, workdir: Path, capsys: pytest.CaptureFixture[str]) -> None:
        (workdir / "bad.yaml").write_text("---\nkey: value \n")
        assert run_cli(["-f", "standard", "bad.yaml"]) == 1
        assert capsys.readouterr().out.splitlines() == [
            "bad.yaml",
            "  2:11      error    trailing spaces  (trailing-spaces)",
            "",
        ]

    def test_github(self, workdir: Path, capsys: pytest.CaptureFixture[str]) -> None:
        (workdir / "bad.yaml").write_text("---\nkey: value \n")
        assert run_cli(["-f", "github", "bad.yaml"]) == 1
        assert capsys.readouterr().out.splitlines() == [
            "::group::bad.yaml",
            "::error file=bad.yaml,line=2,col=11::2:11 [trailing-spaces] trailing spaces",
            "::endgroup::",
            "",
        ]

    def test_clean_file(self, workdir: Path, capsys: pytest.CaptureFixture[str]) -> None:
        (workdir / "good.yaml").write_text("---\nkey: value\n")
        assert run_cli(["-f", "standard", "good.yaml"]) == 0
        assert capsys.readouterr().out == ""


class TestExitCodes:
    def test_warnings(self, workdir: Path, capsys: pytest.CaptureFixture[str]) -> None:
        (workdir / "warn.yaml").write_text("key: value\n")
        assert run_cli(["-f", "parsable", "warn.yaml"]) == 0
        assert "[warning]" in capsys.readouterr().out

    def test_strict_warnings(self, workdir: Path) -> None:
        (workdir / "warn.yaml").write_text("key: value\n")
        assert run_cli(["-s", "warn.yaml"]) == 2

    def test_no_warnings_hides_output(
        self, workdir: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        (workdir / "warn.yaml").write_text("key: value\n")
        assert run_cli(["--no-warnings", "-f", "parsable", "warn.yaml"]) == 0
        assert capsys.readouterr().out == ""

    def test_invalid_config(self, workdir: Path, capsys: pytest.CaptureFixture[str]) -> None:
        (workdir / "a.yaml").write_text("---\na: 1\n")
        assert run_cli(["-d", "rules: {nope: enable}", "a.yaml"]) == -1
        assert 'no such rule: "nope"' in capsys.readouterr().err

    def test_missing_file(self, workdir: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert run_cli(["missing.yaml"]) == -1
        assert "missing.yaml" in capsys.readouterr().err

    def test_rule_failure(
        self, workdir: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        def boom(self, conf, line):
            raise RuntimeError("kaboom")

        monkeypatch.setattr(TrailingSpacesRule, "check", boom)
        (workdir / "a.yaml").write_text("---\na: 1\n")
        assert run_cli(["a.yaml"]) == -1
        assert 'rule "trailing-spaces" failed' in capsys.readouterr().err

    def test_version(self, workdir: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert run_cli(["-v"]) == 0
        assert capsys.readouterr().out.startswith("yamlscope ")


class TestConfiguration:
    def test_builtin_name_shortcut(self, workdir: Path) -> None:
        (workdir / "long.yaml").write_text("---\nkey: " + " ".join(["x"] * 50) + "\n")
        assert run_cli(["-d", "default", "long.yaml"]) == 1
        assert run_cli(["-d", "relaxed", "long.yaml"]) == 0

    def test_config_file(self, workdir: Path) -> None:
        (workdir / "custom.yaml").write_text("rules:\n  new-lines: {type: dos}\n")
        (workdir / "a.yaml").write_text("a: 1\n")
        assert run_cli(["-c", "custom.yaml", "a.yaml"]) == 1

    def test_project_config(self, workdir: Path) -> None:
        (workdir / ".yamllint").write_text("extends: default\nrules:\n  trailing-spaces: disable\n")
        (workdir / "a.yaml").write_text("---\na: 1 \n")
        assert run_cli(["a.yaml"]) == 0

    def test_user_config(self, workdir: Path) -> None:
        user_config = workdir / "xdg" / "yamllint" / "config"
        user_config.parent.mkdir(parents=True)
        user_config.write_text("rules:\n  trailing-spaces: disable\n")
        (workdir / "a.yaml").write_text("a: 1 \n")
        assert run_cli(["a.yaml"]) == 0


class TestFileDiscovery:
    @pytest.fixture
    def tree(self, workdir: Path) -> Path:
        root = workdir / "dir"
        (root / "sub").mkdir(parents=True)
        for name in ("a.yaml", "b.yml", "c.txt", "sub/d.yaml"):
            (root / name).write_text("---\na: 1\n")
        return root

    def test_list_files(self, tree: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert run_cli(["--list-files", "dir"]) == 0
        assert sorted(capsys.readouterr().out.splitlines()) == [
            "dir/a.yaml",
            "dir/b.yml",
            "dir/sub/d.yaml",
        ]

    def test_ignored_paths(self, tree: Path, capsys: pytest.CaptureFixture[str]) -> None:
        (tree.parent / ".yamllint").write_text("extends: default\nignore: |\n  sub/\n")
        assert run_cli(["--list-files", "dir"]) == 0
        assert sorted(capsys.readouterr().out.splitlines()) == ["dir/a.yaml", "dir/b.yml"]

    def test_lint_directory(self, tree: Path, capsys: pytest.CaptureFixture[str]) -> None:
        (tree / "sub" / "d.yaml").write_text("---\na: 1 \n")
        assert run_cli(["-f", "parsable", "dir"]) == 1
        assert capsys.readouterr().out == (
            "dir/sub/d.yaml:2:5: [error] trailing spaces (trailing-spaces)\n"
        )


class TestStdin:
    def test_lint_stdin(
        self, workdir: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        monkeypatch.setattr(sys, "stdin", io.TextIOWrapper(io.BytesIO(b"---\na: 1 \n")))
        assert run_cli(["-f", "parsable", "-"]) == 1
        assert capsys.readouterr().out == (
            "stdin:2:5: [error] trailing spaces (trailing-spaces)\n"
        )
