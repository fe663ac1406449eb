"""Output formats for lint problems."""

from __future__ import annotations

import os
import platform
import sys
from collections.abc import Iterable
from typing import TextIO

from yamlscope.models.problems import LintProblem, ProblemLevel

FORMATS = ("parsable", "standard", "colored", "github", "auto")


def supports_color(stream: TextIO | None = None) -> bool:
    """Whether ANSI colors should be written to ``stream``."""
    stream = stream or sys.stdout
    if "NO_COLOR" in os.environ:
        return False
    if "FORCE_COLOR" in os.environ:
        return True
    supported_platform = not (
        platform.system() == "Windows"
        and not ("ANSICON" in os.environ or os.environ.get("TERM") == "ANSI")
    )
    return supported_platform and hasattr(stream, "isatty") and stream.isatty()


class Format:
    """One-line renderings of a single problem."""

    @staticmethod
    def parsable(problem: LintProblem, filename: str) -> str:
        return f"{filename}:{problem.line}:{problem.column}: [{problem.level}] {problem.message}"

    @staticmethod
    def standard(problem: LintProblem, filename: str) -> str:
        line = f"  {problem.line}:{problem.column}"
        line += max(12 - len(line), 0) * " "
        line += str(problem.level)
        line += max(21 - len(line), 0) * " "
        line += problem.desc
        if problem.rule:
            line += f"  ({problem.rule})"
        return line

    @staticmethod
    def standard_color(problem: LintProblem, filename: str) -> str:
        line = f"  \033[2m{problem.line}:{problem.column}\033[0m"
        line += max(20 - len(line), 0) * " "
        if problem.level is ProblemLevel.WARNING:
            line += f"\033[33m{problem.level}\033[0m"
        else:
            line += f"\033[31m{problem.level}\033[0m"
        line += max(38 - len(line), 0) * " "
        line += problem.desc
        if problem.rule:
            line += f"  \033[2m({problem.rule})\033[0m"
        return line

    @staticmethod
    def github(problem: LintProblem, filename: str) -> str:
        line = (
            f"::{problem.level} file={filename},line={problem.line},col={problem.column}"
            f"::{problem.line}:{problem.column} "
        )
        if problem.rule:
            line += f"[{problem.rule}] "
        line += problem.desc
        return line


def resolve_format(args_format: str, stream: TextIO | None = None) -> str:
    """Pick a concrete format for ``auto``."""
    if args_format != "auto":
        return args_format
    if "GITHUB_ACTIONS" in os.environ and "GITHUB_WORKFLOW" in os.environ:
        return "github"
    if supports_color(stream):
        return "colored"
    return "standard"


def show_problems(
    problems: Iterable[LintProblem],
    file: str,
    args_format: str = "auto",
    no_warn: bool = False,
    stream: TextIO | None = None,
) -> int:
    """Print the problems of one file; return the highest level rank seen.

    The rank is 0 without problems, 1 for warnings and 2 for errors, and
    counts warnings even when ``no_warn`` hides them.
    """
    stream = stream or sys.stdout
    args_format = resolve_format(args_format, stream)
    max_level = 0
    first = True

    for problem in problems:
        level = problem.level or ProblemLevel.ERROR
        max_level = max(max_level, level.rank)
        if no_warn and level is not ProblemLevel.ERROR:
            continue
        if args_format == "parsable":
            print(Format.parsable(problem, file), file=stream)
        elif args_format == "github":
            if first:
                print(f"::group::{file}", file=stream)
                first = False
            print(Format.github(problem, file), file=stream)
        elif args_format == "colored":
            if first:
                print(f"\033[4m{file}\033[0m", file=stream)
                first = False
            print(Format.standard_color(problem, file), file=stream)
        else:
            if first:
                print(file, file=stream)
                first = False
            print(Format.standard(problem, file), file=stream)

    if not first and args_format == "github":
        print("::endgroup::", file=stream)
    if not first and args_format != "parsable":
        print("", file=stream)

    return max_level
