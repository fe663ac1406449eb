"""Command-line entry point: ``yamlscope [options] FILE_OR_DIR ...``."""

from __future__ import annotations

import argparse
import locale
import logging
import os
import sys
from collections.abc import Iterable, Iterator
from pathlib import Path

from yamlscope import __version__
from yamlscope.cli.formatters import FORMATS, show_problems
from yamlscope.config import (
    YamlLintConfig,
    YamlLintConfigError,
    find_project_config,
    user_global_config,
)
from yamlscope.linter import RuleExecutionError, run
from yamlscope.models.problems import ProblemLevel
from yamlscope.settings import Settings

logger = logging.getLogger("yamlscope.cli")


def find_files_recursively(items: Iterable[str], conf: YamlLintConfig) -> Iterator[str]:
    """Expand directories into the YAML files below them."""
    for item in items:
        if os.path.isdir(item):
            for root, _dirnames, filenames in os.walk(item):
                for name in sorted(filenames):
                    filepath = os.path.join(root, name)
                    if conf.is_yaml_file(filepath) and not conf.is_file_ignored(filepath):
                        yield filepath
        else:
            yield item


def load_config(args: argparse.Namespace, settings: Settings) -> YamlLintConfig:
    """Resolve the config from the CLI, the project, the user or the default."""
    if args.config_data is not None:
        data = args.config_data
        # A bare name is a shortcut for extending that built-in config
        if data != "" and ":" not in data:
            data = f"extends: {data}"
        return YamlLintConfig(content=data)
    if args.config_file is not None:
        return YamlLintConfig(file=args.config_file)
    project_config = find_project_config()
    if project_config is not None:
        return YamlLintConfig(file=project_config)
    user_config = user_global_config(settings.config_file)
    if user_config is not None:
        return YamlLintConfig(file=user_config)
    return YamlLintConfig(content="extends: default")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="yamlscope",
        description="A linter for YAML files: checks syntax and cosmetic problems.",
    )
    files_group = parser.add_mutually_exclusive_group(required=True)
    files_group.add_argument(
        "files", metavar="FILE_OR_DIR", nargs="*", default=(), help="files to check"
    )
    files_group.add_argument(
        "-", action="store_true", dest="stdin", help="read from standard input"
    )
    config_group = parser.add_mutually_exclusive_group()
    config_group.add_argument(
        "-c", "--config-file", dest="config_file", help="path to a custom configuration"
    )
    config_group.add_argument(
        "-d", "--config-data", dest="config_data", help="custom configuration (as YAML source)"
    )
    parser.add_argument(
        "--list-files", action="store_true", help="list files to lint and exit"
    )
    parser.add_argument(
        "-f", "--format", choices=FORMATS, default="auto", help="format for parsing output"
    )
    parser.add_argument(
        "-s", "--strict", action="store_true",
        help="return non-zero exit code on warnings as well as errors",
    )
    parser.add_argument(
        "--no-warnings", action="store_true", help="output only error level problems"
    )
    parser.add_argument(
        "-v", "--version", action="version", version=f"yamlscope {__version__}"
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """Lint the given files and exit with 0, 1 (errors) or 2 (strict warnings)."""
    settings = Settings()
    logging.basicConfig(level=settings.log_level.upper())

    args = build_parser().parse_args(argv)

    try:
        conf = load_config(args, settings)
    except YamlLintConfigError as exc:
        print(exc, file=sys.stderr)
        sys.exit(-1)

    if conf.locale is not None:
        locale.setlocale(locale.LC_ALL, conf.locale)

    if args.list_files:
        for file in find_files_recursively(args.files, conf):
            if not conf.is_file_ignored(file):
                print(file)
        sys.exit(0)

    max_level = 0
    try:
        for file in find_files_recursively(args.files, conf):
            filepath = file[2:] if file.startswith("./") else file
            try:
                data = Path(file).read_bytes()
            except OSError as exc:
                print(exc, file=sys.stderr)
                sys.exit(-1)
            problems = run(data, conf, filepath, encoding=settings.file_encoding)
            level = show_problems(problems, file, args.format, args.no_warnings)
            max_level = max(max_level, level)

        if args.stdin:
            problems = run(sys.stdin.buffer.read(), conf, encoding=settings.file_encoding)
            level = show_problems(problems, "stdin", args.format, args.no_warnings)
            max_level = max(max_level, level)
    except RuleExecutionError as exc:
        print(exc, file=sys.stderr)
        sys.exit(-1)

    logger.debug("Highest problem level: %d", max_level)
    if max_level == ProblemLevel.ERROR.rank:
        return_code = 1
    elif max_level == ProblemLevel.WARNING.rank:
        return_code = 2 if args.strict else 0
    else:
        return_code = 0
    sys.exit(return_code)


if __name__ == "__main__":
    main()
