"""The rule engine: runs enabled rules over one input and collects problems.

Each input is parsed once for syntax errors and scanned once for tokens.
Token rules see every token with its window, comment rules every
extracted comment and line rules every line.  The resulting problems
are stamped with the rule id and configured level, filtered through
inline directives and sorted by position.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import TYPE_CHECKING, Any

from yamlscope.linter.directives import DirectiveFilter, is_file_disabled
from yamlscope.models.problems import LintProblem, ProblemLevel
from yamlscope.parser.comments import extract_comments, token_windows
from yamlscope.parser.decoder import DecodeError, auto_decode
from yamlscope.parser.lines import line_generator
from yamlscope.parser.scanner import ScannerError, ScanResult, find_syntax_error, scan
from yamlscope.rules import CommentRule, LineRule, Rule, TokenRule

if TYPE_CHECKING:
    from yamlscope.config import YamlLintConfig

logger = logging.getLogger("yamlscope.linter")

SYNTAX_RULE = "syntax"


class RuleExecutionError(Exception):
    """A rule raised while checking an input.

    ``problems`` holds what had been collected before the fault.
    """

    def __init__(
        self, rule_id: str, original: BaseException, problems: list[LintProblem] | None = None
    ) -> None:
        self.rule_id = rule_id
        self.original = original
        self.problems = problems or []
        super().__init__(f'rule "{rule_id}" failed: {original!r}')


def _collect(
    rule: Rule,
    rule_conf: dict[str, Any],
    checks: Iterator[LintProblem],
    problems: list[LintProblem],
) -> None:
    """Drain ``checks`` into ``problems``, stamping rule id and level."""
    level = ProblemLevel(rule_conf["level"])
    try:
        for problem in checks:
            problems.append(problem.model_copy(update={"rule": rule.id, "level": level}))
    except Exception as exc:
        logger.error("Rule %s failed: %s", rule.id, exc)
        raise RuleExecutionError(rule.id, exc, problems) from exc


def _token_checks(
    rule: TokenRule, rule_conf: dict[str, Any], result: ScanResult
) -> Iterator[LintProblem]:
    context: dict[str, Any] | None = None
    for window in token_windows(result):
        if context is None:
            context = rule.create_context()
        yield from rule.check(
            rule_conf, window.curr, window.prev, window.next, window.nextnext, context
        )


def get_cosmetic_problems(
    buffer: str,
    conf: YamlLintConfig,
    filepath: str | Path | None = None,
    result: ScanResult | None = None,
) -> list[LintProblem]:
    """Run every enabled rule over ``buffer``; return filtered, sorted problems.

    Tokens scanned before a syntax error are still checked.
    """
    if result is None:
        result = scan(buffer)
    rules = conf.enabled_rules(filepath)

    token_rules: list[TokenRule] = []
    comment_rules: list[CommentRule] = []
    line_rules: list[LineRule] = []
    for rule in rules:
        match rule:
            case TokenRule():
                token_rules.append(rule)
            case CommentRule():
                comment_rules.append(rule)
            case LineRule():
                line_rules.append(rule)

    problems: list[LintProblem] = []
    for rule in token_rules:
        rule_conf = conf.rules[rule.id]
        _collect(rule, rule_conf, _token_checks(rule, rule_conf, result), problems)

    comments = extract_comments(result)
    for rule in comment_rules:
        rule_conf = conf.rules[rule.id]
        checks = (p for comment in comments for p in rule.check(rule_conf, comment))
        _collect(rule, rule_conf, checks, problems)

    for rule in line_rules:
        rule_conf = conf.rules[rule.id]
        checks = (p for line in line_generator(buffer) for p in rule.check(rule_conf, line))
        _collect(rule, rule_conf, checks, problems)

    directives = DirectiveFilter(comments, (rule.id for rule in rules))
    problems = directives.filter(problems)
    problems.sort(key=lambda problem: problem.sort_key)
    logger.debug("%d rules produced %d problems", len(rules), len(problems))
    return problems


def get_syntax_error(error: ScannerError | None) -> LintProblem | None:
    """Turn a scanner or parser error into a ``syntax`` problem."""
    if error is None:
        return None
    return LintProblem(
        line=error.line + 1,
        column=error.column + 1,
        desc=f"syntax error: {error.problem}",
        rule=SYNTAX_RULE,
        level=ProblemLevel.ERROR,
    )


def _merge_syntax_error(
    problems: Iterable[LintProblem], syntax_error: LintProblem | None
) -> list[LintProblem]:
    merged = list(problems)
    if syntax_error is None:
        return merged
    for i, problem in enumerate(merged):
        # A cosmetic problem at the very same place is redundant
        if (problem.line, problem.column) == (syntax_error.line, syntax_error.column):
            del merged[i]
            break
    merged.append(syntax_error)
    merged.sort(key=lambda problem: problem.sort_key)
    return merged


def run(
    input: bytes | str,
    conf: YamlLintConfig,
    filepath: str | Path | None = None,
    encoding: str | None = None,
) -> list[LintProblem]:
    """Lint one input and return its problems in position order.

    ``input`` is raw bytes (auto-decoded, or decoded with ``encoding``) or
    already decoded text.  Ignored files yield no problems.
    """
    if filepath is not None and conf.is_file_ignored(filepath):
        return []

    if isinstance(input, bytes):
        try:
            buffer = auto_decode(input, encoding)
        except DecodeError as exc:
            return [
                LintProblem(
                    line=1,
                    column=1,
                    desc=f"syntax error: {exc}",
                    rule=SYNTAX_RULE,
                    level=ProblemLevel.ERROR,
                )
            ]
    else:
        buffer = input

    first_line = next(line_generator(buffer)).content
    if is_file_disabled(first_line):
        return []

    syntax_error = get_syntax_error(find_syntax_error(buffer))
    problems = get_cosmetic_problems(buffer, conf, filepath, scan(buffer))
    return _merge_syntax_error(problems, syntax_error)
