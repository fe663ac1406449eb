"""Helpers shared by token and comment rules."""

from __future__ import annotations

import string

from yamlscope.models.problems import LintProblem
from yamlscope.parser.tokens import ScalarStyle, Token, TokenKind


def spaces_after(
    token: Token,
    prev: Token | None,
    next: Token | None,
    min: int = -1,
    max: int = -1,
    min_desc: str | None = None,
    max_desc: str | None = None,
) -> LintProblem | None:
    """Check the spaces between ``token`` and ``next`` on the same line."""
    if next is not None and token.end_mark.line == next.start_mark.line:
        spaces = next.start_mark.offset - token.end_mark.offset
        if max != -1 and spaces > max:
            return LintProblem(
                line=token.start_mark.line + 1,
                column=next.start_mark.column,
                desc=max_desc or "too many spaces after",
            )
        if min != -1 and spaces < min:
            return LintProblem(
                line=token.start_mark.line + 1,
                column=next.start_mark.column + 1,
                desc=min_desc or "too few spaces after",
            )
    return None


def spaces_before(
    token: Token,
    prev: Token | None,
    next: Token | None,
    min: int = -1,
    max: int = -1,
    min_desc: str | None = None,
    max_desc: str | None = None,
) -> LintProblem | None:
    """Check the spaces between ``prev`` and ``token`` on the same line."""
    if (
        prev is not None
        and prev.end_mark.line == token.start_mark.line
        # Block scalars end after their last line break
        and (prev.end_mark.offset == 0 or prev.end_mark.buffer[prev.end_mark.offset - 1] != "\n")
    ):
        spaces = token.start_mark.offset - prev.end_mark.offset
        if max != -1 and spaces > max:
            return LintProblem(
                line=token.start_mark.line + 1,
                column=token.start_mark.column,
                desc=max_desc or "too many spaces before",
            )
        if min != -1 and spaces < min:
            return LintProblem(
                line=token.start_mark.line + 1,
                column=token.start_mark.column + 1,
                desc=min_desc or "too few spaces before",
            )
    return None


def get_line_indent(token: Token) -> int:
    """Return the indentation of the line the token starts on."""
    buffer = token.start_mark.buffer
    start = buffer.rfind("\n", 0, token.start_mark.offset) + 1
    content = start
    while content < len(buffer) and buffer[content] == " ":
        content += 1
    return content - start


def get_real_end_line(token: Token) -> int:
    """Return the 1-based line where the token's content really ends.

    Multi-line scalars have an end mark after their trailing whitespace;
    this walks back over it.
    """
    end_line = token.end_mark.line + 1
    if token.kind is not TokenKind.SCALAR:
        return end_line
    buffer = token.end_mark.buffer
    pos = token.end_mark.offset - 1
    while pos >= max(token.start_mark.offset - 1, 0) and buffer[pos] in string.whitespace:
        if buffer[pos] == "\n":
            end_line -= 1
        pos -= 1
    return end_line


def is_explicit_key(token: Token) -> bool:
    # explicit key:
    #   ? key
    #   : v
    return (
        token.start_mark.offset < token.end_mark.offset
        and token.start_mark.buffer[token.start_mark.offset] == "?"
    )


def is_plain_scalar(token: Token) -> bool:
    return token.kind is TokenKind.SCALAR and token.style is ScalarStyle.PLAIN
