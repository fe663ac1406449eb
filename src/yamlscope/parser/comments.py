"""Comment extraction and the token window stream used by rules.

Scanners drop comments; this module recovers them from the gaps between
consecutive tokens (a gap never contains scalar content) and attaches each
one to its neighbouring tokens and to adjacent comments.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

from yamlscope.parser.scanner import ScanResult, scan
from yamlscope.parser.tokens import Token, TokenKind


@dataclass(eq=False)
class Comment:
    """A ``#`` comment with 1-based position and its surroundings."""

    line_no: int
    column_no: int
    offset: int
    buffer: str = field(repr=False)
    token_before: Token | None = field(default=None, repr=False)
    token_after: Token | None = field(default=None, repr=False)
    comment_before: Comment | None = field(default=None, repr=False)
    comment_after: Comment | None = field(default=None, repr=False)

    @property
    def content(self) -> str:
        end = self.buffer.find("\n", self.offset)
        if end == -1:
            end = self.buffer.find("\0", self.offset)
        if end == -1:
            return self.buffer[self.offset:]
        return self.buffer[self.offset:end]

    def is_inline(self) -> bool:
        """True when the comment follows content on the same line."""
        token = self.token_before
        if token is None or token.kind is TokenKind.STREAM_START:
            return False
        if self.line_no != token.end_mark.line + 1:
            return False
        # Block scalars end after their final line break.
        end = token.end_mark.offset
        return not (end > 0 and self.buffer[end - 1] == "\n")

    def __str__(self) -> str:
        return self.content


@dataclass(frozen=True)
class TokenWindow:
    """A token with one token of lookbehind and two of lookahead."""

    curr: Token
    prev: Token | None = None
    next: Token | None = None
    nextnext: Token | None = None

    @property
    def line_no(self) -> int:
        return self.curr.start_mark.line + 1


def comments_between_tokens(
    token1: Token, token2: Token | None, end: int | None = None
) -> Iterator[Comment]:
    """Yield the comments found between two consecutive tokens.

    When ``token2`` is None the search runs up to ``end`` (or the end of
    the buffer).
    """
    buffer = token1.end_mark.buffer
    if token2 is None:
        search_end = len(buffer) if end is None else end
    else:
        search_end = token2.start_mark.offset

    offset = token1.end_mark.offset
    gap = buffer[offset:search_end]
    if "#" not in gap:
        return
    line_no = token1.end_mark.line + 1
    column_no = token1.end_mark.column + 1
    for chunk in gap.split("\n"):
        pos = chunk.find("#")
        if pos != -1:
            yield Comment(
                line_no,
                column_no + pos,
                offset + pos,
                buffer,
                token_before=token1,
                token_after=token2,
            )
        offset += len(chunk) + 1
        line_no += 1
        column_no = 1


def _windows(tokens: list[Token]) -> Iterator[TokenWindow]:
    count = len(tokens)
    for i, curr in enumerate(tokens):
        yield TokenWindow(
            curr,
            tokens[i - 1] if i > 0 else None,
            tokens[i + 1] if i + 1 < count else None,
            tokens[i + 2] if i + 2 < count else None,
        )


def _link(previous: Comment | None, comment: Comment) -> None:
    # Comments on directly consecutive lines form a chain.
    if previous is not None and previous.line_no == comment.line_no - 1:
        comment.comment_before = previous
        previous.comment_after = comment


def token_or_comment_generator(
    buffer: str, result: ScanResult | None = None
) -> Iterator[TokenWindow | Comment]:
    """Yield token windows interleaved with comments, in document order.

    A comment's ``comment_after`` link is set once the following comment
    has been found.  Use ``extract_comments`` for fully linked comments.
    The scanner error, if any, is raised after the last valid token.
    """
    if result is None:
        result = scan(buffer)
    previous: Comment | None = None
    for window in _windows(result.tokens):
        yield window
        for comment in comments_between_tokens(window.curr, window.next, result.end_offset):
            _link(previous, comment)
            previous = comment
            yield comment
    if result.error is not None:
        raise result.error


def extract_comments(result: ScanResult) -> list[Comment]:
    """Return every comment of a scanned buffer, fully linked."""
    comments: list[Comment] = []
    previous: Comment | None = None
    for window in _windows(result.tokens):
        for comment in comments_between_tokens(window.curr, window.next, result.end_offset):
            _link(previous, comment)
            previous = comment
            comments.append(comment)
    return comments


def token_windows(result: ScanResult) -> Iterator[TokenWindow]:
    """Yield the lookbehind/lookahead window of every scanned token."""
    return _windows(result.tokens)
