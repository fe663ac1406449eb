"""Require block comments to be indented like the content around them."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from yamlscope.models.problems import LintProblem
from yamlscope.parser.comments import Comment
from yamlscope.parser.tokens import TokenKind
from yamlscope.rules.base import CommentRule
from yamlscope.rules.common import get_line_indent
from yamlscope.rules.registry import RuleRegistry


@RuleRegistry.register
class CommentsIndentationRule(CommentRule):
    @property
    def id(self) -> str:
        return "comments-indentation"

    def check(self, conf: dict[str, Any], comment: Comment) -> Iterator[LintProblem]:
        before = comment.token_before
        after = comment.token_after
        has_content_before = before is not None and before.kind is not TokenKind.STREAM_START

        # Inline comments are not concerned
        if has_content_before and before.end_mark.line + 1 == comment.line_no:
            return

        if after is None or after.kind is TokenKind.STREAM_END:
            next_line_indent = 0
        else:
            next_line_indent = after.start_mark.column

        prev_line_indent = get_line_indent(before) if has_content_before else 0

        # A comment that introduces deeper content may use its indentation:
        #   list:
        #       # comment
        #       - 1
        prev_line_indent = max(prev_line_indent, next_line_indent)

        # Once a run of comments went back to one valid indentation, the
        # following ones must keep it.
        if comment.comment_before is not None and not comment.comment_before.is_inline():
            prev_line_indent = comment.comment_before.column_no - 1

        indent = comment.column_no - 1
        if indent != prev_line_indent and indent != next_line_indent:
            yield LintProblem(
                line=comment.line_no,
                column=comment.column_no,
                desc="comment not indented like content",
            )
