"""Control the position and formatting of comments.

Options:

* ``require-starting-space``: require a space after the ``#`` marker
* ``ignore-shebangs``: accept ``#!`` on the very first line
* ``min-spaces-from-content``: minimal spacing between content and an
  inline comment, ``-1`` to disable
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from typing import Any

from yamlscope.models.problems import LintProblem
from yamlscope.parser.comments import Comment
from yamlscope.rules.base import CommentRule, OptionSpec
from yamlscope.rules.registry import RuleRegistry

_SHEBANG = re.compile(r"!\S")


@RuleRegistry.register
class CommentsRule(CommentRule):
    @property
    def id(self) -> str:
        return "comments"

    @property
    def conf(self) -> dict[str, OptionSpec]:
        return {
            "require-starting-space": bool,
            "ignore-shebangs": bool,
            "min-spaces-from-content": int,
        }

    @property
    def default(self) -> dict[str, Any]:
        return {
            "require-starting-space": True,
            "ignore-shebangs": True,
            "min-spaces-from-content": 2,
        }

    def check(self, conf: dict[str, Any], comment: Comment) -> Iterator[LintProblem]:
        min_spaces = conf["min-spaces-from-content"]
        if (
            min_spaces != -1
            and comment.is_inline()
            and comment.offset - comment.token_before.end_mark.offset < min_spaces
        ):
            yield LintProblem(
                line=comment.line_no,
                column=comment.column_no,
                desc=f"too few spaces before comment: expected {min_spaces}",
            )

        if conf["require-starting-space"]:
            buffer = comment.buffer
            text_start = comment.offset + 1
            while text_start < len(buffer) and buffer[text_start] == "#":
                text_start += 1
            if text_start < len(buffer):
                if (
                    conf["ignore-shebangs"]
                    and comment.line_no == 1
                    and comment.column_no == 1
                    and _SHEBANG.match(buffer, text_start)
                ):
                    return
                # An empty comment ends with '\n', '\r\n' or the buffer.
                if buffer[text_start] not in (" ", "\n", "\r", "\x00"):
                    yield LintProblem(
                        line=comment.line_no,
                        column=comment.column_no + text_start - comment.offset,
                        desc="missing starting space in comment",
                    )
