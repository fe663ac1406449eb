"""Control the indentation of block and flow collections.

``spaces`` is the indentation width, or ``consistent`` to take the width
of the first indented line and hold every other line to it.
``indent-sequences`` says whether block sequences nested in a mapping
are indented (``true``), flush with their key (``false``), either
(``whatever``) or the same way throughout the document (``consistent``).
``check-multi-line-strings`` also checks the continuation lines of
multi-line scalars.

The rule keeps a stack of open constructs, each with the column its
content is expected at.  A token is checked when it is the first one on
its line.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import IntEnum
from typing import Any

from yamlscope.models.problems import LintProblem
from yamlscope.parser.tokens import Token, TokenKind
from yamlscope.rules.base import OptionSpec, TokenRule
from yamlscope.rules.common import get_real_end_line, is_explicit_key
from yamlscope.rules.registry import RuleRegistry


class ParentType(IntEnum):
    ROOT = 0
    B_MAP = 1
    F_MAP = 2
    B_SEQ = 3
    F_SEQ = 4
    B_ENT = 5
    KEY = 6
    VAL = 7


@dataclass
class Parent:
    """An open construct and the column its content belongs at."""

    type: ParentType
    indent: int
    line_indent: int | None = None
    explicit_key: bool = False
    implicit_block_seq: bool = False


class _UnexpectedToken(Exception):
    """The token stream does not fit the open constructs."""


def _expect(condition: bool) -> None:
    if not condition:
        raise _UnexpectedToken


_PROPERTIES = (TokenKind.ANCHOR, TokenKind.TAG)
_EMPTY_VALUE_NEXT = (
    TokenKind.BLOCK_MAPPING_END,
    TokenKind.BLOCK_SEQUENCE_END,
    TokenKind.FLOW_MAPPING_END,
    TokenKind.FLOW_SEQUENCE_END,
    TokenKind.KEY,
)


def _detect_indent(context: dict[str, Any], base_indent: int, found: int) -> int:
    """Expected indent under ``base_indent``; fixes ``spaces`` on first use."""
    if not isinstance(context["spaces"], int):
        context["spaces"] = found - base_indent
    return base_indent + context["spaces"]


def check_scalar_indentation(
    token: Token, context: dict[str, Any]
) -> Iterator[LintProblem]:
    """Check the continuation lines of a multi-line scalar."""
    if token.start_mark.line == token.end_mark.line:
        return

    stack: list[Parent] = context["stack"]

    def expected_indent(found: int) -> int:
        if token.plain:
            return token.start_mark.column
        if token.style.is_quoted:
            return token.start_mark.column + 1
        top = stack[-1]
        if top.type in (ParentType.B_ENT, ParentType.KEY):
            # - >
            #     multi
            #     line
            return _detect_indent(context, token.start_mark.column, found)
        if top.type is ParentType.VAL:
            if token.start_mark.line + 1 > context["cur_line"]:
                # - key:
                #     >
                #       multi
                #       line
                return _detect_indent(context, top.indent, found)
            if stack[-2].explicit_key:
                # - ? key
                #   : >
                #       multi-line
                #       value
                return _detect_indent(context, token.start_mark.column, found)
            # - key: >
            #     multi
            #     line
            return _detect_indent(context, stack[-2].indent, found)
        return _detect_indent(context, top.indent, found)

    buffer = token.start_mark.buffer
    expected: int | None = None
    line_no = token.start_mark.line + 1
    line_start = token.start_mark.offset
    while True:
        line_start = buffer.find("\n", line_start, token.end_mark.offset - 1) + 1
        if line_start == 0:
            break
        line_no += 1

        indent = 0
        while line_start + indent < len(buffer) and buffer[line_start + indent] == " ":
            indent += 1
        if line_start + indent < len(buffer) and buffer[line_start + indent] in "\r\n":
            continue

        if expected is None:
            expected = expected_indent(indent)

        if indent != expected:
            yield LintProblem(
                line=line_no,
                column=indent + 1,
                desc=f"wrong indentation: expected {expected} but found {indent}",
            )


def _value_indent(
    context: dict[str, Any], parent: Parent, prev: Token, next: Token
) -> int:
    """Expected indent of the content following a ``:`` value indicator."""
    if parent.explicit_key:
        #   ? k
        #   : value
        return _detect_indent(context, parent.indent, next.start_mark.column)
    if next.start_mark.line == prev.start_mark.line:
        #   k: value
        return next.start_mark.column
    if next.kind in (TokenKind.BLOCK_SEQUENCE_START, TokenKind.BLOCK_ENTRY):
        # Sequences flush with their key open no BLOCK_SEQUENCE_START
        indent_sequences = context["indent-sequences"]
        if indent_sequences is False:
            return parent.indent
        if indent_sequences is True:
            if context["spaces"] == "consistent" and next.start_mark.column == parent.indent:
                # Not indented, and the width to expect is still unknown
                return -1
            return _detect_indent(context, parent.indent, next.start_mark.column)
        if next.start_mark.column == parent.indent:
            #   key:
            #   - e1
            if indent_sequences == "consistent":
                context["indent-sequences"] = False
            return parent.indent
        #   key:
        #     - e1
        if indent_sequences == "consistent":
            context["indent-sequences"] = True
        return _detect_indent(context, parent.indent, next.start_mark.column)
    #   k:
    #     value
    return _detect_indent(context, parent.indent, next.start_mark.column)


def _push(
    token: Token,
    prev: Token | None,
    next: Token | None,
    nextnext: Token | None,
    context: dict[str, Any],
) -> None:
    stack: list[Parent] = context["stack"]

    match token.kind:
        case TokenKind.BLOCK_MAPPING_START:
            #   - a: 1
            # or
            #   - ? a
            #     : 1
            _expect(next is not None and next.kind is TokenKind.KEY)
            _expect(next.start_mark.line == token.start_mark.line)
            stack.append(Parent(ParentType.B_MAP, token.start_mark.column))

        case TokenKind.FLOW_MAPPING_START | TokenKind.FLOW_SEQUENCE_START:
            _expect(next is not None)
            if next.start_mark.line == token.start_mark.line:
                #   - {a: 1, b: 2}
                indent = next.start_mark.column
            else:
                #   - {
                #     a: 1, b: 2
                #   }
                indent = _detect_indent(
                    context, context["cur_line_indent"], next.start_mark.column
                )
            kind = (
                ParentType.F_MAP
                if token.kind is TokenKind.FLOW_MAPPING_START
                else ParentType.F_SEQ
            )
            stack.append(Parent(kind, indent, line_indent=context["cur_line_indent"]))

        case TokenKind.BLOCK_SEQUENCE_START:
            #   - - a
            #     - b
            _expect(next is not None and next.kind is TokenKind.BLOCK_ENTRY)
            _expect(next.start_mark.line == token.start_mark.line)
            stack.append(Parent(ParentType.B_SEQ, token.start_mark.column))

        case TokenKind.BLOCK_ENTRY if (
            next is not None and next.kind is not TokenKind.BLOCK_ENTRY and not next.is_block_end()
        ):
            if stack[-1].type is not ParentType.B_SEQ:
                stack.append(
                    Parent(ParentType.B_SEQ, token.start_mark.column, implicit_block_seq=True)
                )
            if next.start_mark.line == token.end_mark.line:
                #   - item 1
                indent = next.start_mark.column
            elif next.start_mark.column == token.start_mark.column:
                #   -
                #   key: value
                indent = next.start_mark.column
            else:
                #   -
                #     item 1
                indent = _detect_indent(context, token.start_mark.column, next.start_mark.column)
            stack.append(Parent(ParentType.B_ENT, indent))

        case TokenKind.KEY:
            stack.append(
                Parent(ParentType.KEY, stack[-1].indent, explicit_key=is_explicit_key(token))
            )

        case TokenKind.VALUE:
            _expect(stack[-1].type is ParentType.KEY)
            _expect(prev is not None and next is not None)
            # key: &anchor
            #   value
            if (
                next.kind in _PROPERTIES
                and nextnext is not None
                and next.start_mark.line == prev.start_mark.line
                and next.start_mark.line < nextnext.start_mark.line
            ):
                next = nextnext
            if next.kind not in _EMPTY_VALUE_NEXT:
                indent = _value_indent(context, stack[-1], prev, next)
                stack.append(Parent(ParentType.VAL, indent))


def _pop(token: Token, next: Token | None, stack: list[Parent]) -> None:
    next_kind = next.kind if next is not None else None
    consumed = False
    while True:
        top = stack[-1].type
        if top is ParentType.F_SEQ and token.kind is TokenKind.FLOW_SEQUENCE_END and not consumed:
            stack.pop()
            consumed = True
        elif top is ParentType.F_MAP and token.kind is TokenKind.FLOW_MAPPING_END and not consumed:
            stack.pop()
            consumed = True
        elif (
            top in (ParentType.B_MAP, ParentType.B_SEQ)
            and token.is_block_end()
            and not stack[-1].implicit_block_seq
            and not consumed
        ):
            stack.pop()
            consumed = True
        elif (
            top is ParentType.B_ENT
            and token.kind is not TokenKind.BLOCK_ENTRY
            and stack[-2].implicit_block_seq
            and token.kind not in _PROPERTIES
            and next_kind is not TokenKind.BLOCK_ENTRY
        ):
            stack.pop()
            stack.pop()
        elif top is ParentType.B_ENT and (
            next_kind is TokenKind.BLOCK_ENTRY or (next is not None and next.is_block_end())
        ):
            stack.pop()
        elif (
            top is ParentType.VAL
            and token.kind is not TokenKind.VALUE
            and token.kind not in _PROPERTIES
        ):
            _expect(stack[-2].type is ParentType.KEY)
            stack.pop()
            stack.pop()
        elif top is ParentType.KEY and next_kind in _EMPTY_VALUE_NEXT:
            # A key without a value, as in a set
            stack.pop()
        else:
            break


@RuleRegistry.register
class IndentationRule(TokenRule):
    @property
    def id(self) -> str:
        return "indentation"

    @property
    def conf(self) -> dict[str, OptionSpec]:
        return {
            "spaces": (int, "consistent"),
            "indent-sequences": (bool, "whatever", "consistent"),
            "check-multi-line-strings": bool,
        }

    @property
    def default(self) -> dict[str, Any]:
        return {
            "spaces": "consistent",
            "indent-sequences": True,
            "check-multi-line-strings": False,
        }

    def create_context(self) -> dict[str, Any]:
        return {"stack": [Parent(ParentType.ROOT, 0)], "cur_line": -1, "cur_line_indent": 0}

    def check(
        self,
        conf: dict[str, Any],
        token: Token,
        prev: Token | None,
        next: Token | None,
        nextnext: Token | None,
        context: dict[str, Any],
    ) -> Iterator[LintProblem]:
        try:
            yield from self._check(conf, token, prev, next, nextnext, context)
        except _UnexpectedToken:
            yield LintProblem(
                line=token.start_mark.line + 1,
                column=token.start_mark.column + 1,
                desc="cannot infer indentation: unexpected token",
            )

    def _check(
        self,
        conf: dict[str, Any],
        token: Token,
        prev: Token | None,
        next: Token | None,
        nextnext: Token | None,
        context: dict[str, Any],
    ) -> Iterator[LintProblem]:
        if "spaces" not in context:
            context["spaces"] = conf["spaces"]
            context["indent-sequences"] = conf["indent-sequences"]
        stack: list[Parent] = context["stack"]

        is_visible = (
            token.kind not in (TokenKind.STREAM_START, TokenKind.STREAM_END)
            and not token.is_block_end()
            and not (token.kind is TokenKind.SCALAR and token.value == "")
        )
        first_in_line = is_visible and token.start_mark.line + 1 > context["cur_line"]

        if first_in_line:
            found = token.start_mark.column
            expected = stack[-1].indent
            if token.kind in (TokenKind.FLOW_MAPPING_END, TokenKind.FLOW_SEQUENCE_END):
                expected = stack[-1].line_indent
                _expect(expected is not None)
            elif (
                stack[-1].type is ParentType.KEY
                and stack[-1].explicit_key
                and token.kind is not TokenKind.VALUE
            ):
                expected = _detect_indent(context, expected, found)

            if found != expected:
                if expected < 0:
                    desc = f"wrong indentation: expected at least {found + 1}"
                else:
                    desc = f"wrong indentation: expected {expected} but found {found}"
                yield LintProblem(line=token.start_mark.line + 1, column=found + 1, desc=desc)

        if token.kind is TokenKind.SCALAR and conf["check-multi-line-strings"]:
            yield from check_scalar_indentation(token, context)

        if is_visible:
            context["cur_line"] = get_real_end_line(token)
            if first_in_line:
                context["cur_line_indent"] = token.start_mark.column

        _push(token, prev, next, nextnext, context)
        _pop(token, next, stack)
