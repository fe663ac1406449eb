"""Token and position types produced by the scanner."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum


class TokenKind(StrEnum):
    """Lexical token kinds of the YAML grammar."""

    STREAM_START = "StreamStart"
    STREAM_END = "StreamEnd"
    DOCUMENT_START = "DocumentStart"
    DOCUMENT_END = "DocumentEnd"
    DIRECTIVE = "Directive"
    ANCHOR = "Anchor"
    ALIAS = "Alias"
    TAG = "Tag"
    SCALAR = "Scalar"
    KEY = "Key"
    VALUE = "Value"
    BLOCK_ENTRY = "BlockEntry"
    BLOCK_SEQUENCE_START = "BlockSequenceStart"
    BLOCK_SEQUENCE_END = "BlockSequenceEnd"
    BLOCK_MAPPING_START = "BlockMappingStart"
    BLOCK_MAPPING_END = "BlockMappingEnd"
    FLOW_SEQUENCE_START = "FlowSequenceStart"
    FLOW_SEQUENCE_END = "FlowSequenceEnd"
    FLOW_MAPPING_START = "FlowMappingStart"
    FLOW_MAPPING_END = "FlowMappingEnd"
    FLOW_ENTRY = "FlowEntry"


class ScalarStyle(StrEnum):
    """Presentation style of a scalar token."""

    PLAIN = "plain"
    SINGLE_QUOTED = "single-quoted"
    DOUBLE_QUOTED = "double-quoted"
    LITERAL = "literal"
    FOLDED = "folded"

    @property
    def is_quoted(self) -> bool:
        return self in (ScalarStyle.SINGLE_QUOTED, ScalarStyle.DOUBLE_QUOTED)


BLOCK_END_KINDS = frozenset({TokenKind.BLOCK_SEQUENCE_END, TokenKind.BLOCK_MAPPING_END})
COLLECTION_START_KINDS = frozenset({
    TokenKind.BLOCK_SEQUENCE_START,
    TokenKind.BLOCK_MAPPING_START,
    TokenKind.FLOW_SEQUENCE_START,
    TokenKind.FLOW_MAPPING_START,
})


@dataclass(frozen=True)
class Mark:
    """A position in the decoded buffer.

    ``line`` and ``column`` are 0-based; ``offset`` indexes ``buffer``.
    """

    line: int
    column: int
    offset: int
    buffer: str = field(default="", compare=False, repr=False)

    def __str__(self) -> str:
        return f"line {self.line + 1}, column {self.column + 1}"

    def snippet(self, indent: int = 4, max_length: int = 75) -> str:
        """Return the source line around the mark with a caret under it."""
        start = self.buffer.rfind("\n", 0, self.offset) + 1
        end = self.buffer.find("\n", self.offset)
        if end == -1:
            end = len(self.buffer)
        head, tail = "", ""
        if self.offset - start > max_length // 2:
            head = " ... "
            start = self.offset - max_length // 2 + 5
        if end - self.offset > max_length // 2:
            tail = " ... "
            end = self.offset + max_length // 2 - 5
        text = self.buffer[start:end]
        return (
            " " * indent + head + text + tail + "\n"
            + " " * (indent + self.offset - start + len(head)) + "^"
        )


@dataclass(frozen=True)
class Token:
    """A typed lexical unit with start and end marks.

    ``value`` holds the directive name, anchor or alias name, or the
    decoded scalar value depending on ``kind``.  Tags carry ``handle`` and
    ``suffix``; directives carry ``directive_args``.
    """

    kind: TokenKind
    start_mark: Mark
    end_mark: Mark
    value: str | None = None
    style: ScalarStyle | None = None
    handle: str | None = None
    suffix: str | None = None
    directive_args: tuple[str, ...] | tuple[int, int] | None = None

    @property
    def plain(self) -> bool:
        return self.style is ScalarStyle.PLAIN

    def is_block_end(self) -> bool:
        return self.kind in BLOCK_END_KINDS

    def __repr__(self) -> str:
        extra = f" {self.value!r}" if self.value is not None else ""
        return f"<{self.kind}{extra} @{self.start_mark.line + 1}:{self.start_mark.column + 1}>"
