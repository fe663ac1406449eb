"""YAML tokens and syntax errors, read with ruamel.yaml.

ruamel's pure-Python scanner produces the token stream; this module maps
each of its tokens onto ``yamlscope.parser.tokens`` so that rules see
marks into the shared buffer, scalar styles as ``ScalarStyle`` and block
ends that say which collection they close.  ``find_syntax_error`` runs
ruamel's parser over the whole stream to catch grammar errors that
tokenize cleanly.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

from ruamel.yaml import YAML
from ruamel.yaml import tokens as yaml_tokens
from ruamel.yaml.error import MarkedYAMLError
from ruamel.yaml.parser import ParserError as YAMLParserError
from ruamel.yaml.reader import ReaderError

from yamlscope.parser.tokens import Mark, ScalarStyle, Token, TokenKind

_KINDS: list[tuple[type, TokenKind]] = [
    (yaml_tokens.StreamStartToken, TokenKind.STREAM_START),
    (yaml_tokens.StreamEndToken, TokenKind.STREAM_END),
    (yaml_tokens.DirectiveToken, TokenKind.DIRECTIVE),
    (yaml_tokens.DocumentStartToken, TokenKind.DOCUMENT_START),
    (yaml_tokens.DocumentEndToken, TokenKind.DOCUMENT_END),
    (yaml_tokens.BlockSequenceStartToken, TokenKind.BLOCK_SEQUENCE_START),
    (yaml_tokens.BlockMappingStartToken, TokenKind.BLOCK_MAPPING_START),
    (yaml_tokens.FlowSequenceStartToken, TokenKind.FLOW_SEQUENCE_START),
    (yaml_tokens.FlowMappingStartToken, TokenKind.FLOW_MAPPING_START),
    (yaml_tokens.FlowSequenceEndToken, TokenKind.FLOW_SEQUENCE_END),
    (yaml_tokens.FlowMappingEndToken, TokenKind.FLOW_MAPPING_END),
    (yaml_tokens.KeyToken, TokenKind.KEY),
    (yaml_tokens.ValueToken, TokenKind.VALUE),
    (yaml_tokens.BlockEntryToken, TokenKind.BLOCK_ENTRY),
    (yaml_tokens.FlowEntryToken, TokenKind.FLOW_ENTRY),
    (yaml_tokens.AliasToken, TokenKind.ALIAS),
    (yaml_tokens.AnchorToken, TokenKind.ANCHOR),
    (yaml_tokens.TagToken, TokenKind.TAG),
    (yaml_tokens.ScalarToken, TokenKind.SCALAR),
]

_STYLES = {
    None: ScalarStyle.PLAIN,
    "": ScalarStyle.PLAIN,
    "'": ScalarStyle.SINGLE_QUOTED,
    '"': ScalarStyle.DOUBLE_QUOTED,
    "|": ScalarStyle.LITERAL,
    ">": ScalarStyle.FOLDED,
}


def _loader() -> YAML:
    return YAML(typ="safe", pure=True)


class ScannerError(Exception):
    """Raised on malformed YAML lexical structure.

    ``problem_mark`` locates the offending character; ``context_mark``,
    when set, points at the construct being scanned (e.g. the opening
    quote of an unterminated string).
    """

    def __init__(
        self,
        problem: str,
        problem_mark: Mark,
        context: str | None = None,
        context_mark: Mark | None = None,
    ) -> None:
        self.problem = problem
        self.problem_mark = problem_mark
        self.context = context
        self.context_mark = context_mark
        super().__init__(str(self))

    @property
    def line(self) -> int:
        """0-based line of the problem."""
        return self.problem_mark.line

    @property
    def column(self) -> int:
        """0-based column of the problem."""
        return self.problem_mark.column

    def __str__(self) -> str:
        parts = []
        if self.context is not None:
            parts.append(self.context)
        if self.context_mark is not None and (
            self.context_mark.line != self.problem_mark.line
            or self.context_mark.column != self.problem_mark.column
        ):
            parts.append(f"  in {self.context_mark}")
        parts.append(self.problem)
        parts.append(f"  in {self.problem_mark}")
        return "\n".join(parts)


class ParserError(ScannerError):
    """Raised on input that tokenizes but is not a valid YAML stream."""


def _mark(yaml_mark: Any, buffer: str) -> Mark:
    return Mark(yaml_mark.line, yaml_mark.column, yaml_mark.index, buffer)


def _offset_mark(buffer: str, offset: int) -> Mark:
    line_start = buffer.rfind("\n", 0, offset) + 1
    return Mark(buffer.count("\n", 0, offset), offset - line_start, offset, buffer)


def _convert_error(exc: MarkedYAMLError | ReaderError, buffer: str) -> ScannerError:
    if isinstance(exc, ReaderError):
        if isinstance(exc.character, int):
            problem = f"unacceptable character #x{exc.character:04x}: {exc.reason}"
        else:
            problem = exc.reason
        return ScannerError(problem, _offset_mark(buffer, exc.position))

    error_class = ParserError if isinstance(exc, YAMLParserError) else ScannerError
    problem_mark = exc.problem_mark or exc.context_mark
    return error_class(
        exc.problem or exc.context or "invalid YAML",
        _mark(problem_mark, buffer) if problem_mark is not None else Mark(0, 0, 0, buffer),
        exc.context,
        _mark(exc.context_mark, buffer) if exc.context_mark is not None else None,
    )


class Scanner:
    """Pull-based tokenizer over one decoded buffer.

    ``get_token`` returns tokens in document order; iteration yields them
    until ``STREAM_END``.  A ``ScannerError`` ends the stream: tokens
    returned before it remain valid.
    """

    def __init__(self, buffer: str) -> None:
        self.buffer = buffer
        self.tokens: list[Token] = []
        self.tokens_taken = 0
        # Open block collections, innermost last
        self._blocks: list[TokenKind] = []
        self._source = self._convert(_loader().scan(buffer))

    def _convert(self, source: Iterator[Any]) -> Iterator[Token]:
        try:
            for yaml_token in source:
                yield self._token(yaml_token)
        except (MarkedYAMLError, ReaderError) as exc:
            raise _convert_error(exc, self.buffer) from exc

    def _kind(self, yaml_token: Any) -> TokenKind:
        if isinstance(yaml_token, yaml_tokens.BlockEndToken):
            return self._blocks.pop()
        for token_class, kind in _KINDS:
            if isinstance(yaml_token, token_class):
                break
        else:
            raise TypeError(f"unexpected token {yaml_token!r}")
        if kind is TokenKind.BLOCK_MAPPING_START:
            self._blocks.append(TokenKind.BLOCK_MAPPING_END)
        elif kind is TokenKind.BLOCK_SEQUENCE_START:
            self._blocks.append(TokenKind.BLOCK_SEQUENCE_END)
        return kind

    def _token(self, yaml_token: Any) -> Token:
        kind = self._kind(yaml_token)
        start_mark = _mark(yaml_token.start_mark, self.buffer)
        end_mark = _mark(yaml_token.end_mark, self.buffer)
        match kind:
            case TokenKind.SCALAR:
                return Token(
                    kind, start_mark, end_mark,
                    value=yaml_token.value, style=_STYLES[yaml_token.style],
                )
            case TokenKind.ANCHOR | TokenKind.ALIAS:
                return Token(kind, start_mark, end_mark, value=yaml_token.value)
            case TokenKind.TAG:
                handle, suffix = yaml_token.value
                return Token(kind, start_mark, end_mark, handle=handle, suffix=suffix)
            case TokenKind.DIRECTIVE:
                args = tuple(yaml_token.value) if yaml_token.value is not None else None
                return Token(
                    kind, start_mark, end_mark, value=yaml_token.name, directive_args=args
                )
        return Token(kind, start_mark, end_mark)

    def _fill(self) -> None:
        if not self.tokens:
            token = next(self._source, None)
            if token is not None:
                self.tokens.append(token)

    def check_token(self, *kinds: TokenKind) -> bool:
        self._fill()
        if not self.tokens:
            return False
        return not kinds or self.tokens[0].kind in kinds

    def peek_token(self) -> Token | None:
        self._fill()
        return self.tokens[0] if self.tokens else None

    def get_token(self) -> Token | None:
        self._fill()
        if not self.tokens:
            return None
        self.tokens_taken += 1
        return self.tokens.pop(0)

    def __iter__(self) -> Iterator[Token]:
        while True:
            token = self.get_token()
            if token is None:
                return
            yield token


def token_generator(buffer: str) -> Iterator[Token]:
    """Yield the tokens of ``buffer`` in document order.

    Raises ``ScannerError`` after the last valid token when the input is
    lexically malformed.
    """
    yield from Scanner(buffer)


@dataclass
class ScanResult:
    """All tokens scanned from one buffer, and the error that stopped it."""

    tokens: list[Token]
    error: ScannerError | None = None

    @property
    def end_offset(self) -> int:
        """Offset up to which the buffer was tokenized."""
        if self.error is not None:
            return self.error.problem_mark.offset
        return self.tokens[-1].end_mark.offset if self.tokens else 0


def scan(buffer: str) -> ScanResult:
    """Tokenize ``buffer`` completely, keeping tokens read before an error."""
    result = ScanResult(tokens=[])
    scanner = Scanner(buffer)
    try:
        for token in scanner:
            result.tokens.append(token)
    except ScannerError as exc:
        result.error = exc
    return result


def find_syntax_error(buffer: str) -> ScannerError | None:
    """Parse every document of ``buffer``; return the first error found.

    Lexical errors come back as ``ScannerError``, grammar errors such as an
    unclosed flow collection or a key indented out of its mapping as
    ``ParserError``.
    """
    try:
        for _event in _loader().parse(buffer):
            pass
    except (MarkedYAMLError, ReaderError) as exc:
        return _convert_error(exc, buffer)
    return None
