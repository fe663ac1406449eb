"""Decoding, tokenizing and comment extraction with exact positions."""

from yamlscope.parser.comments import (
    Comment,
    TokenWindow,
    extract_comments,
    token_or_comment_generator,
)
from yamlscope.parser.decoder import DecodeError, auto_decode, detect_encoding, lines_in_files
from yamlscope.parser.lines import Line, line_generator
from yamlscope.parser.scanner import (
    ParserError,
    ScannerError,
    ScanResult,
    Scanner,
    find_syntax_error,
    scan,
    token_generator,
)
from yamlscope.parser.tokens import Mark, ScalarStyle, Token, TokenKind

__all__ = [
    "Comment",
    "DecodeError",
    "Line",
    "Mark",
    "ParserError",
    "ScalarStyle",
    "ScanResult",
    "Scanner",
    "ScannerError",
    "Token",
    "TokenKind",
    "TokenWindow",
    "auto_decode",
    "detect_encoding",
    "extract_comments",
    "find_syntax_error",
    "line_generator",
    "lines_in_files",
    "scan",
    "token_generator",
    "token_or_comment_generator",
]
