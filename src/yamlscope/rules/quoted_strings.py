"""Require or forbid quotes around string values.

``quote-type`` is ``any``, ``single``, ``double`` or ``consistent`` (the
style of the first quoted string).  ``required`` is ``true`` (strings
must be quoted), ``false`` (quotes are optional but must match
``quote-type``) or ``only-when-needed`` (quotes are reported when the
string would read the same unquoted).  ``extra-required`` and
``extra-allowed`` are regular expressions that require or allow quotes
for matching strings.  Keys are checked only with ``check-keys``.

Plain scalars that resolve to something other than a string under YAML
1.1 (numbers, booleans, null, timestamps) are not strings and are left
alone, as are block scalars and values with a ``!!`` tag.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from typing import Any

from ruamel.yaml.nodes import ScalarNode
from ruamel.yaml.resolver import VersionedResolver

from yamlscope.models.problems import LintProblem
from yamlscope.parser.scanner import Scanner, ScannerError
from yamlscope.parser.tokens import ScalarStyle, Token, TokenKind
from yamlscope.rules.base import OptionSpec, TokenRule
from yamlscope.rules.registry import RuleRegistry

_RESOLVER = VersionedResolver(version=(1, 1))

_SCALAR_PREV = (
    TokenKind.BLOCK_ENTRY,
    TokenKind.FLOW_ENTRY,
    TokenKind.FLOW_SEQUENCE_START,
    TokenKind.TAG,
    TokenKind.VALUE,
    TokenKind.KEY,
)
_FLOW_STARTS = (TokenKind.FLOW_MAPPING_START, TokenKind.FLOW_SEQUENCE_START)
_FLOW_ENDS = (TokenKind.FLOW_MAPPING_END, TokenKind.FLOW_SEQUENCE_END)
_FLOW_INDICATORS = frozenset(",[]{}")


def resolves_to_string(value: str) -> bool:
    """True when ``value`` written as a plain scalar loads as a string."""
    tag = _RESOLVER.resolve(ScalarNode, value, (True, False))
    return tag == _RESOLVER.DEFAULT_SCALAR_TAG


def quotes_are_needed(value: str, is_inside_a_flow: bool) -> bool:
    """True when ``value`` cannot be written as the same plain scalar."""
    if is_inside_a_flow and _FLOW_INDICATORS.intersection(value):
        return True
    scanner = Scanner("key: " + value)
    try:
        # STREAM_START, BLOCK_MAPPING_START, KEY, "key", VALUE
        for _ in range(5):
            scanner.get_token()
        scalar, after = scanner.get_token(), scanner.get_token()
    except ScannerError:
        return True
    return not (
        scalar is not None
        and scalar.kind is TokenKind.SCALAR
        and scalar.plain
        and scalar.value == value
        and after is not None
        and after.kind is TokenKind.BLOCK_MAPPING_END
    )


def has_quoted_quotes(token: Token) -> bool:
    return (token.style is ScalarStyle.SINGLE_QUOTED and '"' in token.value) or (
        token.style is ScalarStyle.DOUBLE_QUOTED and "'" in token.value
    )


def has_backslash_line_ending(token: Token) -> bool:
    """True for a multi-line double-quoted string escaping a line break."""
    if token.style is not ScalarStyle.DOUBLE_QUOTED:
        return False
    if token.start_mark.line == token.end_mark.line:
        return False
    source = token.start_mark.buffer[token.start_mark.offset + 1:token.end_mark.offset - 1]
    return "\\\n" in source or "\\\r\n" in source


@RuleRegistry.register
class QuotedStringsRule(TokenRule):
    @property
    def id(self) -> str:
        return "quoted-strings"

    @property
    def conf(self) -> dict[str, OptionSpec]:
        return {
            "quote-type": ("any", "single", "double", "consistent"),
            "required": (bool, "only-when-needed"),
            "extra-required": [str],
            "extra-allowed": [str],
            "allow-quoted-quotes": bool,
            "check-keys": bool,
        }

    @property
    def default(self) -> dict[str, Any]:
        return {
            "quote-type": "any",
            "required": True,
            "extra-required": [],
            "extra-allowed": [],
            "allow-quoted-quotes": False,
            "check-keys": False,
        }

    def validate(self, conf: dict[str, Any]) -> str | None:
        if conf["required"] is True and conf["extra-allowed"]:
            return 'cannot use both "required: true" and "extra-allowed"'
        if conf["required"] is True and conf["extra-required"]:
            return 'cannot use both "required: true" and "extra-required"'
        if conf["required"] is False and conf["extra-allowed"]:
            return 'cannot use both "required: false" and "extra-allowed"'
        for pattern in (*conf["extra-required"], *conf["extra-allowed"]):
            try:
                re.compile(pattern)
            except re.error as exc:
                return f'invalid regular expression "{pattern}": {exc}'
        return None

    def create_context(self) -> dict[str, Any]:
        return {"flow_nest_count": 0, "consistent_style": None}

    def _quote_match(
        self, quote_type: str, style: ScalarStyle, context: dict[str, Any]
    ) -> bool:
        if quote_type == "consistent":
            # The first quoted string sets the style
            if context["consistent_style"] is None:
                context["consistent_style"] = style
            return style is context["consistent_style"]
        return (
            quote_type == "any"
            or (quote_type == "single" and style is ScalarStyle.SINGLE_QUOTED)
            or (quote_type == "double" and style is ScalarStyle.DOUBLE_QUOTED)
        )

    def _wrongly_quoted(
        self, conf: dict[str, Any], token: Token, context: dict[str, Any]
    ) -> bool:
        return not self._quote_match(conf["quote-type"], token.style, context) and not (
            conf["allow-quoted-quotes"] and has_quoted_quotes(token)
        )

    def check(
        self,
        conf: dict[str, Any],
        token: Token,
        prev: Token | None,
        next: Token | None,
        nextnext: Token | None,
        context: dict[str, Any],
    ) -> Iterator[LintProblem]:
        if token.kind in _FLOW_STARTS:
            context["flow_nest_count"] += 1
        elif token.kind in _FLOW_ENDS:
            context["flow_nest_count"] -= 1

        if token.kind is not TokenKind.SCALAR or prev is None or prev.kind not in _SCALAR_PREV:
            return

        node = "key" if prev.kind is TokenKind.KEY else "value"
        if node == "key" and not conf["check-keys"]:
            return

        # Explicit types: !!str foo, !!int 42
        if prev.kind is TokenKind.TAG and prev.handle == "!!":
            return

        # Numbers, booleans, null and timestamps
        if token.plain and not resolves_to_string(token.value):
            return
        if token.style in (ScalarStyle.LITERAL, ScalarStyle.FOLDED):
            return

        quoted = token.style.is_quoted
        quote_type = conf["quote-type"]
        extra_required = any(re.search(p, token.value) for p in conf["extra-required"])

        desc = None
        if conf["required"] is True:
            if not quoted or self._wrongly_quoted(conf, token, context):
                desc = f"string {node} is not quoted with {quote_type} quotes"

        elif conf["required"] is False:
            if quoted and self._wrongly_quoted(conf, token, context):
                desc = f"string {node} is not quoted with {quote_type} quotes"
            elif not quoted and extra_required:
                desc = f"string {node} is not quoted"

        elif conf["required"] == "only-when-needed":
            if (
                quoted
                and token.value
                and resolves_to_string(token.value)
                and not quotes_are_needed(token.value, context["flow_nest_count"] > 0)
                and not has_backslash_line_ending(token)
            ):
                extra_allowed = any(re.search(p, token.value) for p in conf["extra-allowed"])
                if not (extra_required or extra_allowed):
                    desc = f"string {node} is redundantly quoted with {quote_type} quotes"
            elif quoted and self._wrongly_quoted(conf, token, context):
                desc = f"string {node} is not quoted with {quote_type} quotes"
            elif not quoted and extra_required:
                desc = f"string {node} is not quoted"

        if desc is not None:
            yield LintProblem(
                line=token.start_mark.line + 1,
                column=token.start_mark.column + 1,
                desc=desc,
            )
