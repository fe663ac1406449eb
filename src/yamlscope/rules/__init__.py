"""Lint rule plugin system for yamlscope."""

# Import rules to trigger registration
import yamlscope.rules.anchors as _anchors  # noqa: F401
import yamlscope.rules.braces as _braces  # noqa: F401
import yamlscope.rules.brackets as _brackets  # noqa: F401
import yamlscope.rules.colons as _colons  # noqa: F401
import yamlscope.rules.commas as _commas  # noqa: F401
import yamlscope.rules.comments as _comments  # noqa: F401
import yamlscope.rules.comments_indentation as _comments_indentation  # noqa: F401
import yamlscope.rules.document_end as _document_end  # noqa: F401
import yamlscope.rules.document_start as _document_start  # noqa: F401
import yamlscope.rules.empty_lines as _empty_lines  # noqa: F401
import yamlscope.rules.empty_values as _empty_values  # noqa: F401
import yamlscope.rules.float_values as _float_values  # noqa: F401
import yamlscope.rules.hyphens as _hyphens  # noqa: F401
import yamlscope.rules.indentation as _indentation  # noqa: F401
import yamlscope.rules.key_duplicates as _key_duplicates  # noqa: F401
import yamlscope.rules.key_ordering as _key_ordering  # noqa: F401
import yamlscope.rules.line_length as _line_length  # noqa: F401
import yamlscope.rules.new_line_at_end_of_file as _new_line_at_end_of_file  # noqa: F401
import yamlscope.rules.new_lines as _new_lines  # noqa: F401
import yamlscope.rules.octal_values as _octal_values  # noqa: F401
import yamlscope.rules.quoted_strings as _quoted_strings  # noqa: F401
import yamlscope.rules.trailing_spaces as _trailing_spaces  # noqa: F401
import yamlscope.rules.truthy as _truthy  # noqa: F401
from yamlscope.rules.base import CommentRule, LineRule, OptionSpec, Rule, RuleType, TokenRule
from yamlscope.rules.registry import RuleRegistry, UnknownRuleError

__all__ = [
    "CommentRule",
    "LineRule",
    "OptionSpec",
    "Rule",
    "RuleRegistry",
    "RuleType",
    "TokenRule",
    "UnknownRuleError",
]
