"""Control the use of flow sequences and spacing inside ``[ ]``.

Takes the same options as the ``braces`` rule.
"""

from __future__ import annotations

from yamlscope.parser.tokens import TokenKind
from yamlscope.rules.braces import FlowCollectionRule
from yamlscope.rules.registry import RuleRegistry


@RuleRegistry.register
class BracketsRule(FlowCollectionRule):
    start_kind = TokenKind.FLOW_SEQUENCE_START
    end_kind = TokenKind.FLOW_SEQUENCE_END
    collection = "flow sequence"
    indicators = "brackets"

    @property
    def id(self) -> str:
        return "brackets"
