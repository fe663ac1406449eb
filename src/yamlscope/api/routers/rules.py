"""Rule listing endpoint: GET /rules."""

from __future__ import annotations

from fastapi import APIRouter

from yamlscope.api.schemas import RuleInfo, RuleListResponse
from yamlscope.rules import RuleRegistry

router = APIRouter()


@router.get("", response_model=RuleListResponse)
async def list_rules() -> RuleListResponse:
    """List all registered rules with their types and option defaults."""
    rules = []
    for rule_id in RuleRegistry.available():
        rule = RuleRegistry.get(rule_id)
        rules.append(RuleInfo(id=rule_id, type=rule.type, options=rule.default))
    return RuleListResponse(rules=rules)
