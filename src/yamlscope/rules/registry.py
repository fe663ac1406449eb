"""Rule plugin registry: discover and register rule implementations."""

from __future__ import annotations

from yamlscope.rules.base import Rule


class UnknownRuleError(Exception):
    """Raised when a requested rule is not registered."""

    def __init__(self, rule_id: str, available: list[str]) -> None:
        self.rule_id = rule_id
        self.available = available
        super().__init__(f'no such rule: "{rule_id}"')


class RuleRegistry:
    """Registry for lint rule plugins."""

    _rules: dict[str, Rule] = {}

    @classmethod
    def register(cls, rule_class: type[Rule]) -> type[Rule]:
        """Register a rule class. Can be used as a decorator."""
        # Rules are stateless; one shared instance per id
        instance = rule_class()
        cls._rules[instance.id] = instance
        return rule_class

    @classmethod
    def get(cls, rule_id: str) -> Rule:
        """Get the registered instance of the named rule."""
        if rule_id not in cls._rules:
            raise UnknownRuleError(rule_id, available=cls.available())
        return cls._rules[rule_id]

    @classmethod
    def available(cls) -> list[str]:
        """List registered rule ids."""
        return sorted(cls._rules.keys())
