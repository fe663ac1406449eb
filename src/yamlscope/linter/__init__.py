"""Rule engine and inline directive handling."""

from yamlscope.linter.engine import (
    RuleExecutionError,
    get_cosmetic_problems,
    get_syntax_error,
    run,
)

__all__ = [
    "RuleExecutionError",
    "get_cosmetic_problems",
    "get_syntax_error",
    "run",
]
