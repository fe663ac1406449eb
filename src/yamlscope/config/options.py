"""Validation of rule options against the rule's declared schema.

Each rule's ``conf`` schema is turned into a strict pydantic model (one
per rule, cached) so that option values are checked before any document
is scanned.
"""

from __future__ import annotations

from functools import cache
from typing import Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, create_model

from yamlscope.rules.base import OptionSpec, Rule


def _annotation(spec: OptionSpec) -> Any:
    """Translate an option spec into a type annotation."""
    if isinstance(spec, list):
        return list[_annotation(spec[0])]
    if isinstance(spec, tuple):
        types = [item for item in spec if isinstance(item, type)]
        literals = tuple(item for item in spec if not isinstance(item, type))
        members: list[Any] = list(types)
        if literals:
            members.append(Literal[literals])
        if len(members) == 1:
            return members[0]
        return Union[tuple(members)]  # noqa: UP007
    return spec


def describe(spec: OptionSpec) -> str:
    """Human-readable form of an option spec for error messages."""
    if isinstance(spec, list):
        return f"a list of {describe(spec[0])}"
    if isinstance(spec, tuple):
        items = [item.__name__ if isinstance(item, type) else repr(item) for item in spec]
        return "in (" + ", ".join(items) + ")"
    return spec.__name__


@cache
def options_model(rule: Rule) -> type[BaseModel]:
    """Build (once) the pydantic model validating ``rule``'s options."""
    fields: dict[str, Any] = {
        name.replace("-", "_"): (_annotation(spec), Field(alias=name))
        for name, spec in rule.conf.items()
    }
    model_name = "".join(part.capitalize() for part in rule.id.split("-")) + "Options"
    return create_model(
        model_name,
        __config__=ConfigDict(strict=True, extra="forbid", populate_by_name=False),
        **fields,
    )


class OptionError(ValueError):
    """An option is unknown or has a value outside its spec."""

    def __init__(self, option: str, reason: str) -> None:
        self.option = option
        self.reason = reason
        super().__init__(reason)


def validate_options(rule: Rule, options: dict[str, Any]) -> dict[str, Any]:
    """Check ``options`` (defaults already merged in) against ``rule.conf``.

    Returns the options unchanged on success; raises ``OptionError`` for
    the first offending option.
    """
    try:
        options_model(rule).model_validate(options)
    except ValidationError as exc:
        error = exc.errors()[0]
        option = str(error["loc"][0]) if error["loc"] else ""
        if error["type"] == "extra_forbidden":
            raise OptionError(option, f'unknown option "{option}" for rule "{rule.id}"') from exc
        spec = rule.conf.get(option)
        expected = describe(spec) if spec is not None else error["msg"]
        raise OptionError(
            option, f'option "{option}" of "{rule.id}" should be {expected}'
        ) from exc
    return options
