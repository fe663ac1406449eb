"""Lint configuration: parsing, ``extends`` inheritance and validation."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from pathspec import PathSpec
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from yamlscope.config.options import OptionError, validate_options
from yamlscope.rules import Rule, RuleRegistry, UnknownRuleError

logger = logging.getLogger("yamlscope.config")

_BUILTIN_DIR = Path(__file__).parent / "conf"
_PROJECT_CONFIG_FILES = (".yamllint", ".yamllint.yaml", ".yamllint.yml")
_RESERVED_RULE_KEYS = ("ignore", "ignore-from-file", "level")


class YamlLintConfigError(Exception):
    """Raised for malformed or invalid lint configuration."""


def _load_yaml(content: str) -> Any:
    yaml = YAML(typ="safe", pure=True)
    return yaml.load(content)


def path_spec(lines: Iterable[str]) -> PathSpec:
    """Compile gitignore-style path patterns."""
    return PathSpec.from_lines("gitwildmatch", lines)


def _read_patterns(filenames: Any, message: str) -> PathSpec:
    """Build patterns from the lines of one or more ignore files."""
    if isinstance(filenames, str):
        filenames = [filenames]
    if not isinstance(filenames, list) or not all(isinstance(f, str) for f in filenames):
        raise YamlLintConfigError(f"invalid config: {message}")
    lines: list[str] = []
    for filename in filenames:
        try:
            lines.extend(Path(filename).read_text(encoding="utf-8").splitlines())
        except OSError as exc:
            raise YamlLintConfigError(f"invalid config: cannot read {filename}: {exc}") from exc
    return path_spec(lines)


def _patterns(value: Any) -> PathSpec:
    if isinstance(value, PathSpec):
        return value
    if isinstance(value, str):
        return path_spec(value.splitlines())
    if isinstance(value, list) and all(isinstance(line, str) for line in value):
        return path_spec(value)
    raise YamlLintConfigError("invalid config: ignore should contain file patterns")


def validate_rule_conf(rule: Rule, conf: Any) -> dict[str, Any] | bool:
    """Validate one rule entry and fill in the option defaults.

    ``False`` means the rule is disabled.  The returned mapping always
    holds ``level`` and every option of the rule.
    """
    if conf is False:
        return False
    if not isinstance(conf, dict):
        raise YamlLintConfigError(
            f'invalid config: rule "{rule.id}": should be either "enable", "disable" or a dict'
        )

    conf = dict(conf)
    if "ignore-from-file" in conf and not isinstance(conf["ignore-from-file"], PathSpec):
        conf["ignore"] = _read_patterns(
            conf.pop("ignore-from-file"),
            "ignore-from-file should contain valid filename(s), either as a list or string",
        )
    elif "ignore" in conf:
        conf["ignore"] = _patterns(conf["ignore"])

    level = conf.setdefault("level", "error")
    if level not in ("error", "warning"):
        raise YamlLintConfigError('invalid config: level should be "error" or "warning"')

    options = {key: value for key, value in conf.items() if key not in _RESERVED_RULE_KEYS}
    merged = {**rule.default, **options}
    try:
        validate_options(rule, merged)
    except OptionError as exc:
        raise YamlLintConfigError(f"invalid config: {exc}") from exc
    conf.update(merged)

    message = rule.validate(conf)
    if message:
        raise YamlLintConfigError(f"invalid config: {rule.id}: {message}")
    return conf


def get_extended_config_file(name: str) -> Path:
    """Resolve an ``extends`` value to a built-in or user config file."""
    # Built-in configs are plain names without a path separator
    if "/" not in name and os.sep not in name:
        builtin = _BUILTIN_DIR / f"{name}.yaml"
        if builtin.is_file():
            return builtin
    return Path(name).expanduser()


class YamlLintConfig:
    """A fully resolved and validated lint configuration.

    Exactly one of ``content`` (YAML text) or ``file`` must be given.
    """

    def __init__(self, content: str | None = None, file: str | Path | None = None) -> None:
        if (content is None) == (file is None):
            raise ValueError("exactly one of content or file is required")

        self.ignore: PathSpec | None = None
        self.yaml_files = path_spec(["*.yaml", "*.yml", ".yamllint"])
        self.locale: str | None = None
        self.rules: dict[str, Any] = {}

        if file is not None:
            try:
                content = Path(file).read_text(encoding="utf-8")
            except OSError as exc:
                raise YamlLintConfigError(f"invalid config: cannot read {file}: {exc}") from exc

        self.parse(content)
        self.validate()

    @classmethod
    def builtin(cls, name: str = "default") -> YamlLintConfig:
        """Load one of the shipped configurations (``default``, ``relaxed``)."""
        return cls(file=_BUILTIN_DIR / f"{name}.yaml")

    # -- queries -------------------------------------------------------------

    def is_file_ignored(self, filepath: str | Path) -> bool:
        return self.ignore is not None and self.ignore.match_file(str(filepath))

    def is_yaml_file(self, filepath: str | Path) -> bool:
        return self.yaml_files.match_file(Path(filepath).name)

    def enabled_rules(self, filepath: str | Path | None = None) -> list[Rule]:
        """Rules that apply to ``filepath`` (or to any input when None)."""
        enabled = []
        for rule_id, conf in self.rules.items():
            if conf is False:
                continue
            ignore = conf.get("ignore")
            if filepath is not None and ignore is not None and ignore.match_file(str(filepath)):
                continue
            enabled.append(RuleRegistry.get(rule_id))
        return enabled

    # -- building ------------------------------------------------------------

    def extend(self, base_config: YamlLintConfig) -> None:
        """Merge this config's rules over ``base_config``'s."""
        rules = {key: dict(value) if isinstance(value, dict) else value
                 for key, value in base_config.rules.items()}
        for rule_id, conf in self.rules.items():
            if isinstance(conf, dict) and isinstance(rules.get(rule_id), dict):
                rules[rule_id].update(conf)
            else:
                rules[rule_id] = conf
        self.rules = rules

        if base_config.ignore is not None:
            self.ignore = base_config.ignore
        self.yaml_files = base_config.yaml_files
        self.locale = base_config.locale

    def parse(self, raw_content: str) -> None:
        try:
            conf = _load_yaml(raw_content)
        except YAMLError as exc:
            raise YamlLintConfigError(f"invalid config: {exc}") from exc

        if not isinstance(conf, dict):
            raise YamlLintConfigError("invalid config: not a dict")

        rules = conf.get("rules") or {}
        if not isinstance(rules, dict):
            raise YamlLintConfigError("invalid config: rules should be a dict")
        self.rules = {}
        for rule_id, value in rules.items():
            if value == "enable":
                value = {}
            elif value == "disable":
                value = False
            self.rules[rule_id] = value

        if "extends" in conf:
            if not isinstance(conf["extends"], str):
                raise YamlLintConfigError("invalid config: extends should be a string")
            path = get_extended_config_file(conf["extends"])
            logger.debug("Config extends %s (%s)", conf["extends"], path)
            self.extend(YamlLintConfig(file=path))

        if "ignore" in conf and "ignore-from-file" in conf:
            raise YamlLintConfigError(
                "invalid config: ignore and ignore-from-file keys cannot be used together"
            )
        if "ignore-from-file" in conf:
            self.ignore = _read_patterns(
                conf["ignore-from-file"],
                "ignore-from-file should contain filename(s), either as a list or string",
            )
        elif "ignore" in conf:
            self.ignore = _patterns(conf["ignore"])

        if "yaml-files" in conf:
            files = conf["yaml-files"]
            if not isinstance(files, list) or not all(isinstance(f, str) for f in files):
                raise YamlLintConfigError(
                    "invalid config: yaml-files should be a list of file patterns"
                )
            self.yaml_files = path_spec(files)

        if "locale" in conf:
            if not isinstance(conf["locale"], str):
                raise YamlLintConfigError("invalid config: locale should be a string")
            self.locale = conf["locale"]

    def validate(self) -> None:
        for rule_id in list(self.rules):
            try:
                rule = RuleRegistry.get(rule_id)
            except UnknownRuleError as exc:
                raise YamlLintConfigError(f"invalid config: {exc}") from exc
            self.rules[rule_id] = validate_rule_conf(rule, self.rules[rule_id])


def find_project_config(start: Path | None = None) -> Path | None:
    """Look for a project config file from ``start`` up to the home directory."""
    directory = (start or Path.cwd()).resolve()
    home = Path.home().resolve()
    while True:
        for name in _PROJECT_CONFIG_FILES:
            candidate = directory / name
            if candidate.is_file():
                return candidate
        if directory == home or directory.parent == directory:
            return None
        directory = directory.parent


def user_global_config(config_file: str | None = None) -> Path | None:
    """Return the user-wide config file, if one exists."""
    if config_file:
        return Path(config_file).expanduser()
    xdg_home = os.environ.get("XDG_CONFIG_HOME") or str(Path.home() / ".config")
    candidate = Path(xdg_home) / "yamllint" / "config"
    return candidate if candidate.is_file() else None
