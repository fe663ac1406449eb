"""Lint configuration files and rule option validation."""

from yamlscope.config.config import (
    YamlLintConfig,
    YamlLintConfigError,
    find_project_config,
    get_extended_config_file,
    path_spec,
    user_global_config,
    validate_rule_conf,
)

__all__ = [
    "YamlLintConfig",
    "YamlLintConfigError",
    "find_project_config",
    "get_extended_config_file",
    "path_spec",
    "user_global_config",
    "validate_rule_conf",
]
