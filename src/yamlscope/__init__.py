"""yamlscope: a position-exact YAML linter."""

__version__ = "0.4.0"
