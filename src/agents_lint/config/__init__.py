"""Configuration management for agents-lint."""
from .lint import (
    CONFIG_FILES,
    LintConfig,
    SeverityOverrides,
    load_lint_config,
)
from .settings import Settings, load_settings

__all__ = [
    "CONFIG_FILES",
    "LintConfig",
    "SeverityOverrides",
    "load_lint_config",
    "Settings",
    "load_settings",
]
