"""Lint configuration loading and validation.

Loads the optional JSON sidecar (.agents-lint.json) from the repository root.
An absent, malformed or invalid file silently yields the defaults.
"""
from __future__ import annotations
import json
import logging
from pathlib import Path
from typing import Literal, Optional
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

logger = logging.getLogger(__name__)

CONFIG_FILES = [".agents-lint.json", ".agents-lint.config.json"]

SeverityName = Literal["error", "warn", "info"]


class SeverityOverrides(BaseModel):
    """Per-rule-family severity overrides."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    missing_path: Optional[SeverityName] = Field(None, alias="missingPath")
    missing_script: Optional[SeverityName] = Field(None, alias="missingScript")
    stale_dependency: Optional[SeverityName] = Field(None, alias="staleDependency")
    stale_framework: Optional[SeverityName] = Field(None, alias="staleFramework")
    missing_section: Optional[SeverityName] = Field(None, alias="missingSection")


class LintConfig(BaseModel):
    """Complete lint configuration."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    severity: SeverityOverrides = Field(default_factory=SeverityOverrides)
    ignore_patterns: list[str] = Field(
        default_factory=list,
        alias="ignorePatterns",
        description="Substrings of paths/dependencies to skip"
    )
    required_sections: list[str] = Field(
        default_factory=list,
        alias="requiredSections",
        description="Extra section names the document must contain"
    )
    max_file_age_days: Optional[int] = Field(
        None,
        ge=1,
        alias="maxFileAgeDays",
        description="Flag the document when it was last modified longer ago than this"
    )

    @field_validator("ignore_patterns", "required_sections")
    @classmethod
    def drop_blank_entries(cls, v: list[str]) -> list[str]:
        """Blank strings would match everything (or nothing useful)."""
        return [item for item in v if item and item.strip()]

    def is_ignored(self, value: str) -> bool:
        """Check whether a path or dependency name matches an ignore pattern."""
        return any(pattern in value for pattern in self.ignore_patterns)

    @classmethod
    def from_json(cls, path: str | Path) -> LintConfig:
        """Load configuration from a JSON file.

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If the file is not valid JSON or fails validation
        """
        config_path = Path(path)
        raw = config_path.read_text(encoding="utf-8")

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise ValueError(f"Malformed JSON in {config_path}: {e}") from e

        if not isinstance(data, dict):
            raise ValueError(f"Configuration in {config_path} must be a JSON object")

        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise ValueError(f"Invalid configuration in {config_path}: {e}") from e


def load_lint_config(
    repo_root: str | Path,
    config_path: str | Path | None = None
) -> LintConfig:
    """Load lint configuration for a repository.

    Args:
        repo_root: Repository root searched for the default config file names
        config_path: Optional explicit path to a config file

    Returns:
        LintConfig (defaults when nothing usable is found)
    """
    candidates = [Path(config_path)] if config_path else [
        Path(repo_root) / name for name in CONFIG_FILES
    ]

    for candidate in candidates:
        if not candidate.is_file():
            continue
        try:
            config = LintConfig.from_json(candidate)
        except (OSError, ValueError) as e:
            logger.debug(f"Ignoring unusable config {candidate}: {e}")
            return LintConfig()
        logger.debug(f"Loaded lint config from {candidate}")
        return config

    return LintConfig()
