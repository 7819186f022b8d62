"""Ruleset loader for framework staleness and deprecated packages."""

from __future__ import annotations
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Any
import hashlib
import re
import yaml


DEFAULT_RULESET_PATH = Path(__file__).parent / "rules" / "staleness_rules.yaml"


@dataclass(frozen=True)
class StalenessRule:
    """A single stale-pattern rule."""
    id: str
    pattern: re.Pattern
    message: str
    suggestion: str
    family: str | None = None

    def search(self, text: str) -> bool:
        return self.pattern.search(text) is not None


@dataclass
class StalenessRuleset:
    """Complete staleness ruleset."""
    version: str
    framework_detection: dict[str, str]
    fallback_family: str | None
    frameworks: dict[str, list[StalenessRule]]
    general_checks: list[StalenessRule]
    deprecated_packages: dict[str, str]
    content_hash: str
    source_path: Path = field(default=DEFAULT_RULESET_PATH)

    def get_rules_for_family(self, family: str) -> list[StalenessRule]:
        """Get the stale-pattern rules for a framework family."""
        return list(self.frameworks.get(family, []))

    def detect_families(self, dependencies: set[str], has_manifest: bool = True) -> list[str]:
        """Map installed dependency names to framework families.

        Families come back in ruleset order; the fallback family applies only
        when a manifest exists and nothing else matched.
        """
        detected: list[str] = []
        for dependency, family in self.framework_detection.items():
            if dependency in dependencies and family not in detected:
                detected.append(family)

        if not detected and has_manifest and self.fallback_family:
            detected.append(self.fallback_family)

        return detected


def load_staleness_rules(ruleset_path: str | Path | None = None) -> StalenessRuleset:
    """Load staleness rules from a YAML file.

    Args:
        ruleset_path: Path to YAML ruleset file, or None to use the packaged default

    Returns:
        Parsed StalenessRuleset
    """
    if ruleset_path is None:
        return _load_default_rules()
    return _load_rules(Path(ruleset_path))


@lru_cache(maxsize=1)
def _load_default_rules() -> StalenessRuleset:
    return _load_rules(DEFAULT_RULESET_PATH)


def _load_rules(path: Path) -> StalenessRuleset:
    raw_data = path.read_text(encoding="utf-8")
    data = yaml.safe_load(raw_data) or {}

    # Calculate content hash so reports can be tied to a ruleset revision
    content_hash = hashlib.sha256(raw_data.encode()).hexdigest()[:16]

    frameworks = {
        family: _parse_rules(rules or [], family)
        for family, rules in (data.get("frameworks") or {}).items()
    }

    return StalenessRuleset(
        version=str(data.get("version", "1.0")),
        framework_detection=dict(data.get("framework_detection") or {}),
        fallback_family=data.get("fallback_family"),
        frameworks=frameworks,
        general_checks=_parse_rules(data.get("general_checks") or [], None),
        deprecated_packages=dict(data.get("deprecated_packages") or {}),
        content_hash=content_hash,
        source_path=path,
    )


def _parse_rules(rules_data: list[dict[str, Any]], family: str | None) -> list[StalenessRule]:
    """Parse rule dictionaries into StalenessRule objects."""
    rules = []

    for rule_data in rules_data:
        flags = re.IGNORECASE if rule_data.get("ignore_case") else 0
        rules.append(StalenessRule(
            id=rule_data["id"],
            pattern=re.compile(rule_data["pattern"], flags),
            message=rule_data["message"],
            suggestion=rule_data.get("suggestion", ""),
            family=family,
        ))

    return rules
