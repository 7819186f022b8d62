"""Framework staleness checker driven by the YAML ruleset."""
from __future__ import annotations
import logging
from pathlib import Path

from agents_lint.config import LintConfig
from agents_lint.doc_validity.ruleset import StalenessRule, StalenessRuleset, load_staleness_rules
from agents_lint.indexer.manifest import collect_dependencies
from agents_lint.models import CheckResult, Issue, ParsedDocument
from .common import locate

logger = logging.getLogger(__name__)

CHECKER_NAME = "framework-staleness"

# Framework detection only looks at runtime and dev dependencies
DETECTION_CATEGORIES = ("dependencies", "devDependencies")


def check_framework(
    parsed: ParsedDocument,
    repo_root: Path | str,
    config: LintConfig | None = None,
    ruleset: StalenessRuleset | None = None
) -> CheckResult:
    """Look for superseded idioms of the frameworks the project actually uses.

    Each family rule that does not match counts one pass. The general
    runtime-version checks apply to every project and only add issues.
    """
    config = config or LintConfig()
    ruleset = ruleset or load_staleness_rules()
    severity = config.severity.stale_framework or "warn"

    dependencies = collect_dependencies(repo_root, DETECTION_CATEGORIES)
    families = ruleset.detect_families(dependencies or set(), has_manifest=dependencies is not None)
    logger.debug(f"Detected framework families in {repo_root}: {families}")

    issues: list[Issue] = []
    passed = 0

    for family in families:
        for rule in ruleset.get_rules_for_family(family):
            if rule.search(parsed.raw_content):
                issues.append(_rule_issue(parsed, rule, severity))
            else:
                passed += 1

    for rule in ruleset.general_checks:
        if rule.search(parsed.raw_content):
            issues.append(_rule_issue(parsed, rule, severity))

    return CheckResult(
        checker=CHECKER_NAME,
        issues=issues,
        passed=passed,
        failed=len(issues),
    )


def _rule_issue(parsed: ParsedDocument, rule: StalenessRule, severity: str) -> Issue:
    line, context = locate(parsed, rule.search)
    return Issue(
        rule=rule.id,
        severity=severity,
        message=rule.message,
        line=line,
        context=context,
        suggestion=rule.suggestion or None,
    )
