"""Dependency checker: mentioned packages must be installed; installed ones should not be deprecated."""
from __future__ import annotations
import logging
from pathlib import Path

from agents_lint.config import LintConfig
from agents_lint.doc_validity.ruleset import StalenessRuleset, load_staleness_rules
from agents_lint.indexer.manifest import collect_dependencies
from agents_lint.models import CheckResult, Issue, ParsedDocument
from .common import locate_text

logger = logging.getLogger(__name__)

CHECKER_NAME = "dependencies"

# Generic ecosystem nouns that prose mentions without implying an install
EXEMPT_NAMES = {"react", "angular", "vue", "node", "typescript", "javascript"}


def check_dependencies(
    parsed: ParsedDocument,
    repo_root: Path | str,
    config: LintConfig | None = None,
    ruleset: StalenessRuleset | None = None
) -> CheckResult:
    """Check mentioned dependencies and flag deprecated installed packages.

    A missing or malformed package.json yields an empty result.
    """
    config = config or LintConfig()
    ruleset = ruleset or load_staleness_rules()
    stale_severity = config.severity.stale_dependency or "info"

    installed = collect_dependencies(repo_root)
    if installed is None:
        logger.debug(f"No usable package.json in {repo_root}, skipping dependency checks")
        return CheckResult(checker=CHECKER_NAME)

    issues: list[Issue] = []
    passed = 0
    failed = 0

    for dependency in parsed.mentioned_dependencies:
        if config.is_ignored(dependency):
            continue

        if _is_installed(dependency, installed):
            passed += 1
            continue

        if dependency.lower() in EXEMPT_NAMES:
            continue

        failed += 1
        line, context = locate_text(parsed, dependency, ignore_case=True)
        issues.append(Issue(
            rule="no-missing-dependency",
            severity="warn",
            message=f'Package "{dependency}" is mentioned but not found in package.json',
            line=line,
            context=context,
            suggestion=f'Either add "{dependency}" to package.json or remove the reference from this context file',
        ))

    # Deprecated packages are reported whether or not the document mentions them
    for package, replacement in ruleset.deprecated_packages.items():
        if package not in installed:
            continue

        failed += 1
        line, context = locate_text(parsed, package)
        issues.append(Issue(
            rule="deprecated-dependency",
            severity=stale_severity,
            message=f'Package "{package}" is deprecated',
            line=line,
            context=context,
            suggestion=f"Consider migrating to: {replacement}",
        ))

    return CheckResult(
        checker=CHECKER_NAME,
        issues=issues,
        passed=passed,
        failed=failed,
    )


def _is_installed(dependency: str, installed: set[str]) -> bool:
    """Exact name, its @types/ package, or a case-insensitive substring of an installed name."""
    if dependency in installed or f"@types/{dependency}" in installed:
        return True
    normalized = dependency.lower().removeprefix("@types/")
    return any(normalized in name.lower() for name in installed)
