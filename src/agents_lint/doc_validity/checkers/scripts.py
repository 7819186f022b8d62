"""Script checker: mentioned script commands must be declared in a manifest."""
from __future__ import annotations
import logging
from pathlib import Path

from agents_lint.config import LintConfig
from agents_lint.indexer.manifest import collect_scripts, find_manifests
from agents_lint.models import CheckResult, Issue, ParsedDocument
from .common import locate

logger = logging.getLogger(__name__)

CHECKER_NAME = "npm-scripts"

# Any one of these satisfies the test-script check
TEST_SCRIPT_NAMES = ("test", "test:unit", "test:run")

MAX_SUGGESTED_SCRIPTS = 5


def check_scripts(
    parsed: ParsedDocument,
    repo_root: Path | str,
    config: LintConfig | None = None
) -> CheckResult:
    """Check mentioned scripts against the root manifest and its workspaces.

    A repository without a package.json yields an empty result.
    """
    config = config or LintConfig()
    severity = config.severity.missing_script or "warn"

    manifests = find_manifests(repo_root)
    if not manifests:
        logger.debug(f"No package.json in {repo_root}, skipping script checks")
        return CheckResult(checker=CHECKER_NAME)

    available = collect_scripts(manifests)
    declared = set(available)

    issues: list[Issue] = []
    passed = 0
    failed = 0

    for script in parsed.mentioned_scripts:
        if script in declared:
            passed += 1
            continue

        failed += 1
        line, context = locate(parsed, lambda text, s=script: (
            f"run {s}" in text or f"yarn {s}" in text or f"pnpm {s}" in text
        ))
        suggestion = "Available scripts: " + ", ".join(available[:MAX_SUGGESTED_SCRIPTS])
        if len(available) > MAX_SUGGESTED_SCRIPTS:
            suggestion += "..."

        issues.append(Issue(
            rule="no-missing-script",
            severity=severity,
            message=f'Script "{script}" is mentioned but not found in any package.json',
            line=line,
            context=context,
            suggestion=suggestion,
        ))

    # Agents need a test command to verify their own work
    if any(name in declared for name in TEST_SCRIPT_NAMES):
        passed += 1
    else:
        issues.append(Issue(
            rule="missing-test-script",
            severity="warn",
            message="No test script found in package.json; coding agents need a test command to verify their work",
            suggestion='Add a "test" script to package.json so agents can validate their changes automatically',
        ))

    return CheckResult(
        checker=CHECKER_NAME,
        issues=issues,
        passed=passed,
        failed=failed,
    )
