"""Filesystem checker: mentioned paths must exist under the repository root."""
from __future__ import annotations
import logging
from pathlib import Path

from agents_lint.config import LintConfig
from agents_lint.models import CheckResult, Issue, ParsedDocument
from .common import locate, locate_text

logger = logging.getLogger(__name__)

CHECKER_NAME = "filesystem"

# Conventional top-level directories worth a dedicated warning
COMMON_DIRS = ["src", "lib", "dist", "build", "packages", "apps"]

# URLs, environment variables and home-relative paths are not repo locations
SKIP_PREFIXES = ("http", "$", "~")


def check_filesystem(
    parsed: ParsedDocument,
    repo_root: Path | str,
    config: LintConfig | None = None
) -> CheckResult:
    """Verify that every path the document mentions exists on disk.

    Args:
        parsed: Parsed context document
        repo_root: Repository root that relative paths resolve against
        config: Lint configuration (ignore patterns, severity override)

    Returns:
        CheckResult; failed counts missing paths only, directory warnings are
        reported as issues without a matching failure
    """
    config = config or LintConfig()
    repo_root = Path(repo_root)
    severity = config.severity.missing_path or "error"

    issues: list[Issue] = []
    passed = 0
    failed = 0

    for mentioned_path in parsed.mentioned_paths:
        if mentioned_path.startswith(SKIP_PREFIXES):
            continue
        if config.is_ignored(mentioned_path):
            continue

        if _path_exists(repo_root, mentioned_path):
            passed += 1
            continue

        failed += 1
        line, context = locate_text(parsed, mentioned_path)
        issues.append(Issue(
            rule="no-missing-path",
            severity=severity,
            message=f'Path does not exist: "{mentioned_path}"',
            line=line,
            context=context,
            suggestion="Remove this reference or update it to the correct path. "
                       "Did the directory get renamed or deleted?",
        ))

    # Common directory patterns that might have changed
    for directory in COMMON_DIRS:
        def mentions(text: str, d: str = directory) -> bool:
            return f"/{d}/" in text or f"./{d}" in text

        line, context = locate(parsed, mentions)
        if line is None or _safe_exists(repo_root / directory):
            continue

        # Don't double-report if already caught above
        if any(f"/{directory}" in issue.message for issue in issues):
            continue

        issues.append(Issue(
            rule="no-missing-directory",
            severity="warn",
            message=f'Directory "/{directory}" is referenced but does not exist in the repo root',
            line=line,
            context=context,
            suggestion="Check if the project structure has changed since this AGENTS.md was written.",
        ))

    return CheckResult(
        checker=CHECKER_NAME,
        issues=issues,
        passed=passed,
        failed=failed,
    )


def _path_exists(repo_root: Path, mentioned_path: str) -> bool:
    # Leading '/' means "from the repository root" in context documents
    relative = mentioned_path.lstrip("/") or "."
    return _safe_exists(repo_root / relative)


def _safe_exists(path: Path) -> bool:
    try:
        return path.exists()
    except OSError as e:
        logger.debug(f"Could not stat {path}: {e}")
        return False
