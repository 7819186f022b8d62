"""Consistency checks across several context documents of one repository."""
from __future__ import annotations
import logging
import re
from dataclasses import dataclass
from typing import Sequence

from agents_lint.models import CheckResult, Issue, ParsedDocument

logger = logging.getLogger(__name__)

CHECKER_NAME = "cross-consistency"

# Checked in order; the first family that matches wins for a document
PACKAGE_MANAGER_PATTERNS = [
    ("bun", re.compile(r'\bbun\s+(install|add|run)\b')),
    ("pnpm", re.compile(r'\bpnpm\s+(install|add|run)\b')),
    ("yarn", re.compile(r'\byarn\s+(install|add|run)\b')),
    ("npm", re.compile(r'\bnpm\s+(install|run|ci)\b')),
]

SCRIPT_ROLES = [
    ("test", re.compile(r'^(test|e2e|spec|cypress|jest|vitest)(:.*)?$', re.IGNORECASE)),
    ("build", re.compile(r'^(build|compile|bundle)(:.*)?$', re.IGNORECASE)),
    ("lint", re.compile(r'^(lint|eslint|check)(:.*)?$', re.IGNORECASE)),
    ("dev", re.compile(r'^(dev|development|start|serve)$', re.IGNORECASE)),
]

# Paths with fewer segments are too generic to compare
MIN_PATH_SEGMENTS = 3

MAX_PATH_ASYMMETRIES = 5


@dataclass(frozen=True)
class DocumentContext:
    """One context document, labelled by its path relative to the repository root."""
    relative_path: str
    parsed: ParsedDocument


def detect_package_manager(content: str) -> str | None:
    for family, pattern in PACKAGE_MANAGER_PATTERNS:
        if pattern.search(content):
            return family
    return None


def script_role(script: str) -> str | None:
    for role, pattern in SCRIPT_ROLES:
        if pattern.match(script):
            return role
    return None


def check_cross_consistency(documents: Sequence[DocumentContext]) -> CheckResult:
    """Compare package managers, script roles and deep paths across documents.

    Fewer than two documents yields an empty result. One-sided path
    references beyond MAX_PATH_ASYMMETRIES are counted in
    CheckResult.suppressed instead of being reported.
    """
    result = CheckResult(checker=CHECKER_NAME)
    if len(documents) < 2:
        return result

    _check_package_managers(documents, result)
    _check_script_roles(documents, result)
    _check_path_asymmetry(documents, result)

    result.failed = len(result.issues)
    if result.suppressed:
        logger.debug(f"Suppressed {result.suppressed} path asymmetries beyond the cap")
    return result


def _check_package_managers(documents: Sequence[DocumentContext], result: CheckResult) -> None:
    detected = [
        (doc.relative_path, detect_package_manager(doc.parsed.raw_content))
        for doc in documents
    ]
    families = {family for _, family in detected if family}

    if len(families) < 2:
        result.passed += 1
        return

    result.issues.append(Issue(
        rule="cross-pm-conflict",
        severity="error",
        message="Conflicting package managers referenced across context files",
        context=", ".join(f"{label} → {family}" for label, family in detected if family),
        suggestion="Pick one package manager and update all context files to use it consistently.",
    ))


def _check_script_roles(documents: Sequence[DocumentContext], result: CheckResult) -> None:
    by_document: list[tuple[str, dict[str, list[str]]]] = []
    roles: list[str] = []

    for doc in documents:
        grouped: dict[str, list[str]] = {}
        for script in doc.parsed.mentioned_scripts:
            role = script_role(script)
            if role is None:
                continue
            grouped.setdefault(role, [])
            if script not in grouped[role]:
                grouped[role].append(script)
            if role not in roles:
                roles.append(role)
        by_document.append((doc.relative_path, grouped))

    for role in roles:
        holders = [(label, grouped[role]) for label, grouped in by_document if grouped.get(role)]

        # Only in one file: nothing to compare
        if len(holders) < 2:
            continue

        scripts = {script for _, names in holders for script in names}
        if len(scripts) == 1:
            result.passed += 1
            continue

        result.issues.append(Issue(
            rule=f"cross-script-conflict-{role}",
            severity="warn",
            message=f"Conflicting {role} commands across context files",
            context=" vs ".join(f"{label} → {', '.join(names)}" for label, names in holders),
            suggestion=f"Agents reading different files will use different {role} commands. "
                       f"Align them to use the same command.",
        ))


def _check_path_asymmetry(documents: Sequence[DocumentContext], result: CheckResult) -> None:
    reported = 0

    for doc in documents:
        others = [other for other in documents if other.relative_path != doc.relative_path]
        other_paths = {path for other in others for path in other.parsed.mentioned_paths}
        other_labels = ", ".join(other.relative_path for other in others)
        one_sided = 0

        for path in doc.parsed.mentioned_paths:
            if len([segment for segment in path.split("/") if segment]) < MIN_PATH_SEGMENTS:
                continue
            if any(_related(path, other) for other in other_paths):
                continue

            one_sided += 1
            if reported >= MAX_PATH_ASYMMETRIES:
                result.suppressed += 1
                continue

            reported += 1
            result.issues.append(Issue(
                rule="cross-path-asymmetry",
                severity="info",
                message=f'Path "{path}" referenced in {doc.relative_path} but not in {other_labels}',
                suggestion="Consider documenting this path in all context files, "
                           "or verify it is still relevant.",
            ))

        if one_sided == 0:
            result.passed += 1


def _related(path: str, other: str) -> bool:
    """Same path, or one is an ancestor of the other."""
    return path == other or path.startswith(other + "/") or other.startswith(path + "/")
