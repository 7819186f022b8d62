"""Lint orchestration.

Runs the extractor, the five checkers and the scorer for one context document,
and for every document in a repository followed by the cross-document check.
"""
from __future__ import annotations
import asyncio
import logging
import os
from datetime import datetime, timezone
from pathlib import Path

from agents_lint.config import LintConfig, load_lint_config
from agents_lint.errors import NoContextDocumentError
from agents_lint.indexer.doc_scanner import discover_context_documents, find_context_document
from agents_lint.models import CheckResult, MultiReport, ParsedDocument, Report
from .checkers import CHECKERS, DocumentContext, check_cross_consistency
from .reference_extractor import parse_document
from .ruleset import load_staleness_rules
from .scorer import compute_overall_score, compute_score, get_status, score_grade

logger = logging.getLogger(__name__)


def lint_document(
    file_path: Path | str | None = None,
    repo_root: Path | str | None = None,
    config: LintConfig | None = None
) -> Report:
    """Lint one context document.

    Args:
        file_path: Document to lint; discovered in repo_root when omitted
        repo_root: Repository root (defaults to the current directory)
        config: Lint configuration; loaded from repo_root when omitted

    Returns:
        Report for the document

    Raises:
        NoContextDocumentError: If no document is found or it cannot be read
    """
    repo_root = Path(repo_root or Path.cwd()).resolve()
    if config is None:
        config = load_lint_config(repo_root)

    path = Path(file_path) if file_path else find_context_document(repo_root)
    if not path.is_absolute():
        path = repo_root / path

    parsed = _read_document(path, repo_root)
    return build_report(parsed, path, repo_root, config)


def build_report(
    parsed: ParsedDocument,
    file_path: Path,
    repo_root: Path,
    config: LintConfig
) -> Report:
    """Run every checker over a parsed document and score the results."""
    results = [checker(parsed, repo_root, config) for checker in CHECKERS]

    issues = [issue for result in results for issue in result.issues]
    score = compute_score(results)

    report = Report(
        file=_relative_label(file_path, repo_root),
        score=score,
        grade=score_grade(score),
        status=get_status(score),
        results=tuple(results),
        total_issues=len(issues),
        errors=sum(1 for issue in issues if issue.severity == "error"),
        warnings=sum(1 for issue in issues if issue.severity == "warn"),
        infos=sum(1 for issue in issues if issue.severity == "info"),
        timestamp=datetime.now(timezone.utc).isoformat(),
        ruleset=_ruleset_label(),
    )

    logger.debug(f"Linted {report.file}: score={score} issues={report.total_issues}")
    return report


async def lint_all(
    repo_root: Path | str | None = None,
    config: LintConfig | None = None
) -> MultiReport:
    """Lint every context document in a repository concurrently.

    Each document is linted in a worker thread; the cross-document check runs
    once all of them have finished.

    Raises:
        NoContextDocumentError: If the repository has no context document
    """
    repo_root = Path(repo_root or Path.cwd()).resolve()
    if config is None:
        config = load_lint_config(repo_root)

    paths = discover_context_documents(repo_root)
    logger.info(f"Linting {len(paths)} context document(s) in {repo_root}")

    parsed_documents = await asyncio.gather(*[
        asyncio.to_thread(_read_document, path, repo_root) for path in paths
    ])
    reports = await asyncio.gather(*[
        asyncio.to_thread(build_report, parsed, path, repo_root, config)
        for parsed, path in zip(parsed_documents, paths)
    ])

    cross: CheckResult | None = None
    if len(paths) > 1:
        cross = check_cross_consistency([
            DocumentContext(report.file, parsed)
            for report, parsed in zip(reports, parsed_documents)
        ])

    cross_issues = cross.issues if cross else []

    return MultiReport(
        files=tuple(report.file for report in reports),
        reports=tuple(reports),
        cross=cross,
        overall_score=compute_overall_score(reports, cross),
        total_errors=sum(r.errors for r in reports) + sum(1 for i in cross_issues if i.severity == "error"),
        total_warnings=sum(r.warnings for r in reports) + sum(1 for i in cross_issues if i.severity == "warn"),
        total_infos=sum(r.infos for r in reports) + sum(1 for i in cross_issues if i.severity == "info"),
    )


def _read_document(path: Path, repo_root: Path) -> ParsedDocument:
    try:
        return parse_document(path)
    except FileNotFoundError as e:
        raise NoContextDocumentError(
            repo_root,
            hint=f"{path} disappeared before it could be read."
        ) from e
    except (OSError, UnicodeDecodeError) as e:
        raise NoContextDocumentError(
            repo_root,
            hint=f"{path} could not be read: {e}"
        ) from e


def _ruleset_label() -> str:
    ruleset = load_staleness_rules()
    return f"{ruleset.version}+{ruleset.content_hash}"


def _relative_label(file_path: Path, repo_root: Path) -> str:
    try:
        return Path(os.path.relpath(file_path, repo_root)).as_posix()
    except ValueError:
        # Different drive on Windows
        return file_path.as_posix()
