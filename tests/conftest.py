"""Shared pytest fixtures for all tests."""
import json
import pytest
from pathlib import Path

from agents_lint.doc_validity.reference_extractor import extract
from agents_lint.models import CheckResult, Issue, Report


@pytest.fixture
def repo(tmp_path):
    """Empty repository root."""
    return tmp_path


@pytest.fixture
def write_package_json(repo):
    """Write a package.json into the repository (or a sub-directory of it)."""
    def _write(data, subdir=None):
        target = repo / subdir if subdir else repo
        target.mkdir(parents=True, exist_ok=True)
        path = target / "package.json"
        path.write_text(json.dumps(data), encoding="utf-8")
        return path
    return _write


@pytest.fixture
def write_doc(repo):
    """Write a context document into the repository."""
    def _write(content, name="AGENTS.md"):
        path = repo / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path
    return _write


@pytest.fixture
def parse():
    """Parse document text without touching the filesystem."""
    return extract


def make_report(issues, file="AGENTS.md", checker="filesystem"):
    """Build a minimal report around a list of issues."""
    result = CheckResult(checker=checker, issues=list(issues), failed=len(issues))
    return Report(
        file=file,
        score=50,
        grade="D",
        status="warning",
        results=(result,),
        total_issues=len(issues),
        errors=sum(1 for i in issues if i.severity == "error"),
        warnings=sum(1 for i in issues if i.severity == "warn"),
        infos=sum(1 for i in issues if i.severity == "info"),
        timestamp="2026-01-01T00:00:00+00:00",
    )


def line_issue(line, message="stale reference", severity="error"):
    return Issue(rule="no-missing-path", severity=severity, message=message, line=line)


@pytest.fixture
def report_factory():
    return make_report


@pytest.fixture
def line_issue_factory():
    return line_issue
