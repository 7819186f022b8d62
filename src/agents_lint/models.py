"""Core data records shared by the extractor, checkers, scorer and reporters."""
from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Literal

Severity = Literal["error", "warn", "info"]

SEVERITIES: tuple[str, ...] = ("error", "warn", "info")


@dataclass(frozen=True)
class Section:
    """A heading-delimited region of a context document."""
    title: str                 # Trimmed heading text
    content: str               # Body lines, each terminated by '\n'
    start_line: int            # 0-based index of the heading line
    end_line: int              # 0-based index of the last line (inclusive)


@dataclass(frozen=True)
class ParsedDocument:
    """Immutable snapshot of one context document and the facts found in it."""
    raw_content: str
    lines: tuple[str, ...]
    sections: tuple[Section, ...] = ()
    mentioned_paths: tuple[str, ...] = ()
    mentioned_scripts: tuple[str, ...] = ()
    mentioned_dependencies: tuple[str, ...] = ()
    mentioned_frameworks: tuple[str, ...] = ()
    source_path: Path | None = None
    modified_at: datetime | None = None


@dataclass(frozen=True)
class Issue:
    """One finding produced by a checker."""
    rule: str                          # Stable rule identifier, e.g. 'no-missing-path'
    severity: Severity
    message: str
    line: int | None = None            # 1-based line in the document
    context: str | None = None         # Verbatim (trimmed) source line
    suggestion: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "rule": self.rule,
            "severity": self.severity,
            "message": self.message,
        }
        if self.line is not None:
            data["line"] = self.line
        if self.context is not None:
            data["context"] = self.context
        if self.suggestion is not None:
            data["suggestion"] = self.suggestion
        return data


@dataclass
class CheckResult:
    """Output of a single checker."""
    checker: str
    issues: list[Issue] = field(default_factory=list)
    passed: int = 0
    failed: int = 0
    suppressed: int = 0                # Findings withheld by a reporting cap

    def count(self, severity: str) -> int:
        return sum(1 for issue in self.issues if issue.severity == severity)

    def to_dict(self) -> dict[str, Any]:
        return {
            "checker": self.checker,
            "issues": [issue.to_dict() for issue in self.issues],
            "passed": self.passed,
            "failed": self.failed,
            "suppressed": self.suppressed,
        }


@dataclass(frozen=True)
class Report:
    """Aggregated lint results for one context document."""
    file: str                          # Path relative to the repository root
    score: int                         # 0-100 freshness score
    grade: str                         # A-F
    status: str                        # 'fresh', 'warning', 'stale'
    results: tuple[CheckResult, ...]
    total_issues: int
    errors: int
    warnings: int
    infos: int
    timestamp: str                     # ISO-8601, UTC
    ruleset: str = ""                  # Staleness ruleset "<version>+<content hash>"

    @property
    def issues(self) -> list[Issue]:
        return [issue for result in self.results for issue in result.issues]

    def to_dict(self) -> dict[str, Any]:
        return {
            "file": self.file,
            "score": self.score,
            "grade": self.grade,
            "status": self.status,
            "results": [result.to_dict() for result in self.results],
            "totalIssues": self.total_issues,
            "errors": self.errors,
            "warnings": self.warnings,
            "infos": self.infos,
            "timestamp": self.timestamp,
            "ruleset": self.ruleset,
        }


@dataclass(frozen=True)
class MultiReport:
    """Lint results for every context document discovered in a repository."""
    files: tuple[str, ...]
    reports: tuple[Report, ...]
    cross: CheckResult | None
    overall_score: int
    total_errors: int
    total_warnings: int
    total_infos: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "files": list(self.files),
            "overallScore": self.overall_score,
            "totalErrors": self.total_errors,
            "totalWarnings": self.total_warnings,
            "totalInfos": self.total_infos,
            "reports": [report.to_dict() for report in self.reports],
            "cross": self.cross.to_dict() if self.cross else None,
        }
