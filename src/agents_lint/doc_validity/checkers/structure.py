"""Structure and quality checker.

Looks only at the document itself: recommended sections, configured required
sections, length, leftover TODO markers, old year references and (when
configured) how long ago the file was last touched.
"""
from __future__ import annotations
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable

from agents_lint.config import LintConfig
from agents_lint.models import CheckResult, Issue, ParsedDocument

CHECKER_NAME = "structure"

MIN_CONTENT_LENGTH = 100
MAX_CONTENT_LENGTH = 15000
MAX_TODO_MARKERS = 3

TODO_PATTERN = re.compile(r'TODO|FIXME|XXX|HACK', re.IGNORECASE)
OLD_YEAR_PATTERN = re.compile(r'\b(201[0-9]|202[0-3])\b')


@dataclass(frozen=True)
class SectionRequirement:
    """A section the document should contain, found by keyword."""
    keywords: tuple[str, ...]
    rule: str
    message: str
    suggestion: str
    severity: str


@dataclass(frozen=True)
class QualityCheck:
    """A whole-document heuristic; check returns True when the issue applies."""
    check: Callable[[ParsedDocument], bool]
    rule: str
    severity: str
    message: str
    suggestion: str


RECOMMENDED_SECTIONS = [
    SectionRequirement(
        keywords=('setup', 'install', 'getting started', 'quick start', 'prerequisites'),
        rule='missing-setup-section',
        message='No setup/installation section found',
        suggestion='Add a "Setup" or "Getting Started" section explaining how to install '
                   'dependencies and configure the environment.',
        severity='warn',
    ),
    SectionRequirement(
        keywords=('test', 'testing', 'run tests', 'unit test', 'e2e'),
        rule='missing-test-section',
        message='No testing section found; agents need to know how to run tests to verify their changes',
        suggestion='Add a "Testing" section with the exact commands to run tests '
                   '(e.g., `npm test` or `npm run test:unit`).',
        severity='warn',
    ),
    SectionRequirement(
        keywords=('build', 'compile', 'bundle'),
        rule='missing-build-section',
        message='No build section found',
        suggestion='Add a "Build" section with the command to build the project (e.g., `npm run build`).',
        severity='info',
    ),
]

QUALITY_CHECKS = [
    QualityCheck(
        check=lambda parsed: len(parsed.raw_content) < MIN_CONTENT_LENGTH,
        rule='too-short',
        severity='warn',
        message='Context file is very short (< 100 characters); agents may lack sufficient context',
        suggestion='Add more context about your project structure, conventions, and workflows.',
    ),
    QualityCheck(
        check=lambda parsed: len(parsed.raw_content) > MAX_CONTENT_LENGTH,
        rule='too-long',
        severity='info',
        message='Context file is very long (> 15,000 characters); context bloat increases cost by 20%+',
        suggestion='Trim to only non-discoverable information. Remove sections that describe '
                   'things agents can infer from code.',
    ),
    QualityCheck(
        check=lambda parsed: len(TODO_PATTERN.findall(parsed.raw_content)) > MAX_TODO_MARKERS,
        rule='too-many-todos',
        severity='info',
        message='Context file contains multiple TODO/FIXME markers; stale notes can mislead agents',
        suggestion='Resolve TODOs or remove them from AGENTS.md. Outdated notes are worse than no notes.',
    ),
    QualityCheck(
        check=lambda parsed: OLD_YEAR_PATTERN.search(parsed.raw_content) is not None,
        rule='old-year-reference',
        severity='info',
        message='Context file references years before 2024; may contain stale information',
        suggestion='Review and update any time-sensitive references.',
    ),
]


def section_slug(name: str) -> str:
    """'Code Style' -> 'code-style'"""
    return re.sub(r'\s+', '-', name.strip().lower())


def custom_section_requirement(name: str, severity: str) -> SectionRequirement:
    return SectionRequirement(
        keywords=(name.lower(),),
        rule=f'missing-custom-section-{section_slug(name)}',
        message=f'Required section "{name}" not found',
        suggestion=f'Add a "{name}" section as required by your .agents-lint.json config.',
        severity=severity,
    )


def check_structure(
    parsed: ParsedDocument,
    repo_root: Path | str | None = None,
    config: LintConfig | None = None,
    now: datetime | None = None
) -> CheckResult:
    """Check the document's sections and overall quality.

    Args:
        parsed: Parsed context document
        repo_root: Unused; accepted so every checker shares one signature
        config: Lint configuration (required sections, severity, file age)
        now: Reference time for the file-age check (defaults to the current UTC time)

    Returns:
        CheckResult with failed == len(issues)
    """
    config = config or LintConfig()
    override = config.severity.missing_section

    requirements = list(RECOMMENDED_SECTIONS)
    for name in config.required_sections:
        requirements.append(custom_section_requirement(name, override or 'warn'))

    titles = [section.title.lower() for section in parsed.sections]
    content_lower = parsed.raw_content.lower()

    issues: list[Issue] = []
    passed = 0

    for requirement in requirements:
        found = any(
            any(keyword in title for title in titles) or keyword in content_lower
            for keyword in requirement.keywords
        )
        if found:
            passed += 1
            continue

        issues.append(Issue(
            rule=requirement.rule,
            severity=override or requirement.severity,
            message=requirement.message,
            suggestion=requirement.suggestion,
        ))

    for quality_check in QUALITY_CHECKS:
        if quality_check.check(parsed):
            issues.append(Issue(
                rule=quality_check.rule,
                severity=quality_check.severity,
                message=quality_check.message,
                suggestion=quality_check.suggestion,
            ))
        else:
            passed += 1

    if config.max_file_age_days and parsed.modified_at:
        now = now or datetime.now(timezone.utc)
        age_days = (now - parsed.modified_at).days
        if age_days > config.max_file_age_days:
            issues.append(Issue(
                rule='stale-file',
                severity='info',
                message=f'Context file was last modified {age_days} days ago '
                        f'(limit: {config.max_file_age_days})',
                suggestion='Review the file against the current state of the project and update it.',
            ))
        else:
            passed += 1

    return CheckResult(
        checker=CHECKER_NAME,
        issues=issues,
        passed=passed,
        failed=len(issues),
    )
