"""Score calculation for context document freshness.

Combines the pass rate of all checks with a per-issue severity penalty into a
single 0-100 freshness score.
"""
from __future__ import annotations
import math
from typing import Iterable, Sequence

from agents_lint.models import CheckResult, Issue, Report

# Points deducted per issue
SEVERITY_WEIGHTS = {
    'error': 15,
    'warn': 7,
    'info': 2,
}

# Grade bands (lower bound, grade), checked in order
GRADE_BANDS = [
    (90, 'A'),
    (80, 'B'),
    (70, 'C'),
    (50, 'D'),
]

# Thresholds for status
FRESH_THRESHOLD = 80
WARNING_THRESHOLD = 50


def calculate_penalty(issues: Iterable[Issue]) -> int:
    """Sum the severity weights of issues."""
    return sum(SEVERITY_WEIGHTS.get(issue.severity, 0) for issue in issues)


def compute_score(results: Sequence[CheckResult]) -> int:
    """Calculate the freshness score for one document.

    Args:
        results: Every checker's result for the document

    Returns:
        Score from 0 to 100; 100 when no check applied at all
    """
    total_passed = sum(result.passed for result in results)
    total_checks = sum(result.passed + result.failed for result in results)

    if total_checks == 0:
        # Nothing applicable - nothing contradicts the document
        return 100

    base = 100 * total_passed / total_checks
    penalty = calculate_penalty(issue for result in results for issue in result.issues)

    return _clamp(base - penalty)


def compute_overall_score(reports: Sequence[Report], cross: CheckResult | None = None) -> int:
    """Mean of the per-document scores minus the cross-document penalty."""
    if not reports:
        return 100

    mean = sum(report.score for report in reports) / len(reports)
    penalty = calculate_penalty(cross.issues) if cross else 0

    return _clamp(mean - penalty)


def score_grade(score: int) -> str:
    """Letter grade for a score."""
    for lower_bound, grade in GRADE_BANDS:
        if score >= lower_bound:
            return grade
    return 'F'


def get_status(score: int) -> str:
    """Get status label for a score.

    Args:
        score: Freshness score (0-100)

    Returns:
        Status: 'fresh', 'warning', or 'stale'
    """
    if score >= FRESH_THRESHOLD:
        return 'fresh'
    elif score >= WARNING_THRESHOLD:
        return 'warning'
    else:
        return 'stale'


def _clamp(value: float) -> int:
    # Half-up rounding
    return max(0, min(100, math.floor(value + 0.5)))
