"""Tests for freshness scoring."""
import pytest
from dataclasses import replace

from agents_lint.doc_validity.scorer import (
    compute_overall_score,
    compute_score,
    get_status,
    score_grade,
)
from agents_lint.models import CheckResult, Issue


def issue(severity):
    return Issue(rule="r", severity=severity, message="m")


class TestComputeScore:
    """Test the pass-rate minus penalty formula."""

    def test_no_checks_is_perfect(self):
        assert compute_score([]) == 100
        assert compute_score([CheckResult(checker="x")]) == 100

    def test_all_passed(self):
        assert compute_score([CheckResult(checker="x", passed=5)]) == 100

    def test_penalty_weights(self):
        results = [CheckResult(
            checker="x",
            issues=[issue("error"), issue("warn"), issue("info")],
            passed=10,
            failed=0,
        )]
        # 100 - (15 + 7 + 2)
        assert compute_score(results) == 76

    def test_base_from_pass_rate(self):
        results = [
            CheckResult(checker="a", passed=6, failed=1, issues=[issue("warn")]),
            CheckResult(checker="b", passed=0, failed=2, issues=[issue("error"), issue("error")]),
        ]
        base = 100 * 6 / 9
        assert compute_score(results) == round(base - (15 * 2 + 7))

    def test_clamped_at_zero(self):
        results = [CheckResult(checker="x", issues=[issue("error")] * 10, failed=10)]
        assert compute_score(results) == 0

    def test_half_rounds_up(self):
        # 29 / 40 = 72.5%
        assert compute_score([CheckResult(checker="x", passed=29, failed=11)]) == 73

    def test_adding_an_issue_never_increases_score(self):
        issues = []
        previous = compute_score([CheckResult(checker="x", passed=8, failed=2)])
        for severity in ["info", "warn", "error", "info", "error"]:
            issues.append(issue(severity))
            current = compute_score([CheckResult(checker="x", issues=list(issues), passed=8, failed=2)])
            assert 0 <= current <= previous
            previous = current


class TestGradeAndStatus:
    """Test grade bands and status labels."""

    @pytest.mark.parametrize("score,grade", [
        (100, "A"), (90, "A"), (89, "B"), (80, "B"), (79, "C"),
        (70, "C"), (69, "D"), (50, "D"), (49, "F"), (0, "F"),
    ])
    def test_grade_bands(self, score, grade):
        assert score_grade(score) == grade

    @pytest.mark.parametrize("score,status", [
        (100, "fresh"), (80, "fresh"), (79, "warning"), (50, "warning"), (49, "stale"),
    ])
    def test_status(self, score, status):
        assert get_status(score) == status


class TestOverallScore:
    """Test the multi-document score."""

    def test_mean_of_documents(self, report_factory):
        reports = [replace(report_factory([]), score=s) for s in (80, 61)]
        assert compute_overall_score(reports) == 71

    def test_cross_penalty(self, report_factory):
        report = report_factory([])
        cross = CheckResult(checker="cross-consistency", issues=[issue("error")], failed=1)
        # report_factory reports score 50
        assert compute_overall_score([report], cross) == 35

    def test_no_reports(self):
        assert compute_overall_score([]) == 100
