"""Tests for text and JSON report rendering."""
import json

from agents_lint.models import CheckResult, Issue, MultiReport
from agents_lint.reports import (
    checker_title,
    format_json,
    format_multi_json,
    format_multi_report,
    format_report,
)


def sample_issues():
    return [
        Issue(rule="no-missing-path", severity="error", message='Path "./src/gone" does not exist',
              line=4, context="See `./src/gone`"),
        Issue(rule="missing-test-section", severity="warn", message="No testing section found",
              suggestion="Add a Testing section"),
    ]


def sample_multi(report_factory, cross=None):
    reports = (report_factory(sample_issues()), report_factory([], file="CLAUDE.md"))
    return MultiReport(
        files=("AGENTS.md", "CLAUDE.md"),
        reports=reports,
        cross=cross,
        overall_score=50,
        total_errors=1,
        total_warnings=1,
        total_infos=0,
    )


# =============================================================================
# Text Output
# =============================================================================

class TestTextReport:
    """Test the human-readable renderer."""

    def test_plain_output_has_no_escape_codes(self, report_factory):
        text = format_report(report_factory(sample_issues()), color=False)

        assert "\x1b[" not in text
        assert "File: AGENTS.md" in text
        assert "50/100 (D)" in text
        assert 'Path "./src/gone" does not exist:4' in text
        assert "→ Add a Testing section" in text
        assert "1 error  1 warning  0 info" in text

    def test_color_output(self, report_factory):
        assert "\x1b[31m" in format_report(report_factory(sample_issues()), color=True)

    def test_quiet_shows_only_errors(self, report_factory):
        text = format_report(report_factory(sample_issues()), quiet=True)

        assert "does not exist" in text
        assert "No testing section found" not in text

    def test_no_issues(self, report_factory):
        text = format_report(report_factory([]))
        assert "✓ No issues found!" in text

    def test_verdict_follows_status(self, report_factory):
        text = format_report(report_factory([]))
        # report_factory reports the "warning" status
        assert "Some stale references found" in text

    def test_suppressed_indicator(self, report_factory):
        multi = sample_multi(report_factory, cross=CheckResult(
            checker="cross-consistency",
            issues=[Issue(rule="cross-path-asymmetry", severity="info", message="one-sided")],
            failed=1,
            suppressed=4,
        ))
        text = format_multi_report(multi)

        assert "Cross Consistency (1 issue)" in text
        assert "… and 4 more not shown" in text

    def test_multi_report_lists_every_file(self, report_factory):
        text = format_multi_report(sample_multi(report_factory))

        assert "Files: AGENTS.md, CLAUDE.md" in text
        assert "Overall Score" in text
        assert "CLAUDE.md  50/100 (D)" in text

    def test_checker_title(self):
        assert checker_title("npm-scripts") == "Npm Scripts"
        assert checker_title("framework-staleness") == "Framework Staleness"


# =============================================================================
# JSON Output
# =============================================================================

class TestJsonReport:
    """Test the machine-readable renderer."""

    def test_single_document_keys(self, report_factory):
        data = json.loads(format_json(report_factory(sample_issues())))

        assert data["file"] == "AGENTS.md"
        assert data["totalIssues"] == 2
        issue = data["results"][0]["issues"][0]
        assert issue["rule"] == "no-missing-path"
        assert issue["line"] == 4

    def test_multi_document_keys(self, report_factory):
        data = json.loads(format_multi_json(sample_multi(report_factory)))

        assert set(data) == {
            "files", "overallScore", "totalErrors", "totalWarnings", "totalInfos", "reports", "cross",
        }
        assert data["files"] == ["AGENTS.md", "CLAUDE.md"]
        assert data["cross"] is None
        assert len(data["reports"]) == 2

    def test_non_ascii_kept(self, report_factory):
        issue = Issue(rule="r", severity="info", message="café → bar")
        assert "café → bar" in format_json(report_factory([issue]))
