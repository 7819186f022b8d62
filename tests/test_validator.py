"""Tests for lint orchestration over one or many context documents."""
import json
import pytest

from agents_lint.doc_validity.ruleset import load_staleness_rules
from agents_lint.doc_validity.validator import lint_all, lint_document
from agents_lint.errors import NoContextDocumentError

SCENARIO_DOC = """# Project

## Setup
Run `npm install` to get started.

## Build
Use `npm run build` to compile.

Source lives in `./src/services/auth` and the UI kit in `./packages/ui`.
"""


# =============================================================================
# Single Document
# =============================================================================

class TestLintDocument:
    """Test the single-document pipeline."""

    def test_missing_paths_and_test_section_scenario(self, repo, write_doc):
        write_doc(SCENARIO_DOC)
        report = lint_document(repo_root=repo)

        by_checker = {r.checker: r for r in report.results}
        assert [r.checker for r in report.results] == [
            "structure", "filesystem", "npm-scripts", "dependencies", "framework-staleness",
        ]

        filesystem = by_checker["filesystem"]
        assert [i.rule for i in filesystem.issues] == ["no-missing-path", "no-missing-path"]
        assert {i.severity for i in filesystem.issues} == {"error"}

        structure = by_checker["structure"]
        assert [i.rule for i in structure.issues] == ["missing-test-section"]

        passed = sum(r.passed for r in report.results)
        total = sum(r.passed + r.failed for r in report.results)
        base = 100 * passed / total
        assert report.score == max(0, round(base - (15 * 2 + 7 * 1)))
        assert report.score == 30
        assert report.grade == "F"
        assert report.status == "stale"
        assert (report.errors, report.warnings, report.infos) == (2, 1, 0)
        assert report.total_issues == 3

    def test_report_file_is_relative(self, repo, write_doc):
        write_doc(SCENARIO_DOC, name="CLAUDE.md")
        report = lint_document(repo / "CLAUDE.md", repo)
        assert report.file == "CLAUDE.md"

    def test_relative_file_resolved_against_root(self, repo, write_doc):
        write_doc(SCENARIO_DOC, name="docs/AGENTS.md")
        report = lint_document("docs/AGENTS.md", repo)
        assert report.file == "docs/AGENTS.md"

    def test_config_loaded_from_root(self, repo, write_doc):
        write_doc(SCENARIO_DOC)
        (repo / ".agents-lint.json").write_text(json.dumps({"ignorePatterns": ["services", "packages"]}))
        report = lint_document(repo_root=repo)
        assert report.errors == 0

    def test_no_document(self, repo):
        with pytest.raises(NoContextDocumentError) as exc_info:
            lint_document(repo_root=repo)
        assert "No AGENTS.md file found" in str(exc_info.value)
        assert exc_info.value.hint

    def test_missing_explicit_file(self, repo):
        with pytest.raises(NoContextDocumentError):
            lint_document(repo / "GONE.md", repo)

    def test_report_serializes(self, repo, write_doc):
        write_doc(SCENARIO_DOC)
        data = lint_document(repo_root=repo).to_dict()

        assert set(data) == {
            "file", "score", "grade", "status", "results", "totalIssues",
            "errors", "warnings", "infos", "timestamp", "ruleset",
        }
        assert set(data["results"][0]) == {"checker", "issues", "passed", "failed", "suppressed"}
        json.dumps(data)

    def test_report_names_ruleset_revision(self, repo, write_doc):
        write_doc(SCENARIO_DOC)
        ruleset = load_staleness_rules()

        report = lint_document(repo_root=repo)
        assert report.ruleset == f"{ruleset.version}+{ruleset.content_hash}"
        assert len(ruleset.content_hash) == 16


# =============================================================================
# All Documents
# =============================================================================

class TestLintAll:
    """Test concurrent linting of every discovered document."""

    @pytest.mark.asyncio
    async def test_single_document_has_no_cross_result(self, repo, write_doc):
        write_doc(SCENARIO_DOC)
        multi = await lint_all(repo)

        assert multi.files == ("AGENTS.md",)
        assert multi.cross is None
        assert multi.overall_score == multi.reports[0].score

    @pytest.mark.asyncio
    async def test_package_manager_conflict_across_documents(self, repo, write_doc):
        write_doc("# Setup\nInstall with `npm install`, then run the tests.\n" * 3, name="AGENTS.md")
        write_doc("# Setup\nInstall with `pnpm install`, then run the tests.\n" * 3, name="CLAUDE.md")

        multi = await lint_all(repo)

        assert multi.files == ("AGENTS.md", "CLAUDE.md")
        conflicts = [i for i in multi.cross.issues if i.rule == "cross-pm-conflict"]
        assert len(conflicts) == 1
        assert "AGENTS.md → npm" in conflicts[0].context
        assert "CLAUDE.md → pnpm" in conflicts[0].context

        per_document_errors = sum(r.errors for r in multi.reports)
        assert multi.total_errors == per_document_errors + 1

        mean = sum(r.score for r in multi.reports) / 2
        assert multi.overall_score <= round(mean)

    @pytest.mark.asyncio
    async def test_no_documents(self, repo):
        with pytest.raises(NoContextDocumentError):
            await lint_all(repo)
