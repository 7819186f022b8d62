"""Tests for context document discovery."""
import pytest

from agents_lint.errors import NoContextDocumentError
from agents_lint.indexer.doc_scanner import (
    discover_context_documents,
    find_context_document,
)


class TestDocScanner:
    """Test discovery order and the missing-document error."""

    def test_priority_order(self, repo, write_doc):
        write_doc("g", name="GEMINI.md")
        write_doc("c", name="CLAUDE.md")
        write_doc("a", name="AGENTS.md")
        write_doc("r", name=".cursorrules")

        found = discover_context_documents(repo)
        assert [p.name for p in found] == ["AGENTS.md", "CLAUDE.md", "GEMINI.md", ".cursorrules"]
        assert all(p.is_absolute() for p in found)

    def test_copilot_instructions(self, repo, write_doc):
        write_doc("x", name=".github/copilot-instructions.md")
        assert find_context_document(repo).name == "copilot-instructions.md"

    def test_first_document(self, repo, write_doc):
        write_doc("c", name="CLAUDE.md")
        assert find_context_document(repo) == (repo / "CLAUDE.md").resolve()

    def test_directory_named_like_document_ignored(self, repo):
        (repo / "AGENTS.md").mkdir()
        with pytest.raises(NoContextDocumentError):
            find_context_document(repo)

    def test_none_found(self, repo):
        with pytest.raises(NoContextDocumentError) as exc_info:
            discover_context_documents(repo)

        error = exc_info.value
        assert error.repo_root == repo
        assert "AGENTS.md" in error.hint
