"""Exceptions raised at the boundary of the lint pipeline."""
from __future__ import annotations
from pathlib import Path


class NoContextDocumentError(FileNotFoundError):
    """No context document could be found (or read) for a repository."""

    def __init__(self, repo_root: Path | str, hint: str | None = None):
        self.repo_root = Path(repo_root)
        self.hint = hint or (
            'Create one with: echo "# AGENTS.md\\n\\nProject setup instructions '
            'for AI coding agents." > AGENTS.md'
        )
        super().__init__(f"No AGENTS.md file found in {self.repo_root}.\n{self.hint}")


class FixApplyError(RuntimeError):
    """Writing accepted fixes back to the context document failed."""

    def __init__(self, path: Path | str, cause: Exception):
        self.path = Path(path)
        self.cause = cause
        super().__init__(f"Failed to write fixes to {self.path}: {cause}")
