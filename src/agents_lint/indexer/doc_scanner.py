"""Document scanner for finding agent context files.

Discovers AGENTS.md, CLAUDE.md, GEMINI.md and the other well-known context
document names at the repository root.
"""
from __future__ import annotations
from pathlib import Path
from typing import Iterator

from agents_lint.errors import NoContextDocumentError

# Recognized context documents, in priority order
CONTEXT_DOCUMENT_NAMES = [
    "AGENTS.md",
    "agents.md",
    ".agents.md",
    "CLAUDE.md",
    "claude.md",
    "GEMINI.md",
    ".github/copilot-instructions.md",
    ".cursorrules",
]


def scan_context_documents(repo_root: Path | str) -> Iterator[Path]:
    """Scan a repository root for context documents.

    Names are compared case-insensitively, so AGENTS.md and agents.md on a
    case-insensitive filesystem are reported once.

    Yields:
        Absolute paths of existing context documents, in priority order
    """
    repo_root = Path(repo_root).resolve()
    seen: set[str] = set()

    for name in CONTEXT_DOCUMENT_NAMES:
        file_path = repo_root / name

        # Skip if not a file
        if not file_path.is_file():
            continue

        key = name.lower()
        if key in seen:
            continue

        seen.add(key)
        yield file_path


def discover_context_documents(repo_root: Path | str) -> list[Path]:
    """Return every context document in the repository root.

    Raises:
        NoContextDocumentError: If none exists
    """
    found = list(scan_context_documents(repo_root))
    if not found:
        raise NoContextDocumentError(repo_root)
    return found


def find_context_document(repo_root: Path | str) -> Path:
    """Return the highest-priority context document.

    Raises:
        NoContextDocumentError: If none exists
    """
    for file_path in scan_context_documents(repo_root):
        return file_path
    raise NoContextDocumentError(repo_root)
