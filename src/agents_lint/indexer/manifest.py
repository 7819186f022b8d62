"""Project manifest (package.json) reader with workspace support.

Finds the root package.json plus the manifests of any declared workspaces and
exposes the union of their scripts and dependency names. Malformed or absent
manifests degrade to "nothing declared"; nothing here raises.
"""
from __future__ import annotations
import json
import logging
from pathlib import Path
from typing import Any, Iterable, Iterator
import pathspec

logger = logging.getLogger(__name__)

MANIFEST_NAME = "package.json"

# Limit to avoid huge monorepos
MAX_WORKSPACES = 20

# Depth walked for '**' workspace globs
MAX_WORKSPACE_DEPTH = 4

DEPENDENCY_CATEGORIES = ("dependencies", "devDependencies", "peerDependencies")

# Directories never treated as workspaces
SKIP_DIRS = {"node_modules", "dist", "build", "coverage"}


def read_manifest(path: Path) -> dict[str, Any] | None:
    """Read and parse a manifest, returning None when absent or malformed."""
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return None
    except (OSError, ValueError) as e:
        logger.debug(f"Ignoring malformed manifest {path}: {e}")
        return None

    if not isinstance(data, dict):
        logger.debug(f"Ignoring manifest {path}: top level is not an object")
        return None

    return data


def find_manifests(repo_root: Path | str) -> list[Path]:
    """Find the root manifest and the manifests of its declared workspaces.

    Returns:
        Manifest paths, root first; empty when the root has no package.json
    """
    repo_root = Path(repo_root)
    root_manifest = repo_root / MANIFEST_NAME

    if not root_manifest.is_file():
        return []

    found = [root_manifest]
    pkg = read_manifest(root_manifest)
    if pkg is None:
        return found

    patterns = _workspace_patterns(pkg)
    if not patterns:
        return found

    for workspace_dir in _expand_workspaces(repo_root, patterns):
        manifest = workspace_dir / MANIFEST_NAME
        if manifest.is_file() and manifest not in found:
            found.append(manifest)
        if len(found) - 1 >= MAX_WORKSPACES:
            logger.debug(f"Workspace limit ({MAX_WORKSPACES}) reached in {repo_root}")
            break

    return found


def collect_scripts(manifest_paths: Iterable[Path]) -> list[str]:
    """Union of script names across manifests, in first-seen order."""
    scripts: dict[str, None] = {}
    for path in manifest_paths:
        pkg = read_manifest(path)
        if not pkg:
            continue
        declared = pkg.get("scripts")
        if isinstance(declared, dict):
            for name in declared:
                scripts.setdefault(name, None)
    return list(scripts)


def collect_dependencies(
    repo_root: Path | str,
    categories: Iterable[str] = DEPENDENCY_CATEGORIES
) -> set[str] | None:
    """Union of dependency names declared in the root manifest.

    Returns:
        Set of package names, or None when there is no usable root manifest
    """
    pkg = read_manifest(Path(repo_root) / MANIFEST_NAME)
    if pkg is None:
        return None

    names: set[str] = set()
    for category in categories:
        declared = pkg.get(category)
        if isinstance(declared, dict):
            names.update(declared)
    return names


def _workspace_patterns(pkg: dict[str, Any]) -> list[str]:
    """Workspaces may be an array or {"packages": [...]} (yarn)."""
    workspaces = pkg.get("workspaces")
    if isinstance(workspaces, dict):
        workspaces = workspaces.get("packages")
    if not isinstance(workspaces, list):
        return []
    return [w.strip() for w in workspaces if isinstance(w, str) and w.strip()]


def _expand_workspaces(repo_root: Path, patterns: list[str]) -> Iterator[Path]:
    """Yield directories matched by workspace patterns (gitwildmatch globs).

    A gitwildmatch pattern also matches everything below a matched directory,
    so a pattern without '**' only accepts directories at its own depth.
    Negations exclude the directory and everything below it. As in
    .gitignore, the last matching pattern decides.
    """
    rules: list[tuple[bool, pathspec.PathSpec, int | None]] = []
    max_depth = 1
    for pattern in patterns:
        negated = pattern.startswith("!")
        body = pattern[1:] if negated else pattern
        body = body.strip("/").removeprefix("./")
        if not body:
            continue

        recursive = "**" in body
        depth = MAX_WORKSPACE_DEPTH if recursive else body.count("/") + 1
        max_depth = max(max_depth, depth)

        spec = pathspec.PathSpec.from_lines("gitwildmatch", [f"/{body}"])
        exact_depth = None if negated or recursive else depth
        rules.append((negated, spec, exact_depth))

    for directory in _walk_directories(repo_root, repo_root, max_depth):
        rel_path = directory.relative_to(repo_root).as_posix()
        rel_depth = rel_path.count("/") + 1

        included = False
        for negated, spec, exact_depth in rules:
            if exact_depth is not None and rel_depth != exact_depth:
                continue
            if spec.match_file(rel_path):
                included = not negated

        if included:
            yield directory


def _walk_directories(directory: Path, repo_root: Path, depth: int) -> Iterator[Path]:
    """Breadth-limited directory walk, skipping hidden and build directories."""
    if depth <= 0:
        return

    try:
        entries = sorted(directory.iterdir())
    except OSError:
        # Skip directories we can't read
        return

    for entry in entries:
        if entry.name.startswith(".") or entry.name in SKIP_DIRS:
            continue
        if not entry.is_dir():
            continue
        yield entry
        yield from _walk_directories(entry, repo_root, depth - 1)
