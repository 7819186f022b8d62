"""Starter AGENTS.md generation from what the repository already declares."""
from __future__ import annotations
import logging
from dataclasses import dataclass
from pathlib import Path

from agents_lint.indexer.manifest import MANIFEST_NAME, read_manifest

logger = logging.getLogger(__name__)

# Lockfile -> (package manager, install command), checked in order
LOCKFILES = [
    ("bun.lockb", "bun", "bun install"),
    ("pnpm-lock.yaml", "pnpm", "pnpm install"),
    ("yarn.lock", "yarn", "yarn"),
]

# First matching dependency wins
FRAMEWORKS = [
    (("@angular/core",), "Angular"),
    (("next",), "Next.js"),
    (("nuxt",), "Nuxt"),
    (("react",), "React"),
    (("vue",), "Vue"),
    (("svelte",), "Svelte"),
    (("@solidjs/core", "solid-js"), "SolidJS"),
    (("fastify",), "Fastify"),
    (("express",), "Express"),
    (("hono",), "Hono"),
    (("nestjs", "@nestjs/core"), "NestJS"),
]

TEST_RUNNERS = [
    (("vitest",), "vitest"),
    (("jest", "@jest/core"), "jest"),
    (("mocha",), "mocha"),
    (("ava",), "ava"),
    (("tap", "node:test"), "node --test"),
]

TEST_DIRS = ["__tests__", "tests", "test"]


@dataclass
class ProjectInfo:
    """What the generator knows about the project."""
    name: str
    framework: str | None = None
    test_runner: str | None = None
    package_manager: str = "npm"
    has_typescript: bool = False
    build_command: str = ""
    test_command: str = "npm test"
    install_command: str = "npm install"


def detect_project_info(repo_root: Path | str) -> ProjectInfo:
    """Detect package manager, framework, test runner and commands.

    Args:
        repo_root: Repository root

    Returns:
        ProjectInfo; falls back to npm defaults when nothing is declared
    """
    repo_root = Path(repo_root).resolve()
    info = ProjectInfo(name=repo_root.name)

    for lockfile, manager, install in LOCKFILES:
        if (repo_root / lockfile).exists():
            info.package_manager = manager
            info.install_command = install
            info.test_command = f"{manager} test"
            break

    pkg = read_manifest(repo_root / MANIFEST_NAME)
    if pkg is None:
        return info

    if isinstance(pkg.get("name"), str) and pkg["name"]:
        info.name = pkg["name"]

    dependencies: set[str] = set()
    for category in ("dependencies", "devDependencies"):
        declared = pkg.get(category)
        if isinstance(declared, dict):
            dependencies.update(declared)

    info.has_typescript = "typescript" in dependencies
    info.framework = _first_match(FRAMEWORKS, dependencies)
    info.test_runner = _first_match(TEST_RUNNERS, dependencies)

    scripts = pkg.get("scripts") if isinstance(pkg.get("scripts"), dict) else {}
    run_prefix = "npm run" if info.package_manager == "npm" else info.package_manager
    if "test" in scripts:
        info.test_command = f"{info.package_manager} test"
    if "build" in scripts:
        info.build_command = f"{run_prefix} build"

    logger.debug(f"Detected project info for {repo_root}: {info}")
    return info


def generate_agents_md(repo_root: Path | str) -> str:
    """Generate a starter AGENTS.md with setup, structure, testing and build sections."""
    repo_root = Path(repo_root).resolve()
    info = detect_project_info(repo_root)
    lines: list[str] = []

    lines += [
        "# AGENTS.md",
        "",
        f"> Context file for AI coding agents working on **{info.name}**.",
        "",
    ]

    stack = " + ".join(part for part in (info.framework, "TypeScript" if info.has_typescript else None) if part)
    lines += [
        "## Project",
        "",
        f"{info.name} is a {stack or 'Node.js'} project.",
        "",
        "<!-- TODO: Add a 1-2 sentence description of what this project does. -->",
        "",
    ]

    lines += ["## Setup", "", "```bash", info.install_command]
    if info.build_command:
        lines.append(info.build_command)
    lines += ["```", ""]

    lines += ["## Structure", "", "```"]
    if (repo_root / "src").is_dir():
        lines.append("src/          # Source code")
    test_dir = next((d for d in TEST_DIRS if (repo_root / d).is_dir()), None)
    if test_dir:
        lines.append(f"{test_dir + '/':<14}# Tests")
    lines += [
        "```",
        "",
        "<!-- TODO: Expand with key directories and what they contain. -->",
        "",
    ]

    lines += ["## Testing", "", "```bash", info.test_command, "```", ""]
    if info.test_runner:
        lines += [f"Uses {info.test_runner}.", ""]

    lines += ["## Build", ""]
    if info.build_command:
        lines += ["```bash", info.build_command, "```", ""]
    else:
        lines += ["<!-- Add the build command here if the project has one. -->", ""]

    lines += [
        "## Conventions",
        "",
        "<!-- TODO: Add project-specific conventions agents must follow:",
        "  - Naming conventions",
        "  - Code style rules not enforced by the linter",
        "  - Branch naming / commit message format",
        "-->",
        "",
    ]

    return "\n".join(lines)


def _first_match(table: list[tuple[tuple[str, ...], str]], dependencies: set[str]) -> str | None:
    for names, label in table:
        if any(name in dependencies for name in names):
            return label
    return None
