"""Tests for starter AGENTS.md generation."""
from agents_lint.doc_validity.checkers.structure import check_structure
from agents_lint.doc_validity.reference_extractor import extract
from agents_lint.init import detect_project_info, generate_agents_md


class TestDetectProjectInfo:
    """Test project detection from lockfiles and package.json."""

    def test_defaults_without_manifest(self, repo):
        info = detect_project_info(repo)

        assert info.package_manager == "npm"
        assert info.install_command == "npm install"
        assert info.test_command == "npm test"
        assert info.framework is None
        assert info.name == repo.resolve().name

    def test_pnpm_lockfile(self, repo, write_package_json):
        (repo / "pnpm-lock.yaml").write_text("lockfileVersion: 9\n")
        write_package_json({"name": "shop", "scripts": {"build": "vite build", "test": "vitest"}})

        info = detect_project_info(repo)
        assert info.package_manager == "pnpm"
        assert info.install_command == "pnpm install"
        assert info.build_command == "pnpm build"
        assert info.test_command == "pnpm test"
        assert info.name == "shop"

    def test_npm_build_uses_run(self, repo, write_package_json):
        write_package_json({"scripts": {"build": "tsc"}})
        assert detect_project_info(repo).build_command == "npm run build"

    def test_react_typescript(self, repo, write_package_json):
        write_package_json({
            "dependencies": {"react": "^18.2.0"},
            "devDependencies": {"typescript": "^5.0.0", "vitest": "^1.0.0"},
        })
        info = detect_project_info(repo)

        assert info.framework == "React"
        assert info.has_typescript
        assert info.test_runner == "vitest"

    def test_first_framework_wins(self, repo, write_package_json):
        write_package_json({"dependencies": {"react": "^18", "next": "^14"}})
        assert detect_project_info(repo).framework == "Next.js"


class TestGenerateAgentsMd:
    """Test the generated document."""

    def test_react_typescript_document(self, repo, write_package_json):
        write_package_json({
            "name": "dashboard",
            "dependencies": {"react": "^18.2.0"},
            "devDependencies": {"typescript": "^5.0.0", "vitest": "^1.0.0"},
            "scripts": {"test": "vitest", "build": "vite build"},
        })
        (repo / "src").mkdir()
        (repo / "tests").mkdir()

        content = generate_agents_md(repo)

        assert content.startswith("# AGENTS.md\n")
        assert "dashboard is a React + TypeScript project." in content
        assert "npm run build" in content
        assert "src/          # Source code" in content
        assert "tests/        # Tests" in content
        assert "Uses vitest." in content

    def test_generated_document_passes_section_checks(self, repo, write_package_json):
        write_package_json({"name": "api", "dependencies": {"express": "^4"}})
        result = check_structure(extract(generate_agents_md(repo)))

        assert result.issues == []

    def test_generated_document_without_build_script(self, repo):
        content = generate_agents_md(repo)

        assert "## Build" in content
        assert content.count("TODO") == 3
