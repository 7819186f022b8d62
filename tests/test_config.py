"""Tests for lint configuration and process settings."""
import json
import pytest

from agents_lint.config import LintConfig, Settings, load_lint_config


def write_config(repo, data, name=".agents-lint.json"):
    path = repo / name
    path.write_text(data if isinstance(data, str) else json.dumps(data), encoding="utf-8")
    return path


# =============================================================================
# Lint Configuration
# =============================================================================

class TestLintConfig:
    """Test loading the JSON sidecar."""

    def test_defaults_without_file(self, repo):
        config = load_lint_config(repo)
        assert config == LintConfig()
        assert config.ignore_patterns == []
        assert config.required_sections == []
        assert config.max_file_age_days is None
        assert config.severity.missing_path is None

    def test_camel_case_keys(self, repo):
        write_config(repo, {
            "severity": {"missingPath": "warn", "missingSection": "error"},
            "ignorePatterns": ["legacy/"],
            "requiredSections": ["Code Style"],
            "maxFileAgeDays": 30,
        })
        config = load_lint_config(repo)

        assert config.severity.missing_path == "warn"
        assert config.severity.missing_section == "error"
        assert config.severity.missing_script is None
        assert config.ignore_patterns == ["legacy/"]
        assert config.required_sections == ["Code Style"]
        assert config.max_file_age_days == 30

    def test_alternate_file_name(self, repo):
        write_config(repo, {"ignorePatterns": ["x"]}, name=".agents-lint.config.json")
        assert load_lint_config(repo).ignore_patterns == ["x"]

    def test_first_file_name_wins(self, repo):
        write_config(repo, {"ignorePatterns": ["first"]})
        write_config(repo, {"ignorePatterns": ["second"]}, name=".agents-lint.config.json")
        assert load_lint_config(repo).ignore_patterns == ["first"]

    def test_explicit_path(self, repo, tmp_path_factory):
        other = tmp_path_factory.mktemp("elsewhere") / "lint.json"
        other.write_text(json.dumps({"requiredSections": ["Deploy"]}), encoding="utf-8")
        write_config(repo, {"requiredSections": ["Ignored"]})

        assert load_lint_config(repo, other).required_sections == ["Deploy"]

    def test_missing_explicit_path_gives_defaults(self, repo):
        assert load_lint_config(repo, repo / "nope.json") == LintConfig()

    @pytest.mark.parametrize("content", [
        "{not json",
        "[1, 2]",
        json.dumps({"severity": {"missingPath": "fatal"}}),
        json.dumps({"maxFileAgeDays": 0}),
    ])
    def test_unusable_file_gives_defaults(self, repo, content):
        write_config(repo, content)
        assert load_lint_config(repo) == LintConfig()

    def test_from_json_raises_on_invalid(self, repo):
        path = write_config(repo, "{broken")
        with pytest.raises(ValueError, match="Malformed JSON"):
            LintConfig.from_json(path)

    def test_blank_entries_dropped(self):
        config = LintConfig.model_validate({"ignorePatterns": ["", "  ", "vendor"]})
        assert config.ignore_patterns == ["vendor"]

    def test_unknown_keys_ignored(self):
        config = LintConfig.model_validate({"extends": "recommended", "ignorePatterns": ["a"]})
        assert config.ignore_patterns == ["a"]

    def test_is_ignored_is_substring_match(self):
        config = LintConfig(ignore_patterns=["legacy"])
        assert config.is_ignored("src/legacy/old.ts")
        assert not config.is_ignored("src/modern/new.ts")


# =============================================================================
# Process Settings
# =============================================================================

class TestSettings:
    """Test environment-driven settings."""

    def test_defaults(self, monkeypatch):
        for name in ("AGENTS_LINT_LOG_LEVEL", "AGENTS_LINT_CONFIG", "NO_COLOR"):
            monkeypatch.delenv(name, raising=False)

        settings = Settings()
        assert settings.log_level == "WARNING"
        assert settings.config_path is None
        assert settings.no_color is False

    def test_from_environment(self, monkeypatch):
        monkeypatch.setenv("AGENTS_LINT_LOG_LEVEL", "debug")
        monkeypatch.setenv("AGENTS_LINT_CONFIG", "/etc/lint.json")
        monkeypatch.setenv("NO_COLOR", "1")

        settings = Settings()
        assert settings.log_level == "DEBUG"
        assert settings.config_path == "/etc/lint.json"
        assert settings.no_color is True
