"""Process-level settings.

Loads settings from environment variables using python-dotenv.
"""
from __future__ import annotations
import os
from dotenv import load_dotenv


class Settings:
    """Application settings loaded from environment variables."""

    def __init__(self) -> None:
        """Initialize settings from environment variables."""
        # Logging (stderr); stdout is reserved for reports
        self.log_level = os.getenv("AGENTS_LINT_LOG_LEVEL", "WARNING").upper()

        # Explicit path to a lint config file, overriding .agents-lint.json discovery
        self.config_path = os.getenv("AGENTS_LINT_CONFIG") or None

        # https://no-color.org: any non-empty value disables colour
        self.no_color = bool(os.getenv("NO_COLOR"))


def load_settings() -> Settings:
    """Load .env (if present) and build Settings from the environment."""
    load_dotenv()
    return Settings()
