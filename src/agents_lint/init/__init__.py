"""Starter context document generation."""
from .template import ProjectInfo, detect_project_info, generate_agents_md

__all__ = ["ProjectInfo", "detect_project_info", "generate_agents_md"]
