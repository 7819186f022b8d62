"""Context document validity checking.

Extracts the references an agent context document makes about its repository,
validates them against the repository, and scores the document's freshness.
"""
from .reference_extractor import extract, parse_document
from .validator import build_report, lint_all, lint_document
from .scorer import compute_overall_score, compute_score, get_status, score_grade
from .ruleset import StalenessRule, StalenessRuleset, load_staleness_rules

__all__ = [
    # Extraction
    "extract",
    "parse_document",
    # Orchestration
    "build_report",
    "lint_all",
    "lint_document",
    # Scoring
    "compute_overall_score",
    "compute_score",
    "get_status",
    "score_grade",
    # Rules
    "StalenessRule",
    "StalenessRuleset",
    "load_staleness_rules",
]
