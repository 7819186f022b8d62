"""Text and JSON rendering of lint reports."""
from .generator import (
    checker_title,
    format_json,
    format_multi_json,
    format_multi_report,
    format_report,
)

__all__ = ["checker_title", "format_json", "format_multi_json", "format_multi_report", "format_report"]
