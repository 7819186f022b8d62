"""Interactive remediation of lint findings."""
from .actions import AddSection, FixAction, RemoveLine, build_fix_action, section_template
from .answers import ScriptedAnswers, TerminalAnswers, answers_for, read_all_answers
from .fixer import (
    FixSession,
    FixState,
    apply_fixes,
    run_fix_mode,
    run_fix_session,
    write_atomically,
)

__all__ = [
    "AddSection",
    "FixAction",
    "RemoveLine",
    "build_fix_action",
    "section_template",
    "ScriptedAnswers",
    "TerminalAnswers",
    "answers_for",
    "read_all_answers",
    "FixSession",
    "FixState",
    "apply_fixes",
    "run_fix_mode",
    "run_fix_session",
    "write_atomically",
]
