"""Interactive fix session.

Walks every issue of a report in order, offers the derived fix, collects the
accepted decisions and finally writes the document once, atomically.
"""
from __future__ import annotations
import logging
import os
import shutil
import sys
import tempfile
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Sequence, TextIO

from agents_lint.errors import FixApplyError
from agents_lint.models import Issue, Report
from agents_lint.reports.ansi import Palette, palette, severity_icon
from .actions import AddSection, FixAction, RemoveLine, build_fix_action
from .answers import AnswerProvider, answers_for

logger = logging.getLogger(__name__)

ACCEPT_ANSWERS = {"y", "yes"}
QUIT_ANSWERS = {"q", "quit"}

RULE_WIDTH = 60


class FixState(Enum):
    IDLE = "idle"
    PRESENTING = "presenting"
    AWAITING_DECISION = "awaiting_decision"
    ACCEPTED = "accepted"
    SKIPPED = "skipped"
    QUIT = "quit"


@dataclass
class FixSession:
    """Decisions collected during one fix session."""
    lines_to_remove: set[int] = field(default_factory=set)
    sections_to_add: list[str] = field(default_factory=list)
    state: FixState = FixState.IDLE
    fixable: int = 0
    advisory: int = 0

    @property
    def accepted(self) -> int:
        return len(self.lines_to_remove) + len(self.sections_to_add)

    def accept(self, action: FixAction) -> None:
        if isinstance(action, RemoveLine):
            self.lines_to_remove.add(action.line_number)
        else:
            self.sections_to_add.append(action.content)
        self.state = FixState.ACCEPTED


def decide(answer: str) -> FixState:
    """Map a normalized answer to the next state; anything unrecognized skips."""
    if answer in QUIT_ANSWERS:
        return FixState.QUIT
    if answer in ACCEPT_ANSWERS:
        return FixState.ACCEPTED
    return FixState.SKIPPED


def run_fix_session(
    report: Report,
    file_lines: Sequence[str],
    ask: AnswerProvider,
    out: TextIO | None = None,
    colors: Palette | None = None
) -> FixSession:
    """Present every issue and collect decisions; nothing is written here.

    Args:
        report: Lint report whose issues are offered, in order
        file_lines: Current document lines (for bounds and diff preview)
        ask: Answer provider, called once per fixable issue
        out: Stream for the session transcript (default stdout)
        colors: Palette for the transcript

    Returns:
        FixSession with the accepted removals and sections
    """
    out = out or sys.stdout
    colors = colors or palette(False)
    c = colors

    issues = report.issues
    actions = [build_fix_action(issue, file_lines) for issue in issues]

    session = FixSession(
        fixable=sum(1 for action in actions if action is not None),
        advisory=sum(1 for action in actions if action is None),
    )

    print("", file=out)
    print(f"{c.bold}{c.cyan}agents-lint{c.reset} {c.dim}Fix Mode{c.reset}", file=out)
    print(f"{c.dim}{'─' * RULE_WIDTH}{c.reset}", file=out)
    print(f"{c.bold}File:{c.reset} {report.file}  "
          f"{c.dim}·  {session.fixable} fixable, {session.advisory} advisory{c.reset}", file=out)
    print("", file=out)

    fixable_index = 0
    for issue, action in zip(issues, actions):
        if action is None:
            _print_advisory(issue, out, c)
            continue

        fixable_index += 1
        session.state = FixState.PRESENTING
        _print_fixable(issue, action, fixable_index, session.fixable, file_lines, out, c)

        session.state = FixState.AWAITING_DECISION
        answer = ask(f"  {c.bold}Apply?{c.reset} (y)es / (n)o / (q)uit  {c.gray}›{c.reset} ")
        decision = decide(answer)

        if decision is FixState.QUIT:
            session.state = FixState.QUIT
            print(f"  {c.dim}Quit; remaining issues skipped.{c.reset}", file=out)
            print("", file=out)
            break

        if decision is FixState.ACCEPTED:
            session.accept(action)
            if isinstance(action, RemoveLine):
                print(f"  {c.green}✓ Will remove line {action.line_number}{c.reset}", file=out)
            else:
                print(f"  {c.green}✓ Will add section{c.reset}", file=out)
        else:
            session.state = FixState.SKIPPED
            print(f"  {c.dim}Skipped.{c.reset}", file=out)

        print("", file=out)

    return session


def apply_fixes(file_lines: Sequence[str], session: FixSession, newline: str = "\n") -> str:
    """Apply accepted removals (descending line order) then append sections.

    The result is joined with newline, so a CRLF document stays CRLF.
    """
    new_lines = list(file_lines)

    # Descending order keeps the remaining indices valid
    for line_number in sorted(session.lines_to_remove, reverse=True):
        del new_lines[line_number - 1]

    if session.sections_to_add:
        new_lines.extend("\n".join(session.sections_to_add).split("\n"))

    return newline.join(new_lines)


def write_atomically(file_path: Path | str, content: str) -> None:
    """Replace a file's content in one step via a temp file in the same directory.

    Raises:
        FixApplyError: If writing or replacing fails; the original is left untouched
    """
    path = Path(file_path)
    tmp_path: str | None = None

    try:
        with tempfile.NamedTemporaryFile(
            mode="w",
            encoding="utf-8",
            newline="",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
        ) as tmp:
            tmp_path = tmp.name
            tmp.write(content)
        if path.exists():
            shutil.copymode(path, tmp_path)
        os.replace(tmp_path, path)
    except OSError as e:
        if tmp_path and os.path.exists(tmp_path):
            os.unlink(tmp_path)
        raise FixApplyError(path, e) from e

    logger.debug(f"Wrote fixes to {path}")


def run_fix_mode(
    report: Report,
    file_path: Path | str,
    ask: AnswerProvider | None = None,
    out: TextIO | None = None,
    color: bool = False
) -> FixSession:
    """Run an interactive fix session against a document and apply the result.

    Args:
        report: Lint report of the document
        file_path: Absolute path of the document
        ask: Answer provider (defaults to the terminal, or piped stdin)
        out: Stream for the transcript (default stdout)
        color: Whether to use ANSI colours

    Returns:
        The completed FixSession

    Raises:
        FixApplyError: If the accepted fixes could not be written
    """
    out = out or sys.stdout
    c = palette(color)

    if report.total_issues == 0:
        print(f"\n{c.green}✓ No issues to fix.{c.reset}\n", file=out)
        return FixSession()

    path = Path(file_path)
    with path.open(encoding="utf-8", newline="") as f:
        content = f.read()
    newline = "\r\n" if "\r\n" in content else "\n"
    file_lines = content.replace("\r\n", "\n").split("\n")

    ask = ask or answers_for(stdout=out)
    session = run_fix_session(report, file_lines, ask, out, c)

    if session.accepted == 0:
        print(f"{c.dim}No fixes applied.{c.reset}\n", file=out)
        return session

    plural = "es" if session.accepted != 1 else ""
    print(f"{c.dim}{'─' * RULE_WIDTH}{c.reset}", file=out)
    print(f"{c.bold}Applying {session.accepted} fix{plural} to {report.file}…{c.reset}", file=out)

    write_atomically(path, apply_fixes(file_lines, session, newline))

    print(f"{c.green}✓ Done.{c.reset} Run {c.cyan}agents-lint{c.reset} to check remaining issues.\n", file=out)
    return session


def _print_advisory(issue: Issue, out: TextIO, c: Palette) -> None:
    print(f"{c.dim}{severity_icon(issue.severity, c)} {issue.message}{c.reset}", file=out)
    if issue.suggestion:
        print(f"  {c.dim}→ {issue.suggestion}{c.reset}", file=out)
    print(f"  {c.gray}(no auto-fix available){c.reset}", file=out)
    print("", file=out)


def _print_fixable(
    issue: Issue,
    action: FixAction,
    index: int,
    total: int,
    file_lines: Sequence[str],
    out: TextIO,
    c: Palette
) -> None:
    print(f"Issue {index}/{total}  {c.dim}[fixable]{c.reset}", file=out)
    print(f"  {severity_icon(issue.severity, c)} {c.bold}{issue.message}{c.reset}", file=out)
    if issue.context:
        print(f"  {c.gray}{issue.context}{c.reset}", file=out)
    print("", file=out)

    if isinstance(action, RemoveLine):
        print(f"  {c.bold}Fix:{c.reset} Remove line {action.line_number}", file=out)
        print(f"  {c.red}- {file_lines[action.line_number - 1]}{c.reset}", file=out)
    elif isinstance(action, AddSection):
        print(f"  {c.bold}Fix:{c.reset} Add section at end of file", file=out)
        for line in action.content.split("\n"):
            print(f"  {c.green}+ {line}{c.reset}", file=out)
    print("", file=out)
