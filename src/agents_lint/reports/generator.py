"""Report rendering: human-readable text and machine-readable JSON.

Every function here is a pure function of the report it is given.
"""
from __future__ import annotations
import json
import re

from agents_lint import __version__
from agents_lint.doc_validity.scorer import get_status, score_grade
from agents_lint.models import CheckResult, MultiReport, Report
from .ansi import Palette, palette, severity_icon

RULE_WIDTH = 60
BAR_WIDTH = 20


def format_report(report: Report, color: bool = False, quiet: bool = False) -> str:
    """Render one document's report as text.

    Args:
        report: Report to render
        color: Use ANSI colours
        quiet: Only show error-level issues
    """
    c = palette(color)
    lines = _header(c)
    lines.append(f"{c.bold}File:{c.reset} {report.file}")
    lines.append("")

    lines.extend(_score_block("Freshness Score", report.score, report.grade, c))
    lines.extend(_results_block(report.results, c, quiet))

    lines.append(f"{c.dim}{'─' * RULE_WIDTH}{c.reset}")
    lines.append(_counts_line(report.errors, report.warnings, report.infos, c))
    lines.append("")
    lines.append(_verdict(report.status, c))
    lines.append("")
    return "\n".join(lines)


def format_multi_report(multi: MultiReport, color: bool = False, quiet: bool = False) -> str:
    """Render the reports of every document plus the cross-document check as text."""
    c = palette(color)
    lines = _header(c)
    lines.append(f"{c.bold}Files:{c.reset} {', '.join(multi.files)}")
    lines.append("")

    lines.extend(_score_block("Overall Score", multi.overall_score, score_grade(multi.overall_score), c))

    for report in multi.reports:
        lines.append(f"{c.dim}{'─' * RULE_WIDTH}{c.reset}")
        lines.append(f"{c.bold}{report.file}{c.reset}  "
                     f"{_score_color(report.score, c)}{report.score}/100{c.reset} ({report.grade})")
        lines.append("")
        lines.extend(_results_block(report.results, c, quiet))

    if multi.cross is not None:
        lines.append(f"{c.dim}{'─' * RULE_WIDTH}{c.reset}")
        lines.extend(_results_block([multi.cross], c, quiet))

    lines.append(f"{c.dim}{'─' * RULE_WIDTH}{c.reset}")
    lines.append(_counts_line(multi.total_errors, multi.total_warnings, multi.total_infos, c))
    lines.append("")
    lines.append(_verdict(get_status(multi.overall_score), c))
    lines.append("")
    return "\n".join(lines)


def format_json(report: Report) -> str:
    return json.dumps(report.to_dict(), indent=2, ensure_ascii=False)


def format_multi_json(multi: MultiReport) -> str:
    return json.dumps(multi.to_dict(), indent=2, ensure_ascii=False)


def checker_title(checker: str) -> str:
    """'npm-scripts' -> 'Npm Scripts'"""
    return re.sub(r'\b\w', lambda m: m.group(0).upper(), checker.replace('-', ' '))


def _header(c: Palette) -> list[str]:
    return [
        "",
        f"{c.bold}{c.cyan}agents-lint{c.reset} {c.dim}v{__version__}{c.reset}",
        f"{c.dim}{'─' * RULE_WIDTH}{c.reset}",
    ]


def _score_block(title: str, score: int, grade: str, c: Palette) -> list[str]:
    tint = _score_color(score, c)
    return [
        f"{c.bold}{title}{c.reset}",
        f"  {_score_bar(score, c)}  {tint}{c.bold}{score}/100{c.reset} {c.bold}({grade}){c.reset}",
        "",
    ]


def _results_block(results, c: Palette, quiet: bool) -> list[str]:
    lines: list[str] = []
    shown_any = False

    for result in results:
        issues = [i for i in result.issues if i.severity == "error"] if quiet else result.issues
        if not issues and not result.suppressed:
            continue
        shown_any = True

        plural = "s" if len(issues) != 1 else ""
        lines.append(f"{c.bold}{checker_title(result.checker)}{c.reset} "
                     f"{c.dim}({len(issues)} issue{plural}){c.reset}")

        for issue in issues:
            location = f"{c.gray}:{issue.line}{c.reset}" if issue.line else ""
            lines.append(f"  {severity_icon(issue.severity, c)} {issue.message}{location}")
            if issue.context:
                lines.append(f"    {c.gray}{issue.context}{c.reset}")
            if issue.suggestion:
                lines.append(f"    {c.dim}→ {issue.suggestion}{c.reset}")
            lines.append("")

        lines.extend(_suppressed_line(result, c))

    if not shown_any:
        lines.append(f"{c.green}{c.bold}✓ No issues found!{c.reset} Your AGENTS.md is in great shape.")
        lines.append("")

    return lines


def _suppressed_line(result: CheckResult, c: Palette) -> list[str]:
    if not result.suppressed:
        return []
    return [f"  {c.dim}… and {result.suppressed} more not shown{c.reset}", ""]


def _counts_line(errors: int, warnings: int, infos: int, c: Palette) -> str:
    error_tint = c.red if errors else c.gray
    warn_tint = c.yellow if warnings else c.gray
    info_tint = c.cyan if infos else c.gray
    return (
        f"{error_tint}{errors} error{'s' if errors != 1 else ''}{c.reset}  "
        f"{warn_tint}{warnings} warning{'s' if warnings != 1 else ''}{c.reset}  "
        f"{info_tint}{infos} info{c.reset}"
    )


def _verdict(status: str, c: Palette) -> str:
    if status == "stale":
        return (f"{c.red}Context rot detected. Agents using this file may produce incorrect "
                f"or costly outputs.{c.reset}\n"
                f"{c.dim}Run with {c.cyan}--fix{c.reset}{c.dim} to get suggestions for updating "
                f"your AGENTS.md.{c.reset}")
    if status == "warning":
        return (f"{c.yellow}Some stale references found. Consider updating before running "
                f"agents on this repo.{c.reset}")
    return f"{c.green}AGENTS.md is fresh and ready for your coding agents. ✓{c.reset}"


def _score_bar(score: int, c: Palette) -> str:
    filled = int(score / 100 * BAR_WIDTH + 0.5)
    return f"{_score_color(score, c)}{'█' * filled}{c.gray}{'░' * (BAR_WIDTH - filled)}{c.reset}"


def _score_color(score: int, c: Palette) -> str:
    status = get_status(score)
    if status == "fresh":
        return c.green
    if status == "warning":
        return c.yellow
    return c.red

