"""Fix actions derived from lint issues."""
from __future__ import annotations
import re
from dataclasses import dataclass
from typing import Sequence, Union

from agents_lint.models import Issue


@dataclass(frozen=True)
class RemoveLine:
    """Delete one line of the document."""
    line_number: int      # 1-based


@dataclass(frozen=True)
class AddSection:
    """Append a section to the end of the document."""
    content: str


FixAction = Union[RemoveLine, AddSection]

SECTION_TEMPLATES = {
    'missing-setup-section':
        '\n## Setup\n\n```bash\n# TODO: add setup/install commands\n```\n',
    'missing-test-section':
        '\n## Testing\n\n```bash\n# TODO: add test command (e.g., npm test)\n```\n',
    'missing-build-section':
        '\n## Build\n\n```bash\n# TODO: add build command (e.g., npm run build)\n```\n',
}

CUSTOM_SECTION_RULE = re.compile(r'^missing-custom-section-(.+)$')


def section_template(rule: str) -> str | None:
    """Template section for a missing-section rule, or None for other rules."""
    if rule in SECTION_TEMPLATES:
        return SECTION_TEMPLATES[rule]

    match = CUSTOM_SECTION_RULE.match(rule)
    if match:
        # 'code-style' -> 'Code Style'
        name = re.sub(r'\b\w', lambda m: m.group(0).upper(), match.group(1).replace('-', ' '))
        return f'\n## {name}\n\n<!-- TODO: add {name} content -->\n'

    return None


def build_fix_action(issue: Issue, file_lines: Sequence[str]) -> FixAction | None:
    """Derive the fix for an issue.

    A line inside the document becomes a RemoveLine; a missing section with a
    known template becomes an AddSection; anything else is advisory (None).
    """
    if issue.line is not None and 1 <= issue.line <= len(file_lines):
        return RemoveLine(issue.line)

    template = section_template(issue.rule)
    if template:
        return AddSection(template)

    return None
