"""Extract references from agent context documents.

Turns the raw text of an AGENTS.md-style file into a ParsedDocument: heading
sections plus the paths, script commands, dependency names and framework
fingerprints the document mentions.
"""
from __future__ import annotations
import re
from dataclasses import replace
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, Iterator

from agents_lint.models import ParsedDocument, Section


# Patterns for extracting path references
PATH_PATTERNS = {
    # Backtick paths: `./src/index.ts`, `/etc/app.conf`
    'backtick': re.compile(r'`([./][^\s`]+)`'),

    # Bold paths: **./src/**
    'bold': re.compile(r'\*\*([./][^\s*]+)\*\*'),

    # Prepositional phrases: in `src/foo`, see `docs/setup.md`
    'preposition': re.compile(r'(?:in|at|to|from|see)[ \t]+`([^`\n]+/[^`\n]+)`', re.IGNORECASE),

    # Explicit labels: directory: `src/api`
    'label': re.compile(r'(?:directory|folder|file|path):[ \t]*`([^`\n]+)`', re.IGNORECASE),
}

SCRIPT_PATTERNS = [
    re.compile(r'`npm run ([\w:-]+)`'),
    re.compile(r'`yarn ([\w:-]+)`'),
    re.compile(r'`pnpm ([\w:-]+)`'),
    re.compile(r'`bun ([\w:-]+)`'),
    re.compile(r'npm run ([\w:-]+)'),
    re.compile(r'yarn ([\w:-]+)'),
]

# Setup verbs, not named scripts
RESERVED_SCRIPT_VERBS = {'install', 'init'}

DEPENDENCY_PATTERNS = [
    # Versioned literals: `zod@3.22.0`, `@scope/pkg@^1.2`
    re.compile(r'`([@\w][\w/.-]+@[\d.^~*]+)`'),

    # Well-known framework and tool names
    re.compile(
        r'\b(react|vue|angular|next|nuxt|svelte|solid|astro|remix|express|fastify'
        r'|hono|nestjs|prisma|drizzle|zod|typescript)\b',
        re.IGNORECASE,
    ),
]

FRAMEWORK_PATTERNS: dict[str, list[re.Pattern]] = {
    'angular': [re.compile(r'NgModule'), re.compile(r'forRoot\(\)'),
                re.compile(r'ngcc'), re.compile(r'ViewChild')],
    'react': [re.compile(r'React\.Component'), re.compile(r'componentDidMount'),
              re.compile(r'componentWillMount')],
    'vue': [re.compile(r'Vue\.use'), re.compile(r'new Vue\(')],
    'node': [re.compile(r'require\('), re.compile(r'module\.exports')],
}

# A line containing any of these talks about an absent location
NEGATING_PHRASES = [
    re.compile(r'no longer', re.IGNORECASE),
    re.compile(r'removed', re.IGNORECASE),
    re.compile(r'not exist', re.IGNORECASE),
    re.compile(r"doesn't exist", re.IGNORECASE),
    re.compile(r'does not exist', re.IGNORECASE),
    re.compile(r'deprecated', re.IGNORECASE),
]

HEADING_PATTERN = re.compile(r'^(#{1,3})\s+(.+)')

TRAILING_PUNCTUATION = re.compile(r'[,;:.]+$')


def extract(text: str) -> ParsedDocument:
    """Build a ParsedDocument from raw document text.

    Never fails: text without any recognizable reference yields empty facts.
    """
    lines = text.split('\n')

    return ParsedDocument(
        raw_content=text,
        lines=tuple(lines),
        sections=tuple(parse_sections(lines)),
        mentioned_paths=_unique(_extract_paths(text)),
        mentioned_scripts=_unique(_extract_scripts(text)),
        mentioned_dependencies=_unique(_extract_dependencies(text)),
        mentioned_frameworks=_unique(_extract_frameworks(text)),
    )


def parse_document(file_path: Path | str) -> ParsedDocument:
    """Read a context document from disk and extract its facts.

    Raises:
        FileNotFoundError: If the file does not exist
    """
    path = Path(file_path)
    content = path.read_text(encoding='utf-8')
    modified_at = datetime.fromtimestamp(path.stat().st_mtime, tz=timezone.utc)

    return replace(extract(content), source_path=path, modified_at=modified_at)


def parse_sections(lines: list[str]) -> list[Section]:
    """Split lines into heading-delimited sections (single forward scan)."""
    sections: list[Section] = []
    title: str | None = None
    start = 0
    body: list[str] = []

    for index, line in enumerate(lines):
        heading = HEADING_PATTERN.match(line)
        if heading:
            if title is not None:
                sections.append(Section(title, ''.join(body), start, index - 1))
            title = heading.group(2).strip()
            start = index
            body = []
        elif title is not None:
            body.append(line + '\n')

    if title is not None:
        sections.append(Section(title, ''.join(body), start, len(lines) - 1))

    return sections


def _extract_paths(content: str) -> Iterator[str]:
    """Yield path-like references that are asserted to exist."""
    for pattern in PATH_PATTERNS.values():
        for match in pattern.finditer(content):
            candidate = match.group(1)
            if not _looks_like_path(candidate):
                continue

            # "`app/Http/Kernel.php` no longer exists" is not a live location
            if _in_negating_context(content, match.start(1)):
                continue

            candidate = _strip_trailing_punctuation(candidate)
            if candidate:
                yield candidate


def _extract_scripts(content: str) -> Iterator[str]:
    for pattern in SCRIPT_PATTERNS:
        for match in pattern.finditer(content):
            script = TRAILING_PUNCTUATION.sub('', match.group(1))
            if script and script not in RESERVED_SCRIPT_VERBS:
                yield script


def _extract_dependencies(content: str) -> Iterator[str]:
    for pattern in DEPENDENCY_PATTERNS:
        for match in pattern.finditer(content):
            name = _strip_version(match.group(1).lower())
            if name:
                yield name


def _extract_frameworks(content: str) -> Iterator[str]:
    for framework, patterns in FRAMEWORK_PATTERNS.items():
        if any(pattern.search(content) for pattern in patterns):
            yield framework


def _looks_like_path(candidate: str) -> bool:
    return bool(candidate) and (
        candidate.startswith(('./', '../', '/')) or '/' in candidate
    )


def _in_negating_context(content: str, position: int) -> bool:
    """Check the line enclosing position for a negating phrase."""
    line_start = content.rfind('\n', 0, position) + 1
    line_end = content.find('\n', position)
    if line_end == -1:
        line_end = len(content)
    line = content[line_start:line_end]
    return any(phrase.search(line) for phrase in NEGATING_PHRASES)


def _strip_trailing_punctuation(path: str) -> str:
    # Keep parent references such as '../..' intact
    if path == '..' or path.endswith('/..'):
        return path
    return TRAILING_PUNCTUATION.sub('', path)


def _strip_version(name: str) -> str:
    """Drop a trailing '@version' while keeping a leading scope marker."""
    at = name.find('@', 1)
    return name[:at] if at != -1 else name


def _unique(values: Iterable[str]) -> tuple[str, ...]:
    """De-duplicate while keeping first-seen order."""
    return tuple(dict.fromkeys(values))
