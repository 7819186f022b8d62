"""ANSI styling for terminal output.

COLOR and PLAIN are module-level read-only palettes; renderers pick one via
palette(enabled) and never mutate it.
"""
from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class Palette:
    reset: str
    bold: str
    dim: str
    red: str
    yellow: str
    green: str
    cyan: str
    gray: str


COLOR = Palette(
    reset='\x1b[0m',
    bold='\x1b[1m',
    dim='\x1b[2m',
    red='\x1b[31m',
    yellow='\x1b[33m',
    green='\x1b[32m',
    cyan='\x1b[36m',
    gray='\x1b[90m',
)

PLAIN = Palette(reset='', bold='', dim='', red='', yellow='', green='', cyan='', gray='')

SEVERITY_ICONS = {
    'error': '✖',
    'warn': '⚠',
    'info': 'ℹ',
}


def palette(enabled: bool) -> Palette:
    return COLOR if enabled else PLAIN


def severity_icon(severity: str, colors: Palette) -> str:
    """Coloured icon for an issue severity."""
    tint = {'error': colors.red, 'warn': colors.yellow}.get(severity, colors.cyan)
    return f"{tint}{SEVERITY_ICONS.get(severity, SEVERITY_ICONS['info'])}{colors.reset}"
