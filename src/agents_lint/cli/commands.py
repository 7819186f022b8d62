from __future__ import annotations
import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from agents_lint import __version__
from agents_lint.config import load_lint_config, load_settings
from agents_lint.doc_validity.validator import lint_all, lint_document
from agents_lint.errors import FixApplyError, NoContextDocumentError
from agents_lint.init.template import generate_agents_md
from agents_lint.remediation.fixer import run_fix_mode
from agents_lint.reports.generator import (
    format_json,
    format_multi_json,
    format_multi_report,
    format_report,
)

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

EXIT_OK = 0
EXIT_FINDINGS = 1
EXIT_FATAL = 2
EXIT_INTERRUPTED = 130

EPILOG = """\
exit codes:
  0   no errors, warnings within --max-warnings
  1   errors found, or warnings above --max-warnings
  2   fatal error (no context file, unreadable file, failed fix)

examples:
  agents-lint                          lint AGENTS.md (and friends) in the cwd
  agents-lint ./docs/AGENTS.md         lint a specific file
  agents-lint --max-warnings 0         fail CI on any warning
  agents-lint --format json > report.json
  agents-lint --fix                    review and apply suggested fixes
  agents-lint init                     generate a starter AGENTS.md
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="agents-lint",
        description="Detect stale references and context rot in AGENTS.md / CLAUDE.md / GEMINI.md files.",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("file", nargs="?",
                        help="Context file to lint, or 'init' (default: auto-detected in the root)")
    parser.add_argument("--root", default=None,
                        help="Repository root to resolve paths against (default: cwd)")
    parser.add_argument("--fix", action="store_true",
                        help="Interactively review and apply suggested fixes")
    parser.add_argument("--format", choices=["text", "json"], default="text",
                        help="Output format (default: text)")
    parser.add_argument("--max-warnings", type=int, default=None,
                        help="Exit with status 1 if warnings exceed this number")
    parser.add_argument("--quiet", action="store_true",
                        help="Only show errors")
    parser.add_argument("--no-color", action="store_true",
                        help="Disable coloured output")
    parser.add_argument("--config", default=None,
                        help="Path to a lint config file (default: .agents-lint.json in the root)")
    parser.add_argument("--verbose", "-V", action="store_true",
                        help="Log progress to stderr")
    parser.add_argument("--version", "-v", action="version", version=__version__)
    return parser


def run(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    sys.exit(main(argv))


def main(argv: list[str] | None = None) -> int:
    """Parse arguments, run the requested command and return the exit status."""
    settings = load_settings()
    args = build_parser().parse_args(argv)

    level = "DEBUG" if args.verbose else settings.log_level
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stderr)],
    )

    color = not (args.no_color or settings.no_color) and sys.stdout.isatty()
    repo_root = Path(args.root or Path.cwd()).resolve()
    logger.debug(f"Repository root: {repo_root}")

    try:
        if args.file == "init":
            return init_command(repo_root)

        if args.fix and args.format == "json":
            _print_error("--fix cannot be used with --format json", args.format)
            return EXIT_FATAL

        config = load_lint_config(repo_root, args.config or settings.config_path)

        if args.file:
            return lint_file(Path(args.file).resolve(), repo_root, config, args, color)
        return asyncio.run(lint_repository(repo_root, config, args, color))

    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        return EXIT_INTERRUPTED
    except (NoContextDocumentError, FixApplyError) as e:
        _print_error(str(e), args.format)
        return EXIT_FATAL


def init_command(repo_root: Path) -> int:
    """Write a starter AGENTS.md unless one already exists."""
    output_path = repo_root / "AGENTS.md"

    if output_path.exists():
        print("AGENTS.md already exists. Use a different file name or delete it first.", file=sys.stderr)
        return EXIT_FINDINGS

    output_path.write_text(generate_agents_md(repo_root), encoding="utf-8")
    print("✓ Created AGENTS.md: fill in the TODO sections, then run agents-lint to validate.")
    return EXIT_OK


def lint_file(file_path: Path, repo_root: Path, config, args: argparse.Namespace, color: bool) -> int:
    """Lint one explicitly named document."""
    report = lint_document(file_path, repo_root, config)

    if args.fix:
        run_fix_mode(report, file_path, color=color)
        return EXIT_OK

    if args.format == "json":
        print(format_json(report))
    else:
        print(format_report(report, color=color, quiet=args.quiet))

    return _exit_status(report.errors, report.warnings, args)


async def lint_repository(repo_root: Path, config, args: argparse.Namespace, color: bool) -> int:
    """Lint every context document discovered in the repository."""
    multi = await lint_all(repo_root, config)

    if args.fix:
        if len(multi.files) > 1:
            choices = "  or  ".join(f"agents-lint --fix {f}" for f in multi.files)
            _print_error(
                "--fix requires an explicit file when multiple context files exist.\n"
                f"  Specify one: {choices}",
                args.format,
            )
            return EXIT_FATAL
        report = multi.reports[0]
        run_fix_mode(report, repo_root / report.file, color=color)
        return EXIT_OK

    if args.format == "json":
        print(format_multi_json(multi))
    else:
        print(format_multi_report(multi, color=color, quiet=args.quiet))

    return _exit_status(multi.total_errors, multi.total_warnings, args)


def _exit_status(errors: int, warnings: int, args: argparse.Namespace) -> int:
    if errors > 0:
        return EXIT_FINDINGS
    if args.max_warnings is not None and warnings > args.max_warnings:
        if args.format == "text":
            print(f"\n✖ Exceeded max warnings threshold ({warnings} > {args.max_warnings})", file=sys.stderr)
        return EXIT_FINDINGS
    return EXIT_OK


def _print_error(message: str, output_format: str) -> None:
    if output_format == "json":
        print(json.dumps({"error": message}), file=sys.stderr)
    else:
        print(f"Error: {message}", file=sys.stderr)

