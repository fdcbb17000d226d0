"""Terminal reporting — mode-aware status output on stderr.

Prints check and build summaries with status indicators.  Detects
``NO_COLOR`` / ``TERM`` for safe fallback.  Library code never prints;
only the CLI calls into this module.
"""

from __future__ import annotations

import os
import sys
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from folio.content.validate import CheckResult, Issue
    from folio.export.listing import ExportResult


# ---------------------------------------------------------------------------
# ANSI helpers, respecting NO_COLOR (https://no-color.org)
# ---------------------------------------------------------------------------

def _supports_color() -> bool:
    """Return True if the terminal supports ANSI colors."""
    if os.environ.get("NO_COLOR"):
        return False
    if os.environ.get("TERM") == "dumb":
        return False
    return hasattr(sys.stderr, "isatty") and sys.stderr.isatty()


_COLOR = _supports_color()

_RESET = "\033[0m" if _COLOR else ""
_BOLD = "\033[1m" if _COLOR else ""
_DIM = "\033[2m" if _COLOR else ""
_CYAN = "\033[36m" if _COLOR else ""
_GREEN = "\033[32m" if _COLOR else ""
_YELLOW = "\033[33m" if _COLOR else ""
_RED = "\033[31m" if _COLOR else ""


_MODE_STYLES: dict[str, tuple[str, str]] = {
    "check": (_GREEN, "check"),
    "build": (_YELLOW, "build"),
    "fmt": (_CYAN, "fmt"),
}

_SEVERITY_STYLES: dict[str, str] = {
    "error": _RED,
    "warning": _YELLOW,
}


def _mode_badge(mode: str) -> str:
    """Return a styled [mode] badge."""
    color, label = _MODE_STYLES.get(mode, (_DIM, mode))
    return f"{color}[{label}]{_RESET}"


def _plural(count: int, word: str) -> str:
    return f"{count} {word}" if count == 1 else f"{count} {word}s"


def _header(mode: str) -> list[str]:
    from folio import __version__

    return [
        "",
        f"  {_BOLD}folio{_RESET} {_DIM}v{__version__}{_RESET}  {_mode_badge(mode)}",
        f"  {_DIM}{'─' * 43}{_RESET}",
    ]


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def format_issue(issue: Issue) -> str:
    """One-line rendering of an issue, colored by severity."""
    color = _SEVERITY_STYLES.get(issue.severity, "")
    where = str(issue.path) if issue.path is not None else "<source>"
    if issue.line is not None:
        where = f"{where}:{issue.line}"
    return (
        f"{_DIM}{where}{_RESET} {color}{issue.severity}{_RESET} "
        f"{issue.message} {_DIM}[{issue.code}]{_RESET}"
    )


def print_issues(issues: tuple[Issue, ...] | list[Issue]) -> None:
    """Print each issue on its own line to stderr."""
    for issue in issues:
        print(f"  {format_issue(issue)}", file=sys.stderr)


def print_check_report(result: CheckResult) -> None:
    """Print the ``folio check`` summary to stderr."""
    lines = _header("check")
    lines.append(f"  {_DIM}├─{_RESET} {_plural(result.files_checked, 'file')} checked")

    n_errors = len(result.errors)
    n_warnings = len(result.warnings)
    error_color = _RED if n_errors else _GREEN
    lines.append(f"  {_DIM}├─{_RESET} {error_color}{_plural(n_errors, 'error')}{_RESET}")
    warn_color = _YELLOW if n_warnings else _DIM
    lines.append(f"  {_DIM}└─{_RESET} {warn_color}{_plural(n_warnings, 'warning')}{_RESET}")

    if result.issues:
        lines.append("")
        lines.extend(f"  {format_issue(issue)}" for issue in result.issues)

    lines.append("")
    print("\n".join(lines), file=sys.stderr)


def print_build_report(result: ExportResult) -> None:
    """Print the ``folio build`` summary to stderr."""
    lines = _header("build")
    timing = f" {_DIM}in {result.duration_ms:.0f}ms{_RESET}" if result.duration_ms > 0 else ""
    lines.append(
        f"  {_DIM}├─{_RESET} {_plural(result.total_documents, 'document')} exported{timing}"
    )
    if result.drafts_skipped:
        lines.append(f"  {_DIM}├─{_RESET} {_plural(result.drafts_skipped, 'draft')} skipped")
    for exported in result.files:
        lines.append(
            f"  {_DIM}├─{_RESET} {exported.source_path} {_DIM}({exported.size_bytes} bytes){_RESET}"
        )
    lines.append(f"  {_DIM}└─{_RESET} output: {_DIM}{result.output_dir}{_RESET}")
    lines.append("")
    print("\n".join(lines), file=sys.stderr)


def print_fmt_report(changed: list[str], *, check: bool, failed: int = 0) -> None:
    """Print the ``folio fmt`` summary to stderr."""
    lines = _header("fmt")
    verb = "would be reformatted" if check else "reformatted"
    lines.append(f"  {_DIM}├─{_RESET} {_plural(len(changed), 'file')} {verb}")
    if failed:
        lines.append(f"  {_DIM}├─{_RESET} {_RED}{_plural(failed, 'file')} skipped{_RESET} (errors)")
    lines.extend(f"  {_DIM}│{_RESET}  {name}" for name in changed)
    lines.append(f"  {_DIM}└─{_RESET} done")
    lines.append("")
    print("\n".join(lines), file=sys.stderr)


def print_error(message: str) -> None:
    """Print a fatal error to stderr."""
    print(f"{_RED}error:{_RESET} {message}", file=sys.stderr)
