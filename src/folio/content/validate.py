"""Validation — check content files against the front-matter rules.

Each rule yields an :class:`Issue` rather than raising, so a whole
directory can be checked in one pass:

- the block opens and closes with matching delimiters
- ``title`` is present and non-empty
- ``date`` is present and a valid calendar date
- ``draft`` is absent or a literal boolean
- the body after the front matter is non-empty
- the front matter re-serializes byte-identically (warning only)
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING

from folio._errors import ContentError, FrontMatterError
from folio.content.document import coerce_date, render_source
from folio.content.frontmatter import parse_front_matter, split_front_matter

if TYPE_CHECKING:
    from pathlib import Path

    from folio._types import Severity
    from folio.content.frontmatter import FrontMatter
    from folio.content.store import ContentStore


@dataclass(frozen=True, slots=True)
class Issue:
    """A single validation finding.

    Attributes:
        path: File the issue was found in (None for in-memory sources).
        code: Stable short identifier, e.g. ``"missing-title"``.
        message: Human-readable description.
        severity: ``"error"`` fails a check; ``"warning"`` does not.
        line: 1-based line in the file, when known.

    """

    path: Path | None
    code: str
    message: str
    severity: Severity = "error"
    line: int | None = None

    @classmethod
    def from_error(cls, exc: ContentError, path: Path | None) -> Issue:
        if isinstance(exc, FrontMatterError):
            return cls(path=path, code="front-matter", message=exc.message, line=exc.line)
        return cls(path=path, code="unreadable", message=str(exc))

    def __str__(self) -> str:
        where = str(self.path) if self.path is not None else "<source>"
        if self.line is not None:
            where = f"{where}:{self.line}"
        return f"{where}: {self.severity}: {self.message} [{self.code}]"


@dataclass(frozen=True, slots=True)
class CheckResult:
    """Aggregate result of checking a content store.

    Attributes:
        issues: All findings, in file order.
        files_checked: Number of files examined.

    """

    issues: tuple[Issue, ...]
    files_checked: int

    @property
    def errors(self) -> tuple[Issue, ...]:
        return tuple(i for i in self.issues if i.severity == "error")

    @property
    def warnings(self) -> tuple[Issue, ...]:
        return tuple(i for i in self.issues if i.severity == "warning")

    @property
    def ok(self) -> bool:
        """True when no error-severity issues were found."""
        return not self.errors


def validate_source(source: str, path: Path | None = None) -> tuple[Issue, ...]:
    """Check one content file's text and return every issue found."""
    try:
        fmt, raw, body = split_front_matter(source, path=path)
    except FrontMatterError as exc:
        return (Issue(path, "delimiter", exc.message, line=exc.line),)

    try:
        front_matter = parse_front_matter(raw, fmt, path=path)
    except FrontMatterError as exc:
        return (Issue(path, "syntax", exc.message, line=exc.line),)

    issues = [
        *_check_title(front_matter, path),
        *_check_dates(front_matter, path),
        *_check_draft(front_matter, path),
    ]

    if not body.strip():
        line = len(source.splitlines()) or 1
        issues.append(Issue(path, "empty-body", "document body is empty", line=line))

    if not any(i.severity == "error" for i in issues) and render_source(front_matter, body) != source:
        issues.append(
            Issue(
                path,
                "non-canonical",
                "front matter is not in canonical form (run 'folio fmt')",
                severity="warning",
                line=1,
            )
        )

    return tuple(issues)


def check_store(store: ContentStore) -> CheckResult:
    """Validate every file the store discovers."""
    issues: list[Issue] = []
    paths = store.discover()
    for path in paths:
        try:
            source = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            issues.append(Issue(path, "unreadable", f"cannot read file: {exc}"))
            continue
        issues.extend(validate_source(source, path))
    return CheckResult(issues=tuple(issues), files_checked=len(paths))


def _check_title(front_matter: FrontMatter, path: Path | None) -> list[Issue]:
    line = front_matter.line_of("title")
    if "title" not in front_matter:
        return [Issue(path, "missing-title", "missing required field 'title'", line=2)]
    title = front_matter["title"]
    if not isinstance(title, str):
        msg = f"'title' must be a string, got {type(title).__name__}"
        return [Issue(path, "invalid-title", msg, line=line)]
    if not title.strip():
        return [Issue(path, "empty-title", "'title' must not be empty", line=line)]
    return []


def _check_dates(front_matter: FrontMatter, path: Path | None) -> list[Issue]:
    issues: list[Issue] = []
    if "date" not in front_matter:
        issues.append(Issue(path, "missing-date", "missing required field 'date'", line=2))

    for key in ("date", "updated"):
        if key not in front_matter:
            continue
        value = front_matter[key]
        line = front_matter.line_of(key)
        try:
            coerce_date(value, key)
        except ValueError as exc:
            issues.append(Issue(path, f"invalid-{key}", str(exc), line=line))
            continue
        if isinstance(value, datetime):
            msg = f"'{key}' has a time component; only the calendar date is used"
            issues.append(Issue(path, f"{key}-has-time", msg, severity="warning", line=line))
    return issues


def _check_draft(front_matter: FrontMatter, path: Path | None) -> list[Issue]:
    if "draft" not in front_matter or isinstance(front_matter["draft"], bool):
        return []
    msg = f"'draft' must be true or false, got {front_matter['draft']!r}"
    return [Issue(path, "invalid-draft", msg, line=front_matter.line_of("draft"))]
