"""Document — a Markdown article with front matter.

The only entity in a folio content store.  ``title``, ``date`` and ``draft``
are typed and validated; every other front-matter key is preserved as-is in
:attr:`Document.front_matter`.  The body is an opaque Markdown string.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import date, datetime
from pathlib import Path
from typing import TYPE_CHECKING

from folio._errors import ContentError, FrontMatterError
from folio.content.frontmatter import (
    FrontMatter,
    parse_front_matter,
    render_front_matter,
    split_front_matter,
)

if TYPE_CHECKING:
    from folio._types import FrontMatterValue, Permalink


MORE_MARKER = "<!-- more -->"

_DATE_PREFIX = re.compile(r"^\d{4}-\d{2}-\d{2}[_-]")
_NON_SLUG = re.compile(r"[^a-z0-9]+")


@dataclass(frozen=True, slots=True)
class Document:
    """A parsed content document.

    Attributes:
        title: Non-empty document title.
        date: Publication date.
        body: Raw Markdown after the front matter.
        draft: Unpublished documents are excluded from listings.
        updated: Optional last-updated date.
        path: Source file, or None when parsed from a string.
        content_root: Content directory the file was loaded from, used to
            build the permalink's section prefix.
        front_matter: All front-matter fields in authored order.

    """

    title: str
    date: date
    body: str
    draft: bool = False
    updated: date | None = None
    path: Path | None = None
    content_root: Path | None = None
    front_matter: FrontMatter = field(default_factory=FrontMatter, hash=False)

    @classmethod
    def create(
        cls,
        title: str,
        date: date,
        body: str,
        *,
        draft: bool = False,
        path: Path | None = None,
        **extra: FrontMatterValue,
    ) -> Document:
        """Build a new document with canonical field order (title, date, draft, extra...)."""
        fields: dict[str, FrontMatterValue] = {"title": title, "date": date, "draft": draft}
        fields.update(extra)
        return cls(
            title=title,
            date=date,
            body=body,
            draft=draft,
            updated=coerce_date(extra["updated"], "updated") if "updated" in extra else None,
            path=path,
            front_matter=FrontMatter(fields),
        )

    @property
    def slug(self) -> str:
        """URL slug: the ``slug`` field, else the file name, else the title.

        A leading ``YYYY-MM-DD-`` date prefix on the file name is dropped, and
        ``index.md`` inside a page directory takes the directory's name.
        """
        explicit = self.front_matter.get("slug")
        if isinstance(explicit, str) and explicit.strip():
            return explicit.strip()
        if self.path is not None:
            stem = self.path.stem
            if stem == "index" and self.path.parent.name:
                stem = self.path.parent.name
            return slugify(_DATE_PREFIX.sub("", stem))
        return slugify(self.title)

    @property
    def permalink(self) -> Permalink:
        """Site-relative URL, e.g. ``/posts/ownership/``."""
        explicit = self.front_matter.get("path")
        if isinstance(explicit, str) and explicit.strip("/"):
            return "/" + explicit.strip("/") + "/"

        sections: tuple[str, ...] = ()
        if self.path is not None and self.content_root is not None:
            try:
                rel = self.path.relative_to(self.content_root)
            except ValueError:
                rel = None
            if rel is not None:
                parents = rel.parts[:-1]
                if rel.stem == "index" and parents:
                    parents = parents[:-1]
                sections = tuple(parents)

        return "/" + "".join(f"{part}/" for part in sections) + f"{self.slug}/"

    @property
    def summary(self) -> str | None:
        """Body text before the ``<!-- more -->`` marker, or None."""
        head, sep, _ = self.body.partition(MORE_MARKER)
        if not sep:
            return None
        return head.rstrip()

    @property
    def description(self) -> str | None:
        value = self.front_matter.get("description")
        return value if isinstance(value, str) else None

    @property
    def tags(self) -> tuple[str, ...]:
        """Tags from the ``[taxonomies]`` table."""
        taxonomies = self.front_matter.get("taxonomies")
        if not isinstance(taxonomies, dict):
            return ()
        tags = taxonomies.get("tags")
        if not isinstance(tags, list):
            return ()
        return tuple(str(t) for t in tags)


def slugify(text: str) -> str:
    """Lowercase *text* and join its alphanumeric runs with hyphens."""
    return _NON_SLUG.sub("-", text.lower()).strip("-")


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


def parse_document(
    source: str,
    path: Path | None = None,
    *,
    content_root: Path | None = None,
) -> Document:
    """Parse a complete content file into a :class:`Document`.

    Raises:
        FrontMatterError: If the block is malformed, ``title`` is missing or
            empty, ``date`` is missing or invalid, or ``draft`` is not a boolean.

    """
    fmt, raw, body = split_front_matter(source, path=path)
    front_matter = parse_front_matter(raw, fmt, path=path)

    def fail(message: str, key: str) -> FrontMatterError:
        return FrontMatterError(message, path=path, line=front_matter.line_of(key) or 2)

    title = front_matter.get("title")
    if title is None:
        raise fail("missing required field 'title'", "title")
    if not isinstance(title, str):
        raise fail(f"'title' must be a string, got {type(title).__name__}", "title")
    if not title.strip():
        raise fail("'title' must not be empty", "title")

    if "date" not in front_matter:
        raise fail("missing required field 'date'", "date")
    try:
        doc_date = coerce_date(front_matter["date"], "date")
    except ValueError as exc:
        raise fail(str(exc), "date") from exc

    updated = None
    if "updated" in front_matter:
        try:
            updated = coerce_date(front_matter["updated"], "updated")
        except ValueError as exc:
            raise fail(str(exc), "updated") from exc

    draft = front_matter.get("draft", False)
    if not isinstance(draft, bool):
        raise fail(f"'draft' must be true or false, got {draft!r}", "draft")

    return Document(
        title=title,
        date=doc_date,
        body=body,
        draft=draft,
        updated=updated,
        path=path,
        content_root=content_root,
        front_matter=front_matter,
    )


def load_document(path: Path, *, content_root: Path | None = None) -> Document:
    """Read *path* as UTF-8 and parse it.

    Raises:
        ContentError: If the file cannot be read or decoded.
        FrontMatterError: If the front matter is malformed.

    """
    try:
        source = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        msg = f"Cannot read {path}: {exc}"
        raise ContentError(msg) from exc
    return parse_document(source, path, content_root=content_root)


def coerce_date(value: object, key: str) -> date:
    """Normalize a front-matter date value to a calendar date.

    Raises:
        ValueError: If *value* is not a date, date-time, or ISO date string.

    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip())
        except ValueError:
            pass
        try:
            return datetime.fromisoformat(value.strip()).date()
        except ValueError:
            msg = f"'{key}' is not a valid date: {value!r}"
            raise ValueError(msg) from None
    msg = f"'{key}' must be a date (YYYY-MM-DD), got {type(value).__name__}"
    raise ValueError(msg)


# ---------------------------------------------------------------------------
# Serialization
# ---------------------------------------------------------------------------


def render_document(document: Document) -> str:
    """Serialize *document* back to file text with canonical TOML front matter."""
    return render_source(document.front_matter, document.body)


def render_source(fields: FrontMatter | dict[str, FrontMatterValue], body: str) -> str:
    """Join a ``+++`` block and a body, separated by one blank line."""
    block = render_front_matter(fields)
    if not body:
        return block
    return f"{block}\n{body}"


def is_canonical(source: str) -> bool:
    """Whether re-serializing *source* reproduces it byte for byte.

    Only the delimiters and front matter are considered; the core fields
    are not validated.

    Raises:
        FrontMatterError: If the front matter cannot be split or parsed.

    """
    fmt, raw, body = split_front_matter(source)
    front_matter = parse_front_matter(raw, fmt)
    return render_source(front_matter, body) == source
