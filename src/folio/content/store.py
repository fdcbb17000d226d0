"""Content store — a directory of Markdown documents.

Discovers content files under ``config.content_path`` and loads each as a
:class:`~folio.content.document.Document`.  Documents are independent; a
file that fails to parse is reported and skipped, never fatal to the rest.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from folio._errors import ContentError
from folio.content.document import Document, load_document
from folio.content.validate import Issue

if TYPE_CHECKING:
    from pathlib import Path

    from folio.config import FolioConfig


@dataclass(frozen=True, slots=True)
class LoadResult:
    """Outcome of loading every document in a store.

    Attributes:
        documents: Successfully parsed documents, in path order.
        issues: One error issue per file that failed to load.

    """

    documents: tuple[Document, ...]
    issues: tuple[Issue, ...]

    @property
    def ok(self) -> bool:
        return not self.issues


def listing_order(documents: tuple[Document, ...] | list[Document]) -> list[Document]:
    """Sort newest first; same-day documents by title."""
    by_title = sorted(documents, key=lambda d: d.title.casefold())
    return sorted(by_title, key=lambda d: d.date, reverse=True)


class ContentStore:
    """Loads and lists the documents of a content directory.

    Args:
        config: Site configuration (content directory, extensions, drafts).

    """

    def __init__(self, config: FolioConfig) -> None:
        self._config = config
        self._result: LoadResult | None = None

    @property
    def config(self) -> FolioConfig:
        return self._config

    def discover(self) -> list[Path]:
        """Return content file paths, sorted, excluding section index pages.

        Raises:
            ContentError: If the content directory does not exist.

        """
        root = self._config.content_path
        if not root.is_dir():
            msg = f"Content directory not found: {root}"
            raise ContentError(msg)

        extensions = {ext.lower() for ext in self._config.extensions}
        return sorted(
            path
            for path in root.rglob("*")
            if path.is_file()
            and path.suffix.lower() in extensions
            and path.name != self._config.section_index
        )

    def load(self, *, reload: bool = False) -> LoadResult:
        """Load every discovered document.

        Results are cached; pass ``reload=True`` to re-read the directory.

        """
        if self._result is not None and not reload:
            return self._result

        documents: list[Document] = []
        issues: list[Issue] = []
        root = self._config.content_path
        for path in self.discover():
            try:
                documents.append(load_document(path, content_root=root))
            except ContentError as exc:
                issues.append(Issue.from_error(exc, path))

        self._result = LoadResult(documents=tuple(documents), issues=tuple(issues))
        return self._result

    def published(self) -> list[Document]:
        """Documents for the public listing, newest first.

        Drafts are excluded unless ``include_drafts`` is configured.

        """
        documents = self.load().documents
        if not self._config.include_drafts:
            documents = tuple(d for d in documents if not d.draft)
        return listing_order(documents)

    def get(self, slug: str) -> Document:
        """Return the document whose slug is *slug*.

        Raises:
            ContentError: If no document has that slug.

        """
        for document in self.load().documents:
            if document.slug == slug:
                return document
        msg = f"No document with slug {slug!r}"
        raise ContentError(msg)
