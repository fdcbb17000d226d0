"""Listing export — write the published document index as JSON.

``folio build`` produces two files for the external site generator:

- ``index.json``: published documents in listing order (newest first)
- ``sitemap.xml``: one URL per published document (needs ``base_url``)

Draft filtering happens here, according to ``include_drafts``.
"""

from __future__ import annotations

import json
import time
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any, Literal

from folio._errors import ExportError
from folio.config_loader import load_config
from folio.content.markdown import render_preview
from folio.content.store import ContentStore

if TYPE_CHECKING:
    from collections.abc import Sequence

    from folio.content.document import Document

LISTING_FILENAME = "index.json"


@dataclass(frozen=True, slots=True)
class ExportedFile:
    """Record of a single file written during export.

    Attributes:
        source_path: Logical path (e.g., ``"/index.json"``).
        output_path: Absolute filesystem path to the written file.
        source_type: Category of the exported file.
        size_bytes: Size of the written file in bytes.
        duration_ms: Time taken to render and write this file.

    """

    source_path: str
    output_path: Path
    source_type: Literal["listing", "sitemap"]
    size_bytes: int
    duration_ms: float


@dataclass(frozen=True, slots=True)
class ExportResult:
    """Aggregate result of ``folio build``.

    Attributes:
        files: All files written during export.
        total_documents: Number of documents in the listing.
        drafts_skipped: Number of drafts left out of the listing.
        duration_ms: Total wall-clock time for the export.
        output_dir: Absolute path to the output directory.

    """

    files: tuple[ExportedFile, ...]
    total_documents: int
    drafts_skipped: int
    duration_ms: float
    output_dir: Path


def document_record(document: Document) -> dict[str, Any]:
    """JSON-ready metadata for one listing entry."""
    summary = document.summary
    return {
        "title": document.title,
        "date": document.date.isoformat(),
        "updated": document.updated.isoformat() if document.updated else None,
        "draft": document.draft,
        "slug": document.slug,
        "permalink": document.permalink,
        "description": document.description,
        "tags": list(document.tags),
        "summary_html": render_preview(summary) if summary else None,
        "path": _relative_path(document),
    }


def _relative_path(document: Document) -> str | None:
    if document.path is None:
        return None
    if document.content_root is not None:
        try:
            return document.path.relative_to(document.content_root).as_posix()
        except ValueError:
            pass
    return document.path.as_posix()


def write_listing(documents: Sequence[Document], output_dir: Path) -> ExportedFile:
    """Write ``index.json`` for *documents* (already filtered and ordered).

    Raises:
        ExportError: If the file cannot be written.

    """
    t0 = time.perf_counter()
    payload = json.dumps(
        {"documents": [document_record(d) for d in documents]},
        indent=2,
        ensure_ascii=False,
    )
    data = (payload + "\n").encode("utf-8")
    listing_path = output_dir / LISTING_FILENAME
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
        listing_path.write_bytes(data)
    except OSError as exc:
        msg = f"Failed to write {listing_path}: {exc}"
        raise ExportError(msg) from exc
    elapsed = (time.perf_counter() - t0) * 1000

    return ExportedFile(
        source_path=f"/{LISTING_FILENAME}",
        output_path=listing_path,
        source_type="listing",
        size_bytes=len(data),
        duration_ms=elapsed,
    )


def build(
    root: str | Path = ".",
    *,
    output: str | Path | None = None,
    base_url: str | None = None,
    include_drafts: bool | None = None,
) -> ExportResult:
    """Load the store at *root* and write the listing and sitemap.

    Args:
        root: Site root directory.
        output: Output directory (relative to root unless absolute).
        base_url: Site base URL for the sitemap; the sitemap is skipped if empty.
        include_drafts: Include draft documents in the export.

    Raises:
        ExportError: If any content file failed to load, or a write fails.

    """
    from folio.export.sitemap import write_sitemap

    start = time.perf_counter()
    config = load_config(
        Path(root),
        output=output,
        base_url=base_url,
        include_drafts=include_drafts,
    )
    store = ContentStore(config)
    loaded = store.load()
    if not loaded.ok:
        details = "\n".join(f"  {issue}" for issue in loaded.issues)
        msg = f"{len(loaded.issues)} content file(s) failed to load:\n{details}"
        raise ExportError(msg)

    documents = store.published()
    output_dir = config.output_path

    files = [write_listing(documents, output_dir)]
    sitemap = write_sitemap(documents, config.base_url, output_dir)
    if sitemap is not None:
        files.append(sitemap)

    return ExportResult(
        files=tuple(files),
        total_documents=len(documents),
        drafts_skipped=len(loaded.documents) - len(documents),
        duration_ms=(time.perf_counter() - start) * 1000,
        output_dir=output_dir,
    )
