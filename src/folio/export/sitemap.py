"""Sitemap generation — produce sitemap.xml from published documents.

Generates a standard sitemap.xml listing every published document, with
``lastmod`` taken from the document's ``updated`` or ``date`` field.
Requires ``base_url`` to be configured; skips generation when it is empty.
"""

from __future__ import annotations

import sys
import time
from typing import TYPE_CHECKING
from xml.etree.ElementTree import Element, SubElement, tostring

from folio._errors import ExportError

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from folio.content.document import Document
    from folio.export.listing import ExportedFile

# XML namespace for sitemaps
_SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"


def generate_sitemap(documents: Sequence[Document], base_url: str) -> str:
    """Generate a sitemap.xml string for *documents*.

    Args:
        documents: Documents to list, in the desired order.
        base_url: Site base URL (e.g., ``"https://example.com"``).
            A trailing slash is ignored.

    Returns:
        Complete XML string suitable for writing to ``sitemap.xml``.

    """
    base = base_url.rstrip("/")

    urlset = Element("urlset")
    urlset.set("xmlns", _SITEMAP_NS)

    for document in documents:
        url_el = SubElement(urlset, "url")
        loc = SubElement(url_el, "loc")
        loc.text = base + document.permalink

        lastmod = SubElement(url_el, "lastmod")
        lastmod.text = (document.updated or document.date).isoformat()

    xml = tostring(urlset, encoding="unicode", xml_declaration=False)
    return '<?xml version="1.0" encoding="UTF-8"?>\n' + xml + "\n"


def write_sitemap(
    documents: Sequence[Document],
    base_url: str,
    output_dir: Path,
) -> ExportedFile | None:
    """Write sitemap.xml to the output directory.

    Returns *None* (with a notice on stderr) if ``base_url`` is empty.

    Raises:
        ExportError: If the file cannot be written.

    """
    from folio.export.listing import ExportedFile

    if not base_url:
        print(
            "  Sitemap skipped — set base_url in config to enable",
            file=sys.stderr,
        )
        return None

    t0 = time.perf_counter()
    data = generate_sitemap(documents, base_url).encode("utf-8")

    sitemap_path = output_dir / "sitemap.xml"
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
        sitemap_path.write_bytes(data)
    except OSError as exc:
        msg = f"Failed to write {sitemap_path}: {exc}"
        raise ExportError(msg) from exc
    elapsed = (time.perf_counter() - t0) * 1000

    return ExportedFile(
        source_path="/sitemap.xml",
        output_path=sitemap_path,
        source_type="sitemap",
        size_bytes=len(data),
        duration_ms=elapsed,
    )
