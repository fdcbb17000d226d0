"""Export — published listing and sitemap for the external site generator."""

from folio.export.listing import ExportedFile, ExportResult, build, write_listing
from folio.export.sitemap import generate_sitemap, write_sitemap

__all__ = [
    "ExportResult",
    "ExportedFile",
    "build",
    "generate_sitemap",
    "write_listing",
    "write_sitemap",
]
