"""Folio error hierarchy.

All folio-specific errors inherit from FolioError for easy catching.
"""

from __future__ import annotations

from pathlib import Path


class FolioError(Exception):
    """Base error for all folio operations."""


class ConfigError(FolioError):
    """Invalid or missing configuration."""


class ContentError(FolioError):
    """A content file could not be read, found, or loaded."""


class FrontMatterError(ContentError):
    """Malformed front matter in a content file.

    Args:
        message: What is wrong with the block.
        path: Source file, when known.
        line: 1-based line number in the source file, when known.

    """

    def __init__(self, message: str, *, path: Path | None = None, line: int | None = None) -> None:
        self.message = message
        self.path = path
        self.line = line
        super().__init__(self._format())

    def _format(self) -> str:
        if self.path is None:
            return self.message
        if self.line is None:
            return f"{self.path}: {self.message}"
        return f"{self.path}:{self.line}: {self.message}"


class ExportError(FolioError):
    """Error during listing or sitemap export."""
