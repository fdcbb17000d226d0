"""Folio configuration.

FolioConfig is the central configuration object, frozen after creation.
"""

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True, slots=True)
class FolioConfig:
    """Configuration for a folio content site.

    Attributes:
        root: Path to the site root directory (contains content/).
              Always resolved to an absolute path on construction.
        content_dir: Directory containing Markdown content.
        output: Output directory for ``folio build``.
        base_url: Base URL for the site (used for sitemap generation).
        extensions: File suffixes treated as content documents.
        include_drafts: List and export draft documents as well.
        section_index: File name of section index pages, which are not documents.

    """

    root: Path = field(default_factory=Path.cwd)
    content_dir: str = "content"
    output: Path = field(default_factory=lambda: Path("dist"))
    base_url: str = ""
    extensions: tuple[str, ...] = (".md",)
    include_drafts: bool = False
    section_index: str = "_index.md"

    def __post_init__(self) -> None:
        if not self.root.is_absolute():
            object.__setattr__(self, "root", self.root.resolve())

    @property
    def content_path(self) -> Path:
        """Absolute path to content directory."""
        return self.root / self.content_dir

    @property
    def output_path(self) -> Path:
        """Absolute path to output directory."""
        if self.output.is_absolute():
            return self.output
        return self.root / self.output
