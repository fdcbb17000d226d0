"""Content layer — documents, front matter, and the content store.

Parses front-matter blocks, builds Document objects, validates content
files, and discovers documents in a content directory.
"""

from folio.content.document import (
    Document,
    is_canonical,
    load_document,
    parse_document,
    render_document,
)
from folio.content.frontmatter import FrontMatter, dump_front_matter, split_front_matter
from folio.content.store import ContentStore, LoadResult
from folio.content.validate import CheckResult, Issue, check_store, validate_source

__all__ = [
    "CheckResult",
    "ContentStore",
    "Document",
    "FrontMatter",
    "Issue",
    "LoadResult",
    "check_store",
    "dump_front_matter",
    "is_canonical",
    "load_document",
    "parse_document",
    "render_document",
    "split_front_matter",
    "validate_source",
]
