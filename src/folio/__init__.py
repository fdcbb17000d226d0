"""Folio — a front-matter content store for Markdown sites.

Reads a directory of Markdown articles, each opening with a ``+++``
delimited TOML block (``title``, ``date``, ``draft``), and exposes them as
validated Document objects with the body passed through untouched.

Quick start::

    import folio

    doc = folio.load_document(Path("content/posts/ownership.md"))
    doc.title, doc.date, doc.draft

    store = folio.ContentStore(folio.load_config("my-site/"))
    for doc in store.published():
        print(doc.date, doc.title)

Command line::

    folio check my-site/          # Validate every document
    folio fmt my-site/            # Rewrite front matter canonically
    folio build my-site/          # Write index.json + sitemap.xml

"""

__version__ = "0.1.0"
__all__ = [
    "ContentStore",
    "Document",
    "FolioConfig",
    "__version__",
    "build",
    "load_config",
    "load_document",
    "parse_document",
    "render_document",
]

_LAZY = {
    "ContentStore": "folio.content.store",
    "Document": "folio.content.document",
    "FolioConfig": "folio.config",
    "build": "folio.export.listing",
    "load_config": "folio.config_loader",
    "load_document": "folio.content.document",
    "parse_document": "folio.content.document",
    "render_document": "folio.content.document",
}


def __getattr__(name: str) -> object:
    """Lazy imports for the public API.

    Keeps ``import folio`` fast; Patitas and PyYAML load on first use.
    """
    module_name = _LAZY.get(name)
    if module_name is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)

    import importlib

    return getattr(importlib.import_module(module_name), name)
