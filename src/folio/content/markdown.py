"""Markdown body helpers — structure and previews via Patitas.

The body of a document is opaque to folio; these helpers only look at its
block structure (headings, fenced code samples) and render an HTML preview.
Site rendering proper belongs to the external generator.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import cache
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator

    from patitas import Markdown


@dataclass(frozen=True, slots=True)
class CodeSample:
    """A fenced code block in a document body.

    Attributes:
        language: First word of the info string (``"rust"``), or ``""``.
        code: The block's content without the fences.

    """

    language: str
    code: str


@cache
def _renderer() -> Markdown:
    from patitas import Markdown

    return Markdown(plugins=["table"])


def render_preview(body: str) -> str:
    """Render *body* to HTML with the table extension enabled."""
    return _renderer()(body)


def outline(body: str) -> list[tuple[int, str]]:
    """Return ``(level, text)`` for each heading in *body*, in order."""
    from patitas.nodes import Heading

    return [
        (node.level, _inline_text(node))
        for node in _walk(_parse(body))
        if isinstance(node, Heading)
    ]


def code_samples(body: str) -> list[CodeSample]:
    """Return every fenced code block in *body*, in order."""
    from patitas.nodes import FencedCode

    samples: list[CodeSample] = []
    for node in _walk(_parse(body)):
        if not isinstance(node, FencedCode):
            continue
        info = (node.info or "").strip()
        language = info.split()[0] if info else ""
        samples.append(CodeSample(language=language, code=_fenced_content(node, body)))
    return samples


def _parse(body: str) -> object:
    from patitas import parse

    return parse(body)


def _walk(node: object) -> Iterator[object]:
    """Depth-first walk over block nodes.

    Quotes and list items keep nested blocks in ``children``; a list keeps
    its items in ``items``.
    """
    for child in _block_children(node):
        yield child
        yield from _walk(child)


def _block_children(node: object) -> tuple[object, ...]:
    children = getattr(node, "children", None)
    if isinstance(children, tuple):
        return children
    items = getattr(node, "items", None)
    if isinstance(items, tuple):
        return items
    return ()


def _inline_text(node: object) -> str:
    parts: list[str] = []
    for child in getattr(node, "children", None) or ():
        content = getattr(child, "content", None)
        if isinstance(content, str):
            parts.append(content)
        else:
            parts.append(_inline_text(child))
    return "".join(parts)


def _fenced_content(node: object, source: str) -> str:
    override = getattr(node, "content_override", None)
    if override is not None:
        return override
    return source[node.source_start:node.source_end]  # type: ignore[attr-defined]
