"""Shared test fixtures for folio."""

from __future__ import annotations

from pathlib import Path

import pytest

OWNERSHIP = """\
+++
title = "Ownership for Pythonistas"
date = 2026-02-02
+++

Python has a garbage collector; Rust has ownership.

<!-- more -->

```rust
fn main() {
    let s = String::from("hello");
}
```
"""

TRAITS = """\
+++
title = "Traits vs ABCs"
date = 2026-01-15
description = "Protocols, ABCs and traits"

[taxonomies]
tags = ["rust", "python"]
+++

Traits look a lot like abstract base classes.
"""

ITERATORS = """\
+++
title = "Iterators"
date = 2026-01-15
+++

Both languages love iterators.
"""

LIFETIMES = """\
+++
title = "Lifetimes"
date = 2026-03-01
draft = true
+++

Work in progress.
"""


def write(path: Path, text: str) -> Path:
    """Write *text* to *path*, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


@pytest.fixture
def tmp_site(tmp_path: Path) -> Path:
    """Create a minimal content site for testing.

    Layout::

        content/_index.md                  section index (not a document)
        content/posts/ownership.md         2026-02-02
        content/posts/2026-01-15-traits.md 2026-01-15, tagged
        content/posts/iterators/index.md   2026-01-15, page directory
        content/posts/lifetimes.md         2026-03-01, draft

    """
    content = tmp_path / "content"
    write(content / "_index.md", '+++\ntitle = "Blog"\nsort_by = "date"\n+++\n')
    write(content / "posts" / "ownership.md", OWNERSHIP)
    write(content / "posts" / "2026-01-15-traits.md", TRAITS)
    write(content / "posts" / "iterators" / "index.md", ITERATORS)
    write(content / "posts" / "lifetimes.md", LIFETIMES)
    return tmp_path
