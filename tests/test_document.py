"""Tests for folio.content.document — parsing, derived fields, round trip."""

from __future__ import annotations

from datetime import date
from pathlib import Path

import pytest

from folio._errors import ContentError, FrontMatterError
from folio.content.document import (
    Document,
    is_canonical,
    load_document,
    parse_document,
    render_document,
    slugify,
)

from .conftest import OWNERSHIP, TRAITS, write

SCENARIO = '+++\ntitle = "X"\ndate = 2026-02-02\ndraft = true\n+++\n\nBody text.\n'


# ---------------------------------------------------------------------------
# parse_document
# ---------------------------------------------------------------------------


class TestParseDocument:
    """parse_document — core fields and their validation."""

    def test_end_to_end_scenario(self) -> None:
        doc = parse_document(SCENARIO)
        assert doc.title == "X"
        assert doc.date == date(2026, 2, 2)
        assert doc.draft is True
        assert doc.body == "Body text.\n"

    def test_body_is_opaque(self) -> None:
        doc = parse_document(OWNERSHIP)
        assert doc.body.startswith("Python has a garbage collector")
        assert "```rust\nfn main() {" in doc.body

    def test_draft_defaults_to_false(self) -> None:
        doc = parse_document('+++\ntitle = "X"\ndate = 2026-02-02\n+++\n\nBody\n')
        assert doc.draft is False

    def test_extra_fields_preserved(self) -> None:
        doc = parse_document(TRAITS)
        assert list(doc.front_matter) == ["title", "date", "description", "taxonomies"]
        assert doc.front_matter["taxonomies"] == {"tags": ["rust", "python"]}

    def test_datetime_uses_calendar_date(self) -> None:
        doc = parse_document('+++\ntitle = "X"\ndate = 2026-02-02T10:00:00Z\n+++\n\nBody\n')
        assert doc.date == date(2026, 2, 2)

    def test_iso_string_date(self) -> None:
        doc = parse_document('+++\ntitle = "X"\ndate = "2026-02-02"\n+++\n\nBody\n')
        assert doc.date == date(2026, 2, 2)

    def test_updated(self) -> None:
        source = '+++\ntitle = "X"\ndate = 2026-02-02\nupdated = 2026-03-01\n+++\n\nBody\n'
        assert parse_document(source).updated == date(2026, 3, 1)

    def test_yaml_front_matter(self) -> None:
        doc = parse_document("---\ntitle: X\ndate: 2026-02-02\ndraft: true\n---\n\nBody\n")
        assert doc.title == "X"
        assert doc.date == date(2026, 2, 2)
        assert doc.draft is True
        assert doc.front_matter.format == "yaml"

    def test_missing_title(self) -> None:
        with pytest.raises(FrontMatterError, match="'title'"):
            parse_document("+++\ndate = 2026-02-02\n+++\n\nBody\n")

    def test_empty_title(self) -> None:
        with pytest.raises(FrontMatterError, match="must not be empty") as exc_info:
            parse_document('+++\ntitle = "  "\ndate = 2026-02-02\n+++\n\nBody\n')
        assert exc_info.value.line == 2

    def test_non_string_title(self) -> None:
        with pytest.raises(FrontMatterError, match="must be a string"):
            parse_document("+++\ntitle = 42\ndate = 2026-02-02\n+++\n\nBody\n")

    def test_missing_date(self) -> None:
        with pytest.raises(FrontMatterError, match="'date'"):
            parse_document('+++\ntitle = "X"\n+++\n\nBody\n')

    def test_invalid_date_string(self) -> None:
        with pytest.raises(FrontMatterError, match="not a valid date") as exc_info:
            parse_document('+++\ntitle = "X"\ndate = "2026-02-30"\n+++\n\nBody\n')
        assert exc_info.value.line == 3

    def test_invalid_date_literal(self) -> None:
        with pytest.raises(FrontMatterError):
            parse_document('+++\ntitle = "X"\ndate = 2026-02-30\n+++\n\nBody\n')

    def test_date_wrong_type(self) -> None:
        with pytest.raises(FrontMatterError, match="must be a date"):
            parse_document('+++\ntitle = "X"\ndate = 20260202\n+++\n\nBody\n')

    def test_non_boolean_draft(self) -> None:
        with pytest.raises(FrontMatterError, match="'draft' must be true or false") as exc_info:
            parse_document('+++\ntitle = "X"\ndate = 2026-02-02\ndraft = "yes"\n+++\n\nBody\n')
        assert exc_info.value.line == 4

    def test_missing_closing_delimiter(self) -> None:
        with pytest.raises(FrontMatterError, match="closing"):
            parse_document('+++\ntitle = "X"\ndate = 2026-02-02\n\nBody\n')

    def test_error_message_includes_path(self) -> None:
        path = Path("posts/bad.md")
        with pytest.raises(FrontMatterError, match=r"^posts/bad\.md:4: "):
            parse_document(
                '+++\ntitle = "X"\ndate = 2026-02-02\ndraft = 1\n+++\n\nBody\n', path
            )


# ---------------------------------------------------------------------------
# load_document
# ---------------------------------------------------------------------------


class TestLoadDocument:
    """load_document — file reading."""

    def test_loads_file(self, tmp_path: Path) -> None:
        path = write(tmp_path / "post.md", SCENARIO)
        doc = load_document(path)
        assert doc.title == "X"
        assert doc.path == path

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ContentError, match="Cannot read"):
            load_document(tmp_path / "nope.md")

    def test_invalid_utf8(self, tmp_path: Path) -> None:
        path = tmp_path / "latin1.md"
        path.write_bytes(b'+++\ntitle = "caf\xe9"\ndate = 2026-02-02\n+++\n\nBody\n')
        with pytest.raises(ContentError):
            load_document(path)


# ---------------------------------------------------------------------------
# Derived fields
# ---------------------------------------------------------------------------


class TestDerivedFields:
    """slug, permalink, summary, tags, description."""

    def test_slug_from_file_stem(self) -> None:
        doc = parse_document(SCENARIO, Path("/site/content/posts/ownership.md"))
        assert doc.slug == "ownership"

    def test_slug_drops_date_prefix(self) -> None:
        doc = parse_document(SCENARIO, Path("/site/content/posts/2026-01-15-traits.md"))
        assert doc.slug == "traits"

    def test_slug_for_page_directory(self) -> None:
        doc = parse_document(SCENARIO, Path("/site/content/posts/iterators/index.md"))
        assert doc.slug == "iterators"

    def test_explicit_slug_wins(self) -> None:
        source = '+++\ntitle = "X"\ndate = 2026-02-02\nslug = "custom"\n+++\n\nBody\n'
        assert parse_document(source, Path("/c/post.md")).slug == "custom"

    def test_slug_from_title_without_path(self) -> None:
        doc = parse_document(OWNERSHIP)
        assert doc.slug == "ownership-for-pythonistas"

    def test_permalink_includes_sections(self) -> None:
        root = Path("/site/content")
        doc = parse_document(SCENARIO, root / "posts" / "ownership.md", content_root=root)
        assert doc.permalink == "/posts/ownership/"

    def test_permalink_for_page_directory(self) -> None:
        root = Path("/site/content")
        doc = parse_document(
            SCENARIO, root / "posts" / "iterators" / "index.md", content_root=root
        )
        assert doc.permalink == "/posts/iterators/"

    def test_permalink_without_content_root(self) -> None:
        assert parse_document(SCENARIO, Path("/c/posts/x.md")).permalink == "/x/"

    def test_explicit_path_wins(self) -> None:
        source = '+++\ntitle = "X"\ndate = 2026-02-02\npath = "/about/me"\n+++\n\nBody\n'
        assert parse_document(source).permalink == "/about/me/"

    def test_summary(self) -> None:
        doc = parse_document(OWNERSHIP)
        assert doc.summary == "Python has a garbage collector; Rust has ownership."

    def test_no_summary_without_marker(self) -> None:
        assert parse_document(SCENARIO).summary is None

    def test_tags(self) -> None:
        assert parse_document(TRAITS).tags == ("rust", "python")
        assert parse_document(SCENARIO).tags == ()

    def test_description(self) -> None:
        assert parse_document(TRAITS).description == "Protocols, ABCs and traits"
        assert parse_document(SCENARIO).description is None

    def test_slugify(self) -> None:
        assert slugify("Traits vs. ABCs!") == "traits-vs-abcs"
        assert slugify("  Hello  World  ") == "hello-world"


# ---------------------------------------------------------------------------
# Serialization and round trip
# ---------------------------------------------------------------------------


class TestRoundTrip:
    """render_document / is_canonical — byte-identical re-serialization."""

    @pytest.mark.parametrize("source", [SCENARIO, OWNERSHIP, TRAITS])
    def test_canonical_sources_round_trip(self, source: str) -> None:
        assert render_document(parse_document(source)) == source
        assert is_canonical(source)

    def test_escaped_strings_round_trip(self) -> None:
        source = (
            '+++\ntitle = "Say \\"hi\\" to \\\\ slashes"\ndate = 2026-02-02\n+++\n\nBody\n'
        )
        assert render_document(parse_document(source)) == source

    def test_extra_blank_lines_not_canonical(self) -> None:
        source = '+++\ntitle = "X"\ndate = 2026-02-02\n+++\n\n\nBody\n'
        assert not is_canonical(source)
        assert render_document(parse_document(source)).endswith("+++\n\nBody\n")

    def test_crlf_not_canonical(self) -> None:
        assert not is_canonical(SCENARIO.replace("\n", "\r\n"))

    def test_single_quoted_strings_not_canonical(self) -> None:
        assert not is_canonical("+++\ntitle = 'X'\ndate = 2026-02-02\n+++\n\nBody\n")

    def test_yaml_converted_to_toml(self) -> None:
        doc = parse_document("---\ntitle: X\ndate: 2026-02-02\ndraft: true\n---\n\nBody text.\n")
        assert render_document(doc) == SCENARIO

    def test_empty_body(self) -> None:
        doc = Document.create("X", date(2026, 2, 2), "")
        assert render_document(doc) == '+++\ntitle = "X"\ndate = 2026-02-02\ndraft = false\n+++\n'

    def test_is_canonical_raises_on_malformed(self) -> None:
        with pytest.raises(FrontMatterError):
            is_canonical("no front matter\n")


class TestCreate:
    """Document.create — new documents in canonical field order."""

    def test_field_order(self) -> None:
        doc = Document.create(
            "X", date(2026, 2, 2), "Body text.\n", draft=True, description="About X"
        )
        assert list(doc.front_matter) == ["title", "date", "draft", "description"]
        assert doc.description == "About X"

    def test_renders_scenario(self) -> None:
        doc = Document.create("X", date(2026, 2, 2), "Body text.\n", draft=True)
        assert render_document(doc) == SCENARIO

    def test_created_document_reparses_equal(self) -> None:
        doc = Document.create("X", date(2026, 2, 2), "Body text.\n", draft=True)
        assert parse_document(render_document(doc)) == doc
