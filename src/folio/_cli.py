"""Folio CLI — folio check / list / show / new / fmt / build.

Entry point for the ``folio`` command-line interface.
"""

from __future__ import annotations

import argparse
import json
import sys
from datetime import date, datetime, time
from pathlib import Path

from folio._errors import ContentError, FolioError


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the folio CLI."""
    parser = argparse.ArgumentParser(
        prog="folio",
        description="Front-matter content store for Markdown sites.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {_get_version()}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # folio check
    check_parser = subparsers.add_parser("check", help="Validate every content document")
    check_parser.add_argument("root", nargs="?", default=".", help="Site root directory")
    check_parser.add_argument(
        "--strict", action="store_true", help="Treat warnings as errors",
    )

    # folio list
    list_parser = subparsers.add_parser("list", help="Print the published listing")
    list_parser.add_argument("root", nargs="?", default=".", help="Site root directory")
    list_parser.add_argument("--drafts", action="store_true", help="Include drafts")

    # folio show
    show_parser = subparsers.add_parser("show", help="Print a document's front matter as JSON")
    show_parser.add_argument("file", help="Content file")

    # folio new
    new_parser = subparsers.add_parser("new", help="Create a new document")
    new_parser.add_argument("file", help="Path of the file to create")
    new_parser.add_argument("--title", required=True, help="Document title")
    new_parser.add_argument(
        "--date", default=None, help="Publication date, YYYY-MM-DD (default: today)",
    )
    new_parser.add_argument(
        "--publish", action="store_true", help="Create as published rather than draft",
    )

    # folio fmt
    fmt_parser = subparsers.add_parser("fmt", help="Rewrite front matter in canonical form")
    fmt_parser.add_argument("root", nargs="?", default=".", help="Site root directory")
    fmt_parser.add_argument(
        "--check", action="store_true", help="Report files that would change; write nothing",
    )

    # folio build
    build_parser = subparsers.add_parser(
        "build", help="Write the published listing and sitemap",
    )
    build_parser.add_argument("root", nargs="?", default=".", help="Site root directory")
    build_parser.add_argument("--output", default=None, help="Output directory")
    build_parser.add_argument(
        "--base-url", default=None, help="Base URL for sitemap generation",
    )
    build_parser.add_argument(
        "--drafts", action="store_true", default=None, help="Include drafts",
    )

    return parser


def _get_version() -> str:
    """Get the package version."""
    from folio import __version__

    return __version__


def _json_default(value: object) -> str:
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    msg = f"Object of type {type(value).__name__} is not JSON serializable"
    raise TypeError(msg)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def _cmd_check(args: argparse.Namespace) -> int:
    from folio.config_loader import load_config
    from folio.content.store import ContentStore
    from folio.content.validate import check_store
    from folio.report import print_check_report

    result = check_store(ContentStore(load_config(args.root)))
    print_check_report(result)
    if not result.ok or (args.strict and result.warnings):
        return 1
    return 0


def _cmd_list(args: argparse.Namespace) -> int:
    from folio.config_loader import load_config
    from folio.content.store import ContentStore
    from folio.report import print_issues

    config = load_config(args.root, include_drafts=True if args.drafts else None)
    store = ContentStore(config)
    loaded = store.load()
    print_issues(loaded.issues)
    for document in store.published():
        marker = " [draft]" if document.draft else ""
        print(f"{document.date.isoformat()}  {document.title}{marker}  {document.permalink}")
    return 0 if loaded.ok else 1


def _cmd_show(args: argparse.Namespace) -> int:
    from folio.content.document import load_document
    from folio.content.markdown import code_samples, outline

    document = load_document(Path(args.file))
    payload = {
        "front_matter": document.front_matter.to_dict(),
        "slug": document.slug,
        "permalink": document.permalink,
        "headings": [{"level": level, "text": text} for level, text in outline(document.body)],
        "code_languages": sorted({s.language for s in code_samples(document.body) if s.language}),
    }
    print(json.dumps(payload, indent=2, ensure_ascii=False, default=_json_default))
    return 0


def _cmd_new(args: argparse.Namespace) -> int:
    from folio.content.document import Document, render_document

    path = Path(args.file)
    if path.exists():
        msg = f"Refusing to overwrite existing file: {path}"
        raise ContentError(msg)

    try:
        doc_date = date.fromisoformat(args.date) if args.date else date.today()
    except ValueError as exc:
        msg = f"Invalid --date {args.date!r}: expected YYYY-MM-DD"
        raise ContentError(msg) from exc

    document = Document.create(
        args.title,
        doc_date,
        "Write the introduction here.\n\n<!-- more -->\n",
        draft=not args.publish,
    )
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_document(document), encoding="utf-8")
    print(f"  Created {path}", file=sys.stderr)
    return 0


def _cmd_fmt(args: argparse.Namespace) -> int:
    from folio.config_loader import load_config
    from folio.content.document import is_canonical, parse_document, render_document
    from folio.content.store import ContentStore
    from folio.content.validate import Issue
    from folio.report import print_fmt_report, print_issues

    config = load_config(args.root)
    store = ContentStore(config)
    changed: list[str] = []
    failures: list[Issue] = []

    for path in store.discover():
        try:
            source = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            failures.append(Issue(path, "unreadable", f"cannot read file: {exc}"))
            continue
        try:
            if is_canonical(source):
                continue
            formatted = render_document(parse_document(source, path))
        except ContentError as exc:
            failures.append(Issue.from_error(exc, path))
            continue
        changed.append(path.relative_to(config.content_path).as_posix())
        if not args.check:
            path.write_text(formatted, encoding="utf-8")

    print_issues(failures)
    print_fmt_report(changed, check=args.check, failed=len(failures))
    if failures or (args.check and changed):
        return 1
    return 0


def _cmd_build(args: argparse.Namespace) -> int:
    from folio.export.listing import build
    from folio.report import print_build_report

    result = build(
        args.root,
        output=args.output,
        base_url=args.base_url,
        include_drafts=args.drafts,
    )
    print_build_report(result)
    return 0


_COMMANDS = {
    "check": _cmd_check,
    "list": _cmd_list,
    "show": _cmd_show,
    "new": _cmd_new,
    "fmt": _cmd_fmt,
    "build": _cmd_build,
}


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    from folio.report import print_error

    try:
        code = _COMMANDS[args.command](args)
    except FolioError as exc:
        print_error(str(exc))
        sys.exit(1)
    sys.exit(code)


if __name__ == "__main__":
    main()
