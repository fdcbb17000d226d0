"""Front matter — split, parse, and re-serialize the leading metadata block.

A content file opens with a delimiter line, a block of key/value pairs, and
the same delimiter again::

    +++
    title = "Ownership for Pythonistas"
    date = 2026-02-02
    draft = true
    +++

    Body text...

``+++`` delimits TOML (parsed with :mod:`tomllib`); ``---`` delimits YAML
(parsed with PyYAML's ``safe_load``).  Serialization always emits TOML in a
single canonical layout, so a canonically formatted file survives a
parse/dump cycle byte for byte.
"""

from __future__ import annotations

import math
import re
import tomllib
from collections.abc import Iterator, Mapping
from datetime import date, datetime, time
from typing import TYPE_CHECKING

import yaml

from folio._errors import FrontMatterError

if TYPE_CHECKING:
    from pathlib import Path

    from folio._types import FrontMatterFormat, FrontMatterValue


_DELIMITERS: dict[str, FrontMatterFormat] = {"+++": "toml", "---": "yaml"}
TOML_DELIMITER = "+++"

_BOM = "\ufeff"
_BARE_KEY = re.compile(r"^[A-Za-z0-9_-]+$")
_TOML_LINE = re.compile(r"at line (\d+)")
_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\b": "\\b",
    "\t": "\\t",
    "\n": "\\n",
    "\f": "\\f",
    "\r": "\\r",
}


class FrontMatter(Mapping[str, "FrontMatterValue"]):
    """Read-only, ordered mapping of front-matter keys to values.

    Keys keep the order in which they were authored.  The block's source
    syntax and raw text are kept alongside for diagnostics.

    Args:
        data: Parsed key/value pairs.
        format: ``"toml"`` or ``"yaml"``.
        raw: Text between the delimiters, as it appeared in the file.

    """

    __slots__ = ("_data", "format", "raw")

    def __init__(
        self,
        data: Mapping[str, FrontMatterValue] | None = None,
        *,
        format: FrontMatterFormat = "toml",  # noqa: A002
        raw: str = "",
    ) -> None:
        self._data: dict[str, FrontMatterValue] = dict(data or {})
        self.format = format
        self.raw = raw

    def __getitem__(self, key: str) -> FrontMatterValue:
        return self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"FrontMatter({self._data!r}, format={self.format!r})"

    def to_dict(self) -> dict[str, FrontMatterValue]:
        """Return a shallow, mutable copy of the fields."""
        return dict(self._data)

    def line_of(self, key: str) -> int | None:
        """Return the 1-based file line where *key* is defined, if found.

        Line 1 is the opening delimiter, so the first line of ``raw`` is 2.

        """
        pattern = re.compile(rf"^\s*[\"']?{re.escape(key)}[\"']?\s*[=:]")
        for i, line in enumerate(self.raw.splitlines()):
            if pattern.match(line):
                return i + 2
        return None


# ---------------------------------------------------------------------------
# Splitting
# ---------------------------------------------------------------------------


def split_front_matter(
    source: str, *, path: Path | None = None
) -> tuple[FrontMatterFormat, str, str]:
    """Split *source* into ``(format, raw_block, body)``.

    The body is everything after the closing delimiter line, with leading
    blank lines removed.  A UTF-8 byte-order mark and ``\\r\\n`` line endings
    are tolerated.

    Raises:
        FrontMatterError: If the opening or closing delimiter is missing.

    """
    lines = source.removeprefix(_BOM).splitlines(keepends=True)
    if not lines:
        raise FrontMatterError("empty file, expected a front-matter block", path=path, line=1)

    opener = lines[0].strip()
    fmt = _DELIMITERS.get(opener)
    if fmt is None:
        raise FrontMatterError(
            "missing opening front-matter delimiter ('+++' or '---')", path=path, line=1
        )

    for i in range(1, len(lines)):
        if lines[i].strip() == opener:
            raw = "".join(lines[1:i])
            body = _strip_leading_blank_lines(lines[i + 1:])
            return fmt, raw, body

    raise FrontMatterError(f"missing closing {opener!r} delimiter", path=path, line=1)


def _strip_leading_blank_lines(lines: list[str]) -> str:
    start = 0
    while start < len(lines) and not lines[start].strip():
        start += 1
    return "".join(lines[start:])


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


def parse_front_matter(
    raw: str,
    format: FrontMatterFormat = "toml",  # noqa: A002
    *,
    path: Path | None = None,
) -> FrontMatter:
    """Parse the text between the delimiters into a :class:`FrontMatter`.

    Raises:
        FrontMatterError: If the block is not valid TOML/YAML or is not a mapping.

    """
    if format == "toml":
        try:
            data = tomllib.loads(raw)
        except tomllib.TOMLDecodeError as exc:
            match = _TOML_LINE.search(str(exc))
            line = int(match.group(1)) + 1 if match else None
            raise FrontMatterError(f"invalid TOML: {exc}", path=path, line=line) from exc
    else:
        try:
            data = yaml.safe_load(raw)
        except yaml.YAMLError as exc:
            mark = getattr(exc, "problem_mark", None)
            line = mark.line + 2 if mark is not None else None
            raise FrontMatterError(f"invalid YAML: {exc}", path=path, line=line) from exc
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise FrontMatterError(
                f"front matter must be a mapping, got {type(data).__name__}", path=path, line=2
            )
        front_matter = FrontMatter({str(k): v for k, v in data.items()}, format=format, raw=raw)
        for key, value in front_matter.items():
            bad = _unrepresentable(value)
            if bad is not None:
                raise FrontMatterError(
                    f"{key!r} holds {bad}, which TOML cannot represent",
                    path=path,
                    line=front_matter.line_of(key),
                )
        return front_matter

    return FrontMatter(data, format=format, raw=raw)


def _unrepresentable(value: object) -> str | None:
    """Name the first type inside *value* that has no TOML form, if any."""
    if isinstance(value, (bool, int, float, str, datetime, date, time)):
        return None
    if isinstance(value, list):
        items = value
    elif isinstance(value, dict):
        if not all(isinstance(k, str) for k in value):
            return "a non-string key"
        items = list(value.values())
    elif value is None:
        return "a null value"
    else:
        return f"a {type(value).__name__} value"
    for item in items:
        bad = _unrepresentable(item)
        if bad is not None:
            return bad
    return None


# ---------------------------------------------------------------------------
# Serialization
# ---------------------------------------------------------------------------


def dump_front_matter(fields: Mapping[str, FrontMatterValue]) -> str:
    """Serialize *fields* to canonical TOML (without delimiters).

    Layout: one ``key = value`` line per scalar or array field in the given
    order, then each table as a blank line, a ``[name]`` header and its
    entries.  Tables nested inside tables are written inline.

    """
    lines: list[str] = []
    tables: list[tuple[str, Mapping[str, FrontMatterValue]]] = []

    for key, value in fields.items():
        if isinstance(value, Mapping):
            tables.append((key, value))
        else:
            lines.append(f"{_format_key(key)} = {format_value(value)}")

    for name, table in tables:
        lines.append("")
        lines.append(f"[{_format_key(name)}]")
        lines.extend(f"{_format_key(k)} = {format_value(v)}" for k, v in table.items())

    return "".join(f"{line}\n" for line in lines)


def render_front_matter(fields: Mapping[str, FrontMatterValue]) -> str:
    """Serialize *fields* as a complete ``+++``-delimited block."""
    return f"{TOML_DELIMITER}\n{dump_front_matter(fields)}{TOML_DELIMITER}\n"


def format_value(value: FrontMatterValue) -> str:
    """Format a single value as a TOML literal."""
    # bool before int, datetime before date: both are subclasses
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if math.isnan(value):
            return "nan"
        if math.isinf(value):
            return "inf" if value > 0 else "-inf"
        return repr(value)
    if isinstance(value, str):
        return _format_string(value)
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, (list, tuple)):
        return "[" + ", ".join(format_value(v) for v in value) + "]"
    if isinstance(value, Mapping):
        if not value:
            return "{}"
        items = ", ".join(f"{_format_key(k)} = {format_value(v)}" for k, v in value.items())
        return "{ " + items + " }"
    msg = f"cannot serialize {type(value).__name__} as TOML"
    raise TypeError(msg)


def _format_key(key: str) -> str:
    if _BARE_KEY.match(key):
        return key
    return _format_string(key)


def _format_string(text: str) -> str:
    out: list[str] = []
    for ch in text:
        if ch in _ESCAPES:
            out.append(_ESCAPES[ch])
        elif ord(ch) < 0x20 or ord(ch) == 0x7F:
            out.append(f"\\u{ord(ch):04X}")
        else:
            out.append(ch)
    return '"' + "".join(out) + '"'
