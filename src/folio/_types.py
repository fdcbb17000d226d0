"""Shared type definitions for folio."""

from datetime import date, datetime
from typing import Literal

# Delimited block syntax: ``+++`` is TOML, ``---`` is YAML
type FrontMatterFormat = Literal["toml", "yaml"]

# A single front-matter value as TOML can express it
type FrontMatterValue = (
    str | bool | int | float | date | datetime | list[FrontMatterValue] | dict[str, FrontMatterValue]
)

# Validation issue severity
type Severity = Literal["error", "warning"]

# Site-relative URL path (e.g., "/posts/ownership/")
type Permalink = str
