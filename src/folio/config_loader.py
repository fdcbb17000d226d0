"""Load FolioConfig from folio.yaml / folio.toml if present.

Merges file config with CLI kwargs. CLI overrides file.
"""

from __future__ import annotations

import tomllib
from pathlib import Path

import yaml

from folio._errors import ConfigError
from folio.config import FolioConfig

_CONFIG_KEYS = frozenset({
    "content_dir", "output", "base_url", "extensions", "include_drafts", "section_index",
})
_CONFIG_TYPES: dict[str, tuple[type, ...]] = {
    "content_dir": (str,),
    "output": (str, Path),
    "base_url": (str,),
    "include_drafts": (bool,),
    "section_index": (str,),
}


def load_config(root: Path | str, **overrides: object) -> FolioConfig:
    """Load FolioConfig from root, optionally merging folio.yaml.

    Looks for folio.yaml, folio.yml, or folio.toml in root. If found, loads
    and merges with overrides. Overrides take precedence; ``None`` overrides
    are ignored so that unset CLI flags fall through to the file.

    Raises:
        ConfigError: If the config file is malformed, names unknown keys, or
            gives a value of the wrong type.

    """
    root = Path(root)
    file_config = _read_folio_config(root)
    merged = {**file_config, **{k: v for k, v in overrides.items() if v is not None}}

    unknown = sorted(set(merged) - _CONFIG_KEYS)
    if unknown:
        msg = f"Unknown config keys: {', '.join(unknown)}"
        raise ConfigError(msg)

    for key, expected in _CONFIG_TYPES.items():
        if key in merged and not isinstance(merged[key], expected):
            names = " or ".join(t.__name__ for t in expected)
            msg = f"{key} must be {names}, got {type(merged[key]).__name__}"
            raise ConfigError(msg)

    if "output" in merged and not isinstance(merged["output"], Path):
        merged["output"] = Path(str(merged["output"]))
    if "extensions" in merged:
        merged["extensions"] = _normalize_extensions(merged["extensions"])
    return FolioConfig(root=root, **merged)  # type: ignore[arg-type]


def _read_folio_config(root: Path) -> dict[str, object]:
    """Read folio config from yaml/toml if present. Returns empty dict otherwise."""
    for name in ("folio.yaml", "folio.yml"):
        path = root / name
        if path.is_file():
            return _parse_yaml(path)
    toml_path = root / "folio.toml"
    if toml_path.is_file():
        return _parse_toml(toml_path)
    return {}


def _parse_yaml(path: Path) -> dict[str, object]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        msg = f"Invalid YAML in {path}: {exc}"
        raise ConfigError(msg) from exc
    if not isinstance(data, dict):
        msg = f"{path}: top level must be a mapping"
        raise ConfigError(msg)
    return _flatten_folio_section(data)


def _parse_toml(path: Path) -> dict[str, object]:
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        msg = f"Invalid TOML in {path}: {exc}"
        raise ConfigError(msg) from exc
    return _flatten_folio_section(data)


def _flatten_folio_section(data: dict[str, object]) -> dict[str, object]:
    """Extract folio.* keys into top-level config."""
    result: dict[str, object] = {}
    folio = data.get("folio")
    if isinstance(folio, dict):
        result.update(folio)
    for k, v in data.items():
        if k != "folio":
            result[k] = v
    return result


def _normalize_extensions(value: object) -> tuple[str, ...]:
    """Accept a string or a list of suffixes; ensure each has a leading dot."""
    if isinstance(value, str):
        items = [value]
    elif isinstance(value, (list, tuple)) and all(isinstance(v, str) for v in value):
        items = list(value)
    else:
        msg = f"extensions must be a string or list of strings, got {type(value).__name__}"
        raise ConfigError(msg)
    return tuple(ext if ext.startswith(".") else f".{ext}" for ext in items)
