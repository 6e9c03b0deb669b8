"""Load PagemapConfig from pagemap.yaml if present.

Merges file config with CLI kwargs. CLI overrides file.
"""

from __future__ import annotations

import tomllib
from pathlib import Path

import yaml

from pagemap.config import PagemapConfig

# Keys accepted at the top level of a config file
_CONFIG_KEYS: frozenset[str] = frozenset({
    "pages_dir",
    "extensions",
    "meta_macro",
    "debounce_ms",
    "max_events",
})

CONFIG_FILE_NAMES: tuple[str, ...] = ("pagemap.yaml", "pagemap.yml", "pagemap.toml")


def load_config(root: Path, **overrides: object) -> PagemapConfig:
    """Load PagemapConfig from root, optionally merging pagemap.yaml.

    Looks for pagemap.yaml, pagemap.yml, or pagemap.toml in root. If found,
    loads and merges with overrides. Overrides take precedence; overrides
    whose value is ``None`` are ignored so CLI defaults don't mask the file.
    """
    file_config = _read_pagemap_config(root)
    merged = {**file_config, **{k: v for k, v in overrides.items() if v is not None}}
    if "extensions" in merged and isinstance(merged["extensions"], str):
        merged["extensions"] = tuple(
            ext.strip() for ext in str(merged["extensions"]).split(",") if ext.strip()
        )
    return PagemapConfig(root=root, **merged)  # type: ignore[arg-type]


def _read_pagemap_config(root: Path) -> dict[str, object]:
    """Read pagemap config from yaml/toml if present. Returns empty dict otherwise."""
    for name in ("pagemap.yaml", "pagemap.yml"):
        path = root / name
        if path.is_file():
            return _parse_yaml(path)
    toml_path = root / "pagemap.toml"
    if toml_path.is_file():
        return _parse_toml(toml_path)
    return {}


def _parse_yaml(path: Path) -> dict[str, object]:
    """Parse YAML config. Returns empty dict on error."""
    try:
        data = yaml.safe_load(path.read_text()) or {}
    except (OSError, yaml.YAMLError):
        return {}
    if not isinstance(data, dict):
        return {}
    return _flatten_pagemap_section(data)


def _parse_toml(path: Path) -> dict[str, object]:
    """Parse TOML config. Returns empty dict on error."""
    try:
        data = tomllib.loads(path.read_text())
    except (OSError, tomllib.TOMLDecodeError):
        return {}
    return _flatten_pagemap_section(data)


def _flatten_pagemap_section(data: dict[str, object]) -> dict[str, object]:
    """Extract pagemap.* keys into top-level config."""
    result: dict[str, object] = {}
    section = data.get("pagemap")
    if isinstance(section, dict):
        for k, v in section.items():
            if k in _CONFIG_KEYS:
                result[k] = v
    for k, v in data.items():
        if k != "pagemap" and k in _CONFIG_KEYS:
            result[k] = v
    return result
