"""
TOML-based config file loading for treepick.

Searches for `.treepick.toml`, `treepick.toml`, or `pyproject.toml [tool.treepick]`
walking up from the current directory. File settings are traversal options, so they
go through the same `normalize_config()` as options passed in code: malformed values
fall back to defaults instead of failing.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Mapping
from dataclasses import fields
from pathlib import Path
from typing import Any

from treepick.file_walker import TraversalConfig, normalize_config

if sys.version_info >= (3, 11):
    import tomllib  # pyright: ignore[reportUnreachable]
else:
    import tomli as tomllib  # type: ignore[no-redef]  # pyright: ignore[reportUnreachable]

log = logging.getLogger(__name__)

# Config file search order (first match wins within each directory level)
_CONFIG_FILENAMES = [".treepick.toml", "treepick.toml", "pyproject.toml"]

_OPTION_NAMES = frozenset(f.name for f in fields(TraversalConfig))


def find_config_file(start_dir: Path) -> Path | None:
    """
    Walk up from `start_dir` looking for a config file. Returns the first
    found, or `None`. `pyproject.toml` only counts if it has `[tool.treepick]`.
    """
    start = start_dir.resolve()
    for directory in [start, *start.parents]:
        for filename in _CONFIG_FILENAMES:
            candidate = directory / filename
            if not candidate.is_file():
                continue
            if filename != "pyproject.toml" or "treepick" in _read_toml(candidate).get("tool", {}):
                return candidate
    return None


def _read_toml(path: Path) -> dict[str, Any]:
    try:
        return tomllib.loads(path.read_text())
    except (tomllib.TOMLDecodeError, OSError) as e:
        log.warning("Ignoring unreadable config file %s: %s", path, e)
        return {}


def load_config(config_path: Path) -> dict[str, Any]:
    """
    Read traversal options from a config file, keyed by `TraversalConfig` field name.

    Keys may be kebab-case (`keep-root`) and may sit inside any table (`[selection]`);
    tables are flattened. Unknown keys are logged and dropped. Values are not checked
    here; `merge_with_config()` normalizes them.
    """
    data = _read_toml(config_path)
    if config_path.name == "pyproject.toml":
        data = data.get("tool", {}).get("treepick", {})

    options: dict[str, Any] = {}
    for key, value in _flatten(data).items():
        name = key.replace("-", "_")
        if name in _OPTION_NAMES:
            options[name] = value
        else:
            log.warning("Ignoring unrecognized config key: %s", key)
    return options


def _flatten(data: Mapping[str, Any]) -> dict[str, Any]:
    flat: dict[str, Any] = {}
    for key, value in data.items():
        if isinstance(value, Mapping):
            flat.update(_flatten(value))
        else:
            flat[key] = value
    return flat


def merge_with_config(
    cli_options: Mapping[str, Any],
    file_options: Mapping[str, Any],
    explicit_flags: set[str],
) -> TraversalConfig:
    """
    Combine CLI and config file options into one `TraversalConfig`.

    Precedence: explicit CLI flags > config file > CLI defaults.
    """
    merged = dict(cli_options)
    for name, value in file_options.items():
        if name not in explicit_flags:
            merged[name] = value
    return normalize_config(merged)
