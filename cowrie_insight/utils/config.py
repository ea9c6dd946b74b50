"""Configuration loading for the Cowrie session insight pipeline."""

from __future__ import annotations

import copy
from pathlib import Path
from typing import Any, Dict

from cowrie_insight.utils.io import load_yaml

DEFAULTS: Dict[str, Any] = {
    "paths": {},
    "analysis": {"top_n": 10},
    "logging": {"level": "INFO"},
}


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(path: Path) -> Dict[str, Any]:
    """Load a YAML config, fill in defaults and resolve ``paths`` entries.

    Relative paths resolve against the project root, the parent of the directory
    holding the config file.
    """

    config = _merge(DEFAULTS, load_yaml(Path(path)) or {})
    base_dir = Path(path).resolve().parent.parent

    resolved_paths: Dict[str, Path] = {}
    for key, value in (config.get("paths") or {}).items():
        if value is None:
            continue
        path_value = Path(str(value))
        if not path_value.is_absolute():
            path_value = (base_dir / path_value).resolve()
        resolved_paths[key] = path_value
    config["paths"] = resolved_paths

    top_n = config["analysis"].get("top_n")
    if not isinstance(top_n, int) or isinstance(top_n, bool) or top_n <= 0:
        raise ValueError(f"analysis.top_n must be a positive integer, got {top_n!r}")

    return config
