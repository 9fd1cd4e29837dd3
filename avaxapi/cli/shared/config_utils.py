"""Raw config JSON helpers for the `config` command group."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from avaxapi.config.loader import get_config_path


def load_config_json(path: Path | None = None) -> dict[str, Any]:
    """Read raw config JSON from disk."""
    path = path or get_config_path()
    if not path.exists():
        return {}
    return json.loads(path.read_text(encoding="utf-8"))


def save_config_json(data: dict[str, Any], path: Path | None = None) -> Path:
    """Write raw config JSON to the config path."""
    path = path or get_config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
    return path


def parse_value(raw: str) -> Any:
    """Parse CLI input value as JSON if possible; fallback to string."""
    text = raw.strip()
    if text == "":
        return ""
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        lowered = text.lower()
        if lowered in {"true", "false"}:
            return lowered == "true"
        return text


def deep_get(data: dict[str, Any], dotted_key: str) -> Any:
    """Get value by dotted path."""
    cur: Any = data
    for part in dotted_key.split("."):
        if not isinstance(cur, dict) or part not in cur:
            raise KeyError(dotted_key)
        cur = cur[part]
    return cur


def deep_set(data: dict[str, Any], dotted_key: str, value: Any) -> None:
    """Set value by dotted path."""
    parts = dotted_key.split(".")
    cur: dict[str, Any] = data
    for part in parts[:-1]:
        node = cur.get(part)
        if not isinstance(node, dict):
            node = {}
            cur[part] = node
        cur = node
    cur[parts[-1]] = value


def deep_unset(data: dict[str, Any], dotted_key: str) -> bool:
    """Delete key by dotted path; return True if removed."""
    parts = dotted_key.split(".")
    cur: Any = data
    for part in parts[:-1]:
        if not isinstance(cur, dict) or part not in cur:
            return False
        cur = cur[part]
    if not isinstance(cur, dict) or parts[-1] not in cur:
        return False
    del cur[parts[-1]]
    return True
