"""Version utilities for patchbin."""

from __future__ import annotations

import json
from pathlib import Path

DEFAULT_VERSION = "0.98.0"


def load_version() -> str:
    config_path = Path(__file__).resolve().with_name("config.json")
    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return DEFAULT_VERSION
    meta = data.get("_metadata", {}) if isinstance(data, dict) else {}
    version = str(meta.get("version") or "").strip()
    return version or DEFAULT_VERSION
