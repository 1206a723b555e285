"""Helpers for reading JSON configuration files."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from ..errors import ConfigInvalidError


def read_json(path: Path) -> dict[str, Any]:
    """Read JSON from *path* and return a dictionary.

    Raises
    ------
    ConfigInvalidError
        Raised when the file is missing, is not valid JSON, or its top-level
        value is not an object.
    """

    try:
        with path.open("r", encoding="utf-8") as handle:
            payload = json.load(handle)
    except FileNotFoundError as exc:
        raise ConfigInvalidError(f"JSON file not found: {path}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigInvalidError(f"Invalid JSON data in {path}") from exc

    if not isinstance(payload, dict):
        raise ConfigInvalidError(f"Expected a JSON object in {path}")
    return payload


__all__ = ["read_json"]
