"""Palette settings persisted as a flat JSON object."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

DEFAULT_HOTKEY = "<ctrl>+<alt>+<space>"
DEFAULT_MODEL = "qwen-turbo"
DEFAULT_PATH = Path.home() / ".config" / "quickpalette" / "config.json"

DEFAULTS: dict[str, str] = {
    "api_key": "",
    "hotkey": DEFAULT_HOTKEY,
    "model": DEFAULT_MODEL,
}


class JsonConfigStore:
    """Unknown keys are kept on write; missing or malformed values read as defaults."""

    def __init__(self, path: Path | None = None) -> None:
        self._path = path or DEFAULT_PATH
        self._path.parent.mkdir(parents=True, exist_ok=True)

    @property
    def path(self) -> Path:
        return self._path

    def get_api_key(self) -> str:
        return self._get("api_key")

    def set_api_key(self, key: str) -> None:
        self._set("api_key", key)

    def get_hotkey(self) -> str:
        return self._get("hotkey")

    def set_hotkey(self, hotkey: str) -> None:
        self._set("hotkey", hotkey)

    def get_model(self) -> str:
        return self._get("model")

    def set_model(self, model: str) -> None:
        self._set("model", model)

    def _get(self, key: str) -> str:
        value = self._load().get(key)
        if value is None or (key != "api_key" and not str(value).strip()):
            return DEFAULTS[key]
        return str(value)

    def _set(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self._path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")

    def _load(self) -> dict[str, Any]:
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return {}
        except (json.JSONDecodeError, OSError) as exc:
            logger.warning("Ignoring unreadable config %s: %s", self._path, exc)
            return {}
        return data if isinstance(data, dict) else {}
