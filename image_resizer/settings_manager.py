from __future__ import annotations

import json
import os
from typing import Any

from .logger import get_logger

_logger = get_logger("settings")

ERROR_OUTPUTS = ("console", "dialog")


def default_settings_path() -> str:
    env_path = (os.getenv("IMAGE_RESIZER_SETTINGS") or "").strip()
    if env_path:
        return env_path
    return os.path.join(os.path.expanduser("~"), ".image_resizer", "settings.json")


class SettingsManager:
    def __init__(self, settings_path: str):
        self.settings_path = settings_path
        self._settings: dict[str, Any] = {}
        self.load()

    DEFAULTS: dict[str, Any] = {
        "error_output": "console",
        "program_name": "image-resizer",
        "vips_cache_max": 0,
    }

    def load(self) -> None:
        try:
            if os.path.exists(self.settings_path):
                with open(self.settings_path, encoding="utf-8") as f:
                    data = json.load(f)
                    if isinstance(data, dict):
                        self._settings = data
                        _logger.debug("settings loaded: %s", self.settings_path)
                        return
                    _logger.warning("settings file is not an object: %s", self.settings_path)
        except (OSError, ValueError) as e:
            _logger.warning("settings load failed: %s", e)
        self._settings = {}

    def get(self, key: str, default: Any = None) -> Any:
        if key in self._settings:
            return self._settings[key]
        if default is not None:
            return default
        return self.DEFAULTS.get(key)

    @property
    def data(self) -> dict[str, Any]:
        return self._settings

    @property
    def error_output(self) -> str:
        val = self.get("error_output")
        if isinstance(val, str) and val.strip().lower() in ERROR_OUTPUTS:
            return val.strip().lower()
        _logger.warning("unknown error_output %r, using console", val)
        return "console"

    @property
    def program_name(self) -> str:
        val = self.get("program_name")
        return val if isinstance(val, str) and val else self.DEFAULTS["program_name"]

    @property
    def vips_cache_max(self) -> int:
        try:
            return max(0, int(self.get("vips_cache_max")))
        except (TypeError, ValueError):
            return 0
