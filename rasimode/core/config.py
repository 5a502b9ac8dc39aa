"""Configuration management for the RASI indentation engine."""
from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Optional

import yaml

from rasimode.core.logging import get_logger
from rasimode.indent.syntax import LexicalSyntax

CONFIG_DIR = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")) / "rasimode"
DEFAULTS_PATH = Path(__file__).resolve().parent.parent / "settings" / "defaults.yaml"
USER_SETTINGS_PATH = CONFIG_DIR / "settings.yaml"

DEFAULT_INDENT_UNIT = 4


class ConfigManager:
    """Loads default and user configuration and provides helpers to query values."""

    def __init__(self, settings_path: Optional[Path] = None) -> None:
        self.logger = get_logger(__name__)
        self.settings_path = Path(settings_path) if settings_path else USER_SETTINGS_PATH
        self.defaults = self._load_yaml(DEFAULTS_PATH)
        self.user_settings = self._load_yaml(self.settings_path)
        self.settings = self._deep_merge(self.defaults, self.user_settings)

    def _load_yaml(self, path: Path) -> dict[str, Any]:
        if not path.exists():
            return {}
        with path.open("r", encoding="utf-8") as handle:
            return yaml.safe_load(handle) or {}

    def get(self, key: str, default: Any | None = None) -> Any:
        return self.settings.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self.settings[key] = value

    def save(self) -> None:
        self.settings_path.parent.mkdir(parents=True, exist_ok=True)
        with self.settings_path.open("w", encoding="utf-8") as handle:
            yaml.safe_dump(self.settings, handle)

    def _deep_merge(self, base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        merged: dict[str, Any] = dict(base)
        for key, value in override.items():
            if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
                merged[key] = self._deep_merge(merged[key], value)
            else:
                merged[key] = value
        return merged

    def indent_unit(self) -> int:
        """Columns per nesting level, falling back to the default on bad values."""

        value = self.settings.get("indent", {}).get("unit", DEFAULT_INDENT_UNIT)
        if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            self.logger.warning("Invalid indent unit %r; using %d", value, DEFAULT_INDENT_UNIT)
            return DEFAULT_INDENT_UNIT
        return value

    def lexical_syntax(self) -> LexicalSyntax:
        return LexicalSyntax.from_settings(self.settings.get("syntax", {}))

    def log_level(self) -> str:
        return str(self.settings.get("logging", {}).get("level", "WARNING")).upper()
