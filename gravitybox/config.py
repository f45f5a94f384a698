"""Application configuration — JSON-based, with file locking and batch update support."""

from __future__ import annotations

import json
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator

from loguru import logger

# Default data directory
_DEFAULT_DATA_DIR = Path.home() / ".gravitybox"


class Config:
    """JSON-based application configuration with file locking."""

    _DEFAULTS: dict[str, Any] = {
        "language": "en_US",
        "package_name": "com.ceco.gm2.gravitybox",
        "sandbox_dir": "",
        "external_storage": "",
        # Battery
        "battery": {
            "charged_sound": False,
            "sound_dir": "",
        },
    }

    def __init__(self, config_dir: Path | None = None) -> None:
        self._data: dict[str, Any] = {}
        self._dir = config_dir or _DEFAULT_DATA_DIR
        self._path = self._dir / "config.json"
        self._lock = threading.Lock()
        self._defer_save = False
        self._load()

    def _load(self) -> None:
        """Load config from disk, merging with defaults."""
        self._data = json.loads(json.dumps(self._DEFAULTS))  # deep copy defaults
        if self._path.exists():
            try:
                with open(self._path, encoding="utf-8") as f:
                    user_data = json.load(f)
                self._deep_merge(self._data, user_data)
            except (json.JSONDecodeError, OSError) as e:
                logger.warning(f"Failed to load config, using defaults: {e}")

    def _deep_merge(self, base: dict, override: dict) -> None:
        """Recursively merge override into base."""
        for key, value in override.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                self._deep_merge(base[key], value)
            else:
                base[key] = value

    def _save(self) -> None:
        """Persist config to disk with file locking."""
        if self._defer_save:
            return
        with self._lock:
            self._dir.mkdir(parents=True, exist_ok=True)
            tmp_path = self._path.with_suffix(".tmp")
            try:
                with open(tmp_path, "w", encoding="utf-8") as f:
                    json.dump(self._data, f, ensure_ascii=False, indent=2)
                tmp_path.replace(self._path)
            except OSError as e:
                logger.error(f"Failed to save config: {e}")
                if tmp_path.exists():
                    tmp_path.unlink(missing_ok=True)

    @contextmanager
    def batch_update(self) -> Iterator[None]:
        """Context manager for batching multiple config changes into a single write."""
        self._defer_save = True
        try:
            yield
        finally:
            self._defer_save = False
            self._save()

    # ── Generic access ──

    def get(self, key: str, default: Any = None) -> Any:
        """Get a config value by dot-separated key path."""
        parts = key.split(".")
        node = self._data
        for part in parts:
            if isinstance(node, dict) and part in node:
                node = node[part]
            else:
                return default
        return node

    def set(self, key: str, value: Any) -> None:
        """Set a config value by dot-separated key path."""
        parts = key.split(".")
        node = self._data
        for part in parts[:-1]:
            if part not in node or not isinstance(node[part], dict):
                node[part] = {}
            node = node[part]
        node[parts[-1]] = value
        self._save()

    # ── Typed properties ──

    @property
    def data_dir(self) -> Path:
        return self._dir

    @property
    def language(self) -> str:
        return self._data.get("language", "en_US")

    @language.setter
    def language(self, value: str) -> None:
        self.set("language", value)

    @property
    def package_name(self) -> str:
        return self._data.get("package_name") or self._DEFAULTS["package_name"]

    @package_name.setter
    def package_name(self, value: str) -> None:
        self.set("package_name", value)

    @property
    def sandbox_dir(self) -> Path:
        raw = self._data.get("sandbox_dir", "")
        return Path(raw) if raw else self._dir / "sandbox"

    @sandbox_dir.setter
    def sandbox_dir(self, value: Path | None) -> None:
        self.set("sandbox_dir", str(value) if value else "")

    @property
    def external_storage(self) -> Path:
        raw = self._data.get("external_storage", "")
        return Path(raw) if raw else Path.home()

    @external_storage.setter
    def external_storage(self, value: Path | None) -> None:
        self.set("external_storage", str(value) if value else "")

    @property
    def charged_sound_enabled(self) -> bool:
        return bool(self.get("battery.charged_sound", False))

    @charged_sound_enabled.setter
    def charged_sound_enabled(self, value: bool) -> None:
        self.set("battery.charged_sound", value)

    @property
    def sound_dir(self) -> Path:
        raw = self.get("battery.sound_dir", "")
        return Path(raw) if raw else self._dir / "sounds"
