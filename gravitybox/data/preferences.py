"""Key-value preferences stored in Android shared-preferences XML.

File format::

    <?xml version='1.0' encoding='utf-8' standalone='yes' ?>
    <map>
        <string name="settings_uuid">2f0c...</string>
        <boolean name="pref_charged_sound" value="true" />
        <int name="pref_delay" value="5" />
        <set name="pref_apps">
            <string>com.example</string>
        </set>
    </map>
"""

from __future__ import annotations

import threading
import xml.etree.ElementTree as ET
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator

from loguru import logger

_XML_HEADER = "<?xml version='1.0' encoding='utf-8' standalone='yes' ?>\n"
_INT_MIN, _INT_MAX = -(2**31), 2**31 - 1


def _parse_entry(el: ET.Element) -> Any:
    tag = el.tag
    if tag == "string":
        return el.text or ""
    if tag == "boolean":
        return el.get("value") == "true"
    if tag in ("int", "long"):
        return int(el.get("value", "0"))
    if tag == "float":
        return float(el.get("value", "0"))
    if tag == "set":
        return {child.text or "" for child in el.iter("string")}
    raise ValueError(f"Unsupported preference type <{tag}>")


def _build_entry(key: str, value: Any) -> ET.Element:
    # bool before int: bool is an int subclass
    if isinstance(value, bool):
        return ET.Element("boolean", name=key, value="true" if value else "false")
    if isinstance(value, int):
        tag = "int" if _INT_MIN <= value <= _INT_MAX else "long"
        return ET.Element(tag, name=key, value=str(value))
    if isinstance(value, float):
        return ET.Element("float", name=key, value=repr(value))
    if isinstance(value, str):
        el = ET.Element("string", name=key)
        el.text = value
        return el
    if isinstance(value, (set, frozenset)):
        el = ET.Element("set", name=key)
        for item in sorted(value):
            ET.SubElement(el, "string").text = str(item)
        return el
    raise TypeError(f"Cannot store {type(value).__name__} preference '{key}'")


class Preferences:
    """Shared-preferences XML file with locking and batch update support."""

    def __init__(self, path: Path) -> None:
        self._path = path
        self._data: dict[str, Any] = {}
        self._lock = threading.RLock()
        self._defer_save = False
        self.reload()

    @property
    def path(self) -> Path:
        return self._path

    def reload(self) -> None:
        """Re-read the file, e.g. after it was replaced by a restore."""
        with self._lock:
            self._data = {}
            if not self._path.exists():
                return
            try:
                root = ET.parse(self._path).getroot()
            except (ET.ParseError, OSError) as e:
                logger.warning(f"Failed to load preferences {self._path.name}, starting empty: {e}")
                return
            for el in root:
                key = el.get("name")
                if not key:
                    continue
                try:
                    self._data[key] = _parse_entry(el)
                except ValueError as e:
                    logger.warning(f"Skipping preference '{key}': {e}")

    def _save(self) -> None:
        """Write the whole map atomically."""
        if self._defer_save:
            return
        with self._lock:
            root = ET.Element("map")
            for key in sorted(self._data):
                root.append(_build_entry(key, self._data[key]))
            ET.indent(root, space="    ")

            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path = self._path.with_suffix(".tmp")
            try:
                with open(tmp_path, "w", encoding="utf-8") as f:
                    f.write(_XML_HEADER)
                    f.write(ET.tostring(root, encoding="unicode"))
                    f.write("\n")
                tmp_path.replace(self._path)
            except OSError:
                tmp_path.unlink(missing_ok=True)
                raise

    @contextmanager
    def batch_update(self) -> Iterator[None]:
        """Group several changes into a single write."""
        with self._lock:
            self._defer_save = True
            try:
                yield
            finally:
                self._defer_save = False
                self._save()

    # ── Access ──

    def get(self, key: str, default: Any = None) -> Any:
        with self._lock:
            return self._data.get(key, default)

    def contains(self, key: str) -> bool:
        with self._lock:
            return key in self._data

    def set(self, key: str, value: Any) -> None:
        _build_entry(key, value)  # reject unsupported types before mutating
        with self._lock:
            self._data[key] = value
            self._save()

    def remove(self, key: str) -> None:
        with self._lock:
            if self._data.pop(key, None) is not None:
                self._save()

    def all(self) -> dict[str, Any]:
        with self._lock:
            return dict(self._data)
