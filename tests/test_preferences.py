"""Tests for the shared-preferences XML store."""

from __future__ import annotations

from pathlib import Path

import pytest

from gravitybox.data.preferences import Preferences


@pytest.fixture
def prefs_path(tmp_path: Path) -> Path:
    return tmp_path / "shared_prefs" / "com.ceco.gm2.gravitybox_preferences.xml"


class TestPreferences:
    def test_missing_file_is_empty(self, prefs_path: Path) -> None:
        prefs = Preferences(prefs_path)
        assert prefs.all() == {}
        assert prefs.get("anything", "fallback") == "fallback"

    def test_typed_values_survive_reload(self, prefs_path: Path) -> None:
        prefs = Preferences(prefs_path)
        with prefs.batch_update():
            prefs.set("name", "value")
            prefs.set("flag", True)
            prefs.set("count", 5)
            prefs.set("big", 2**40)
            prefs.set("ratio", 0.5)
            prefs.set("apps", {"com.b", "com.a"})

        reloaded = Preferences(prefs_path)
        assert reloaded.all() == {
            "name": "value",
            "flag": True,
            "count": 5,
            "big": 2**40,
            "ratio": 0.5,
            "apps": {"com.a", "com.b"},
        }

    def test_android_xml_format(self, prefs_path: Path) -> None:
        prefs = Preferences(prefs_path)
        with prefs.batch_update():
            prefs.set("settings_uuid", "abc")
            prefs.set("pref_flag", False)
            prefs.set("big", 2**40)
        text = prefs_path.read_text(encoding="utf-8")
        assert text.startswith("<?xml version='1.0' encoding='utf-8' standalone='yes' ?>")
        assert '<string name="settings_uuid">abc</string>' in text
        assert '<boolean name="pref_flag" value="false" />' in text
        assert '<long name="big" value="1099511627776" />' in text

    def test_reads_existing_android_file(self, prefs_path: Path) -> None:
        prefs_path.parent.mkdir(parents=True)
        prefs_path.write_text(
            "<?xml version='1.0' encoding='utf-8' standalone='yes' ?>\n"
            "<map>\n"
            '    <int name="pref_delay" value="7" />\n'
            '    <string name="pref_text">hi &amp; bye</string>\n'
            '    <unknown name="pref_odd" value="?" />\n'
            "</map>\n",
            encoding="utf-8",
        )
        prefs = Preferences(prefs_path)
        assert prefs.get("pref_delay") == 7
        assert prefs.get("pref_text") == "hi & bye"
        assert not prefs.contains("pref_odd")

    def test_corrupt_file_loads_empty(self, prefs_path: Path) -> None:
        prefs_path.parent.mkdir(parents=True)
        prefs_path.write_text("<map><string", encoding="utf-8")
        assert Preferences(prefs_path).all() == {}

    def test_remove(self, prefs_path: Path) -> None:
        prefs = Preferences(prefs_path)
        prefs.set("key", "v")
        prefs.remove("key")
        assert not Preferences(prefs_path).contains("key")

    def test_unsupported_type_rejected(self, prefs_path: Path) -> None:
        prefs = Preferences(prefs_path)
        with pytest.raises(TypeError):
            prefs.set("bad", ["list"])
        assert not prefs.contains("bad")

    def test_batch_writes_once(self, prefs_path: Path) -> None:
        prefs = Preferences(prefs_path)
        with prefs.batch_update():
            prefs.set("a", "1")
            assert not prefs_path.exists()
        assert prefs_path.exists()
