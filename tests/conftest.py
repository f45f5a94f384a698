"""Shared fixtures: a temporary sandbox + external storage layout."""

from __future__ import annotations

from pathlib import Path

import pytest

from gravitybox.core.layout import SettingsLayout
from gravitybox.core.notify import RecordingNotifier

PREFS_XML = (
    "<?xml version='1.0' encoding='utf-8' standalone='yes' ?>\n"
    "<map>\n"
    '    <boolean name="pref_charged_sound" value="true" />\n'
    "</map>\n"
)


@pytest.fixture
def prefs_xml() -> str:
    return PREFS_XML


@pytest.fixture
def layout(tmp_path: Path) -> SettingsLayout:
    return SettingsLayout(
        package_name="com.ceco.gm2.gravitybox",
        sandbox_dir=tmp_path / "sandbox",
        external_storage=tmp_path / "sdcard",
    )


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def populated(layout: SettingsLayout) -> SettingsLayout:
    """Live sandbox with preferences, two data files, the cached image and an app picker."""
    layout.prefs_dir.mkdir(parents=True)
    layout.live_prefs_file.write_text(PREFS_XML, encoding="utf-8")

    files = layout.files_dir
    files.mkdir(parents=True)
    (files / "a.txt").write_bytes(b"alpha")
    (files / "b.bin").write_bytes(b"\x00\x01bravo")
    (files / "kis_image.png").write_bytes(b"cached")

    picker = files / "app_picker"
    picker.mkdir()
    (picker / "icon_1.png").write_bytes(b"icon one")
    nested = picker / "nested"
    nested.mkdir()
    (nested / "deep.txt").write_bytes(b"too deep")

    # Unrelated directory next to app_picker
    (files / "other_dir").mkdir()
    (files / "other_dir" / "x.txt").write_bytes(b"x")
    return layout
