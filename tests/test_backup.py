"""Tests for the BackupManager."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest

from gravitybox.core.backup import BackupManager
from gravitybox.core.layout import SettingsLayout
from gravitybox.core.notify import RecordingNotifier
from gravitybox.models.messages import SettingsMessage


@pytest.fixture
def manager(layout: SettingsLayout, notifier: RecordingNotifier) -> BackupManager:
    return BackupManager(layout, notifier)


class TestBackupPaths:
    def test_fixed_layout(self, layout: SettingsLayout, tmp_path: Path) -> None:
        root = tmp_path / "sdcard" / "GravityBox" / "backup"
        assert layout.backup_root == root
        assert layout.backup_marker == root / ".backup_ok"
        assert layout.backup_prefs_file == root / "com.ceco.gm2.gravitybox_preferences.xml"
        assert layout.backup_files_dir == root / "files"


class TestBackupCreation:
    def test_success_writes_marker(
        self, populated: SettingsLayout, manager: BackupManager, notifier: RecordingNotifier
    ) -> None:
        assert manager.is_backup_available() is False
        assert manager.backup() is True
        assert manager.is_backup_available() is True
        assert populated.backup_marker.stat().st_size == 0
        assert notifier.messages == [SettingsMessage.BACKUP_SUCCESS]

    def test_copies_prefs_and_files(self, populated: SettingsLayout, manager: BackupManager) -> None:
        manager.backup()
        assert populated.backup_prefs_file.read_bytes() == populated.live_prefs_file.read_bytes()
        files = populated.backup_files_dir
        assert (files / "a.txt").read_bytes() == b"alpha"
        assert (files / "b.bin").read_bytes() == b"\x00\x01bravo"

    def test_cached_image_is_excluded(self, populated: SettingsLayout, manager: BackupManager) -> None:
        manager.backup()
        assert not (populated.backup_files_dir / "kis_image.png").exists()

    def test_app_picker_mirrored_one_level(
        self, populated: SettingsLayout, manager: BackupManager
    ) -> None:
        manager.backup()
        picker = populated.backup_files_dir / "app_picker"
        assert (picker / "icon_1.png").read_bytes() == b"icon one"
        assert not (picker / "nested").exists()

    def test_other_directories_ignored(self, populated: SettingsLayout, manager: BackupManager) -> None:
        manager.backup()
        assert not (populated.backup_files_dir / "other_dir").exists()

    def test_missing_files_dir_is_fine(
        self, populated: SettingsLayout, manager: BackupManager
    ) -> None:
        import shutil

        shutil.rmtree(populated.files_dir)
        assert manager.backup() is True
        assert populated.backup_files_dir.is_dir()


class TestBackupFailures:
    def test_no_prefs(
        self, layout: SettingsLayout, manager: BackupManager, notifier: RecordingNotifier
    ) -> None:
        assert manager.backup() is False
        assert notifier.messages == [SettingsMessage.BACKUP_NO_PREFS]
        assert manager.is_backup_available() is False

    def test_stale_marker_removed_on_failed_attempt(
        self, layout: SettingsLayout, manager: BackupManager
    ) -> None:
        layout.backup_root.mkdir(parents=True)
        layout.backup_marker.touch()
        assert manager.is_backup_available() is True

        assert manager.backup() is False  # no prefs file
        assert manager.is_backup_available() is False

    def test_backup_root_not_creatable(
        self, layout: SettingsLayout, manager: BackupManager, notifier: RecordingNotifier
    ) -> None:
        # A regular file where the GravityBox directory should be
        layout.external_storage.mkdir(parents=True)
        (layout.external_storage / "GravityBox").write_text("not a dir")
        assert manager.backup() is False
        assert notifier.last == SettingsMessage.BACKUP_FAILED

    def test_copy_failure_leaves_partial_state_without_marker(
        self, populated: SettingsLayout, manager: BackupManager, notifier: RecordingNotifier
    ) -> None:
        import shutil

        real_copy = shutil.copy2

        def flaky_copy(src, dst, *args, **kwargs):
            if Path(src).name == "b.bin":
                raise OSError("disk full")
            return real_copy(src, dst, *args, **kwargs)

        with patch("gravitybox.core.fileops.shutil.copy2", side_effect=flaky_copy):
            assert manager.backup() is False

        assert notifier.last == SettingsMessage.BACKUP_FAILED
        assert manager.is_backup_available() is False
        # Files copied before the failure are kept
        assert populated.backup_prefs_file.exists()
        assert (populated.backup_files_dir / "a.txt").exists()

    def test_marker_write_failure(
        self, populated: SettingsLayout, manager: BackupManager, notifier: RecordingNotifier
    ) -> None:
        with patch("gravitybox.core.fileops.Path.touch", side_effect=OSError("read-only")):
            assert manager.backup() is False
        assert notifier.last == SettingsMessage.BACKUP_FAILED
        assert manager.is_backup_available() is False

    def test_unreadable_prefs_dir(
        self, populated: SettingsLayout, manager: BackupManager, notifier: RecordingNotifier
    ) -> None:
        real_is_file = Path.is_file

        def denied(path: Path) -> bool:
            if path == populated.live_prefs_file:
                raise PermissionError(13, "Permission denied", str(path))
            return real_is_file(path)

        with patch.object(Path, "is_file", autospec=True, side_effect=denied):
            assert manager.backup() is False
        assert notifier.messages == [SettingsMessage.BACKUP_FAILED]
        assert manager.is_backup_available() is False

    def test_unreadable_files_dir(
        self, populated: SettingsLayout, manager: BackupManager, notifier: RecordingNotifier
    ) -> None:
        real_is_dir = Path.is_dir

        def denied(path: Path) -> bool:
            if path == populated.files_dir:
                raise PermissionError(13, "Permission denied", str(path))
            return real_is_dir(path)

        with patch.object(Path, "is_dir", autospec=True, side_effect=denied):
            assert manager.backup() is False
        assert notifier.last == SettingsMessage.BACKUP_FAILED

    def test_availability_check_denied(self, layout: SettingsLayout, manager: BackupManager) -> None:
        with patch.object(Path, "exists", side_effect=PermissionError("denied")):
            assert manager.is_backup_available() is False
