"""Restore manager — copy a completed settings backup back into the sandbox."""

from __future__ import annotations

from pathlib import Path

from loguru import logger

from gravitybox.core.errors import NoBackupError, SettingsError
from gravitybox.core.fileops import copy_file, ensure_dir, list_entries
from gravitybox.core.layout import APP_PICKER_DIR, SettingsLayout
from gravitybox.core.locking import backup_root_lock
from gravitybox.core.notify import LogNotifier, Notifier
from gravitybox.core.permissions import (
    ConsumerAccess,
    consumer_access_for_platform,
    ensure_consumer_access,
)
from gravitybox.models.messages import SettingsMessage

_FAILED = SettingsMessage.RESTORE_FAILED


class RestoreManager:
    """
    Restore settings from the backup written by ``BackupManager``.

    Only a backup carrying the ``.backup_ok`` marker is restored. Every
    restored file and every directory created along the way is made
    readable for the app's consumers; failing to adjust access is logged
    and does not fail the restore. Any copy failure does.
    """

    def __init__(
        self,
        layout: SettingsLayout,
        notifier: Notifier | None = None,
        access: ConsumerAccess | None = None,
    ) -> None:
        self._layout = layout
        self._notifier = notifier or LogNotifier()
        self._access = access or consumer_access_for_platform()

    def restore(self) -> bool:
        """Run a full restore. Returns False (and notifies) on the first failure."""
        with backup_root_lock(self._layout.backup_root):
            try:
                restored = self._run()
            except SettingsError as e:
                logger.error(f"Settings restore aborted: {e}")
                self._notifier.show(e.message)
                return False
            except OSError as e:
                logger.error(f"Settings restore aborted: {e}")
                self._notifier.show(_FAILED)
                return False

        logger.info(f"Restored {restored} file(s) from {self._layout.backup_root}")
        self._notifier.show(SettingsMessage.RESTORE_SUCCESS)
        return True

    def _run(self) -> int:
        layout = self._layout

        if not layout.backup_marker.exists():
            raise NoBackupError(f"No completed backup in {layout.backup_root}")
        if not layout.backup_prefs_file.is_file():
            raise NoBackupError(f"Backup has no preferences file: {layout.backup_prefs_file}")

        # Preferences
        self._ensure_dir(layout.prefs_dir)
        self._copy(layout.backup_prefs_file, layout.live_prefs_file)
        restored = 1

        # Other files
        self._ensure_dir(layout.files_dir)
        for entry in list_entries(layout.backup_files_dir, _FAILED):
            if entry.is_file():
                self._copy(entry, layout.files_dir / entry.name)
                restored += 1
            elif entry.is_dir() and entry.name == APP_PICKER_DIR:
                restored += self._restore_app_picker(entry)

        return restored

    def _restore_app_picker(self, source_dir: Path) -> int:
        target_dir = self._layout.files_dir / APP_PICKER_DIR
        self._ensure_dir(target_dir)
        restored = 0
        for entry in list_entries(source_dir, _FAILED):
            if entry.is_file():
                self._copy(entry, target_dir / entry.name)
                restored += 1
        return restored

    def _ensure_dir(self, path: Path) -> None:
        if ensure_dir(path, _FAILED):
            ensure_consumer_access(self._access, path)

    def _copy(self, source: Path, dest: Path) -> None:
        copy_file(source, dest, _FAILED)
        ensure_consumer_access(self._access, dest)
