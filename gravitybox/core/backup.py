"""Backup manager — copy settings from the live sandbox to external storage."""

from __future__ import annotations

from pathlib import Path

from loguru import logger

from gravitybox.core.errors import ConfigurationError, SettingsError
from gravitybox.core.fileops import (
    copy_file,
    ensure_dir,
    list_entries,
    remove_file,
    touch_file,
)
from gravitybox.core.layout import APP_PICKER_DIR, EXCLUDED_FILES, SettingsLayout
from gravitybox.core.locking import backup_root_lock
from gravitybox.core.notify import LogNotifier, Notifier
from gravitybox.models.messages import SettingsMessage

_FAILED = SettingsMessage.BACKUP_FAILED


class BackupManager:
    """
    Snapshot of the preferences file and the ``files`` directory.

    The ``.backup_ok`` marker is removed before anything is copied and only
    written back once every step succeeded, so a failed attempt never looks
    like a usable backup. Files copied before a failure are left in place.
    """

    def __init__(self, layout: SettingsLayout, notifier: Notifier | None = None) -> None:
        self._layout = layout
        self._notifier = notifier or LogNotifier()

    @property
    def backup_root(self) -> Path:
        return self._layout.backup_root

    def is_backup_available(self) -> bool:
        try:
            return self._layout.backup_marker.exists()
        except OSError as e:
            logger.warning(f"Cannot check backup marker: {e}")
            return False

    def backup(self) -> bool:
        """Run a full backup. Returns False (and notifies) on the first failure."""
        with backup_root_lock(self.backup_root):
            try:
                copied = self._run()
            except SettingsError as e:
                logger.error(f"Settings backup aborted: {e}")
                self._notifier.show(e.message)
                return False
            except OSError as e:
                logger.error(f"Settings backup aborted: {e}")
                self._notifier.show(_FAILED)
                return False

        logger.info(f"Backed up settings ({copied} file(s)) to {self.backup_root}")
        self._notifier.show(SettingsMessage.BACKUP_SUCCESS)
        return True

    def _run(self) -> int:
        layout = self._layout

        ensure_dir(layout.backup_root, _FAILED)
        remove_file(layout.backup_marker, _FAILED)

        # Preferences
        if not layout.live_prefs_file.is_file():
            raise ConfigurationError(
                SettingsMessage.BACKUP_NO_PREFS,
                f"Preferences file not found: {layout.live_prefs_file}",
            )
        copy_file(layout.live_prefs_file, layout.backup_prefs_file, _FAILED)
        copied = 1

        # Other files
        ensure_dir(layout.backup_files_dir, _FAILED)
        for entry in list_entries(layout.files_dir, _FAILED):
            if entry.is_file():
                if entry.name in EXCLUDED_FILES:
                    logger.debug(f"Skipping excluded file {entry.name}")
                    continue
                copy_file(entry, layout.backup_files_dir / entry.name, _FAILED)
                copied += 1
            elif entry.is_dir() and entry.name == APP_PICKER_DIR:
                copied += self._backup_app_picker(entry)

        touch_file(layout.backup_marker, _FAILED)
        return copied

    def _backup_app_picker(self, source_dir: Path) -> int:
        """Mirror the app picker directory one level deep."""
        target_dir = self._layout.backup_files_dir / APP_PICKER_DIR
        ensure_dir(target_dir, _FAILED)
        copied = 0
        for entry in list_entries(source_dir, _FAILED):
            if entry.is_file():
                copy_file(entry, target_dir / entry.name, _FAILED)
                copied += 1
        return copied
