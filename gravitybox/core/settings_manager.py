"""Settings manager — backup, restore and the installation UUID."""

from __future__ import annotations

import threading
from uuid import uuid4

from loguru import logger

from gravitybox.core.backup import BackupManager
from gravitybox.core.layout import SettingsLayout
from gravitybox.core.notify import LogNotifier, Notifier
from gravitybox.core.permissions import ConsumerAccess
from gravitybox.core.restore import RestoreManager
from gravitybox.data.preferences import Preferences

UUID_KEY = "settings_uuid"


class SettingsManager:
    """Front door for settings operations, constructed once and passed around."""

    def __init__(
        self,
        layout: SettingsLayout,
        notifier: Notifier | None = None,
        access: ConsumerAccess | None = None,
    ) -> None:
        self._layout = layout
        notifier = notifier or LogNotifier()
        self._backup = BackupManager(layout, notifier)
        self._restore = RestoreManager(layout, notifier, access)
        self._prefs: Preferences | None = None
        self._uuid_lock = threading.Lock()

    @property
    def layout(self) -> SettingsLayout:
        return self._layout

    @property
    def preferences(self) -> Preferences:
        """Live preferences of the application (loaded on first access)."""
        if self._prefs is None:
            self._prefs = Preferences(self._layout.live_prefs_file)
        return self._prefs

    # ── Backup / restore ──

    def backup_settings(self) -> bool:
        return self._backup.backup()

    def restore_settings(self) -> bool:
        ok = self._restore.restore()
        if ok and self._prefs is not None:
            self._prefs.reload()
        return ok

    def is_backup_available(self) -> bool:
        return self._backup.is_backup_available()

    # ── Identity ──

    def get_or_create_uuid(self) -> str:
        """Return the stored installation UUID, creating and persisting it if missing."""
        with self._uuid_lock:
            prefs = self.preferences
            uuid = prefs.get(UUID_KEY)
            if not uuid:
                uuid = str(uuid4())
                try:
                    prefs.set(UUID_KEY, uuid)
                except OSError as e:
                    # Still held in memory, so repeated calls agree
                    logger.error(f"Failed to persist settings UUID: {e}")
                else:
                    logger.info(f"Generated settings UUID {uuid}")
            return uuid
