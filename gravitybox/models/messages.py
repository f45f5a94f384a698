"""User-visible settings messages."""

from __future__ import annotations

from enum import StrEnum


class SettingsMessage(StrEnum):
    """Outcome of a backup or restore, as an i18n key."""

    BACKUP_FAILED = "settings.backup_failed"
    BACKUP_SUCCESS = "settings.backup_success"
    BACKUP_NO_PREFS = "settings.backup_no_prefs"
    RESTORE_FAILED = "settings.restore_failed"
    RESTORE_SUCCESS = "settings.restore_success"
    RESTORE_NO_BACKUP = "settings.restore_no_backup"

    @property
    def is_failure(self) -> bool:
        return self not in (SettingsMessage.BACKUP_SUCCESS, SettingsMessage.RESTORE_SUCCESS)
