"""Settings backup/restore errors.

Each error carries the message it should be reported with. Engines raise
them internally; the public ``backup()`` / ``restore()`` entry points turn
them into a notification and a ``False`` result.
"""

from __future__ import annotations

from gravitybox.models.messages import SettingsMessage


class SettingsError(Exception):
    """Base class for errors that abort a backup or restore."""

    def __init__(self, message: SettingsMessage, detail: str = "") -> None:
        super().__init__(detail or str(message))
        self.message = message
        self.detail = detail


class ConfigurationError(SettingsError):
    """A source required for the operation does not exist."""


class StorageError(SettingsError):
    """Creating, copying or deleting a file failed."""


class NoBackupError(SettingsError):
    """Restore was requested without a completed backup."""

    def __init__(self, detail: str = "") -> None:
        super().__init__(SettingsMessage.RESTORE_NO_BACKUP, detail)


class PermissionAdjustmentError(Exception):
    """Adjusting access bits on a restored file failed. Logged, never fatal."""
