"""Notification sinks for backup/restore outcomes."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from loguru import logger

from gravitybox.i18n import t
from gravitybox.models.messages import SettingsMessage


@runtime_checkable
class Notifier(Protocol):
    """Shows a short user-visible message."""

    def show(self, message: SettingsMessage) -> None: ...


class LogNotifier:
    """Default notifier. Writes the translated message to the log."""

    def show(self, message: SettingsMessage) -> None:
        text = t(message.value)
        if message.is_failure:
            logger.warning(text)
        else:
            logger.info(text)


class RecordingNotifier:
    """Keeps every message shown, in order."""

    def __init__(self) -> None:
        self.messages: list[SettingsMessage] = []

    def show(self, message: SettingsMessage) -> None:
        self.messages.append(message)

    @property
    def last(self) -> SettingsMessage | None:
        return self.messages[-1] if self.messages else None

    def texts(self) -> list[str]:
        return [t(m.value) for m in self.messages]
