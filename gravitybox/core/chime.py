"""Audio playback for the "battery charged" chime."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from loguru import logger

CHARGED_SOUND = "battery_charged"


@runtime_checkable
class ChimePlayer(Protocol):
    """Plays a named sound asset."""

    def play(self, asset: str) -> None: ...


class SilentChimePlayer:
    """Accepts play requests and only logs them."""

    def play(self, asset: str) -> None:
        logger.debug(f"Chime '{asset}' requested (silent player)")


class QtChimePlayer:
    """Plays ``<sound_dir>/<asset>.wav`` through Qt Multimedia.

    PySide6 is imported on first use so that headless installs without the
    ``qt`` extra can still construct the player.
    """

    def __init__(self, sound_dir: Path, volume: float = 1.0) -> None:
        self._sound_dir = sound_dir
        self._volume = volume
        self._effects: dict[str, Any] = {}

    def asset_path(self, asset: str) -> Path:
        return self._sound_dir / f"{asset}.wav"

    def play(self, asset: str) -> None:
        path = self.asset_path(asset)
        if not path.is_file():
            raise FileNotFoundError(f"Sound asset not found: {path}")

        effect = self._effects.get(asset)
        if effect is None:
            from PySide6.QtCore import QUrl
            from PySide6.QtMultimedia import QSoundEffect

            effect = QSoundEffect()
            effect.setSource(QUrl.fromLocalFile(str(path)))
            effect.setVolume(self._volume)
            # Keep a reference, QSoundEffect stops when collected
            self._effects[asset] = effect

        effect.play()
        logger.debug(f"Playing {path.name}")
