"""Battery monitor — turns raw platform updates into deduplicated snapshots."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from loguru import logger

from gravitybox.core.battery_state import BatteryStateStore
from gravitybox.core.chime import CHARGED_SOUND, ChimePlayer, SilentChimePlayer
from gravitybox.models.battery import (
    BatterySnapshot,
    BatteryStatusListener,
    RawBatteryEvent,
    clamp_level,
)


class BatteryInfoManager:
    """
    Consumes platform battery events and keeps listeners up to date.

    Listeners are notified once per actual change of level or charging state.
    With the charged sound enabled, the chime plays when the stored level
    goes from exactly 99 to 100 in a single update.
    """

    def __init__(
        self,
        store: BatteryStateStore | None = None,
        chime: ChimePlayer | None = None,
        charged_sound_enabled: bool = False,
    ) -> None:
        self._store = store or BatteryStateStore()
        self._chime = chime or SilentChimePlayer()
        self._charged_sound_enabled = charged_sound_enabled

    # ── Listeners / state ──

    def register_listener(self, listener: BatteryStatusListener) -> None:
        self._store.register_listener(listener)

    def unregister_listener(self, listener: BatteryStatusListener) -> None:
        self._store.unregister_listener(listener)

    def current_snapshot(self) -> BatterySnapshot:
        return self._store.current_snapshot()

    @property
    def charged_sound_enabled(self) -> bool:
        return self._charged_sound_enabled

    def set_charged_sound_enabled(self, enabled: bool) -> None:
        self._charged_sound_enabled = enabled

    # ── Updates ──

    @staticmethod
    def compute_snapshot(event: RawBatteryEvent) -> BatterySnapshot | None:
        """Snapshot for *event*, or None if its scale is unusable."""
        if event.level_scale <= 0:
            return None
        level = clamp_level(round(100 * event.level_raw / event.level_scale))
        return BatterySnapshot(level=level, charging=event.plugged != 0)

    def update_battery_info(self, event: RawBatteryEvent) -> bool:
        """Apply a platform update. Returns True if listeners were notified."""
        snapshot = self.compute_snapshot(event)
        if snapshot is None:
            logger.warning(f"Ignoring battery update with invalid scale: {event}")
            return False
        return self._store.commit(snapshot, before_commit=self._on_before_commit)

    def update_from_extras(self, extras: Mapping[str, Any]) -> bool:
        return self.update_battery_info(RawBatteryEvent.from_extras(extras))

    def _on_before_commit(self, previous: BatterySnapshot, new: BatterySnapshot) -> None:
        if self._charged_sound_enabled and new.level == 100 and previous.level == 99:
            self._play_charged_sound()

    def _play_charged_sound(self) -> None:
        try:
            self._chime.play(CHARGED_SOUND)
        except Exception as e:
            logger.warning(f"Failed to play charged sound: {e}")
