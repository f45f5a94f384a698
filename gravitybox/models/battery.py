"""Battery data models."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable


def clamp_level(level: int) -> int:
    """Clamp a charge level to a valid percentage."""
    return max(0, min(100, int(level)))


@dataclass(frozen=True)
class BatterySnapshot:
    """Battery level and charging flag at one point in time."""

    level: int = 0
    charging: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "level", clamp_level(self.level))
        object.__setattr__(self, "charging", bool(self.charging))


@dataclass(frozen=True)
class RawBatteryEvent:
    """Battery update as reported by the platform (level/scale/plugged extras)."""

    level_raw: int
    level_scale: int
    plugged: int = 0

    @classmethod
    def from_extras(cls, extras: Mapping[str, Any]) -> RawBatteryEvent:
        """Build an event from intent-style extras, using the platform defaults."""
        return cls(
            level_raw=int(extras.get("level", 0)),
            level_scale=int(extras.get("scale", 100)),
            plugged=int(extras.get("plugged", 0)),
        )


@runtime_checkable
class BatteryStatusListener(Protocol):
    """Receives every committed battery change."""

    def on_battery_status_changed(self, snapshot: BatterySnapshot) -> None: ...
