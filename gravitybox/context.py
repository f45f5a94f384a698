"""Application context — service container for dependency injection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from gravitybox.config import Config
    from gravitybox.core.battery import BatteryInfoManager
    from gravitybox.core.layout import SettingsLayout
    from gravitybox.core.settings_manager import SettingsManager


@dataclass
class AppContext:
    """
    Central service container.

    Replaces the process-wide ``getInstance()`` accessors: every consumer
    receives the services it needs from here.
    """

    config: Config
    layout: SettingsLayout

    settings_manager: SettingsManager
    battery_manager: BatteryInfoManager
