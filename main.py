"""Command-line entry point — wires services and runs settings/battery commands.

Usage:
    gravitybox [--data-dir DIR] [--verbose] <command>

Commands:
    backup                 back up preferences and data files
    restore                restore the last completed backup
    status                 show backup availability and paths
    uuid                   print (creating if needed) the settings UUID
    battery READING...     feed LEVEL/SCALE[/PLUGGED] readings to the monitor

Examples:
    gravitybox backup
    gravitybox battery 98/100/1 99/100/1 100/100/1
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from gravitybox.config import Config
from gravitybox.context import AppContext
from gravitybox.core.battery import BatteryInfoManager
from gravitybox.core.chime import ChimePlayer, QtChimePlayer, SilentChimePlayer
from gravitybox.core.layout import SettingsLayout
from gravitybox.core.notify import LogNotifier, Notifier
from gravitybox.core.settings_manager import SettingsManager
from gravitybox.i18n import set_language, t
from gravitybox.logger import setup_logger
from gravitybox.models.battery import BatterySnapshot, RawBatteryEvent


def create_context(
    data_dir: Path | None = None,
    notifier: Notifier | None = None,
    verbose: bool = False,
) -> AppContext:
    """Wire all services and return an AppContext."""
    config = Config(data_dir)

    setup_logger(config.data_dir / "logs", verbose=verbose)
    set_language(config.language)

    layout = SettingsLayout.from_config(config)
    settings_manager = SettingsManager(layout, notifier or LogNotifier())

    chime: ChimePlayer = (
        QtChimePlayer(config.sound_dir) if config.charged_sound_enabled else SilentChimePlayer()
    )
    battery_manager = BatteryInfoManager(
        chime=chime,
        charged_sound_enabled=config.charged_sound_enabled,
    )

    return AppContext(
        config=config,
        layout=layout,
        settings_manager=settings_manager,
        battery_manager=battery_manager,
    )


class _PrintingListener:
    def on_battery_status_changed(self, snapshot: BatterySnapshot) -> None:
        state = t("battery.charging") if snapshot.charging else t("battery.discharging")
        print(t("battery.status", level=snapshot.level, state=state))


def parse_reading(text: str) -> RawBatteryEvent:
    """Parse ``LEVEL/SCALE[/PLUGGED]`` into a battery event."""
    parts = text.split("/")
    if len(parts) not in (2, 3):
        raise argparse.ArgumentTypeError(f"expected LEVEL/SCALE[/PLUGGED], got {text!r}")
    try:
        values = [int(p) for p in parts]
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"invalid reading {text!r}: {e}") from e
    return RawBatteryEvent(values[0], values[1], values[2] if len(values) == 3 else 0)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gravitybox",
        description="Back up and restore GravityBox settings, monitor battery state.",
    )
    parser.add_argument("--data-dir", type=Path, default=None, help="Configuration directory")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("backup", help="Back up settings to external storage")
    sub.add_parser("restore", help="Restore settings from the last backup")
    sub.add_parser("status", help="Show backup availability and paths")
    sub.add_parser("uuid", help="Print the settings UUID")
    battery = sub.add_parser("battery", help="Feed battery readings to the monitor")
    battery.add_argument("readings", nargs="+", type=parse_reading, metavar="READING")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Application entry point."""
    args = build_parser().parse_args(argv)
    ctx = create_context(args.data_dir, verbose=args.verbose)
    manager = ctx.settings_manager

    if args.command == "backup":
        return 0 if manager.backup_settings() else 1

    if args.command == "restore":
        return 0 if manager.restore_settings() else 1

    if args.command == "status":
        available = manager.is_backup_available()
        print(t("status.backup_available", available="yes" if available else "no"))
        print(t("status.backup_root", path=ctx.layout.backup_root))
        print(t("status.sandbox", path=ctx.layout.sandbox_dir))
        return 0

    if args.command == "uuid":
        print(manager.get_or_create_uuid())
        return 0

    if args.command == "battery":
        ctx.battery_manager.register_listener(_PrintingListener())
        for event in args.readings:
            ctx.battery_manager.update_battery_info(event)
        return 0

    return 1


if __name__ == "__main__":
    sys.exit(main())
