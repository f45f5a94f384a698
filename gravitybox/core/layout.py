"""Settings file layout — live sandbox paths and the external backup location."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from gravitybox.config import Config

BACKUP_SUBDIR = Path("GravityBox") / "backup"
BACKUP_MARKER = ".backup_ok"
BACKUP_FILES_DIR = "files"
APP_PICKER_DIR = "app_picker"

# Cached keyguard image, regenerated on demand and never backed up
EXCLUDED_FILES = frozenset({"kis_image.png"})


@dataclass(frozen=True)
class SettingsLayout:
    """
    Where settings live and where they are backed up to.

    Live sandbox:
      {sandbox_dir}/shared_prefs/{package}_preferences.xml
      {sandbox_dir}/files/...
      {sandbox_dir}/files/app_picker/...

    Backup:
      {external_storage}/GravityBox/backup/
        ├── .backup_ok
        ├── {package}_preferences.xml
        └── files/
            └── app_picker/
    """

    package_name: str
    sandbox_dir: Path
    external_storage: Path

    @classmethod
    def from_config(cls, config: Config) -> SettingsLayout:
        return cls(
            package_name=config.package_name,
            sandbox_dir=config.sandbox_dir,
            external_storage=config.external_storage,
        )

    # ── Live ──

    @property
    def prefs_name(self) -> str:
        return f"{self.package_name}_preferences"

    @property
    def prefs_file_name(self) -> str:
        return f"{self.prefs_name}.xml"

    @property
    def files_dir(self) -> Path:
        return self.sandbox_dir / "files"

    @property
    def prefs_dir(self) -> Path:
        return self.sandbox_dir / "shared_prefs"

    @property
    def live_prefs_file(self) -> Path:
        return self.prefs_dir / self.prefs_file_name

    # ── Backup ──

    @property
    def backup_root(self) -> Path:
        return self.external_storage / BACKUP_SUBDIR

    @property
    def backup_marker(self) -> Path:
        return self.backup_root / BACKUP_MARKER

    @property
    def backup_prefs_file(self) -> Path:
        return self.backup_root / self.prefs_file_name

    @property
    def backup_files_dir(self) -> Path:
        return self.backup_root / BACKUP_FILES_DIR
