"""File helpers shared by backup and restore. Failures become ``StorageError``."""

from __future__ import annotations

import shutil
from pathlib import Path

from gravitybox.core.errors import StorageError
from gravitybox.models.messages import SettingsMessage


def ensure_dir(path: Path, on_error: SettingsMessage) -> bool:
    """Create *path* (and parents) if missing. Returns True if it was created."""
    try:
        if path.is_dir():
            return False
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise StorageError(on_error, f"Cannot create {path}: {e}") from e
    return True


def copy_file(source: Path, dest: Path, on_error: SettingsMessage) -> None:
    try:
        shutil.copy2(source, dest)
    except OSError as e:
        raise StorageError(on_error, f"Cannot copy {source} -> {dest}: {e}") from e


def remove_file(path: Path, on_error: SettingsMessage) -> None:
    """Delete *path*; a missing file is fine."""
    try:
        path.unlink(missing_ok=True)
    except OSError as e:
        raise StorageError(on_error, f"Cannot delete {path}: {e}") from e


def list_entries(directory: Path, on_error: SettingsMessage) -> list[Path]:
    """Entries of *directory* in name order; empty if it does not exist."""
    try:
        if not directory.is_dir():
            return []
        return sorted(directory.iterdir(), key=lambda p: p.name)
    except OSError as e:
        raise StorageError(on_error, f"Cannot list {directory}: {e}") from e


def touch_file(path: Path, on_error: SettingsMessage) -> None:
    """Create an empty file at *path* if it does not exist yet."""
    try:
        path.touch(exist_ok=True)
    except OSError as e:
        raise StorageError(on_error, f"Cannot create {path}: {e}") from e
