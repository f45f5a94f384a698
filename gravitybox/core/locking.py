"""Per-backup-root locks so backup and restore never overlap on one location."""

from __future__ import annotations

import threading
from pathlib import Path

_registry_lock = threading.Lock()
_locks: dict[str, threading.Lock] = {}


def backup_root_lock(root: Path) -> threading.Lock:
    """Return the process-wide lock for *root* (same lock for equal resolved paths)."""
    key = str(Path(root).resolve())
    with _registry_lock:
        lock = _locks.get(key)
        if lock is None:
            lock = _locks[key] = threading.Lock()
        return lock
