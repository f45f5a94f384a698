"""Consumer access — make restored settings readable by the app and its hooks."""

from __future__ import annotations

import os
import platform
import stat
from pathlib import Path
from typing import Protocol

from loguru import logger

from gravitybox.core.errors import PermissionAdjustmentError


class ConsumerAccess(Protocol):
    """Grants read access on a file (and traversal on a directory) to consumers.

    Implementations raise ``PermissionAdjustmentError`` when they cannot.
    """

    def grant(self, path: Path) -> None: ...


class PosixConsumerAccess:
    """World-readable files, world-readable and traversable directories."""

    def grant(self, path: Path) -> None:
        try:
            self._chmod(path)
        except OSError as e:
            raise PermissionAdjustmentError(f"{path}: {e}") from e

    @staticmethod
    def _chmod(path: Path) -> None:
        mode = stat.S_IMODE(path.stat().st_mode) | stat.S_IRUSR | stat.S_IRGRP | stat.S_IROTH
        if path.is_dir():
            mode |= stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH
        os.chmod(path, mode)


class NoopConsumerAccess:
    """Platforms without POSIX mode bits (Windows)."""

    def grant(self, path: Path) -> None:
        return None


def consumer_access_for_platform() -> ConsumerAccess:
    if platform.system() == "Windows":
        return NoopConsumerAccess()
    return PosixConsumerAccess()


def ensure_consumer_access(access: ConsumerAccess, path: Path) -> bool:
    """Grant access on *path*; failures are logged, never raised."""
    try:
        access.grant(path)
    except (PermissionAdjustmentError, OSError) as e:
        logger.warning(f"Could not adjust permissions: {e}")
        return False
    return True
