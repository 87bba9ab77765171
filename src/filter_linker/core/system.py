"""Operating-system probes passed into the materializer."""

from __future__ import annotations

import os
import sys
from pathlib import Path


def is_elevated() -> bool:
    """Whether the current process runs with administrator/root rights."""
    if sys.platform == "win32":
        import ctypes

        try:
            return bool(ctypes.windll.shell32.IsUserAnAdmin())
        except (AttributeError, OSError):
            return False
    return os.geteuid() == 0


def symlink_privilege_held() -> bool:
    """Whether this process may create symbolic links.

    Windows requires an elevated session; POSIX systems do not restrict
    symlink creation.
    """
    if sys.platform == "win32":
        return is_elevated()
    return True


def volume_id(path: Path) -> int:
    return os.stat(path).st_dev


def same_volume(a: Path, b: Path) -> bool:
    return volume_id(a) == volume_id(b)
