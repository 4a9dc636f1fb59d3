from __future__ import annotations

import os
import shutil
import stat
from pathlib import Path
from typing import Callable


def _clear_readonly(func: Callable[[str], object], path: str, exc: BaseException) -> None:
    """shutil.rmtree error hook: drop the read-only bit and retry once.

    Cloned object files under .git are written read-only by git.
    """
    try:
        os.chmod(path, stat.S_IWUSR | stat.S_IRUSR | stat.S_IXUSR)
    except OSError:
        raise exc
    func(path)


def rmtree_force(path: Path) -> bool:
    """Remove a directory tree, including read-only entries.

    Returns False when there was nothing to remove.
    """
    if not path.exists() and not path.is_symlink():
        return False
    if path.is_symlink() or path.is_file():
        path.unlink()
        return True
    shutil.rmtree(path, onexc=_clear_readonly)
    return True
