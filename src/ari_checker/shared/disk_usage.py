from __future__ import annotations

import os
import stat
from pathlib import Path


def tree_size_bytes(root: Path, *, stop_after: int | None = None) -> int:
    """Sum the sizes of regular files under ``root``.

    Symlinks are not followed. When ``stop_after`` is given the walk ends as
    soon as the running total exceeds it.
    """
    total = 0
    for dirpath, _dirnames, filenames in os.walk(root, followlinks=False):
        for name in filenames:
            try:
                st = os.lstat(os.path.join(dirpath, name))
            except FileNotFoundError:
                continue
            if stat.S_ISREG(st.st_mode):
                total += st.st_size
        if stop_after is not None and total > stop_after:
            break
    return total
