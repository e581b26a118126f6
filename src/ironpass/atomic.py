"""Atomic file writing utilities."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

# Config files may carry store locations and GnuPG settings
PRIVATE_FILE_MODE = 0o600


def atomic_write(path: Path, content: str, *, mode: int = PRIVATE_FILE_MODE) -> None:
    """Replace ``path`` with ``content`` in one rename.

    The temporary file is created next to the target so the rename never
    crosses filesystems, and it gets ``mode`` before any data is written.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.")
    tmp_path = Path(tmp_name)
    try:
        os.fchmod(fd, mode)
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(content)
            handle.flush()
            os.fsync(handle.fileno())
        tmp_path.replace(path)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise
