"""Storage access used by the answer store."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Protocol


class Filesystem(Protocol):
    """Minimal storage interface: existence check, full read, full write."""

    def exists(self, path: Path) -> bool: ...

    def read_text(self, path: Path) -> str: ...

    def write_text(self, path: Path, content: str) -> None: ...


class LocalFilesystem:
    """Filesystem backed by local disk.

    Writes go to a temporary file next to the target which then replaces
    it, so a reader never sees a partially written file. The parent
    directory must already exist. A symlinked target is written through:
    the file it points at is replaced and the link is kept. New files get
    the usual 0o666 permissions less the process umask; existing files keep
    their mode.
    """

    def exists(self, path: Path) -> bool:
        return Path(path).exists()

    def read_text(self, path: Path) -> str:
        return Path(path).read_text(encoding="utf-8")

    def write_text(self, path: Path, content: str) -> None:
        target = Path(path).resolve()
        if target.exists():
            mode = target.stat().st_mode & 0o777
        else:
            mode = 0o666 & ~_current_umask()
        fd, tmp_name = tempfile.mkstemp(
            dir=target.parent, prefix=f".{target.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
                f.write(content)
            os.chmod(tmp_name, mode)
            os.replace(tmp_name, target)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise


def _current_umask() -> int:
    # os.umask can only be read by setting it
    mask = os.umask(0)
    os.umask(mask)
    return mask
