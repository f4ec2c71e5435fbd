"""JSON file helpers shared by the stores."""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any

DEFAULT_FILE_MODE = 0o644


def dumps(data: Any) -> str:
    """Pretty JSON the way files in ``shops/`` are written (2-space indent)."""
    return json.dumps(data, indent=2, ensure_ascii=False) + "\n"


def write_json_atomic(path: Path, data: Any, mode: int | None = DEFAULT_FILE_MODE) -> None:
    """Write ``data`` to ``path`` through a temp file and ``os.replace``.

    Readers see either the old document or the new one, never a partial write.
    The file gets ``mode`` before it is moved into place; with ``mode=None`` it
    keeps the private 0600 bits ``mkstemp`` gives the temp file.
    """
    fd, tmp_path = tempfile.mkstemp(dir=str(path.parent), prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(dumps(data))
            handle.flush()
            os.fsync(handle.fileno())
        if mode is not None:
            os.chmod(tmp_path, mode)
        os.replace(tmp_path, path)
    except BaseException:
        try:
            os.unlink(tmp_path)
        except OSError:
            pass
        raise


def remove_if_exists(path: Path) -> bool:
    """Delete ``path``; returns False when there was nothing to delete."""
    try:
        path.unlink()
    except FileNotFoundError:
        return False
    return True
