"""File primitives for the save file, all text I/O in UTF-8.

Missing files surface as ``FileNotFoundError`` so callers can treat them
differently from other ``OSError`` failures.
"""

from __future__ import annotations

import shutil
from pathlib import Path

PathLike = Path | str


def _path(path: PathLike) -> Path:
    return path if isinstance(path, Path) else Path(path)


def file_exists(path: PathLike) -> bool:
    return _path(path).is_file()


def ensure_dir(path: PathLike) -> bool:
    """Create *path* (and parents) if missing. Returns True when it was created."""
    p = _path(path)
    if p.is_dir():
        return False
    p.mkdir(parents=True, exist_ok=True)
    return True


def read_text(path: PathLike, errors: str = "strict") -> str:
    """Read the whole file. Raises FileNotFoundError when it does not exist."""
    return _path(path).read_text(encoding="utf-8", errors=errors)


def write_text(path: PathLike, text: str) -> None:
    """Overwrite *path* with *text*."""
    _path(path).write_text(text, encoding="utf-8")


def delete_file(path: PathLike) -> bool:
    """Remove *path*. Returns False if it was already gone."""
    try:
        _path(path).unlink()
    except FileNotFoundError:
        return False
    return True


def copy_file(src: PathLike, dst: PathLike) -> Path:
    return Path(shutil.copy2(_path(src), _path(dst)))
