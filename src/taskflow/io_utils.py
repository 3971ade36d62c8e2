"""Wrappers for text file I/O with consistent encoding (UTF-8)."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Any

PathLike = Path | str


def read_text(path: PathLike, errors: str = "strict", **kwargs: Any) -> str:
    """Read path as text with UTF-8 encoding. Forwards extra kwargs to Path.read_text."""
    p = path if isinstance(path, Path) else Path(path)
    return p.read_text(encoding="utf-8", errors=errors, **kwargs)


def write_text(path: PathLike, text: str, **kwargs: Any) -> None:
    """Write text to path with UTF-8 encoding. Forwards extra kwargs to Path.write_text."""
    p = path if isinstance(path, Path) else Path(path)
    p.write_text(text, encoding="utf-8", **kwargs)


def atomic_write_text(path: PathLike, text: str) -> None:
    """Write *text* to a temp file next to *path*, then rename it into place."""
    p = path if isinstance(path, Path) else Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp = tempfile.mkstemp(prefix=p.name + ".", dir=str(p.parent))
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(text)
        os.replace(tmp, p)
    finally:
        if os.path.exists(tmp):
            os.unlink(tmp)
