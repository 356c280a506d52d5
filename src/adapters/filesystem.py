"""Local filesystem operations: directories, text files and modes."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable


logger = logging.getLogger(__name__)


def ensure_directories(paths: Iterable[Path]) -> None:
    for path in paths:
        path.mkdir(parents=True, exist_ok=True)


def write_text_file(path: Path, content: str) -> Path:
    """Write `content` as UTF-8, replacing any existing file."""

    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8", newline="\n") as fh:
        fh.write(content)
    logger.debug("Wrote %s (%d bytes)", path, len(content.encode("utf-8")))
    return path


def set_mode(path: Path, mode: int, *, recursive: bool = False) -> None:
    """chmod `path`, and with `recursive` every entry below it (like `chmod -R`)."""

    os.chmod(path, mode)
    if not recursive or not path.is_dir():
        return
    for dirpath, dirnames, filenames in os.walk(path):
        for name in [*dirnames, *filenames]:
            os.chmod(os.path.join(dirpath, name), mode)
    logger.debug("chmod -R %o %s", mode, path)
