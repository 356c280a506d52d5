"""Installation directory resolution."""

from __future__ import annotations

import os
from pathlib import Path


def resolve_install_dir(raw: str | os.PathLike[str] | None, *, default: Path, cwd: Path | None = None) -> Path:
    """Turn user input into an absolute, normalised path.

    - empty input falls back to `default`
    - a leading `~` expands to the home directory
    - relative paths are anchored at `cwd` (the process cwd by default)
    - `.`/`..` and symlinks are resolved; the path does not need to exist
    """

    value = str(raw).strip() if raw is not None else ""
    if not value:
        value = str(default)

    value = os.path.expanduser(value)
    path = Path(value)
    if not path.is_absolute():
        path = (cwd or Path.cwd()) / path

    return Path(os.path.realpath(path))
