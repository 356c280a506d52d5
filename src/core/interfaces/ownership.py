"""Contract for changing file ownership inside the container user namespace."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable


@runtime_checkable
class OwnershipChanger(Protocol):
    def available(self) -> bool:
        """Whether the backing tool can be used on this host."""

        ...

    def chown(self, path: Path, uid: int, gid: int) -> bool:
        """Recursively change ownership of `path`; return False on failure."""

        ...
