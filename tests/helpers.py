"""Test doubles shared across the unit tests."""

from __future__ import annotations

from pathlib import Path

from core.domain.models import ToolStatus


class FakeOwnership:
    """Records chown calls instead of running podman."""

    def __init__(self, *, available: bool = True, succeed: bool = True) -> None:
        self._available = available
        self._succeed = succeed
        self.calls: list[tuple[Path, int, int]] = []

    def available(self) -> bool:
        return self._available

    def chown(self, path: Path, uid: int, gid: int) -> bool:
        self.calls.append((path, uid, gid))
        return self._succeed


def found_tool(name: str) -> ToolStatus:
    return ToolStatus(name=name, found=True, path=f"/usr/bin/{name}", version=f"{name} 1.0")


def missing_tool(name: str) -> ToolStatus:
    return ToolStatus(name=name, found=False)
