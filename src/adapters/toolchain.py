"""Probing of external binaries.

Checks PATH for the tools the installer shells out to and captures their
version string for display.
"""

from __future__ import annotations

import logging
import os
import shutil
import subprocess

from core.domain.models import ToolStatus


logger = logging.getLogger(__name__)


# podman-compose prints its version on stderr on some releases.
_VERSION_COMMANDS: dict[str, list[str]] = {
    "podman": ["podman", "--version"],
    "podman-compose": ["podman-compose", "--version"],
    "openssl": ["openssl", "version"],
}

_INSTALL_HINTS: dict[str, str] = {
    "podman": "podman: https://podman.io/getting-started/installation",
    "podman-compose": "podman-compose: pip3 install podman-compose",
    "openssl": "openssl: usually pre-installed or via package manager",
}


def install_hint(name: str) -> str:
    return _INSTALL_HINTS.get(name, name)


def _read_version(command: list[str], *, timeout: float) -> str | None:
    try:
        completed = subprocess.run(
            command,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            timeout=timeout,
            check=False,
        )
    except (OSError, subprocess.SubprocessError) as exc:
        logger.debug("Version probe %s failed: %s", command, exc)
        return None

    for line in completed.stdout.splitlines():
        if line.strip():
            return line.strip()
    return None


def probe_tool(name: str, *, timeout: float = 10.0) -> ToolStatus:
    """Locate `name` on PATH and read its version."""

    path = shutil.which(name)
    if path is None:
        logger.debug("%s not found on PATH", name)
        return ToolStatus(name=name, found=False)

    command = _VERSION_COMMANDS.get(name, [name, "--version"])
    version = _read_version([path, *command[1:]], timeout=timeout)
    return ToolStatus(name=name, found=True, path=path, version=version)


def is_running_as_root() -> bool:
    geteuid = getattr(os, "geteuid", None)
    if geteuid is None:
        return False
    return geteuid() == 0
