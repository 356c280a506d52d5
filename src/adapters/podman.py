"""Ownership changes through `podman unshare`.

In rootless mode the container's UIDs map to sub-UIDs of the host user, so
a plain `chown` cannot hand files to the Redis user. `podman unshare` runs
the chown inside the user namespace instead.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
from pathlib import Path


logger = logging.getLogger(__name__)


class PodmanOwnership:
    """`OwnershipChanger` backed by `podman unshare chown -R`."""

    def __init__(self, *, executable: str = "podman", timeout: float = 120.0) -> None:
        self._executable = executable
        self._timeout = timeout

    def available(self) -> bool:
        return shutil.which(self._executable) is not None

    def chown(self, path: Path, uid: int, gid: int) -> bool:
        command = [self._executable, "unshare", "chown", "-R", f"{uid}:{gid}", str(path)]
        logger.debug("Running %s", " ".join(command))
        try:
            completed = subprocess.run(
                command,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.PIPE,
                text=True,
                timeout=self._timeout,
                check=False,
            )
        except (OSError, subprocess.SubprocessError) as exc:
            logger.debug("podman unshare chown %s failed: %s", path, exc)
            return False

        if completed.returncode != 0:
            logger.debug(
                "podman unshare chown %s exited with %d: %s",
                path,
                completed.returncode,
                (completed.stderr or "").strip(),
            )
            return False
        return True
