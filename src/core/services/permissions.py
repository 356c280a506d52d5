"""File modes and container-namespace ownership.

Sentinel rewrites its own config at runtime, so those files are left
world-writable; the rest only needs to be readable by the container users.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from adapters.filesystem import set_mode
from core.domain.models import InstallLayout
from core.interfaces.ownership import OwnershipChanger
from core.services.hooks import InstallHooks


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ModeRule:
    path: Path
    mode: int
    recursive: bool = False


@dataclass(frozen=True)
class OwnershipRule:
    path: Path
    uid: int
    gid: int
    label: str


def mode_rules(layout: InstallLayout) -> list[ModeRule]:
    """chmod operations, in application order (later rules win)."""

    sentinel_dirs = [*layout.sentinel_dirs(), *layout.tls_sentinel_dirs()]

    rules = [ModeRule(layout.run_dir, 0o777)]
    rules.extend(ModeRule(d, 0o755, recursive=True) for d in sentinel_dirs)
    rules.extend(ModeRule(d / "sentinel.conf", 0o666) for d in sentinel_dirs)
    rules.append(ModeRule(layout.twemproxy_config, 0o644))
    rules.extend(ModeRule(p, 0o644) for p in sorted(layout.tls_redis_dir.glob("*.conf")))
    return rules


def ownership_rules(layout: InstallLayout, *, redis_uid: int, twemproxy_uid: int) -> list[OwnershipRule]:
    return [
        OwnershipRule(layout.certs_dir, redis_uid, redis_uid, "certificate"),
        OwnershipRule(layout.tls_redis_dir, redis_uid, redis_uid, "TLS Redis config"),
        OwnershipRule(layout.redis_ha_dir, redis_uid, redis_uid, "Redis HA sentinel"),
        OwnershipRule(layout.twemproxy_dir, twemproxy_uid, twemproxy_uid, "Twemproxy config"),
        OwnershipRule(layout.run_dir, redis_uid, redis_uid, "run directory"),
    ]


def apply_modes(layout: InstallLayout) -> None:
    for rule in mode_rules(layout):
        set_mode(rule.path, rule.mode, recursive=rule.recursive)


def apply_ownership(
    rules: list[OwnershipRule],
    *,
    changer: OwnershipChanger | None,
    running_as_root: bool,
    hooks: InstallHooks | None = None,
) -> list[str]:
    """Best-effort chown; returns the warnings produced.

    Never raises on a failed chown: each failure becomes a warning and the
    remaining rules still run.
    """

    hooks = hooks or InstallHooks()
    warnings: list[str] = []

    hooks.on_info("Setting ownership for container access...")

    if running_as_root or changer is None or not changer.available():
        message = "Skipping ownership setting (running as root or podman not available)"
        hooks.on_warning(message)
        return [message]

    for rule in rules:
        if not changer.chown(rule.path, rule.uid, rule.gid):
            message = f"Could not set {rule.label} ownership (podman unshare failed)"
            logger.debug("chown %s:%s %s failed", rule.uid, rule.gid, rule.path)
            hooks.on_warning(message)
            warnings.append(message)

    hooks.on_success("Container ownership set")
    return warnings
