"""Installation orchestration.

Runs the file-emission steps in order and stops at the first failure. The
only recovered failures are the best-effort ownership changes, which end up
in `InstallResult.warnings`. Side effects visible to the user go through
`InstallHooks`; nothing here prints.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from adapters.filesystem import ensure_directories
from core.config import InstallerSettings
from core.domain.certificates import CertificateBundle
from core.domain.models import InstallLayout
from core.interfaces.issuer import CertificateIssuer
from core.interfaces.ownership import OwnershipChanger
from core.services.certificates import generate_certificate_chain
from core.services.config_files import (
    compose_file,
    configuration_plan,
    readme_file,
    render_files,
)
from core.services.hooks import InstallHooks
from core.services.permissions import apply_modes, apply_ownership, ownership_rules


logger = logging.getLogger(__name__)


@dataclass
class InstallRequest:
    """Parameters of one installation."""

    install_dir: Path
    running_as_root: bool = False


@dataclass
class InstallResult:
    """What an installation produced."""

    layout: InstallLayout
    certificates: CertificateBundle
    files: list[Path] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


def run_install(
    request: InstallRequest,
    *,
    settings: InstallerSettings,
    issuer: CertificateIssuer,
    ownership: OwnershipChanger | None = None,
    hooks: InstallHooks | None = None,
) -> InstallResult:
    hooks = hooks or InstallHooks()
    layout = InstallLayout(root=request.install_dir)
    written: list[Path] = []

    logger.debug("Installing into %s", layout.root)

    hooks.on_step("Creating Directory Structure")
    ensure_directories(layout.directories())
    hooks.on_success("Directory structure created")
    hooks.on_step_done()

    hooks.on_step("Generating TLS Certificates")
    bundle = generate_certificate_chain(
        issuer=issuer,
        certs_dir=layout.certs_dir,
        validity_days=settings.cert_validity_days,
        hooks=hooks,
    )
    hooks.on_step_done()

    hooks.on_step("Creating Configuration Files")
    for group in configuration_plan(layout):
        written.extend(render_files(group.files))
        hooks.on_success(group.label)
    hooks.on_step_done()

    hooks.on_step("Creating Podman Compose File")
    written.extend(render_files([compose_file(layout)]))
    hooks.on_success("Podman compose file created")
    hooks.on_step_done()

    hooks.on_step("Setting Permissions")
    apply_modes(layout)
    hooks.on_success("File permissions set")
    warnings = apply_ownership(
        ownership_rules(
            layout,
            redis_uid=settings.redis_uid,
            twemproxy_uid=settings.twemproxy_uid,
        ),
        changer=ownership,
        running_as_root=request.running_as_root,
        hooks=hooks,
    )
    hooks.on_step_done()

    written.extend(render_files([readme_file(layout)]))

    return InstallResult(
        layout=layout,
        certificates=bundle,
        files=written,
        warnings=warnings,
    )
