"""CLI entry point (Typer).

One command: `install-3scale-services [TARGET]` provisions the
podman-compose environment in TARGET, prompting for it when omitted.
`--doctor` and `--version` are eager options that short-circuit the install.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from adapters import toolchain
from adapters.certificates import build_issuer
from adapters.podman import PodmanOwnership
from cli import doctor
from cli.log_config import configure_logging
from cli.ui_components import (
    build_hooks,
    print_dependency_report,
    print_error,
    print_header,
    print_info,
    print_install_summary,
    print_next_steps,
    print_success,
    print_warning,
)
from core.config import InstallerSettings, __version__
from core.domain.models import DependencyReport
from core.domain.topology import SERVICE_GROUPS, total_services
from core.errors import InstallerError, MissingDependenciesError
from core.services.certificates import describe_validity
from core.services.dependencies import check_dependencies, ensure_dependencies
from core.services.installer import InstallRequest, run_install
from core.services.paths import resolve_install_dir

app = typer.Typer(
    add_completion=False,
    help="Install a podman-compose environment for 3scale Porta development.",
)

_console = Console()

_AFFIRMATIVE = ("yes", "y")


def _ask_yes(question: str) -> bool:
    """Only an exact `yes`/`y` counts as consent."""

    answer = typer.prompt(question, default="", show_default=False)
    return answer.strip() in _AFFIRMATIVE


def _cancel() -> None:
    print_info(_console, "Installation cancelled")
    raise typer.Exit(code=0)


def _check_dependencies(settings: InstallerSettings) -> DependencyReport:
    print_header(_console, "Checking Required Tools")

    report = check_dependencies(
        settings.required_tools(),
        probe=lambda name: toolchain.probe_tool(name, timeout=settings.command_timeout_seconds),
        running_as_root=toolchain.is_running_as_root(),
    )
    print_dependency_report(_console, report)

    try:
        ensure_dependencies(report)
    except MissingDependenciesError as exc:
        print_error(_console, str(exc))
        _console.print()
        _console.print("Please install missing tools:")
        for name in ("podman", "podman-compose", "openssl"):
            _console.print(f"  - {toolchain.install_hint(name)}")
        _console.print()
        raise typer.Exit(code=1) from exc

    print_success(_console, "All required tools available")
    _console.print()
    return report


def _resolve_target(target: str | None, *, settings: InstallerSettings, assume_yes: bool) -> Path:
    if not target and not assume_yes:
        _console.print()
        print_info(_console, "Installation directory selection")
        _console.print()
        target = typer.prompt(
            f"Enter installation directory [{settings.default_install_dir}]",
            default="",
            show_default=False,
        )
    return resolve_install_dir(target, default=settings.default_install_dir)


def _confirm_installation(install_dir: Path, *, assume_yes: bool) -> None:
    print_install_summary(
        _console,
        install_dir=install_dir,
        total=total_services(),
        groups=SERVICE_GROUPS,
    )
    if assume_yes:
        return

    if install_dir.is_dir():
        print_warning(_console, f"Directory already exists: {install_dir}")
        if not _ask_yes("Do you want to overwrite it? (yes/no/y/n)"):
            _cancel()

    if not _ask_yes("Proceed with installation? (yes/no/y/n)"):
        _cancel()
    _console.print()


def _verbose_callback(value: bool) -> bool:
    configure_logging(verbose=value)
    return value


def _doctor_callback(value: bool) -> None:
    if value:
        doctor.run()
        raise typer.Exit()


def _version_callback(value: bool) -> None:
    if value:
        _console.print(__version__)
        raise typer.Exit()


@app.command()
def main(
    target: Optional[str] = typer.Argument(
        None,
        help="Installation directory (prompted for when omitted).",
        show_default=False,
    ),
    yes: bool = typer.Option(
        False,
        "--yes",
        "-y",
        help="Answer yes to every prompt and use the default directory when none is given.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        callback=_verbose_callback,
        is_eager=True,
        help="Enable debug logging.",
    ),
    run_doctor: bool = typer.Option(
        False,
        "--doctor",
        callback=_doctor_callback,
        is_eager=True,
        help="Check the required tools and show the configuration, then exit.",
    ),
    show_version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Print the installer version and exit.",
    ),
) -> None:
    """Create the compose file, configs and TLS certificates in TARGET."""

    settings = InstallerSettings()

    print_header(_console, f"3scale Porta Services Installer v{__version__}")
    _console.print()

    report = _check_dependencies(settings)
    install_dir = _resolve_target(target, settings=settings, assume_yes=yes)
    _confirm_installation(install_dir, assume_yes=yes)

    try:
        result = run_install(
            InstallRequest(install_dir=install_dir, running_as_root=report.running_as_root),
            settings=settings,
            issuer=build_issuer(settings),
            ownership=PodmanOwnership(timeout=settings.command_timeout_seconds),
            hooks=build_hooks(_console),
        )
    except (InstallerError, OSError) as exc:
        print_error(_console, str(exc))
        raise typer.Exit(code=1) from exc

    print_next_steps(
        _console,
        install_dir=result.layout.root,
        total=total_services(),
        validity=describe_validity(result.certificates.validity_days),
    )


def run() -> None:
    app(prog_name="install-3scale-services")


if __name__ == "__main__":
    run()
