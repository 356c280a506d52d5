"""Doctor command for environment diagnostics."""

from __future__ import annotations

import typer
from rich.console import Console
from rich.table import Table

from adapters import toolchain
from cli.ui_components import build_tools_table
from core.config import InstallerSettings, get_user_env_file
from core.services.dependencies import check_dependencies

_console = Console()


def _settings_table(settings: InstallerSettings) -> Table:
    table = Table(title="Configuration")
    table.add_column("Setting", style="cyan", no_wrap=True)
    table.add_column("Value", style="white")

    table.add_row("Default directory", str(settings.default_install_dir))
    table.add_row("Certificate backend", settings.cert_backend.label())
    table.add_row("Certificate validity", f"{settings.cert_validity_days} days")
    table.add_row("RSA key size", str(settings.cert_key_size))
    table.add_row("Redis UID", str(settings.redis_uid))
    table.add_row("Twemproxy UID", str(settings.twemproxy_uid))
    table.add_row("User config", str(get_user_env_file()))
    return table


def run() -> None:
    """Check required tools and show the effective configuration."""

    settings = InstallerSettings()
    report = check_dependencies(
        settings.required_tools(),
        probe=lambda name: toolchain.probe_tool(name, timeout=settings.command_timeout_seconds),
        running_as_root=toolchain.is_running_as_root(),
    )

    _console.print(build_tools_table(report))
    _console.print(_settings_table(settings))

    if not report.ok:
        _console.print("\n[yellow]Install the missing tools:[/yellow]")
        for name in report.missing:
            _console.print(f"  - {toolchain.install_hint(name)}")
        raise typer.Exit(code=1)
