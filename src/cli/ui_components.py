"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales (cabeceras,
  líneas ✓/✗/!/ℹ, tablas).
- La instalación y `--doctor` muestran las cosas de la misma forma.
"""

from __future__ import annotations

from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from core.domain.models import DependencyReport, ServiceGroup
from core.services.hooks import InstallHooks


_RULE = "=" * 40


def print_header(console: Console, title: str) -> None:
    console.print(f"[blue]{_RULE}[/blue]")
    console.print(f"[blue]{escape(title)}[/blue]")
    console.print(f"[blue]{_RULE}[/blue]")


def print_success(console: Console, message: str) -> None:
    console.print(f"[green]✓[/green] {escape(message)}")


def print_error(console: Console, message: str) -> None:
    console.print(f"[red]✗[/red] {escape(message)}")


def print_warning(console: Console, message: str) -> None:
    console.print(f"[yellow]![/yellow] {escape(message)}")


def print_info(console: Console, message: str) -> None:
    console.print(f"[blue]ℹ[/blue] {escape(message)}")


def build_hooks(console: Console) -> InstallHooks:
    """Hooks that print installer progress to `console`."""

    return InstallHooks(
        step=lambda title: print_header(console, title),
        success=lambda msg: print_success(console, msg),
        info=lambda msg: print_info(console, msg),
        warning=lambda msg: print_warning(console, msg),
        step_done=lambda: console.print(),
    )


def print_dependency_report(console: Console, report: DependencyReport) -> None:
    for tool in report.tools:
        if tool.found:
            version = tool.version or "version unknown"
            print_success(console, f"{tool.name} found: {version}")
        else:
            print_error(console, f"{tool.name} not found")

    if report.running_as_root:
        print_warning(console, "Running as root - containers will run in root mode")
    else:
        print_success(console, "Running in rootless mode (recommended)")
    console.print()


def print_install_summary(
    console: Console,
    *,
    install_dir: Path,
    total: int,
    groups: tuple[ServiceGroup, ...],
) -> None:
    console.print()
    print_header(console, "Installation Summary")
    console.print(f"Installation directory: {escape(str(install_dir))}")
    console.print(f"Services to be created: {total} containers")
    for group in groups:
        members = f" ({group.members})" if group.members else ""
        console.print(f"  - {group.count} {group.label}{members}")
    console.print()


def print_next_steps(console: Console, *, install_dir: Path, total: int, validity: str) -> None:
    directory = escape(str(install_dir))

    print_header(console, "Installation Complete!")
    console.print()
    print_success(console, f"Installation directory: {install_dir}")
    print_success(console, f"{total} services configured")
    print_success(console, f"TLS certificates generated (valid for {validity})")
    print_success(console, "All configuration files created")
    console.print()

    print_header(console, "Next Steps")
    console.print()
    steps = (
        ("Navigate to the installation directory:", f"cd {directory}"),
        ("Start all services:", "podman-compose up -d"),
        ("Check service status:", "podman-compose ps"),
        ("View logs:", "podman-compose logs -f"),
    )
    for number, (text, command) in enumerate(steps, start=1):
        console.print(f"{number}. {text}")
        console.print(f"   [green]{command}[/green]")
        console.print()
    console.print("For more information, see:")
    console.print(f"   [blue]{escape(str(install_dir / 'README.md'))}[/blue]")
    console.print()


def build_tools_table(report: DependencyReport) -> Table:
    table = Table(title="3scale Services Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    for tool in report.tools:
        if tool.found:
            details = " | ".join(part for part in (tool.version, tool.path) if part)
            table.add_row(tool.name, "OK", escape(details))
        else:
            table.add_row(tool.name, "MISSING", "Not found on PATH")

    if report.running_as_root:
        table.add_row("Privileges", "WARN", "Running as root -> containers run in root mode")
    else:
        table.add_row("Privileges", "OK", "Rootless mode")
    return table
