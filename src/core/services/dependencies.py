"""Dependency probe.

Builds a `DependencyReport` from a tool probe. The probe is injected so the
check can run against a fake PATH in tests.
"""

from __future__ import annotations

from typing import Callable, Sequence

from core.domain.models import DependencyReport, ToolStatus
from core.errors import MissingDependenciesError


def check_dependencies(
    required: Sequence[str],
    *,
    probe: Callable[[str], ToolStatus],
    running_as_root: bool = False,
) -> DependencyReport:
    """Probe every required tool, preserving the order of `required`."""

    tools = [probe(name) for name in required]
    return DependencyReport(tools=tools, running_as_root=running_as_root)


def ensure_dependencies(report: DependencyReport) -> None:
    """Raise `MissingDependenciesError` when any probed tool is absent."""

    if not report.ok:
        raise MissingDependenciesError(report.missing)
