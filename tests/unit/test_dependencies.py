from __future__ import annotations

import pytest

from adapters import toolchain
from core.config import InstallerSettings
from core.domain.certificates import CertificateBackend
from core.errors import MissingDependenciesError
from core.services.dependencies import check_dependencies, ensure_dependencies
from tests.helpers import found_tool, missing_tool


def test_report_keeps_probe_order_and_lists_missing():
    absent = {"podman-compose", "openssl"}

    report = check_dependencies(
        ("podman", "podman-compose", "openssl"),
        probe=lambda name: missing_tool(name) if name in absent else found_tool(name),
    )

    assert [t.name for t in report.tools] == ["podman", "podman-compose", "openssl"]
    assert report.missing == ["podman-compose", "openssl"]
    assert not report.ok


def test_ensure_dependencies_raises_with_missing_names():
    report = check_dependencies(("podman", "openssl"), probe=missing_tool)

    with pytest.raises(MissingDependenciesError) as excinfo:
        ensure_dependencies(report)

    assert excinfo.value.missing == ["podman", "openssl"]
    assert str(excinfo.value) == "Missing required tools: podman openssl"


def test_ensure_dependencies_passes_when_all_found():
    report = check_dependencies(("podman",), probe=found_tool, running_as_root=True)

    ensure_dependencies(report)
    assert report.running_as_root
    assert report.ok
    assert report.tools[0].version == "podman 1.0"


def test_openssl_only_required_for_openssl_backend():
    assert InstallerSettings().required_tools() == ("podman", "podman-compose", "openssl")
    native = InstallerSettings(cert_backend=CertificateBackend.CRYPTOGRAPHY)
    assert native.required_tools() == ("podman", "podman-compose")


def test_probe_tool_reports_missing_binary(monkeypatch):
    monkeypatch.setattr(toolchain.shutil, "which", lambda name: None)

    status = toolchain.probe_tool("podman")

    assert status.found is False
    assert status.path is None


def test_probe_tool_reads_first_version_line(tmp_path, monkeypatch):
    script = tmp_path / "fake-openssl"
    script.write_text("#!/bin/sh\necho\necho 'OpenSSL 3.0.13 30 Jan 2024'\necho extra\n", encoding="utf-8")
    script.chmod(0o755)
    monkeypatch.setattr(toolchain.shutil, "which", lambda name: str(script))

    status = toolchain.probe_tool("openssl")

    assert status.found is True
    assert status.path == str(script)
    assert status.version == "OpenSSL 3.0.13 30 Jan 2024"


def test_install_hints_cover_required_tools():
    assert toolchain.install_hint("podman-compose") == "podman-compose: pip3 install podman-compose"
    assert "podman.io" in toolchain.install_hint("podman")
