from __future__ import annotations

import os
from pathlib import Path

import pytest

from core.config import InstallerSettings
from core.domain.certificates import CertificateBackend
from tests.helpers import FakeOwnership


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep every test away from the real user config, cwd `.env` and PORTA_SERVICES_* vars."""

    for key in list(os.environ):
        if key.startswith("PORTA_SERVICES_"):
            monkeypatch.delenv(key)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def settings(tmp_path: Path) -> InstallerSettings:
    return InstallerSettings(
        default_install_dir=tmp_path / "default-install",
        cert_backend=CertificateBackend.CRYPTOGRAPHY,
        cert_key_size=2048,
    )


@pytest.fixture
def fake_ownership() -> FakeOwnership:
    return FakeOwnership()
