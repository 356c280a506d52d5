"""Configuración del instalador.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Los servicios y adaptadores leen el mismo contrato de forma consistente.

Precedencia: entorno del proceso, `./.env` y el `.env` por usuario.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.domain.certificates import CertificateBackend


__version__ = "1.0.0"

APP_DIR_NAME = "3scale-services"


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / APP_DIR_NAME
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / APP_DIR_NAME

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / APP_DIR_NAME
    return Path.home() / ".config" / APP_DIR_NAME


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _default_install_dir() -> Path:
    return Path.home() / APP_DIR_NAME


class InstallerSettings(BaseSettings):
    """Settings for the installer.

    Every field can be overridden with a `PORTA_SERVICES_<FIELD>` variable.
    """

    model_config = SettingsConfigDict(
        env_prefix="PORTA_SERVICES_",
        extra="ignore",
        case_sensitive=False,
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    default_install_dir: Path = Field(
        default_factory=_default_install_dir,
        description="Directory offered when no target is given on the command line.",
    )

    cert_backend: CertificateBackend = Field(
        default=CertificateBackend.OPENSSL,
        description="How the certificate chain is issued: the openssl CLI or the cryptography package.",
    )
    cert_validity_days: int = Field(
        default=3650,
        ge=1,
        description="Validity of the CA, server and client certificates (days).",
    )
    cert_key_size: int = Field(
        default=4096,
        ge=2048,
        le=16384,
        description="RSA modulus size for every generated key.",
    )

    redis_uid: int = Field(
        default=999,
        ge=0,
        description="UID/GID the Redis images run as inside the container.",
    )
    twemproxy_uid: int = Field(
        default=65534,
        ge=0,
        description="UID/GID the Twemproxy image runs as (nobody).",
    )

    command_timeout_seconds: float = Field(
        default=120.0,
        gt=0,
        description="Timeout for each external command (openssl, podman).",
    )

    def required_tools(self) -> tuple[str, ...]:
        """Binaries that must be on PATH before installing."""

        if self.cert_backend is CertificateBackend.OPENSSL:
            return ("podman", "podman-compose", "openssl")
        return ("podman", "podman-compose")
