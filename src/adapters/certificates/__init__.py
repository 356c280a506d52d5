"""Emisores de certificados.

Por qué un paquete:
- Agrupa un módulo por backend (openssl, cryptography).
- Cada módulo implementa `core.interfaces.issuer.CertificateIssuer`.
"""

from __future__ import annotations

from adapters.certificates.native import CryptographyIssuer
from adapters.certificates.openssl import OpenSSLIssuer
from core.config import InstallerSettings
from core.domain.certificates import CertificateBackend
from core.interfaces.issuer import CertificateIssuer


def build_issuer(settings: InstallerSettings | None = None) -> CertificateIssuer:
    """Create the issuer selected by `settings.cert_backend`."""

    settings = settings or InstallerSettings()
    if settings.cert_backend is CertificateBackend.CRYPTOGRAPHY:
        return CryptographyIssuer(
            key_size=settings.cert_key_size,
            validity_days=settings.cert_validity_days,
        )
    return OpenSSLIssuer(
        key_size=settings.cert_key_size,
        validity_days=settings.cert_validity_days,
        timeout=settings.command_timeout_seconds,
    )


__all__ = [
    "CryptographyIssuer",
    "OpenSSLIssuer",
    "build_issuer",
]
