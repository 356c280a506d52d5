"""Contrato de emisores de certificados.

Por qué Protocol:
- Contrato estructural (duck typing) sin herencia rígida.
- El CLI de openssl, el paquete cryptography o un fake de tests son
  intercambiables sin tocar los servicios.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable

from core.domain.certificates import CertificateSpec, IssuedCertificate


@runtime_checkable
class CertificateIssuer(Protocol):
    """Minimal contract for a certificate backend.

    Rules:
    - Keys are written unencrypted (PKCS#8 PEM) because the containers read
      them without a passphrase.
    - Failures raise `core.errors.CertificateError`.
    """

    def create_authority(self, spec: CertificateSpec, directory: Path) -> IssuedCertificate:
        """Create a self-signed CA key pair inside `directory`."""

        ...

    def issue(
        self,
        spec: CertificateSpec,
        directory: Path,
        authority: IssuedCertificate,
    ) -> IssuedCertificate:
        """Create a key pair inside `directory` signed by `authority`."""

        ...
