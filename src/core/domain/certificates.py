"""Certificate chain description.

The installer issues three certificates: a self-signed CA and two leaf
certificates (server and client) signed by it. These models describe *what*
each certificate must contain; the issuers in `adapters.certificates` decide
*how* to produce it.
"""

from __future__ import annotations

from enum import Enum
from ipaddress import IPv4Address, IPv6Address
from pathlib import Path

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class CertificateBackend(str, Enum):
    """Available certificate issuers."""

    OPENSSL = "openssl"
    CRYPTOGRAPHY = "cryptography"

    def label(self) -> str:
        return "openssl CLI" if self is CertificateBackend.OPENSSL else "cryptography (Python)"


class CertificateSpec(BaseModel):
    """Content of one certificate and the file names it is written to."""

    model_config = ConfigDict(frozen=True)

    key_filename: str = Field(..., min_length=1)
    cert_filename: str = Field(..., min_length=1)
    common_name: str = Field(..., min_length=1)
    dns_names: tuple[str, ...] = Field(default=())
    ip_addresses: tuple[IPv4Address | IPv6Address, ...] = Field(default=())
    key_usage: tuple[str, ...] = Field(
        default=(),
        description="openssl keyUsage names, e.g. 'digitalSignature'.",
    )
    extended_key_usage: tuple[str, ...] = Field(
        default=(),
        description="openssl extendedKeyUsage names, e.g. 'serverAuth'.",
    )

    def subject_alt_name(self) -> str:
        """SAN in openssl config syntax (`DNS:localhost,IP:127.0.0.1`)."""

        entries = [f"DNS:{name}" for name in self.dns_names]
        entries.extend(f"IP:{ip}" for ip in self.ip_addresses)
        return ",".join(entries)

    def openssl_extensions(self) -> str:
        """Extension file body for `openssl x509 -req -extfile`."""

        lines = [f"subjectAltName={self.subject_alt_name()}"]
        if self.key_usage:
            lines.append("keyUsage=" + ",".join(self.key_usage))
        if self.extended_key_usage:
            lines.append("extendedKeyUsage=" + ",".join(self.extended_key_usage))
        return "\n".join(lines)


class IssuedCertificate(BaseModel):
    """Paths of a key pair written to disk."""

    key_path: Path
    cert_path: Path


class CertificateBundle(BaseModel):
    """The full chain produced by one installation."""

    ca: IssuedCertificate
    server: IssuedCertificate
    client: IssuedCertificate
    validity_days: int = Field(..., ge=1)

    def files(self) -> list[Path]:
        return [
            self.ca.cert_path,
            self.ca.key_path,
            self.server.cert_path,
            self.server.key_path,
            self.client.cert_path,
            self.client.key_path,
        ]


_LOCALHOST_V4 = IPv4Address("127.0.0.1")
_LOCALHOST_V6 = IPv6Address("::1")

CA_SPEC = CertificateSpec(
    key_filename="ca-root-key.pem",
    cert_filename="ca-root-cert.pem",
    common_name="ca.localhost",
    dns_names=("localhost",),
    ip_addresses=(_LOCALHOST_V4,),
)

# serverAuth + clientAuth so Redis and Sentinel can use it in both directions.
SERVER_SPEC = CertificateSpec(
    key_filename="redis.key",
    cert_filename="redis.crt",
    common_name="localhost",
    dns_names=("localhost",),
    ip_addresses=(_LOCALHOST_V4, _LOCALHOST_V6),
    key_usage=("digitalSignature", "keyEncipherment"),
    extended_key_usage=("serverAuth", "clientAuth"),
)

CLIENT_SPEC = CertificateSpec(
    key_filename="redis-client.key",
    cert_filename="redis-client.crt",
    common_name="localhost",
    dns_names=("localhost",),
    ip_addresses=(_LOCALHOST_V4, _LOCALHOST_V6),
    key_usage=("digitalSignature", "keyEncipherment"),
    extended_key_usage=("clientAuth",),
)
