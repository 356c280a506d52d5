"""Certificate chain generation: CA, then server and client signed by it."""

from __future__ import annotations

import logging
from pathlib import Path

from adapters.filesystem import set_mode
from core.domain.certificates import CA_SPEC, CLIENT_SPEC, SERVER_SPEC, CertificateBundle
from core.interfaces.issuer import CertificateIssuer
from core.services.hooks import InstallHooks


logger = logging.getLogger(__name__)

# Keys are world-readable too: the Redis containers run as a different UID.
CERT_FILE_MODE = 0o644
_CERT_PATTERNS = ("*.pem", "*.crt", "*.key")


def describe_validity(days: int) -> str:
    if days % 365 == 0:
        years = days // 365
        return f"{years} year" if years == 1 else f"{years} years"
    return f"{days} days"


def generate_certificate_chain(
    *,
    issuer: CertificateIssuer,
    certs_dir: Path,
    validity_days: int,
    hooks: InstallHooks | None = None,
) -> CertificateBundle:
    """Issue the CA, server and client certificates into `certs_dir`."""

    hooks = hooks or InstallHooks()
    certs_dir.mkdir(parents=True, exist_ok=True)
    validity = describe_validity(validity_days)

    hooks.on_info("Generating CA certificate...")
    ca = issuer.create_authority(CA_SPEC, certs_dir)
    hooks.on_success(f"CA certificate generated (valid for {validity})")

    hooks.on_info("Generating server certificate...")
    server = issuer.issue(SERVER_SPEC, certs_dir, ca)
    hooks.on_success(f"Server certificate generated (valid for {validity})")

    hooks.on_info("Generating client certificate...")
    client = issuer.issue(CLIENT_SPEC, certs_dir, ca)
    hooks.on_success(f"Client certificate generated (valid for {validity})")

    for pattern in _CERT_PATTERNS:
        for path in sorted(certs_dir.glob(pattern)):
            set_mode(path, CERT_FILE_MODE)
    hooks.on_success("Certificate permissions set")

    logger.debug("Certificate chain written to %s", certs_dir)
    return CertificateBundle(ca=ca, server=server, client=client, validity_days=validity_days)
