"""Certificate issuer backed by the `cryptography` package.

Produces the same chain as the openssl backend without needing the binary:
RSA keys, SHA-256 signatures, PKCS#8 PEM keys without a passphrase.
"""

from __future__ import annotations

import datetime
import logging
from pathlib import Path

from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from cryptography.x509.oid import ExtendedKeyUsageOID, NameOID

from core.domain.certificates import CertificateSpec, IssuedCertificate
from core.errors import CertificateError


logger = logging.getLogger(__name__)


_KEY_USAGE_FLAGS: dict[str, str] = {
    "digitalSignature": "digital_signature",
    "nonRepudiation": "content_commitment",
    "keyEncipherment": "key_encipherment",
    "dataEncipherment": "data_encipherment",
    "keyAgreement": "key_agreement",
    "keyCertSign": "key_cert_sign",
    "cRLSign": "crl_sign",
}

_EXTENDED_KEY_USAGES: dict[str, x509.ObjectIdentifier] = {
    "serverAuth": ExtendedKeyUsageOID.SERVER_AUTH,
    "clientAuth": ExtendedKeyUsageOID.CLIENT_AUTH,
    "codeSigning": ExtendedKeyUsageOID.CODE_SIGNING,
    "emailProtection": ExtendedKeyUsageOID.EMAIL_PROTECTION,
}


def _key_usage(names: tuple[str, ...]) -> x509.KeyUsage:
    flags = {
        "digital_signature": False,
        "content_commitment": False,
        "key_encipherment": False,
        "data_encipherment": False,
        "key_agreement": False,
        "key_cert_sign": False,
        "crl_sign": False,
        "encipher_only": False,
        "decipher_only": False,
    }
    for name in names:
        try:
            flags[_KEY_USAGE_FLAGS[name]] = True
        except KeyError as exc:
            raise CertificateError(f"Unsupported keyUsage: {name}") from exc
    return x509.KeyUsage(**flags)


def _extended_key_usage(names: tuple[str, ...]) -> x509.ExtendedKeyUsage:
    try:
        return x509.ExtendedKeyUsage([_EXTENDED_KEY_USAGES[name] for name in names])
    except KeyError as exc:
        raise CertificateError(f"Unsupported extendedKeyUsage: {exc.args[0]}") from exc


def _subject_alt_name(spec: CertificateSpec) -> x509.SubjectAlternativeName:
    entries: list[x509.GeneralName] = [x509.DNSName(name) for name in spec.dns_names]
    entries.extend(x509.IPAddress(ip) for ip in spec.ip_addresses)
    return x509.SubjectAlternativeName(entries)


def _write_key(key: rsa.RSAPrivateKey, path: Path) -> None:
    pem = key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    )
    path.write_bytes(pem)


def _write_cert(cert: x509.Certificate, path: Path) -> None:
    path.write_bytes(cert.public_bytes(serialization.Encoding.PEM))


class CryptographyIssuer:
    """Pure-Python implementation of `CertificateIssuer`."""

    def __init__(self, *, key_size: int = 4096, validity_days: int = 3650) -> None:
        self._key_size = key_size
        self._validity_days = validity_days

    def _new_key(self) -> rsa.RSAPrivateKey:
        return rsa.generate_private_key(public_exponent=65537, key_size=self._key_size)

    def _validity(self) -> tuple[datetime.datetime, datetime.datetime]:
        now = datetime.datetime.now(datetime.timezone.utc)
        return now, now + datetime.timedelta(days=self._validity_days)

    def create_authority(self, spec: CertificateSpec, directory: Path) -> IssuedCertificate:
        key = self._new_key()
        name = x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, spec.common_name)])
        not_before, not_after = self._validity()

        builder = (
            x509.CertificateBuilder()
            .subject_name(name)
            .issuer_name(name)
            .public_key(key.public_key())
            .serial_number(x509.random_serial_number())
            .not_valid_before(not_before)
            .not_valid_after(not_after)
            .add_extension(x509.BasicConstraints(ca=True, path_length=None), critical=True)
            .add_extension(
                _key_usage(spec.key_usage or ("digitalSignature", "keyCertSign", "cRLSign")),
                critical=True,
            )
            .add_extension(x509.SubjectKeyIdentifier.from_public_key(key.public_key()), critical=False)
            .add_extension(_subject_alt_name(spec), critical=False)
        )
        cert = builder.sign(private_key=key, algorithm=hashes.SHA256())

        key_path = directory / spec.key_filename
        cert_path = directory / spec.cert_filename
        _write_key(key, key_path)
        _write_cert(cert, cert_path)
        logger.debug("Created CA %s (serial %x)", cert_path, cert.serial_number)
        return IssuedCertificate(key_path=key_path, cert_path=cert_path)

    def issue(
        self,
        spec: CertificateSpec,
        directory: Path,
        authority: IssuedCertificate,
    ) -> IssuedCertificate:
        try:
            ca_key = serialization.load_pem_private_key(authority.key_path.read_bytes(), password=None)
            ca_cert = x509.load_pem_x509_certificate(authority.cert_path.read_bytes())
        except (OSError, ValueError, TypeError) as exc:
            raise CertificateError(f"Cannot load certificate authority: {exc}") from exc
        if not isinstance(ca_key, rsa.RSAPrivateKey):
            raise CertificateError("Certificate authority key is not an RSA key")

        key = self._new_key()
        not_before, not_after = self._validity()

        builder = (
            x509.CertificateBuilder()
            .subject_name(x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, spec.common_name)]))
            .issuer_name(ca_cert.subject)
            .public_key(key.public_key())
            .serial_number(x509.random_serial_number())
            .not_valid_before(not_before)
            .not_valid_after(not_after)
            .add_extension(_subject_alt_name(spec), critical=False)
            .add_extension(x509.SubjectKeyIdentifier.from_public_key(key.public_key()), critical=False)
            .add_extension(
                x509.AuthorityKeyIdentifier.from_issuer_public_key(ca_key.public_key()),
                critical=False,
            )
        )
        if spec.key_usage:
            builder = builder.add_extension(_key_usage(spec.key_usage), critical=False)
        if spec.extended_key_usage:
            builder = builder.add_extension(_extended_key_usage(spec.extended_key_usage), critical=False)

        cert = builder.sign(private_key=ca_key, algorithm=hashes.SHA256())

        key_path = directory / spec.key_filename
        cert_path = directory / spec.cert_filename
        _write_key(key, key_path)
        _write_cert(cert, cert_path)
        logger.debug("Issued %s for CN=%s", cert_path, spec.common_name)
        return IssuedCertificate(key_path=key_path, cert_path=cert_path)
