"""Certificate issuer backed by the `openssl` command line tool."""

from __future__ import annotations

import logging
import subprocess
import tempfile
from pathlib import Path

from core.domain.certificates import CertificateSpec, IssuedCertificate
from core.errors import CertificateError


logger = logging.getLogger(__name__)


class OpenSSLIssuer:
    """Shells out to `openssl req` / `openssl x509` for every certificate."""

    def __init__(
        self,
        *,
        executable: str = "openssl",
        key_size: int = 4096,
        validity_days: int = 3650,
        timeout: float = 120.0,
    ) -> None:
        self._executable = executable
        self._key_size = key_size
        self._validity_days = validity_days
        self._timeout = timeout

    def _run(self, *args: str) -> None:
        command = [self._executable, *args]
        logger.debug("Running %s", " ".join(command))
        try:
            subprocess.run(
                command,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                timeout=self._timeout,
                check=True,
            )
        except subprocess.CalledProcessError as exc:
            detail = (exc.stderr or "").strip() or f"exit status {exc.returncode}"
            raise CertificateError(f"openssl {args[0]} failed: {detail}") from exc
        except (OSError, subprocess.TimeoutExpired) as exc:
            raise CertificateError(f"openssl {args[0]} failed: {exc}") from exc

    def create_authority(self, spec: CertificateSpec, directory: Path) -> IssuedCertificate:
        key_path = directory / spec.key_filename
        cert_path = directory / spec.cert_filename
        self._run(
            "req",
            "-x509",
            "-newkey",
            f"rsa:{self._key_size}",
            "-sha256",
            "-days",
            str(self._validity_days),
            "-nodes",
            "-keyout",
            str(key_path),
            "-out",
            str(cert_path),
            "-subj",
            f"/CN={spec.common_name}",
            "-addext",
            f"subjectAltName={spec.subject_alt_name()}",
        )
        return IssuedCertificate(key_path=key_path, cert_path=cert_path)

    def issue(
        self,
        spec: CertificateSpec,
        directory: Path,
        authority: IssuedCertificate,
    ) -> IssuedCertificate:
        key_path = directory / spec.key_filename
        cert_path = directory / spec.cert_filename
        csr_path = cert_path.with_suffix(".csr")

        self._run(
            "req",
            "-newkey",
            f"rsa:{self._key_size}",
            "-nodes",
            "-keyout",
            str(key_path),
            "-out",
            str(csr_path),
            "-subj",
            f"/CN={spec.common_name}",
        )
        try:
            with tempfile.TemporaryDirectory(prefix="3scale-certs-") as tmp:
                extfile = Path(tmp) / "extensions.cnf"
                extfile.write_text(spec.openssl_extensions() + "\n", encoding="utf-8")
                self._run(
                    "x509",
                    "-req",
                    "-in",
                    str(csr_path),
                    "-sha256",
                    "-days",
                    str(self._validity_days),
                    "-CA",
                    str(authority.cert_path),
                    "-CAkey",
                    str(authority.key_path),
                    "-CAcreateserial",
                    "-out",
                    str(cert_path),
                    "-extfile",
                    str(extfile),
                )
        finally:
            csr_path.unlink(missing_ok=True)

        return IssuedCertificate(key_path=key_path, cert_path=cert_path)
