"""Installer exceptions.

Only the CLI catches these; everything below it lets them propagate so the
first failure aborts the installation.
"""

from __future__ import annotations

from typing import Sequence


class InstallerError(Exception):
    """Base class for fatal installer failures."""


class MissingDependenciesError(InstallerError):
    def __init__(self, missing: Sequence[str]) -> None:
        self.missing = list(missing)
        super().__init__(f"Missing required tools: {' '.join(self.missing)}")


class CertificateError(InstallerError):
    """The certificate chain could not be issued."""
