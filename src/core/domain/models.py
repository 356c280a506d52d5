"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Validación estricta y documentación autocontenida (Field) sin acoplar el
  Core a librerías de I/O.

Nota:
- Estos modelos describen *qué* forma una instalación (directorios,
  herramientas), no *cómo* se escribe en disco.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


SENTINEL_COUNT = 3


class InstallLayout(BaseModel):
    """Directory tree of one installation.

    Every path is derived from `root`; nothing here touches the filesystem.
    """

    model_config = ConfigDict(frozen=True)

    root: Path = Field(..., description="Absolute installation directory.")

    @property
    def redis_configs(self) -> Path:
        return self.root / "redis-configs"

    @property
    def certs_dir(self) -> Path:
        return self.redis_configs / "certs"

    @property
    def redis_ha_dir(self) -> Path:
        return self.redis_configs / "redis-ha"

    @property
    def twemproxy_dir(self) -> Path:
        return self.redis_configs / "twemproxy"

    @property
    def tls_redis_dir(self) -> Path:
        return self.redis_configs / "tls-redis"

    @property
    def run_dir(self) -> Path:
        return self.redis_configs / "run"

    @property
    def compose_file(self) -> Path:
        return self.root / "podman-compose.yaml"

    @property
    def readme_file(self) -> Path:
        return self.root / "README.md"

    @property
    def twemproxy_config(self) -> Path:
        return self.twemproxy_dir / "twemproxy.yml"

    def sentinel_dirs(self) -> list[Path]:
        return [self.redis_ha_dir / f"sentinel{i}" for i in range(1, SENTINEL_COUNT + 1)]

    def tls_sentinel_dirs(self) -> list[Path]:
        return [self.tls_redis_dir / f"sentinel{i}" for i in range(1, SENTINEL_COUNT + 1)]

    def directories(self) -> list[Path]:
        """Every directory the installer creates, parents first."""

        return [
            self.root,
            self.certs_dir,
            *self.sentinel_dirs(),
            self.twemproxy_dir,
            *self.tls_sentinel_dirs(),
            self.run_dir,
        ]


class ToolStatus(BaseModel):
    """Result of probing one external binary."""

    name: str = Field(..., min_length=1)
    found: bool = False
    path: str | None = None
    version: str | None = Field(
        default=None,
        description="First line of the tool's version output, when it could be read.",
    )


class DependencyReport(BaseModel):
    """Outcome of the dependency probe."""

    tools: list[ToolStatus] = Field(default_factory=list)
    running_as_root: bool = False

    @property
    def missing(self) -> list[str]:
        return [t.name for t in self.tools if not t.found]

    @property
    def ok(self) -> bool:
        return not self.missing


class ServiceGroup(BaseModel):
    """A line of the installation summary (e.g. 3 databases)."""

    count: int = Field(..., ge=1)
    label: str
    members: str
