"""Which files get rendered from which template.

The plan is pure data; `render_files` is the only function that writes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable

from adapters.filesystem import write_text_file
from adapters.template_renderer import render_template
from core.domain.models import InstallLayout
from core.domain.topology import (
    STANDARD_MASTER,
    STANDARD_SENTINELS,
    TLS_MASTER,
    TLS_REDIS_NODES,
    TLS_SENTINELS,
    TWEMPROXY_LISTEN,
    TWEMPROXY_SHARDS,
)


@dataclass(frozen=True)
class FileSpec:
    """One output file: destination, template and render context."""

    destination: Path
    template: str
    context: dict[str, Any] = field(default_factory=dict)

    def render(self) -> str:
        return render_template(self.template, **self.context)


@dataclass(frozen=True)
class FileGroup:
    """Files reported together (one success line per group)."""

    label: str
    files: tuple[FileSpec, ...]


def twemproxy_files(layout: InstallLayout) -> FileGroup:
    spec = FileSpec(
        destination=layout.twemproxy_config,
        template="twemproxy.yml.j2",
        context={"listen": TWEMPROXY_LISTEN, "shards": TWEMPROXY_SHARDS},
    )
    return FileGroup(label="Twemproxy configuration created", files=(spec,))


def standard_sentinel_files(layout: InstallLayout) -> FileGroup:
    files = tuple(
        FileSpec(
            destination=directory / "sentinel.conf",
            template="sentinel.conf.j2",
            context={"sentinel": sentinel, "master": STANDARD_MASTER},
        )
        for directory, sentinel in zip(layout.sentinel_dirs(), STANDARD_SENTINELS)
    )
    return FileGroup(label="Standard sentinel configurations created", files=files)


def tls_sentinel_files(layout: InstallLayout) -> FileGroup:
    files = tuple(
        FileSpec(
            destination=directory / "sentinel.conf",
            template="tls-sentinel.conf.j2",
            context={"sentinel": sentinel, "master": TLS_MASTER},
        )
        for directory, sentinel in zip(layout.tls_sentinel_dirs(), TLS_SENTINELS)
    )
    return FileGroup(label="TLS sentinel configurations created", files=files)


def tls_redis_files(layout: InstallLayout) -> FileGroup:
    files = tuple(
        FileSpec(
            destination=layout.tls_redis_dir / node.config_filename,
            template="tls-redis.conf.j2",
            context={"node": node},
        )
        for node in TLS_REDIS_NODES
    )
    return FileGroup(label="TLS Redis configurations created", files=files)


def configuration_plan(layout: InstallLayout) -> list[FileGroup]:
    """Redis-side configs in the order they are written."""

    return [
        twemproxy_files(layout),
        standard_sentinel_files(layout),
        tls_sentinel_files(layout),
        tls_redis_files(layout),
    ]


def compose_file(layout: InstallLayout) -> FileSpec:
    return FileSpec(destination=layout.compose_file, template="podman-compose.yaml.j2")


def readme_file(layout: InstallLayout) -> FileSpec:
    return FileSpec(destination=layout.readme_file, template="README.md.j2")


def render_files(files: Iterable[FileSpec]) -> list[Path]:
    return [write_text_file(spec.destination, spec.render()) for spec in files]
