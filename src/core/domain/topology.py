"""Port and role assignments of the generated services.

The compose file and the Redis/Sentinel/Twemproxy configs all agree on these
values; the config templates are rendered from here.
"""

from __future__ import annotations

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

from core.domain.models import ServiceGroup


class SentinelNode(BaseModel):
    model_config = ConfigDict(frozen=True)

    index: int = Field(..., ge=1)
    port: int = Field(..., ge=0, le=65535)
    tls_port: int | None = Field(default=None, ge=1, le=65535)


class MonitoredMaster(BaseModel):
    """What a Sentinel group watches (`sentinel monitor ...`)."""

    model_config = ConfigDict(frozen=True)

    name: str = "redis-master"
    host: str
    port: int = Field(..., ge=1, le=65535)
    quorum: int = Field(default=2, ge=1)
    down_after_ms: int = 5000
    failover_timeout_ms: int = 60000


class TlsRedisNode(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    tls_port: int = Field(..., ge=1, le=65535)
    replica: bool = False
    unix_socket: str | None = None

    @property
    def config_filename(self) -> str:
        return f"{self.name}.conf"


class TwemproxyShard(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    port: int = Field(..., ge=1, le=65535)
    weight: int = Field(default=1, ge=1)


STANDARD_MASTER = MonitoredMaster(host="::1", port=6379)
TLS_MASTER = MonitoredMaster(host="localhost", port=46380)

STANDARD_SENTINELS = (
    SentinelNode(index=1, port=26379),
    SentinelNode(index=2, port=26380),
    SentinelNode(index=3, port=26381),
)

# TLS Sentinels disable the plain port.
TLS_SENTINELS = (
    SentinelNode(index=1, port=0, tls_port=56380),
    SentinelNode(index=2, port=0, tls_port=56381),
    SentinelNode(index=3, port=0, tls_port=56382),
)

TLS_REDIS_NODES = (
    TlsRedisNode(name="master", tls_port=46380, unix_socket="/var/run/redis/tls-redis-master.sock"),
    TlsRedisNode(name="replica1", tls_port=46381, replica=True),
    TlsRedisNode(name="replica2", tls_port=46382, replica=True),
)

TWEMPROXY_LISTEN = "127.0.0.1:22121"
TWEMPROXY_SHARDS = (
    TwemproxyShard(name="shard1", port=6382),
    TwemproxyShard(name="shard2", port=6383),
    TwemproxyShard(name="shard3", port=6384),
)

SERVICE_GROUPS = (
    ServiceGroup(count=3, label="databases", members="MySQL, PostgreSQL, MySQL-SSL"),
    ServiceGroup(count=17, label="Redis configurations", members=""),
    ServiceGroup(count=2, label="additional services", members="Memcached, MailHog"),
)


def total_services() -> int:
    return sum(group.count for group in SERVICE_GROUPS)
