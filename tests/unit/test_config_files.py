from __future__ import annotations

from pathlib import Path

import pytest

from core.domain.models import InstallLayout
from core.services.config_files import (
    FileSpec,
    compose_file,
    configuration_plan,
    readme_file,
    render_files,
    standard_sentinel_files,
    tls_redis_files,
    tls_sentinel_files,
    twemproxy_files,
)

APISONATOR_ACL = (
    "user apisonator on >secret#Passw0rd ~* &* +blpop +llen +lpop +lpush +lrange +ltrim +rpush +sadd +scan "
    "+scard +sismember +smembers +srem +sscan +del +exists +expire +get +mget +set +setex +zadd +zcard "
    "+zremrangebyscore +zrevrange +hset +incr +incrby +select +role +lindex +lrem +lset +brpoplpush +flushdb "
    "+keys +ping +ttl\n"
)

TLS_MASTER_CONF = (
    "port 0\n"
    "tls-port 46380\n"
    "unixsocket /var/run/redis/tls-redis-master.sock\n"
    "unixsocketperm 777\n"
    "tls-cert-file /etc/redis.crt\n"
    "tls-key-file /etc/redis.key\n"
    "tls-ca-cert-file /etc/ca-root-cert.pem\n"
    "tls-auth-clients optional\n"
    "tls-replication yes\n"
    "user default off\n"
    "user porta on >sup3rS3cre1! ~* &* +@all\n"
) + APISONATOR_ACL

TLS_REPLICA2_CONF = (
    "port 0\n"
    "tls-port 46382\n"
    "tls-cert-file /etc/redis.crt\n"
    "tls-key-file /etc/redis.key\n"
    "tls-ca-cert-file /etc/ca-root-cert.pem\n"
    "tls-auth-clients optional\n"
    "tls-replication yes\n"
    "user default off\n"
    "user porta on >sup3rS3cre1! ~* &* +@all\n"
    "masteruser porta\n"
    "masterauth sup3rS3cre1!\n"
) + APISONATOR_ACL

SENTINEL2_CONF = (
    "port 26380\n"
    "sentinel resolve-hostnames yes\n"
    "sentinel announce-hostnames yes\n"
    "sentinel monitor redis-master ::1 6379 2\n"
    "sentinel down-after-milliseconds redis-master 5000\n"
    "sentinel failover-timeout redis-master 60000\n"
)

TLS_SENTINEL3_CONF = (
    "port 0\n"
    "sentinel resolve-hostnames yes\n"
    "sentinel announce-hostnames yes\n"
    "sentinel monitor redis-master localhost 46380 2\n"
    "sentinel down-after-milliseconds redis-master 5000\n"
    "sentinel failover-timeout redis-master 60000\n"
    "tls-port 56382\n"
    'tls-cert-file "/etc/redis.crt"\n'
    'tls-key-file "/etc/redis.key"\n'
    'tls-ca-cert-file "/etc/ca-root-cert.pem"\n'
    "tls-auth-clients optional\n"
    "tls-replication yes\n"
    "user default off sanitize-payload &* -@all\n"
    "user sentinel on #ab38eadaeb746599f2c1ee90f8267f31f467347462764a24d71ac1843ee77fe3 ~* &* +@all\n"
    "sentinel auth-user redis-master apisonator\n"
    "sentinel auth-pass redis-master secret#Passw0rd\n"
    "sentinel sentinel-user sentinel\n"
    "sentinel sentinel-pass Passw0rd\n"
)

TWEMPROXY_YML = (
    "alpha:\n"
    "  listen: 127.0.0.1:22121\n"
    "  hash: fnv1a_64\n"
    '  hash_tag: "{}"\n'
    "  distribution: ketama\n"
    "  auto_eject_hosts: true\n"
    "  redis: true\n"
    "  server_retry_timeout: 2000\n"
    "  server_failure_limit: 1\n"
    "  servers:\n"
    "   - 127.0.0.1:6382:1 shard1\n"
    "   - 127.0.0.1:6383:1 shard2\n"
    "   - 127.0.0.1:6384:1 shard3\n"
)


def _layout(tmp_path: Path) -> InstallLayout:
    return InstallLayout(root=tmp_path / "install")


def test_twemproxy_config_lists_three_shards(tmp_path: Path):
    (spec,) = twemproxy_files(_layout(tmp_path)).files

    assert spec.destination == tmp_path / "install" / "redis-configs" / "twemproxy" / "twemproxy.yml"
    assert spec.render() == TWEMPROXY_YML


def test_standard_sentinels_differ_only_by_port(tmp_path: Path):
    specs = standard_sentinel_files(_layout(tmp_path)).files

    assert [s.destination.parent.name for s in specs] == ["sentinel1", "sentinel2", "sentinel3"]
    assert specs[1].render() == SENTINEL2_CONF
    assert specs[0].render().splitlines()[0] == "port 26379"
    assert specs[2].render().splitlines()[0] == "port 26381"


def test_tls_sentinel_config(tmp_path: Path):
    specs = tls_sentinel_files(_layout(tmp_path)).files

    assert all(s.destination.parent.parent.name == "tls-redis" for s in specs)
    assert specs[2].render() == TLS_SENTINEL3_CONF
    assert "tls-port 56380\n" in specs[0].render()


def test_tls_master_has_unix_socket_and_no_masterauth(tmp_path: Path):
    specs = {s.destination.name: s for s in tls_redis_files(_layout(tmp_path)).files}

    assert sorted(specs) == ["master.conf", "replica1.conf", "replica2.conf"]
    assert specs["master.conf"].render() == TLS_MASTER_CONF


def test_tls_replica_authenticates_as_porta(tmp_path: Path):
    specs = {s.destination.name: s for s in tls_redis_files(_layout(tmp_path)).files}

    assert specs["replica2.conf"].render() == TLS_REPLICA2_CONF
    assert "tls-port 46381\n" in specs["replica1.conf"].render()
    assert "unixsocket" not in specs["replica1.conf"].render()


def test_configuration_plan_order(tmp_path: Path):
    labels = [group.label for group in configuration_plan(_layout(tmp_path))]

    assert labels == [
        "Twemproxy configuration created",
        "Standard sentinel configurations created",
        "TLS sentinel configurations created",
        "TLS Redis configurations created",
    ]


def test_compose_file_declares_every_container(tmp_path: Path):
    content = compose_file(_layout(tmp_path)).render()

    assert content.startswith("# Unified Podman Compose Configuration for 3scale Porta Services\n")
    assert content.count("container_name: ") == 22
    assert "  3scale-tls-redis-sentinel3:\n" in content
    assert "image: quay.io/3scale/twemproxy:v0.5.0" in content
    assert content.endswith("  tls-redis-replica2-data:\n")


def test_readme_mentions_credentials(tmp_path: Path):
    content = readme_file(_layout(tmp_path)).render()

    assert content.startswith("# 3scale Porta Services\n")
    assert "redis-cli -p 6385 -a sup3rS3cre1!" in content
    assert "    └── run/                    # Unix sockets\n" in content


def test_render_files_overwrites_existing(tmp_path: Path):
    spec = twemproxy_files(_layout(tmp_path)).files[0]
    spec.destination.parent.mkdir(parents=True)
    spec.destination.write_text("stale\n", encoding="utf-8")

    written = render_files([spec])

    assert written == [spec.destination]
    assert spec.destination.read_bytes() == TWEMPROXY_YML.encode("utf-8")


GOLDEN_DIR = Path(__file__).parent / "golden"
GOLDEN_FILES = sorted(p.relative_to(GOLDEN_DIR).as_posix() for p in GOLDEN_DIR.rglob("*") if p.is_file())


def _emitted_files(layout: InstallLayout) -> dict[str, FileSpec]:
    specs = [spec for group in configuration_plan(layout) for spec in group.files]
    specs += [compose_file(layout), readme_file(layout)]
    return {spec.destination.relative_to(layout.root).as_posix(): spec for spec in specs}


def test_every_emitted_file_has_a_golden_copy(tmp_path: Path):
    assert sorted(_emitted_files(_layout(tmp_path))) == GOLDEN_FILES


@pytest.mark.parametrize("relative_path", GOLDEN_FILES)
def test_rendered_file_matches_golden_copy(tmp_path: Path, relative_path: str):
    spec = _emitted_files(_layout(tmp_path))[relative_path]

    expected = (GOLDEN_DIR / relative_path).read_bytes().decode("utf-8")
    assert spec.render() == expected
