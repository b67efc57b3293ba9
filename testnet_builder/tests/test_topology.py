"""Tests for the orchestration descriptor."""

import pytest
import yaml

from testnet_builder.build import build_topology, render_descriptor
from testnet_builder.config import resolve_config
from testnet_builder.constants import MAX_NETWORK_SIZE


def _config(size=2, **env):
    environ = {"BASE_IP": "10.0.0.", "PORT": "17000", "BASE_DOMAIN": "testnet.diva.i2p"}
    environ.update(env)
    return resolve_config(size, environ)


def test_two_node_descriptor():
    """Test the descriptor of a two node network without overlay."""
    descriptor = build_topology(_config())

    assert [s.name for s in descriptor.services] == [
        "n1.chain.testnet.diva.i2p",
        "n2.chain.testnet.diva.i2p",
    ]
    assert [s.ipv4_address for s in descriptor.services] == ["10.0.0.151", "10.0.0.152"]
    assert descriptor.network.subnet == "10.0.0.0/24"
    assert descriptor.network.name == "network.testnet.diva.i2p"
    assert descriptor.volumes == []
    assert descriptor.tunnels == []


def test_chain_service_block():
    """Test environment and volumes of a chain service."""
    descriptor = build_topology(_config(NODE_ENV="development", LOG_LEVEL="debug"))
    service = descriptor.service("n1.chain.testnet.diva.i2p")

    assert service.image == "divax/divachain:latest"
    assert service.restart == "unless-stopped"
    assert service.environment == {
        "NODE_ENV": "development",
        "LOG_LEVEL": "debug",
        "IP": "10.0.0.151",
        "PORT": 17000,
        "ADDRESS": "10.0.0.151:17000",
        "NETWORK_SIZE": 2,
        "NETWORK_VERBOSE_LOGGING": 0,
    }
    assert service.volumes == ["./keys/10.0.0.151:/keys/", "./genesis:/genesis/"]
    assert service.network == "network.testnet.diva.i2p"


def test_name_based_key_volume():
    """Test that name-based networks mount keys by node name."""
    descriptor = build_topology(_config(IS_NAME_BASED="1"))
    service = descriptor.services[0]

    assert service.volumes[0] == "./keys/n1.testnet.diva.i2p:/keys/"
    assert service.environment["ADDRESS"] == "n1.testnet.diva.i2p:17000"
    assert service.ipv4_address == "10.0.0.151"


def test_overlay_descriptor():
    """Test routers, volumes and tunnels with overlay enabled."""
    descriptor = build_topology(_config(HAS_I2P="1"))

    assert [s.name for s in descriptor.services] == [
        "n1.chain.testnet.diva.i2p",
        "n2.chain.testnet.diva.i2p",
        "n1.testnet.diva.i2p",
        "n2.testnet.diva.i2p",
    ]
    routers = descriptor.services[2:]
    assert [r.ipv4_address for r in routers] == ["10.0.0.51", "10.0.0.52"]
    assert routers[0].image == "divax/i2p:latest"
    assert routers[0].environment == {"ENABLE_TUNNELS": 1}
    assert routers[0].volumes == [
        "./tunnels.conf.d/n1.testnet.diva.i2p:/home/i2pd/tunnels.source.conf.d/",
        "n1.testnet.diva.i2p:/home/i2pd/data/",
    ]
    assert [v.name for v in descriptor.volumes] == ["n1.testnet.diva.i2p", "n2.testnet.diva.i2p"]

    chain_env = descriptor.services[1].environment
    assert chain_env["I2P_SOCKS_PROXY_HOST"] == "10.0.0.52"
    assert chain_env["I2P_SOCKS_PROXY_PORT"] == 4445
    assert chain_env["I2P_SOCKS_PROXY_CONSOLE_PORT"] == 7070


def test_tunnel_configs():
    """Test per-node tunnel configuration content."""
    descriptor = build_topology(_config(HAS_I2P="1"))

    assert [(t.node_name, t.host, t.port) for t in descriptor.tunnels] == [
        ("n1.testnet.diva.i2p", "10.0.0.151", 17000),
        ("n2.testnet.diva.i2p", "10.0.0.152", 17000),
    ]
    assert descriptor.tunnels[1].render() == (
        "[p2p-api]\n"
        "type = server\n"
        "host = 10.0.0.152\n"
        "port = 17000\n"
        "gzip = false\n"
        "keys = n2.testnet.diva.i2p.p2p-api.dat\n"
    )


def test_addresses_are_distinct_for_max_size():
    """Test that node and router suffixes never collide."""
    config = _config(MAX_NETWORK_SIZE, HAS_I2P="1")
    descriptor = build_topology(config)
    addresses = [s.ipv4_address for s in descriptor.services]

    assert len(addresses) == 2 * MAX_NETWORK_SIZE
    assert len(set(addresses)) == len(addresses)

    suffixes = [int(a.rsplit(".", 1)[1]) for a in addresses]
    assert suffixes[:MAX_NETWORK_SIZE] == [150 + i for i in range(1, MAX_NETWORK_SIZE + 1)]
    assert suffixes[MAX_NETWORK_SIZE:] == [50 + i for i in range(1, MAX_NETWORK_SIZE + 1)]
    assert max(suffixes) < 255


def test_compose_yaml():
    """Test the YAML rendering of the descriptor."""
    text = render_descriptor(build_topology(_config(HAS_I2P="1")), "yaml")
    compose = yaml.safe_load(text)

    assert compose["version"] == "3.7"
    assert list(compose["services"]) == [
        "n1.chain.testnet.diva.i2p",
        "n2.chain.testnet.diva.i2p",
        "n1.testnet.diva.i2p",
        "n2.testnet.diva.i2p",
    ]
    node = compose["services"]["n1.chain.testnet.diva.i2p"]
    assert node["container_name"] == "n1.chain.testnet.diva.i2p"
    assert node["networks"] == {"network.testnet.diva.i2p": {"ipv4_address": "10.0.0.151"}}
    assert compose["networks"]["network.testnet.diva.i2p"] == {
        "name": "network.testnet.diva.i2p",
        "ipam": {"driver": "default", "config": [{"subnet": "10.0.0.0/24"}]},
    }
    assert compose["volumes"]["n2.testnet.diva.i2p"] == {"name": "n2.testnet.diva.i2p"}


def test_compose_without_overlay_has_no_volumes():
    """Test that the volumes section is omitted without overlay."""
    compose = yaml.safe_load(render_descriptor(build_topology(_config()), "yaml"))
    assert "volumes" not in compose


def test_descriptor_text_is_idempotent():
    """Test that identical configs render identical descriptor text."""
    config = _config(7, HAS_I2P="1")
    assert render_descriptor(build_topology(config)) == render_descriptor(build_topology(config))


def test_unknown_format():
    """Test that an unknown format is rejected."""
    with pytest.raises(ValueError):
        render_descriptor(build_topology(_config()), "toml")
