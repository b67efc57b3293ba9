"""Container topology of a testnet: chain nodes and optional I2P routers."""

import logging
from typing import Any, Dict, List, Optional

from ..config import NetworkConfig
from ..constants import CHAIN_IMAGE, I2P_CONSOLE_PORT, I2P_SOCKS_PROXY_PORT, ROUTER_IMAGE
from ..models import NetworkBlock, ServiceBlock, TopologyDescriptor, TunnelConfig, VolumeBlock
from .addressing import NodeAddress, plan_nodes

logger = logging.getLogger(__name__)


def _chain_environment(config: NetworkConfig, node: NodeAddress) -> Dict[str, Any]:
    environment: Dict[str, Any] = {
        "NODE_ENV": config.environment,
        "LOG_LEVEL": config.log_level,
        "IP": node.ip,
        "PORT": config.port,
        "ADDRESS": node.endpoint,
    }
    if config.overlay_enabled:
        environment["I2P_SOCKS_PROXY_HOST"] = node.router_ip
        environment["I2P_SOCKS_PROXY_PORT"] = I2P_SOCKS_PROXY_PORT
        environment["I2P_SOCKS_PROXY_CONSOLE_PORT"] = I2P_CONSOLE_PORT
    environment["NETWORK_SIZE"] = config.size
    environment["NETWORK_VERBOSE_LOGGING"] = 1 if config.verbose_logging else 0
    return environment


def chain_service(config: NetworkConfig, node: NodeAddress) -> ServiceBlock:
    """Service block of a chain node."""
    return ServiceBlock(
        name=config.chain_name(node.index),
        image=CHAIN_IMAGE,
        environment=_chain_environment(config, node),
        volumes=[
            f"./keys/{node.key_name}:/keys/",
            "./genesis:/genesis/",
        ],
        network=config.network_name,
        ipv4_address=node.ip,
    )


def router_service(config: NetworkConfig, node: NodeAddress) -> ServiceBlock:
    """Service block of the I2P router paired with a chain node."""
    return ServiceBlock(
        name=node.name,
        image=ROUTER_IMAGE,
        environment={"ENABLE_TUNNELS": 1},
        volumes=[
            f"./tunnels.conf.d/{node.name}:/home/i2pd/tunnels.source.conf.d/",
            f"{node.name}:/home/i2pd/data/",
        ],
        network=config.network_name,
        ipv4_address=node.router_ip,
    )


def tunnel_config(config: NetworkConfig, node: NodeAddress) -> TunnelConfig:
    """Server tunnel exposing the node's P2P port through its router."""
    return TunnelConfig(node_name=node.name, host=node.ip, port=config.port)


def build_topology(config: NetworkConfig, nodes: Optional[List[NodeAddress]] = None) -> TopologyDescriptor:
    """
    Build the orchestration descriptor.

    Chain services come first in ascending index order, followed by the
    router services when overlay routing is enabled. Output depends only on
    the config and the node plan, so repeated runs are identical.

    Args:
        config: Resolved network configuration
        nodes: Planned node addresses (planned from config if None)

    Returns:
        TopologyDescriptor
    """
    if nodes is None:
        nodes = plan_nodes(config)

    services = [chain_service(config, node) for node in nodes]
    volumes = []
    tunnels = []

    if config.overlay_enabled:
        for node in nodes:
            services.append(router_service(config, node))
            volumes.append(VolumeBlock(name=node.name))
            tunnels.append(tunnel_config(config, node))

    descriptor = TopologyDescriptor(
        services=services,
        network=NetworkBlock(name=config.network_name, subnet=config.subnet),
        volumes=volumes,
        tunnels=tunnels,
    )
    logger.info(
        f"Topology built: {len(nodes)} nodes, {len(tunnels)} routers, subnet {config.subnet}"
    )
    return descriptor
