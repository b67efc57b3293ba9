"""One generation pass: plan addresses, build genesis and topology."""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from ..config import NetworkConfig
from ..models import GenesisBlock, TopologyDescriptor
from .addressing import NodeAddress, OverlayAddressBook, plan_nodes
from .genesis_builder import NodeIdentity, build_genesis
from .topology_builder import build_topology

logger = logging.getLogger(__name__)


@dataclass
class GenerationResult:
    """Everything produced by a generation pass."""
    config: NetworkConfig
    nodes: List[NodeAddress]
    genesis: GenesisBlock
    identities: List[NodeIdentity]
    descriptor: TopologyDescriptor


def generate(
    config: NetworkConfig,
    address_book: Optional[OverlayAddressBook] = None,
    seed: Optional[bytes] = None,
    keys_dir: Optional[str] = None,
    template: Optional[Dict[str, Any]] = None
) -> GenerationResult:
    """
    Generate the genesis block and topology for a network.

    Both artifacts are built from the same node plan, so a persisted overlay
    address shows up identically in the genesis and in the descriptor.

    Args:
        config: Resolved network configuration
        address_book: Persisted overlay addresses (optional)
        seed: Optional run seed for reproducible keys
        keys_dir: Optional directory to persist node key pairs in
        template: Base genesis block fields

    Returns:
        GenerationResult
    """
    logger.info(
        f"Generating testnet: size={config.size} domain={config.base_domain} "
        f"overlay={'on' if config.overlay_enabled else 'off'}"
    )
    nodes = plan_nodes(config, address_book)
    genesis, identities = build_genesis(config, nodes, seed=seed, keys_dir=keys_dir, template=template)
    descriptor = build_topology(config, nodes)
    return GenerationResult(
        config=config,
        nodes=nodes,
        genesis=genesis,
        identities=identities,
        descriptor=descriptor,
    )
