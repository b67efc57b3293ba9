"""Node identities and the genesis transaction."""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, Field

from ..config import NetworkConfig
from ..constants import GENESIS_STAKE
from ..crypto import derive_node_seed, generate_keypair, save_keypair
from ..errors import ArtifactWriteError
from ..models import AddPeerCommand, GenesisBlock, GenesisTransaction, ModifyStakeCommand
from .addressing import NodeAddress, plan_nodes

logger = logging.getLogger(__name__)


class NodeIdentity(BaseModel):
    """Public identity of a generated node. The secret key is never kept here."""
    index: int = Field(..., ge=1, description="1-based node index")
    host: str = Field(..., description="Announced host")
    port: int = Field(..., description="Announced port")
    public_key: str = Field(..., description="URL-safe base64 public key")


def create_identity(
    node: NodeAddress,
    seed: Optional[bytes] = None,
    keys_dir: Optional[str] = None
) -> NodeIdentity:
    """
    Generate the key pair of a node and return its public identity.

    Args:
        node: Planned node address
        seed: Optional run seed; keys are derived per node from it
        keys_dir: If given, the key pair is saved to keys_dir/<key_name>/

    Returns:
        NodeIdentity without secret key material
    """
    keypair = generate_keypair(derive_node_seed(seed, node.index) if seed is not None else None)
    if keys_dir is not None:
        key_path = Path(keys_dir) / node.key_name
        try:
            save_keypair(keypair, str(key_path), node.name)
        except OSError as e:
            raise ArtifactWriteError("save keys to", str(key_path), e.strerror or str(e)) from e
    public_key = keypair.public_key_b64url
    del keypair
    return NodeIdentity(index=node.index, host=node.host, port=node.port, public_key=public_key)


def build_genesis(
    config: NetworkConfig,
    nodes: Optional[List[NodeAddress]] = None,
    seed: Optional[bytes] = None,
    keys_dir: Optional[str] = None,
    template: Optional[Dict[str, Any]] = None
) -> Tuple[GenesisBlock, List[NodeIdentity]]:
    """
    Build the genesis block registering every node with stake.

    For each node, in ascending index order, an addPeer and then a
    modifyStake command are appended; sequence numbers start at 1 and have
    no gaps.

    Args:
        config: Resolved network configuration
        nodes: Planned node addresses (planned from config if None)
        seed: Optional run seed for reproducible keys
        keys_dir: Optional directory to persist node key pairs in
        template: Base genesis block fields; any existing tx is replaced

    Returns:
        Tuple of (genesis block, node identities)
    """
    if nodes is None:
        nodes = plan_nodes(config)

    identities = []
    commands = []
    seq = 1
    for node in nodes:
        identity = create_identity(node, seed=seed, keys_dir=keys_dir)
        identities.append(identity)

        commands.append(AddPeerCommand(
            seq=seq,
            host=identity.host,
            port=identity.port,
            public_key=identity.public_key,
        ))
        seq += 1
        commands.append(ModifyStakeCommand(
            seq=seq,
            public_key=identity.public_key,
            stake=GENESIS_STAKE,
        ))
        seq += 1

    base = {key: value for key, value in (template or {}).items() if key != 'tx'}
    genesis = GenesisBlock.model_validate(base)
    genesis.tx = [GenesisTransaction(commands=commands)]

    logger.info(f"Genesis built: {len(identities)} peers, {len(commands)} commands")
    return genesis, identities
