"""Data models for generated testnet artifacts."""

from .genesis import AddPeerCommand, ModifyStakeCommand, GenesisCommand, GenesisTransaction, GenesisBlock
from .topology import ServiceBlock, NetworkBlock, VolumeBlock, TunnelConfig, TopologyDescriptor

__all__ = [
    "AddPeerCommand",
    "ModifyStakeCommand",
    "GenesisCommand",
    "GenesisTransaction",
    "GenesisBlock",
    "ServiceBlock",
    "NetworkBlock",
    "VolumeBlock",
    "TunnelConfig",
    "TopologyDescriptor",
]
