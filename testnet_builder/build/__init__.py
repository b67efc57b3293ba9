"""Testnet generation: address planning, genesis, topology and output."""

from .addressing import NodeAddress, OverlayAddressBook, plan_nodes
from .genesis_builder import NodeIdentity, build_genesis, create_identity
from .topology_builder import build_topology
from .formatting import render_descriptor
from .generator import GenerationResult, generate
from .writer import write_artifacts

__all__ = [
    "NodeAddress",
    "OverlayAddressBook",
    "plan_nodes",
    "NodeIdentity",
    "build_genesis",
    "create_identity",
    "build_topology",
    "render_descriptor",
    "GenerationResult",
    "generate",
    "write_artifacts",
]
