"""Key material for testnet node identities."""

from .keys import KeyPair, generate_keypair, derive_node_seed, save_keypair, encode_public_key

__all__ = [
    "KeyPair",
    "generate_keypair",
    "derive_node_seed",
    "save_keypair",
    "encode_public_key",
]
