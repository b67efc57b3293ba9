"""Key generation for Ed25519 node identities."""

import base64
import hashlib
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import nacl.signing


def encode_public_key(public_key: nacl.signing.VerifyKey) -> str:
    """URL-safe base64 without padding, as embedded in genesis commands."""
    return base64.urlsafe_b64encode(bytes(public_key)).rstrip(b'=').decode('ascii')


@dataclass
class KeyPair:
    """Ed25519 key pair."""
    private_key: nacl.signing.SigningKey
    public_key: nacl.signing.VerifyKey

    @property
    def public_key_b64url(self) -> str:
        """Get URL-safe base64-encoded public key."""
        return encode_public_key(self.public_key)

    @property
    def secret_key_bytes(self) -> bytes:
        """64-byte libsodium secret key: seed followed by public key."""
        return bytes(self.private_key) + bytes(self.public_key)


def generate_keypair(seed: Optional[bytes] = None) -> KeyPair:
    """
    Generate an Ed25519 key pair.

    Args:
        seed: Optional 32-byte seed for a reproducible key pair

    Returns:
        KeyPair: New cryptographic key pair
    """
    if seed is None:
        private_key = nacl.signing.SigningKey.generate()
    else:
        private_key = nacl.signing.SigningKey(seed)
    return KeyPair(private_key=private_key, public_key=private_key.verify_key)


def derive_node_seed(seed: bytes, index: int) -> bytes:
    """Derive the 32-byte key seed of node `index` from a run seed."""
    return hashlib.sha256(seed + index.to_bytes(4, 'big')).digest()


def save_keypair(keypair: KeyPair, directory: str, name: str) -> tuple[Path, Path]:
    """
    Save key pair into a node key directory (mounted as the node's /keys/).

    Writes `<name>.public` with the URL-safe base64 public key and
    `<name>.private` with the raw 64-byte secret key, readable by owner only.

    Args:
        keypair: Key pair to save
        directory: Node key directory
        name: Node name used for the file names

    Returns:
        Tuple of (private_key_path, public_key_path)
    """
    base = Path(directory)
    base.mkdir(parents=True, exist_ok=True)

    private_path = base / f"{name}.private"
    public_path = base / f"{name}.public"

    fd = os.open(private_path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
    with os.fdopen(fd, 'wb') as f:
        f.write(keypair.secret_key_bytes)
    os.chmod(private_path, 0o600)

    public_path.write_text(keypair.public_key_b64url)

    return private_path, public_path
