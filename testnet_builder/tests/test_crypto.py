"""Tests for node key generation."""

import base64
import stat

from testnet_builder.crypto import derive_node_seed, generate_keypair, save_keypair


def test_keypair_generation():
    """Test Ed25519 keypair generation and URL-safe encoding."""
    keypair = generate_keypair()
    public_key = keypair.public_key_b64url

    assert len(public_key) == 43
    assert not set(public_key) & set("+/=")
    assert base64.urlsafe_b64decode(public_key + "=") == bytes(keypair.public_key)


def test_keypairs_are_unique():
    """Test that fresh keypairs differ."""
    keys = {generate_keypair().public_key_b64url for _ in range(20)}
    assert len(keys) == 20


def test_seeded_keypair():
    """Test that a seed yields a reproducible keypair."""
    seed = derive_node_seed(b"testnet", 1)

    assert len(seed) == 32
    assert generate_keypair(seed).public_key_b64url == generate_keypair(seed).public_key_b64url
    assert derive_node_seed(b"testnet", 1) != derive_node_seed(b"testnet", 2)
    assert derive_node_seed(b"testnet", 1) != derive_node_seed(b"other", 1)


def test_save_keypair(tmp_path):
    """Test saving a keypair into a node key directory."""
    keypair = generate_keypair()
    private_path, public_path = save_keypair(keypair, str(tmp_path / "keys" / "10.0.0.151"), "n1.testnet.diva.i2p")

    assert private_path.name == "n1.testnet.diva.i2p.private"
    assert public_path.name == "n1.testnet.diva.i2p.public"
    assert public_path.read_text() == keypair.public_key_b64url

    secret = private_path.read_bytes()
    assert len(secret) == 64
    assert secret[:32] == bytes(keypair.private_key)
    assert secret[32:] == bytes(keypair.public_key)
    assert stat.S_IMODE(private_path.stat().st_mode) == 0o600


def test_save_keypair_overwrites(tmp_path):
    """Test that saving again replaces the previous key files."""
    first = generate_keypair()
    second = generate_keypair()
    save_keypair(first, str(tmp_path), "n1")
    private_path, public_path = save_keypair(second, str(tmp_path), "n1")

    assert private_path.read_bytes() == second.secret_key_bytes
    assert public_path.read_text() == second.public_key_b64url
