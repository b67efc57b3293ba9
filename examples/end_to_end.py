#!/usr/bin/env python3
"""
Complete end-to-end workflow for Testnet Builder.

This script demonstrates:
1. Configuration resolution from environment values
2. Reuse of a previously provisioned I2P address
3. Genesis and topology generation
4. Writing artifacts to disk
5. Checking that both artifacts agree
"""

import json
import tempfile
from pathlib import Path

import yaml

from testnet_builder.build import OverlayAddressBook, generate, write_artifacts
from testnet_builder.config import resolve_config
from testnet_builder.models import AddPeerCommand


def main():
    print("=== Testnet Builder End-to-End Run ===\n")
    output_dir = Path(tempfile.mkdtemp(prefix="testnet-"))

    # Step 1: Resolve configuration
    print("Step 1: Resolving configuration...")
    config = resolve_config(4, {
        "BASE_IP": "10.0.0.",
        "PORT": "17000",
        "HAS_I2P": "1",
        "NETWORK_VERBOSE_LOGGING": "1",
    })
    print(f"  ✓ {config.size} nodes on {config.subnet}, port {config.port}, env {config.environment}")

    # Step 2: Persist an overlay address for node 2
    print("\nStep 2: Persisting an I2P address for node 2...")
    b32_dir = output_dir / "i2p-b32"
    b32_dir.mkdir()
    (b32_dir / config.node_name(2)).write_text("examplenodeaddress.b32.i2p:17468\n")
    print(f"  ✓ {b32_dir / config.node_name(2)}")

    # Step 3: Generate
    print("\nStep 3: Generating genesis and topology...")
    result = generate(config, address_book=OverlayAddressBook(str(b32_dir)), seed=b"example")
    commands = result.genesis.genesis_transaction.commands
    print(f"  ✓ Genesis commands: {len(commands)}")
    print(f"  ✓ Services: {len(result.descriptor.services)}")

    # Step 4: Write artifacts
    print("\nStep 4: Writing artifacts...")
    written = write_artifacts(result, str(output_dir))
    for name, path in written.items():
        print(f"  ✓ {name}: {path}")

    # Step 5: Cross-check
    print("\nStep 5: Cross-checking genesis and descriptor...")
    genesis = json.loads(written["genesis"].read_text())
    compose = yaml.safe_load(written["descriptor"].read_text())
    peers = [c for c in commands if isinstance(c, AddPeerCommand)]
    for index, peer in enumerate(peers, start=1):
        service = compose["services"][config.chain_name(index)]
        assert service["environment"]["ADDRESS"] == f"{peer.host}:{peer.port}"
        print(f"  ✓ n{index}: {peer.host}:{peer.port}")
    assert len(genesis["tx"][0]["commands"]) == 2 * config.size

    print("\n=== Run Complete! ===")
    print(f"Artifacts in {output_dir}")


if __name__ == '__main__':
    main()
