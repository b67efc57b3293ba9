"""Main CLI application for Testnet Builder."""

import json
import logging
import os

import click
from pydantic import ValidationError

from ..build import OverlayAddressBook, generate, write_artifacts
from ..build.formatting import FORMATTERS
from ..config import resolve_config
from ..constants import DEFAULT_NETWORK_SIZE
from ..errors import ArtifactWriteError, OverlayAddressError
from ..models import AddPeerCommand, GenesisBlock, ModifyStakeCommand

logger = logging.getLogger(__name__)


def _load_json_object(path):
    """Read a JSON object from an input file, failing with a CLI error naming the file."""
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, UnicodeDecodeError) as e:
        raise click.ClickException(f"Failed to read {path}: {e}")
    except json.JSONDecodeError as e:
        raise click.ClickException(f"Invalid JSON in {path}: {e}")
    if not isinstance(data, dict):
        raise click.ClickException(f"Invalid JSON in {path}: expected an object")
    return data


@click.group()
@click.option('--debug', is_flag=True, help='Enable debug logging')
def cli(debug):
    """Testnet Builder CLI - genesis and container topology for local testnets."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s'
    )


@cli.command()
@click.option('--size', default=str(DEFAULT_NETWORK_SIZE), help='Number of nodes')
@click.option('--output-dir', default='.', help='Directory to write artifacts into')
@click.option('--i2p-b32-dir', default=None, help='Directory of persisted overlay addresses (default: <output-dir>/i2p-b32)')
@click.option('--genesis-template', default=None, type=click.Path(exists=True, dir_okay=False), help='JSON file with base genesis block fields')
@click.option('--format', 'fmt', type=click.Choice(sorted(FORMATTERS)), default='yaml', help='Descriptor format')
@click.option('--seed', default=None, help='Hex seed for reproducible node keys')
@click.option('--keys-dir', default=None, help='Persist node key pairs under this directory')
def build(size, output_dir, i2p_b32_dir, genesis_template, fmt, seed, keys_dir):
    """Generate genesis block and orchestration descriptor.

    Network settings are read from IS_NAME_BASED, BASE_DOMAIN, BASE_IP,
    PORT, HAS_I2P, NETWORK_VERBOSE_LOGGING, NODE_ENV and LOG_LEVEL.
    """
    config = resolve_config(size, dict(os.environ))

    template = None
    if genesis_template:
        template = _load_json_object(genesis_template)
        try:
            GenesisBlock.model_validate({k: v for k, v in template.items() if k != 'tx'})
        except ValidationError as e:
            raise click.ClickException(f"Invalid genesis template {genesis_template}: {e}")

    seed_bytes = None
    if seed:
        try:
            seed_bytes = bytes.fromhex(seed)
        except ValueError:
            raise click.BadParameter('seed must be hex encoded', param_hint='--seed')

    address_book = OverlayAddressBook(i2p_b32_dir or os.path.join(output_dir, 'i2p-b32'))

    try:
        result = generate(
            config,
            address_book=address_book,
            seed=seed_bytes,
            keys_dir=keys_dir,
            template=template,
        )
        written = write_artifacts(result, output_dir, fmt)
    except (ArtifactWriteError, OverlayAddressError) as e:
        raise click.ClickException(str(e))

    click.echo(f"\n✓ Testnet generated: {config.size} nodes")
    click.echo(f"  Network:    {config.network_name} ({config.subnet})")
    click.echo(f"  Addressing: {'name based' if config.name_based else 'IP based'}, port {config.port}")
    click.echo(f"  I2P:        {'enabled' if config.overlay_enabled else 'disabled'}")
    click.echo(f"  Genesis:    {written['genesis']}")
    click.echo(f"  Descriptor: {written['descriptor']}")
    tunnels = [path for name, path in written.items() if name.startswith('tunnel:')]
    if tunnels:
        click.echo(f"  Tunnels:    {len(tunnels)} configs")


@cli.command()
@click.option('--genesis', required=True, type=click.Path(exists=True, dir_okay=False), help='Path to generated genesis block')
def info(genesis):
    """Display genesis block peers and stake."""
    try:
        genesis_block = GenesisBlock.model_validate(_load_json_object(genesis))
    except ValidationError as e:
        raise click.ClickException(f"Invalid genesis block {genesis}: {e}")

    click.echo("=== Genesis Block Information ===\n")
    click.echo(f"Version: {genesis_block.version}")
    click.echo(f"Height:  {genesis_block.height}")
    for tx in genesis_block.tx:
        peers = [c for c in tx.commands if isinstance(c, AddPeerCommand)]
        stake = {c.public_key: c.stake for c in tx.commands if isinstance(c, ModifyStakeCommand)}
        click.echo(f"\nTransaction {tx.ident} ({len(tx.commands)} commands)")
        click.echo(f"Peers ({len(peers)}):")
        for peer in peers:
            click.echo(
                f"  - #{peer.seq} {peer.host}:{peer.port} "
                f"{peer.public_key[:16]}... stake {stake.get(peer.public_key, 0)}"
            )


def main():
    """Entry point for CLI."""
    cli()


if __name__ == '__main__':
    main()
