"""Writing generated artifacts to disk."""

import logging
from pathlib import Path
from typing import Dict

from ..errors import ArtifactWriteError
from .formatting import EXTENSIONS, render_descriptor
from .generator import GenerationResult

logger = logging.getLogger(__name__)


def _make_dir(path: Path) -> None:
    try:
        path.mkdir(mode=0o755, parents=True, exist_ok=True)
    except OSError as e:
        raise ArtifactWriteError("create directory", str(path), e.strerror or str(e)) from e


def _write_text(path: Path, content: str) -> None:
    _make_dir(path.parent)
    try:
        path.write_text(content)
    except OSError as e:
        raise ArtifactWriteError("write", str(path), e.strerror or str(e)) from e
    logger.debug(f"Wrote {path}")


def write_artifacts(result: GenerationResult, output_dir: str, fmt: str = "yaml") -> Dict[str, Path]:
    """
    Write the genesis block, descriptor and tunnel configs.

    Layout under output_dir:
        genesis/block.json
        build-testnet.yml (or .json)
        tunnels.conf.d/<node name>/testnet.conf   (overlay only)

    Any failure aborts immediately; files already written are not cleaned up.

    Args:
        result: Output of generate()
        output_dir: Target directory
        fmt: Descriptor format name

    Returns:
        Mapping of artifact name to written path

    Raises:
        ArtifactWriteError: If a directory or file cannot be written
    """
    base = Path(output_dir)
    written: Dict[str, Path] = {}

    descriptor_text = render_descriptor(result.descriptor, fmt)

    genesis_path = base / "genesis" / "block.json"
    _write_text(genesis_path, result.genesis.to_json())
    written["genesis"] = genesis_path

    descriptor_path = base / f"build-testnet.{EXTENSIONS[fmt]}"
    _write_text(descriptor_path, descriptor_text)
    written["descriptor"] = descriptor_path

    for tunnel in result.descriptor.tunnels:
        tunnel_path = base / "tunnels.conf.d" / tunnel.node_name / tunnel.filename
        _write_text(tunnel_path, tunnel.render())
        written[f"tunnel:{tunnel.node_name}"] = tunnel_path

    logger.info(f"Artifacts written to {base}")
    return written
