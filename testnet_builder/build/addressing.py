"""Per-node address planning, shared by the genesis and topology builders."""

import logging
from pathlib import Path
from typing import List, Optional, Tuple

from pydantic import BaseModel, Field

from ..config import NetworkConfig
from ..errors import OverlayAddressError

logger = logging.getLogger(__name__)


class NodeAddress(BaseModel):
    """Resolved addressing of one node."""
    index: int = Field(..., ge=1, description="1-based node index")
    name: str = Field(..., description="Node name (n{index}.{domain})")
    ip: str = Field(..., description="Fixed container address of the chain node")
    router_ip: str = Field(..., description="Fixed container address of the overlay router")
    key_name: str = Field(..., description="Key directory name under keys/")
    host: str = Field(..., description="Address announced in the genesis")
    port: int = Field(..., description="Port announced in the genesis")
    overlay: bool = Field(False, description="Host/port come from a persisted overlay address")

    @property
    def endpoint(self) -> str:
        return f"{self.host}:{self.port}"


class OverlayAddressBook:
    """
    Previously provisioned overlay addresses.

    Each node's address is a file named after the node containing
    `host:port`, e.g. `i2p-b32/n1.testnet.diva.i2p`.
    """

    def __init__(self, directory: str):
        self.directory = Path(directory)

    def lookup(self, name: str) -> Optional[Tuple[str, int]]:
        """
        Look up the persisted address of a node.

        Args:
            name: Node name

        Returns:
            (host, port) or None if nothing is persisted for the node

        Raises:
            OverlayAddressError: If the file exists but is not host:port
        """
        path = self.directory / name
        try:
            content = path.read_text(encoding='utf-8').strip()
        except FileNotFoundError:
            return None
        except (IsADirectoryError, NotADirectoryError, PermissionError) as e:
            logger.warning(f"Overlay address for {name} unavailable ({e}), using computed address")
            return None
        except UnicodeDecodeError as e:
            raise OverlayAddressError(str(path), e.object.decode('utf-8', errors='replace').strip()) from e

        host, sep, port = content.rpartition(':')
        if not sep or not host or not (port.isascii() and port.isdigit()):
            raise OverlayAddressError(str(path), content)
        return host, int(port)


def plan_nodes(config: NetworkConfig, address_book: Optional[OverlayAddressBook] = None) -> List[NodeAddress]:
    """
    Resolve the address of every node, in ascending index order.

    Args:
        config: Resolved network configuration
        address_book: Persisted overlay addresses, consulted only when
            overlay routing is enabled

    Returns:
        List of NodeAddress, one per index 1..size
    """
    nodes = []
    for index in range(1, config.size + 1):
        name = config.node_name(index)
        host = name if config.name_based else config.node_ip(index)
        port = config.port
        overlay = False

        if config.overlay_enabled and address_book is not None:
            persisted = address_book.lookup(name)
            if persisted is not None:
                host, port = persisted
                overlay = True
                logger.debug(f"Reusing overlay address for {name}: {host}:{port}")

        nodes.append(NodeAddress(
            index=index,
            name=name,
            ip=config.node_ip(index),
            router_ip=config.router_ip(index),
            key_name=name if config.name_based else config.node_ip(index),
            host=host,
            port=port,
            overlay=overlay,
        ))
    return nodes
