"""Orchestration descriptor models.

The builders produce these records; turning them into compose text is left
to the formatting step.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from ..constants import COMPOSE_VERSION, RESTART_POLICY


class ServiceBlock(BaseModel):
    """One container service bound to a fixed address."""
    name: str = Field(..., description="Service and container name")
    image: str = Field(..., description="Container image")
    restart: str = Field(RESTART_POLICY, description="Restart policy")
    environment: Dict[str, Any] = Field(default_factory=dict, description="Environment variables, in order")
    volumes: List[str] = Field(default_factory=list, description="Volume bindings (source:target)")
    network: str = Field(..., description="Attached network name")
    ipv4_address: str = Field(..., description="Fixed address within the subnet")

    def to_compose(self) -> Dict[str, Any]:
        return {
            "container_name": self.name,
            "image": self.image,
            "restart": self.restart,
            "environment": dict(self.environment),
            "volumes": list(self.volumes),
            "networks": {self.network: {"ipv4_address": self.ipv4_address}},
        }


class NetworkBlock(BaseModel):
    """The shared bridge network."""
    name: str = Field(..., description="Network name")
    subnet: str = Field(..., description="Subnet in CIDR notation")
    driver: str = Field("default", description="IPAM driver")

    def to_compose(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "ipam": {"driver": self.driver, "config": [{"subnet": self.subnet}]},
        }


class VolumeBlock(BaseModel):
    """Named volume holding an overlay router's persistent data."""
    name: str = Field(..., description="Volume name")

    def to_compose(self) -> Dict[str, Any]:
        return {"name": self.name}


class TunnelConfig(BaseModel):
    """
    I2P server tunnel for one node.

    Exposes the node's P2P port through its paired router.
    """
    node_name: str = Field(..., description="Router/node name, also the config directory")
    host: str = Field(..., description="Internal address of the chain node")
    port: int = Field(..., description="Internal P2P port of the chain node")
    section: str = Field("p2p-api", description="Tunnel section name")
    filename: str = Field("testnet.conf", description="File name inside the node directory")

    @property
    def keys(self) -> str:
        return f"{self.node_name}.{self.section}.dat"

    def render(self) -> str:
        return (
            f"[{self.section}]\n"
            "type = server\n"
            f"host = {self.host}\n"
            f"port = {self.port}\n"
            "gzip = false\n"
            f"keys = {self.keys}\n"
        )


class TopologyDescriptor(BaseModel):
    """Services, network and volumes of a generated testnet."""
    services: List[ServiceBlock] = Field(default_factory=list, description="Services in emission order")
    network: NetworkBlock = Field(..., description="Shared network")
    volumes: List[VolumeBlock] = Field(default_factory=list, description="Named volumes")
    tunnels: List[TunnelConfig] = Field(default_factory=list, description="Per-node tunnel configs")
    version: str = Field(COMPOSE_VERSION, description="Compose file format version")

    def service(self, name: str) -> Optional[ServiceBlock]:
        for service in self.services:
            if service.name == name:
                return service
        return None

    def to_compose(self) -> Dict[str, Any]:
        """Build the compose mapping. Tunnel configs are separate files and not included."""
        compose: Dict[str, Any] = {
            "version": self.version,
            "services": {s.name: s.to_compose() for s in self.services},
            "networks": {self.network.name: self.network.to_compose()},
        }
        if self.volumes:
            compose["volumes"] = {v.name: v.to_compose() for v in self.volumes}
        return compose
