"""Genesis block data models."""

import json
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from ..constants import GENESIS_IDENT, GENESIS_ORIGIN, GENESIS_SIG, GENESIS_STAKE, GENESIS_TIMESTAMP


class AddPeerCommand(BaseModel):
    """Registers a peer and its reachable address."""
    model_config = ConfigDict(populate_by_name=True)

    seq: int = Field(..., ge=1, description="Position in the genesis command list")
    command: Literal["addPeer"] = "addPeer"
    host: str = Field(..., description="Hostname, IP or overlay address")
    port: int = Field(..., description="P2P port")
    public_key: str = Field(..., alias="publicKey", description="URL-safe base64 public key")


class ModifyStakeCommand(BaseModel):
    """Assigns stake to a registered peer."""
    model_config = ConfigDict(populate_by_name=True)

    seq: int = Field(..., ge=1, description="Position in the genesis command list")
    command: Literal["modifyStake"] = "modifyStake"
    public_key: str = Field(..., alias="publicKey", description="URL-safe base64 public key")
    stake: int = Field(GENESIS_STAKE, description="Stake weight")


GenesisCommand = Annotated[
    Union[AddPeerCommand, ModifyStakeCommand],
    Field(discriminator="command"),
]


class GenesisTransaction(BaseModel):
    """
    The bootstrap transaction carrying the initial peer set and stake.

    Unsigned: origin and sig are fixed zero sentinels.
    """
    ident: str = Field(GENESIS_IDENT, description="Transaction identifier")
    origin: str = Field(GENESIS_ORIGIN, description="Origin public key sentinel")
    timestamp: int = Field(GENESIS_TIMESTAMP, description="Fixed genesis timestamp")
    commands: List[GenesisCommand] = Field(default_factory=list, description="Ordered genesis commands")
    sig: str = Field(GENESIS_SIG, description="Signature sentinel")

    def shape(self) -> List[Dict[str, Any]]:
        """Commands without their public keys, i.e. everything that is not random."""
        return [c.model_dump(exclude={"public_key"}) for c in self.commands]


class GenesisBlock(BaseModel):
    """
    Genesis block - the first block of the testnet chain.

    Base fields may come from a template; unknown template fields are kept
    and written back unchanged.
    """
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    version: int = Field(1, description="Block format version")
    previous_hash: str = Field("", alias="previousHash", description="Hash of the previous block")
    hash: str = Field("", description="Block hash")
    height: int = Field(1, description="Block height")
    tx: List[GenesisTransaction] = Field(default_factory=list, description="Block transactions")

    @property
    def genesis_transaction(self) -> GenesisTransaction:
        return self.tx[0]

    def to_json(self, indent: Optional[int] = None) -> str:
        """Serialize with the field names the chain expects (camelCase)."""
        return json.dumps(self.model_dump(mode='json', by_alias=True), indent=indent)
