"""Resolution of the requested network size and environment settings."""

import logging
import math
import re
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

from .constants import (
    DEFAULT_BASE_DOMAIN,
    DEFAULT_BASE_IP,
    DEFAULT_LOG_LEVEL,
    DEFAULT_NETWORK_SIZE,
    DEFAULT_PORT,
    MAX_NETWORK_SIZE,
    MAX_PORT,
    MIN_PORT,
    NODE_IP_OFFSET,
    ROUTER_IP_OFFSET,
)

logger = logging.getLogger(__name__)

_DECIMAL = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$", re.ASCII)
_RADIX = re.compile(r"^0([xX][0-9a-fA-F]+|[oO][0-7]+|[bB][01]+)$", re.ASCII)
_INFINITY = re.compile(r"^[+-]?Infinity$")


class NetworkConfig(BaseModel):
    """
    Resolved testnet parameters.

    Built once by resolve_config() and passed explicitly to the builders.
    """
    model_config = ConfigDict(frozen=True)

    size: int = Field(..., ge=1, le=MAX_NETWORK_SIZE, description="Number of nodes")
    name_based: bool = Field(False, description="Use hostnames instead of IPs for peer addresses")
    base_domain: str = Field(DEFAULT_BASE_DOMAIN, description="Domain suffix for node names")
    base_ip: str = Field(DEFAULT_BASE_IP, description="First three octets, including trailing dot")
    port: int = Field(DEFAULT_PORT, gt=MIN_PORT, lt=MAX_PORT, description="Chain P2P port")
    overlay_enabled: bool = Field(False, description="Pair every node with an I2P router")
    verbose_logging: bool = Field(False, description="Verbose network logging on the nodes")
    environment: str = Field("production", description="NODE_ENV for the nodes")
    log_level: str = Field(DEFAULT_LOG_LEVEL, description="LOG_LEVEL for the nodes")

    @property
    def network_name(self) -> str:
        return f"network.{self.base_domain}"

    @property
    def subnet(self) -> str:
        return f"{self.base_ip}0/24"

    def node_name(self, index: int) -> str:
        """Hostname of node `index`, also used for its overlay router."""
        return f"n{index}.{self.base_domain}"

    def chain_name(self, index: int) -> str:
        return f"n{index}.chain.{self.base_domain}"

    def node_ip(self, index: int) -> str:
        return f"{self.base_ip}{NODE_IP_OFFSET + index}"

    def router_ip(self, index: int) -> str:
        return f"{self.base_ip}{ROUTER_IP_OFFSET + index}"


def _as_number(value: Any) -> Optional[float]:
    """
    Coerce an environment value to a number, or None if it is not one.

    Accepts what Number() accepts in the node runtime: decimal and
    exponent notation, 0x/0o/0b literals and Infinity; blank text is 0.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        text = str(value).strip()
        if not text:
            return 0.0
        if _DECIMAL.match(text):
            number = float(text)
        elif _RADIX.match(text):
            number = float(int(text, 0))
        elif _INFINITY.match(text):
            number = float(text)
        else:
            return None
    if math.isnan(number):
        return None
    return number


def _is_enabled(value: Any) -> bool:
    number = _as_number(value)
    return number is not None and number > 0


def _resolve_size(size: Any) -> int:
    number = _as_number(size)
    if number is None or math.isinf(number):
        logger.debug(f"Non-numeric network size {size!r}, using default")
        return DEFAULT_NETWORK_SIZE
    floored = math.floor(number)
    if floored <= 0 or floored > MAX_NETWORK_SIZE:
        logger.debug(f"Network size {size!r} out of range, using default")
        return DEFAULT_NETWORK_SIZE
    return floored


def _resolve_port(port: Any) -> int:
    number = _as_number(port)
    if number is None or not number.is_integer() or not MIN_PORT < number < MAX_PORT:
        if port not in (None, ""):
            logger.debug(f"Port {port!r} invalid, using default {DEFAULT_PORT}")
        return DEFAULT_PORT
    return int(number)


def resolve_config(size: Any = DEFAULT_NETWORK_SIZE, environ: Optional[Mapping[str, str]] = None) -> NetworkConfig:
    """
    Resolve a network configuration from a requested size and environment.

    Out-of-range or malformed inputs are replaced with defaults; this never
    raises for bad values.

    Args:
        size: Requested number of nodes
        environ: Environment variables (IS_NAME_BASED, BASE_DOMAIN, BASE_IP,
            PORT, HAS_I2P, NETWORK_VERBOSE_LOGGING, NODE_ENV, LOG_LEVEL)

    Returns:
        NetworkConfig: Validated configuration
    """
    env = environ or {}

    verbose_logging = _is_enabled(env.get("NETWORK_VERBOSE_LOGGING"))
    if verbose_logging or env.get("NODE_ENV") == "development":
        environment = "development"
    else:
        environment = "production"

    return NetworkConfig(
        size=_resolve_size(size),
        name_based=_is_enabled(env.get("IS_NAME_BASED")),
        base_domain=env.get("BASE_DOMAIN") or DEFAULT_BASE_DOMAIN,
        base_ip=env.get("BASE_IP") or DEFAULT_BASE_IP,
        port=_resolve_port(env.get("PORT")),
        overlay_enabled=_is_enabled(env.get("HAS_I2P")),
        verbose_logging=verbose_logging,
        environment=environment,
        log_level=env.get("LOG_LEVEL") or DEFAULT_LOG_LEVEL,
    )
