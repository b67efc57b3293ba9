"""Network-wide defaults and fixed genesis values."""

DEFAULT_NETWORK_SIZE = 7
MAX_NETWORK_SIZE = 64
DEFAULT_BASE_DOMAIN = "testnet.diva.i2p"
DEFAULT_BASE_IP = "172.29.101."
DEFAULT_PORT = 17468
DEFAULT_LOG_LEVEL = "warn"

# Exclusive port bounds
MIN_PORT = 1024
MAX_PORT = 48000

# Last-octet offsets within the /24
ROUTER_IP_OFFSET = 50
NODE_IP_OFFSET = 150

GENESIS_IDENT = "genesis"
GENESIS_STAKE = 1000
GENESIS_TIMESTAMP = 88355100000
GENESIS_ORIGIN = "0" * 43
GENESIS_SIG = "0" * 86

COMPOSE_VERSION = "3.7"
CHAIN_IMAGE = "divax/divachain:latest"
ROUTER_IMAGE = "divax/i2p:latest"
RESTART_POLICY = "unless-stopped"
I2P_SOCKS_PROXY_PORT = 4445
I2P_CONSOLE_PORT = 7070
