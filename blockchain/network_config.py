"""
Network Configuration
Resolves a network name into connection and signing parameters
"""

from dataclasses import dataclass
from typing import List, Mapping, Optional, Tuple

from .exceptions import ConfigurationError, MissingConfigurationError, NetworkNotFoundError

# Every profile compiles with the same solc release
SOLIDITY_VERSION = "0.8.20"

LOCAL_NETWORK = "hardhat"

# Local dev node (npx hardhat node)
LOCAL_RPC_URL = "http://127.0.0.1:8545"

NETWORK_CONFIG = {
    "hardhat": {
        "chain_id": 31337,
        "local": True,
        "block_explorer_url": None,
    },
    "sepolia": {
        "chain_id": 11155111,
        "local": False,
        "rpc_url_env": "SEPOLIA_RPC_URL",
        "private_key_env": "PRIVATE_KEY",
        "block_explorer_url": "https://sepolia.etherscan.io",
    },
    "polygon": {
        "chain_id": 137,
        "local": False,
        "rpc_url_env": "POLYGON_RPC_URL",
        "private_key_env": "PRIVATE_KEY",
        "block_explorer_url": "https://polygonscan.com",
    },
}

DEFAULT_CONTRACT = "GridToken"
DEFAULT_ARTIFACTS_DIR = "artifacts"
DEFAULT_CONFIRMATION_TIMEOUT = 120.0
DEFAULT_POLL_INTERVAL = 0.5


@dataclass(frozen=True)
class NetworkProfile:
    """Connection parameters for one target network"""

    name: str
    rpc_endpoint: Optional[str] = None
    signing_credentials: Tuple[str, ...] = ()
    compiler_version: str = SOLIDITY_VERSION
    chain_id: Optional[int] = None
    block_explorer_url: Optional[str] = None

    @property
    def is_local(self) -> bool:
        return NETWORK_CONFIG.get(self.name, {}).get("local", False)

    def validate(self):
        """
        Check that a remote profile can actually be deployed to

        Raises:
            MissingConfigurationError: endpoint or signing key is absent
        """
        if self.is_local:
            return

        network = NETWORK_CONFIG.get(self.name, {})
        missing = []

        if not self.rpc_endpoint:
            missing.append(network.get("rpc_url_env", "rpc_endpoint"))
        if not self.signing_credentials:
            missing.append(network.get("private_key_env", "signing_credentials"))

        if missing:
            raise MissingConfigurationError(
                f"Network '{self.name}' requires {' and '.join(missing)} to be set"
            )

    def get_address_url(self, address: str) -> Optional[str]:
        """Block explorer link for an address, if the network has an explorer"""
        if self.block_explorer_url:
            return f"{self.block_explorer_url.rstrip('/')}/address/{address}"
        return None


def get_supported_networks() -> List[str]:
    return sorted(NETWORK_CONFIG.keys())


def parse_private_keys(raw: Optional[str]) -> Tuple[str, ...]:
    """
    Split a comma-separated key list, keeping order

    Args:
        raw: Environment value, e.g. "0xabc,0xdef"

    Returns:
        Tuple of keys with blanks dropped
    """
    if not raw:
        return ()
    return tuple(key.strip() for key in raw.split(",") if key.strip())


def resolve_network(name: str, env: Mapping[str, str]) -> NetworkProfile:
    """
    Build the profile for the selected network

    Args:
        name: Network name (see NETWORK_CONFIG)
        env: Environment-style key/value pairs

    Returns:
        Validated NetworkProfile

    Raises:
        NetworkNotFoundError: unknown network name
        MissingConfigurationError: remote network not fully configured
    """
    if name not in NETWORK_CONFIG:
        raise NetworkNotFoundError(
            f"Unknown network '{name}'. Supported: {', '.join(get_supported_networks())}"
        )

    network = NETWORK_CONFIG[name]

    if network["local"]:
        profile = NetworkProfile(name=name, chain_id=network["chain_id"])
    else:
        profile = NetworkProfile(
            name=name,
            rpc_endpoint=(env.get(network["rpc_url_env"]) or "").strip() or None,
            signing_credentials=parse_private_keys(env.get(network["private_key_env"])),
            chain_id=network["chain_id"],
            block_explorer_url=network["block_explorer_url"],
        )

    profile.validate()
    return profile


def _read_seconds(env: Mapping[str, str], key: str, default: float) -> float:
    raw = env.get(key)
    if raw is None or raw.strip() == "":
        return default

    try:
        return float(raw)
    except ValueError:
        raise ConfigurationError(f"{key} must be a number of seconds, got '{raw}'")


@dataclass(frozen=True)
class DeploySettings:
    """Per-invocation settings besides the network profile"""

    network: str = LOCAL_NETWORK
    contract_name: str = DEFAULT_CONTRACT
    artifacts_dir: str = DEFAULT_ARTIFACTS_DIR
    confirmation_timeout: float = DEFAULT_CONFIRMATION_TIMEOUT
    poll_interval: float = DEFAULT_POLL_INTERVAL

    def __post_init__(self):
        if self.confirmation_timeout < 0:
            raise ConfigurationError(
                f"Confirmation timeout must not be negative, got {self.confirmation_timeout:g}"
            )
        if self.poll_interval <= 0:
            raise ConfigurationError(
                f"Poll interval must be positive, got {self.poll_interval:g}"
            )

    @classmethod
    def from_env(cls, env: Mapping[str, str]) -> "DeploySettings":
        """
        Read settings from environment-style values

        Raises:
            ConfigurationError: a numeric value is malformed or out of range
        """
        return cls(
            network=env.get("DEPLOY_NETWORK") or LOCAL_NETWORK,
            contract_name=env.get("DEPLOY_CONTRACT") or DEFAULT_CONTRACT,
            artifacts_dir=env.get("ARTIFACTS_DIR") or DEFAULT_ARTIFACTS_DIR,
            confirmation_timeout=_read_seconds(env, "DEPLOY_TIMEOUT", DEFAULT_CONFIRMATION_TIMEOUT),
            poll_interval=_read_seconds(env, "DEPLOY_POLL_INTERVAL", DEFAULT_POLL_INTERVAL),
        )

