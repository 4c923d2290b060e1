"""
RPC Manager
Opens the Web3 connection for a network profile
"""

from typing import Optional
from urllib.parse import urlsplit

from web3 import Web3
from loguru import logger

from blockchain.exceptions import SubmissionError
from blockchain.network_config import LOCAL_RPC_URL, NetworkProfile


def redact_url(url: str) -> str:
    """Drop path and query (provider URLs embed API keys)"""
    parts = urlsplit(url)
    if not parts.scheme or not parts.netloc:
        return "<invalid url>"
    return f"{parts.scheme}://{parts.netloc}"


class RPCManager:
    """
    Single-endpoint connection manager.
    Retries belong to the provider; this only connects and sanity-checks.
    """

    def __init__(self, profile: NetworkProfile, request_timeout: float = 30):
        """
        Initialize RPC Manager

        Args:
            profile: Resolved network profile
            request_timeout: Per-request HTTP timeout in seconds
        """
        self.profile = profile
        self.request_timeout = request_timeout
        self.endpoint = profile.rpc_endpoint or LOCAL_RPC_URL
        self.w3: Optional[Web3] = None

    def get_web3(self) -> Web3:
        """
        Connect to the profile's endpoint

        Returns:
            Connected Web3 instance

        Raises:
            SubmissionError: node unreachable
        """
        if self.w3 is not None:
            return self.w3

        w3 = Web3(Web3.HTTPProvider(
            self.endpoint,
            request_kwargs={"timeout": self.request_timeout}
        ))

        if not w3.is_connected():
            raise SubmissionError(
                f"Failed to connect to {self.profile.name} at {redact_url(self.endpoint)}"
            )

        logger.success(f"Connected to {self.profile.name} at {redact_url(self.endpoint)}")

        self._check_chain_id(w3)

        self.w3 = w3
        return w3

    def _check_chain_id(self, w3: Web3):
        """Warn when the node serves a different chain than the profile expects"""
        if self.profile.chain_id is None:
            return

        try:
            chain_id = w3.eth.chain_id
        except Exception as e:
            raise SubmissionError(str(e)) from e

        if chain_id != self.profile.chain_id:
            logger.warning(
                f"Node reports chain id {chain_id}, "
                f"{self.profile.name} expects {self.profile.chain_id}"
            )
        else:
            logger.debug(f"Chain id: {chain_id}")
