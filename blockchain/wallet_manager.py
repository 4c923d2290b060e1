"""
Wallet Manager
Holds the signing accounts of a remote network profile
"""

from decimal import Decimal
from typing import Dict, Sequence

from eth_account import Account
from web3 import Web3
from loguru import logger


class WalletManager:
    """
    Signing accounts built from an ordered list of private keys.
    The first key is the deployer.
    """

    def __init__(self, private_keys: Sequence[str]):
        """
        Initialize wallet manager

        Args:
            private_keys: Hex private keys, with or without 0x prefix

        Raises:
            ValueError: no keys, or a key is malformed
        """
        if not private_keys:
            raise ValueError("At least one private key is required")

        self.accounts = [Account.from_key(key) for key in private_keys]
        self.deployer_account = self.accounts[0]
        self.deployer_address = self.deployer_account.address

        logger.info(f"Deployer wallet: {self.deployer_address}")

    def sign_transaction(self, transaction: Dict):
        """
        Sign a transaction with the deployer key

        Args:
            transaction: Transaction dict

        Returns:
            Signed transaction
        """
        try:
            return self.deployer_account.sign_transaction(transaction)
        except Exception as e:
            logger.error(f"Error signing transaction: {e}")
            raise

    def get_deployer_balance(self, w3: Web3) -> Decimal:
        """Native token balance of the deployer, in ether units"""
        balance_wei = w3.eth.get_balance(self.deployer_address)
        return Decimal(str(w3.from_wei(balance_wei, "ether")))
