"""
Contract Deployer
Submits one contract-creation transaction and waits for its receipt
"""

import sys
import threading
import time
from dataclasses import dataclass
from typing import Optional, TextIO

from web3 import Web3
from web3.exceptions import TransactionNotFound
from loguru import logger

from .artifacts import ContractArtifact
from .exceptions import (
    ConfigurationError,
    ConfirmationError,
    ConfirmationTimeoutError,
    DeploymentCancelledError,
    DeploymentError,
    SubmissionError,
)
from .network_config import (
    DEFAULT_CONFIRMATION_TIMEOUT,
    DEFAULT_POLL_INTERVAL,
    NetworkProfile,
)
from .wallet_manager import WalletManager

# Headroom over the node's gas estimate
GAS_BUFFER = 1.2


@dataclass(frozen=True)
class DeploymentResult:
    """Outcome of a confirmed deployment"""

    contract_name: str
    contract_address: str
    transaction_hash: str
    block_number: int
    network: str
    confirmed: bool = True


class ContractDeployer:
    """
    One-shot deployment driver.

    Initiated -> Submitted -> Confirmed, or Failed from either step.
    At most one transaction is submitted and nothing is retried here.
    """

    def __init__(
        self,
        w3: Web3,
        profile: NetworkProfile,
        confirmation_timeout: float = DEFAULT_CONFIRMATION_TIMEOUT,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        cancel_event: Optional[threading.Event] = None,
        stream: Optional[TextIO] = None
    ):
        """
        Initialize Contract Deployer

        Args:
            w3: Connected Web3 instance
            profile: Resolved network profile
            confirmation_timeout: Seconds to wait for the receipt
            poll_interval: Seconds between receipt polls
            cancel_event: Set to abandon the deployment
            stream: Where the status lines go (stdout by default)

        Raises:
            MissingConfigurationError: profile is not deployable
            ConfigurationError: poll interval is not positive
        """
        profile.validate()

        if poll_interval <= 0:
            raise ConfigurationError(f"Poll interval must be positive, got {poll_interval:g}")

        self.w3 = w3
        self.profile = profile
        self.confirmation_timeout = confirmation_timeout
        self.poll_interval = poll_interval
        self.cancel_event = cancel_event or threading.Event()
        self.stream = stream

    def _report(self, message: str):
        print(message, file=self.stream or sys.stdout, flush=True)

    def _check_cancelled(self):
        if self.cancel_event.is_set():
            raise DeploymentCancelledError("Deployment cancelled before submission")

    def deploy(self, artifact: ContractArtifact) -> DeploymentResult:
        """
        Deploy a contract and wait for confirmation

        Args:
            artifact: Compiled contract

        Returns:
            DeploymentResult

        Raises:
            SubmissionError: transaction could not be sent
            ConfirmationError: transaction reverted or receipt not obtained
            DeploymentCancelledError: cancel event set before submission or during the wait
        """
        self._check_cancelled()

        self._report(f"Deploying {artifact.name}...")

        tx_hash = self._submit(artifact)
        tx_hash_hex = Web3.to_hex(tx_hash)

        logger.info(f"Transaction sent: {tx_hash_hex}")
        logger.info("Waiting for confirmation...")

        receipt = self._wait_for_receipt(tx_hash)
        result = self._build_result(artifact, receipt, tx_hash_hex)

        logger.success(f"Block: {result.block_number}, gas used: {receipt.get('gasUsed')}")
        explorer_url = self.profile.get_address_url(result.contract_address)
        if explorer_url:
            logger.info(f"Explorer: {explorer_url}")

        self._report(f"{artifact.name} deployed to: {result.contract_address}")
        return result

    def _submit(self, artifact: ContractArtifact) -> bytes:
        """Send the creation transaction, returning its hash"""
        try:
            contract = self.w3.eth.contract(abi=artifact.abi, bytecode=artifact.bytecode)
            constructor = contract.constructor()

            if self.profile.is_local:
                # Dev node signs with its own unlocked account
                deployer = self.w3.eth.accounts[0]
                logger.info(f"Deploying from node account: {deployer}")
                self._check_cancelled()
                return constructor.transact({"from": deployer})

            wallet = WalletManager(self.profile.signing_credentials)
            deployer = wallet.deployer_address
            logger.info(f"Deployer balance: {wallet.get_deployer_balance(self.w3)}")

            gas_estimate = constructor.estimate_gas({"from": deployer})
            gas_limit = int(gas_estimate * GAS_BUFFER)
            logger.info(f"Gas limit: {gas_limit}")

            transaction = constructor.build_transaction({
                "from": deployer,
                "nonce": self.w3.eth.get_transaction_count(deployer, "pending"),
                "gas": gas_limit,
                "chainId": self.w3.eth.chain_id,
            })

            logger.info("Signing transaction...")
            signed_tx = wallet.sign_transaction(transaction)

            self._check_cancelled()
            logger.info("Sending deployment transaction...")
            return self.w3.eth.send_raw_transaction(signed_tx.raw_transaction)

        except DeploymentError:
            raise
        except Exception as e:
            raise SubmissionError(str(e)) from e

    def _wait_for_receipt(self, tx_hash: bytes):
        """Poll for the receipt until it arrives, times out or is cancelled"""
        deadline = time.monotonic() + self.confirmation_timeout

        while True:
            try:
                receipt = self.w3.eth.get_transaction_receipt(tx_hash)
            except TransactionNotFound:
                receipt = None
            except Exception as e:
                raise ConfirmationError(str(e)) from e

            if receipt is not None:
                return receipt

            if time.monotonic() >= deadline:
                raise ConfirmationTimeoutError(
                    f"Transaction {Web3.to_hex(tx_hash)} not confirmed "
                    f"after {self.confirmation_timeout:g} seconds"
                )

            if self.cancel_event.wait(self.poll_interval):
                raise DeploymentCancelledError(
                    f"Stopped waiting for transaction {Web3.to_hex(tx_hash)}"
                )

    def _build_result(self, artifact: ContractArtifact, receipt, tx_hash_hex: str) -> DeploymentResult:
        """Turn a receipt into a DeploymentResult, rejecting failed ones"""
        if receipt["status"] != 1:
            raise ConfirmationError(
                f"Transaction {tx_hash_hex} reverted in block {receipt.get('blockNumber')}"
            )

        contract_address = receipt.get("contractAddress")
        if not contract_address or not Web3.is_address(contract_address):
            raise ConfirmationError(
                f"Receipt for {tx_hash_hex} has no contract address"
            )

        return DeploymentResult(
            contract_name=artifact.name,
            contract_address=Web3.to_checksum_address(contract_address),
            transaction_hash=tx_hash_hex,
            block_number=receipt.get("blockNumber"),
            network=self.profile.name,
        )
