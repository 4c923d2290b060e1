"""
Shared test fixtures
"""

import json
from decimal import Decimal
from unittest.mock import MagicMock

import pytest
from loguru import logger

from blockchain.artifacts import ContractArtifact
from blockchain.network_config import NetworkProfile

# Hardhat's first well-known dev account
HARDHAT_KEY = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"
HARDHAT_ADDRESS = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"

# Address of the first contract that account creates
CONTRACT_ADDRESS = "0x5FbDB2315678afecb367f032d93F642f64180aa3"

TX_HASH = b"\x12" * 32

BYTECODE = "0x6080604052348015600f57600080fd5b50603f80601d6000396000f3fe"

ABI = [
    {
        "inputs": [],
        "name": "totalSupply",
        "outputs": [{"name": "", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function"
    }
]


@pytest.fixture(autouse=True)
def reset_logger():
    """Drop sinks bound to captured streams after each test"""
    yield
    logger.remove()


@pytest.fixture
def artifact():
    return ContractArtifact(name="GridToken", abi=ABI, bytecode=BYTECODE)


@pytest.fixture
def artifacts_dir(tmp_path):
    """Hardhat artifacts tree holding GridToken"""
    root = tmp_path / "artifacts"
    contract_dir = root / "contracts" / "GridToken.sol"
    contract_dir.mkdir(parents=True)

    with open(contract_dir / "GridToken.json", "w") as f:
        json.dump({
            "_format": "hh-sol-artifact-1",
            "contractName": "GridToken",
            "sourceName": "contracts/GridToken.sol",
            "abi": ABI,
            "bytecode": BYTECODE,
            "deployedBytecode": "0x6080",
        }, f)

    return root


@pytest.fixture
def local_profile():
    return NetworkProfile(name="hardhat", chain_id=31337)


@pytest.fixture
def sepolia_profile():
    return NetworkProfile(
        name="sepolia",
        rpc_endpoint="https://eth-sepolia.example.org/v2/secret",
        signing_credentials=(HARDHAT_KEY,),
        chain_id=11155111,
        block_explorer_url="https://sepolia.etherscan.io",
    )


@pytest.fixture
def receipt():
    return {
        "status": 1,
        "contractAddress": CONTRACT_ADDRESS,
        "blockNumber": 1,
        "gasUsed": 150000,
    }


@pytest.fixture
def w3(receipt):
    """Mock Web3 client that confirms every deployment"""
    client = MagicMock()

    client.eth.accounts = [HARDHAT_ADDRESS]
    client.eth.get_balance.return_value = 10**18
    client.from_wei.return_value = Decimal("1")
    client.eth.chain_id = 11155111
    client.eth.get_transaction_count.return_value = 0
    client.eth.send_raw_transaction.return_value = TX_HASH
    client.eth.get_transaction_receipt.return_value = receipt

    constructor = client.eth.contract.return_value.constructor.return_value
    constructor.transact.return_value = TX_HASH
    constructor.estimate_gas.return_value = 100000

    def build_transaction(params):
        return {
            **params,
            "data": BYTECODE,
            "gasPrice": 1_000_000_000,
            "value": 0,
        }

    constructor.build_transaction.side_effect = build_transaction

    return client
