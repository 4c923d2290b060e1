"""
Integration Tests against a local dev node
"""

import io

import pytest
from web3 import Web3

from blockchain.contract_deployer import ContractDeployer
from blockchain.network_config import LOCAL_RPC_URL, resolve_network


# Note: These tests require a local Hardhat node
# Run: npx hardhat node
# Then: pytest tests/test_local_node.py


@pytest.fixture
def w3():
    """Connect to local Hardhat node"""
    client = Web3(Web3.HTTPProvider(LOCAL_RPC_URL, request_kwargs={"timeout": 2}))
    if not client.is_connected():
        pytest.skip("No dev node listening on " + LOCAL_RPC_URL)
    return client


class TestLocalNodeDeployment:
    """Real deployments on the ephemeral network"""

    def test_deploy_reaches_confirmed(self, w3, artifact):
        deployer = ContractDeployer(w3, resolve_network("hardhat", {}), stream=io.StringIO())

        result = deployer.deploy(artifact)

        assert result.confirmed
        assert Web3.is_checksum_address(result.contract_address)
        assert w3.eth.get_code(result.contract_address) != b""

    def test_each_deployment_gets_a_new_address(self, w3, artifact):
        deployer = ContractDeployer(w3, resolve_network("hardhat", {}), stream=io.StringIO())

        first = deployer.deploy(artifact)
        second = deployer.deploy(artifact)

        assert first.contract_address != second.contract_address


if __name__ == "__main__":
    pytest.main([__file__, '-v'])
