"""
Unit Tests for the RPC Manager
"""

from unittest.mock import PropertyMock, patch

import pytest

from blockchain.exceptions import SubmissionError
from blockchain.network_config import LOCAL_RPC_URL
from utils.rpc_manager import RPCManager, redact_url


@pytest.fixture
def web3_cls():
    with patch("utils.rpc_manager.Web3") as mock_web3:
        mock_web3.return_value.is_connected.return_value = True
        mock_web3.return_value.eth.chain_id = 11155111
        yield mock_web3


class TestRPCManager:
    """Connecting to a profile's endpoint"""

    def test_remote_endpoint(self, web3_cls, sepolia_profile):
        w3 = RPCManager(sepolia_profile).get_web3()

        assert w3 is web3_cls.return_value
        web3_cls.HTTPProvider.assert_called_once_with(
            sepolia_profile.rpc_endpoint,
            request_kwargs={"timeout": 30}
        )

    def test_local_endpoint(self, web3_cls, local_profile):
        """The local profile uses the dev node address"""
        RPCManager(local_profile).get_web3()

        assert web3_cls.HTTPProvider.call_args[0][0] == LOCAL_RPC_URL

    def test_connection_is_reused(self, web3_cls, sepolia_profile):
        manager = RPCManager(sepolia_profile)

        assert manager.get_web3() is manager.get_web3()
        assert web3_cls.call_count == 1

    def test_unreachable_node(self, web3_cls, sepolia_profile):
        """An unreachable node is a submission failure without leaking the API key"""
        web3_cls.return_value.is_connected.return_value = False

        with pytest.raises(SubmissionError) as exc_info:
            RPCManager(sepolia_profile).get_web3()

        assert "secret" not in str(exc_info.value)
        assert "eth-sepolia.example.org" in str(exc_info.value)

    def test_chain_id_failure_is_submission_error(self, web3_cls, sepolia_profile):
        """A node that drops the chain id call fails like an unreachable one"""
        type(web3_cls.return_value.eth).chain_id = PropertyMock(side_effect=ConnectionError("reset by peer"))

        with pytest.raises(SubmissionError, match="reset by peer"):
            RPCManager(sepolia_profile).get_web3()

    def test_chain_id_mismatch_still_connects(self, web3_cls, sepolia_profile):
        web3_cls.return_value.eth.chain_id = 1

        assert RPCManager(sepolia_profile).get_web3() is web3_cls.return_value


class TestRedactUrl:

    def test_strips_path_and_query(self):
        assert redact_url("https://polygon.example.org/v2/key?x=1") == "https://polygon.example.org"

    def test_invalid(self):
        assert redact_url("not a url") == "<invalid url>"


if __name__ == "__main__":
    pytest.main([__file__, '-v'])
