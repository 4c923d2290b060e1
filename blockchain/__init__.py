"""
Blockchain Deployment Package
Handles network configuration, contract artifacts, signing, and deployment
"""

from .artifacts import ContractArtifact, load_artifact
from .contract_deployer import ContractDeployer, DeploymentResult
from .exceptions import (
    ArtifactNotFoundError,
    ConfigurationError,
    ConfirmationError,
    ConfirmationTimeoutError,
    DeploymentCancelledError,
    DeploymentError,
    InvalidArtifactError,
    MissingConfigurationError,
    NetworkNotFoundError,
    SubmissionError,
)
from .network_config import DeploySettings, NetworkProfile, resolve_network
from .wallet_manager import WalletManager

__all__ = [
    'ContractArtifact',
    'load_artifact',
    'ContractDeployer',
    'DeploymentResult',
    'DeploySettings',
    'NetworkProfile',
    'resolve_network',
    'WalletManager',
    'DeploymentError',
    'ConfigurationError',
    'MissingConfigurationError',
    'NetworkNotFoundError',
    'ArtifactNotFoundError',
    'InvalidArtifactError',
    'SubmissionError',
    'ConfirmationError',
    'ConfirmationTimeoutError',
    'DeploymentCancelledError',
]
