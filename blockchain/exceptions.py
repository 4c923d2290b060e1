"""
Deployment Exceptions
Error taxonomy for the contract deployment lifecycle
"""


class DeploymentError(Exception):
    """Base exception for every deployment failure"""

    pass


class ConfigurationError(DeploymentError, ValueError):
    """Raised when a configuration value is present but invalid"""

    pass


class MissingConfigurationError(ConfigurationError):
    """Raised when a remote network lacks its RPC endpoint or signing key"""

    pass


class NetworkNotFoundError(ConfigurationError):
    """Raised when the selected network has no profile"""

    pass


class ArtifactNotFoundError(DeploymentError, FileNotFoundError):
    """Raised when the compiled contract artifact does not exist"""

    pass


class InvalidArtifactError(DeploymentError, ValueError):
    """Raised when the artifact has no usable ABI or bytecode"""

    pass


class SubmissionError(DeploymentError):
    """Raised when the creation transaction could not be transmitted"""

    pass


class ConfirmationError(DeploymentError):
    """Raised when the network rejects the transaction or no receipt is obtained"""

    pass


class ConfirmationTimeoutError(ConfirmationError, TimeoutError):
    """Raised when no receipt arrives within the confirmation timeout"""

    pass


class DeploymentCancelledError(ConfirmationError):
    """Raised when the confirmation wait is cancelled by a signal"""

    pass
