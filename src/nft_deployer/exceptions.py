"""Custom exception classes for nft-deployer library."""

from enum import Enum
from typing import Any, Optional


class ErrorKind(Enum):
    """
    Failure kinds surfaced by the deployment workflow.

    Value strings are stable identifiers a UI can switch on.
    """

    WALLET_NOT_CONNECTED = "wallet-not-connected"
    ARTIFACT_NOT_FOUND = "artifact-not-found"
    NETWORK_SWITCH_REJECTED = "network-switch-rejected"
    NETWORK_NOT_CONFIGURED = "network-not-configured"
    NETWORK_MISMATCH_AFTER_SWITCH = "network-mismatch-after-switch"
    GAS_ESTIMATION_FAILED = "gas-estimation-failed"
    USER_REJECTED_SIGNING = "user-rejected-signing"
    INSUFFICIENT_FUNDS = "insufficient-funds"
    TRANSACTION_REVERTED = "transaction-reverted"
    DEPLOYMENT_VERIFICATION_FAILED = "deployment-verification-failed"
    POST_DEPLOY_CONFIG_FAILED = "post-deploy-config-failed"
    NETWORK_ERROR = "network-error"
    DEPLOYMENT_TIMED_OUT = "deployment-timed-out"
    INVALID_PARAMS = "invalid-params"


class DeploymentError(Exception):
    """Base exception for deployment-related errors."""

    kind: ErrorKind = ErrorKind.NETWORK_ERROR


class WalletNotConnected(DeploymentError):
    """Raised when the wallet has no account available."""

    kind = ErrorKind.WALLET_NOT_CONNECTED


class ArtifactNotFound(DeploymentError, FileNotFoundError):
    """Raised when a token-standard artifact is missing (optional capability not installed)."""

    kind = ErrorKind.ARTIFACT_NOT_FOUND


class NetworkSwitchRejected(DeploymentError):
    """Raised when the user declines the chain-switch prompt."""

    kind = ErrorKind.NETWORK_SWITCH_REJECTED

    def __init__(self, message: str, chain_name: str = ""):
        super().__init__(message)
        self.chain_name = chain_name


class NetworkNotConfigured(DeploymentError):
    """Raised when the wallet does not know the target chain."""

    kind = ErrorKind.NETWORK_NOT_CONFIGURED

    def __init__(self, message: str, chain_name: str = ""):
        super().__init__(message)
        self.chain_name = chain_name


class NetworkMismatchAfterSwitch(DeploymentError):
    """Raised when a switch reported success but the wallet is on another chain."""

    kind = ErrorKind.NETWORK_MISMATCH_AFTER_SWITCH


class SignerNetworkMismatch(NetworkMismatchAfterSwitch):
    """Raised when the signer's own view of the network disagrees with the target chain."""


class GasEstimationFailed(DeploymentError):
    """Raised when the node rejects the would-be deployment transaction."""

    kind = ErrorKind.GAS_ESTIMATION_FAILED


class UserRejectedSigning(DeploymentError):
    """Raised when the user declines to sign the deployment transaction."""

    kind = ErrorKind.USER_REJECTED_SIGNING


class InsufficientFunds(DeploymentError):
    """Raised when the wallet cannot cover gas."""

    kind = ErrorKind.INSUFFICIENT_FUNDS


class TransactionReverted(DeploymentError):
    """Raised when the transaction was mined with a failure status."""

    kind = ErrorKind.TRANSACTION_REVERTED


class DeploymentVerificationFailed(DeploymentError):
    """Raised when no contract code exists at the resulting address."""

    kind = ErrorKind.DEPLOYMENT_VERIFICATION_FAILED


class PostDeployConfigFailed(DeploymentError):
    """
    Raised inside the post-deploy step when enabling public minting fails.

    Never escapes the workflow: it is converted to a DeploymentWarning.
    """

    kind = ErrorKind.POST_DEPLOY_CONFIG_FAILED


class NetworkError(DeploymentError, ConnectionError):
    """Raised for connectivity failures from the provider or node."""

    kind = ErrorKind.NETWORK_ERROR


class DeploymentTimedOut(DeploymentError, TimeoutError):
    """Raised when a suspension point exceeds its caller-supplied timeout."""

    kind = ErrorKind.DEPLOYMENT_TIMED_OUT

    def __init__(self, operation: str, timeout: Optional[float] = None):
        if timeout is None:
            message = f"Timed out waiting for {operation}"
        else:
            message = f"Timed out after {timeout:g}s waiting for {operation}"
        super().__init__(message)
        self.operation = operation
        self.timeout = timeout


class InvalidDeploymentParams(DeploymentError, ValueError):
    """Raised when deployment parameters are out of range."""

    kind = ErrorKind.INVALID_PARAMS


class InvariantViolation(RuntimeError):
    """
    Raised when a step that cannot fail under normal conditions does.

    Indicates a bug in an earlier step, not a retryable condition, so it is
    not a DeploymentError.
    """

    pass


class WalletProviderError(Exception):
    """
    Raised by WalletProvider and Signer implementations.

    Carries the provider's error code (EIP-1193 numeric code, JSON-RPC code,
    or a string code such as "ACTION_REJECTED") so the workflow can translate
    it without knowing the provider's exception types.
    """

    def __init__(self, message: str, code: Any = None, data: Any = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.data = data
