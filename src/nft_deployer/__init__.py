"""
nft-deployer: Python library for deploying NFT collection contracts through a user's wallet
"""

from importlib.metadata import PackageNotFoundError, version

from .artifacts import ArtifactLoader
from .chains import ChainRegistry
from .deployer import NFTDeployer, deploy_nft_contract
from .exceptions import (
    ArtifactNotFound,
    DeploymentError,
    DeploymentTimedOut,
    DeploymentVerificationFailed,
    ErrorKind,
    GasEstimationFailed,
    InsufficientFunds,
    InvalidDeploymentParams,
    InvariantViolation,
    NetworkError,
    NetworkMismatchAfterSwitch,
    NetworkNotConfigured,
    NetworkSwitchRejected,
    PostDeployConfigFailed,
    SignerNetworkMismatch,
    TransactionReverted,
    UserRejectedSigning,
    WalletNotConnected,
    WalletProviderError,
)
from .observer import DeploymentObserver, LoggingObserver
from .timeouts import DeploymentTimeouts
from .types import (
    ChainDescriptor,
    ContractArtifact,
    DeploymentParams,
    DeploymentResult,
    DeploymentWarning,
    TokenStandard,
    TransactionReceipt,
    WalletSession,
)
from .wallet import PendingTransaction, Signer, WalletProvider

try:
    __version__ = version("nft-deployer")
except PackageNotFoundError:
    __version__ = None

__all__ = [
    "NFTDeployer",
    "deploy_nft_contract",
    "ArtifactLoader",
    "ChainRegistry",
    "DeploymentObserver",
    "LoggingObserver",
    "DeploymentTimeouts",
    # Wallet boundary
    "WalletProvider",
    "Signer",
    "PendingTransaction",
    # Types
    "ChainDescriptor",
    "ContractArtifact",
    "DeploymentParams",
    "DeploymentResult",
    "DeploymentWarning",
    "TokenStandard",
    "TransactionReceipt",
    "WalletSession",
    # Errors
    "ErrorKind",
    "DeploymentError",
    "WalletNotConnected",
    "ArtifactNotFound",
    "NetworkSwitchRejected",
    "NetworkNotConfigured",
    "NetworkMismatchAfterSwitch",
    "SignerNetworkMismatch",
    "GasEstimationFailed",
    "UserRejectedSigning",
    "InsufficientFunds",
    "TransactionReverted",
    "DeploymentVerificationFailed",
    "PostDeployConfigFailed",
    "NetworkError",
    "DeploymentTimedOut",
    "InvalidDeploymentParams",
    "InvariantViolation",
    "WalletProviderError",
]
