"""Wallet provider boundary and session adapter."""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from .errors import describe_provider_error
from .exceptions import NetworkError, WalletNotConnected, WalletProviderError
from .types import TransactionReceipt, WalletSession


class PendingTransaction(ABC):
    """A submitted transaction whose hash is known but which may not be mined yet."""

    @property
    @abstractmethod
    def hash(self) -> str:
        """0x-prefixed transaction hash."""

    @property
    def gas_price(self) -> Optional[int]:
        """Gas price the transaction was sent with, if the provider reports it."""
        return None

    @abstractmethod
    def wait(self, timeout: Optional[float] = None) -> TransactionReceipt:
        """
        Block until the transaction is mined.

        Args:
            timeout: Seconds to wait, None for the provider's own default

        Raises:
            DeploymentTimedOut: If the timeout expires
            WalletProviderError: On provider failure
        """


class Signer(ABC):
    """Transaction-sending capability bound to one account."""

    @property
    @abstractmethod
    def address(self) -> str:
        """Account the signer sends from."""

    @abstractmethod
    def get_chain_id(self) -> int:
        """Chain the signer's own provider is connected to."""

    @abstractmethod
    def estimate_gas(self, tx: Dict[str, Any]) -> int:
        """Estimate gas for an unsigned transaction. Raises WalletProviderError."""

    @abstractmethod
    def send_transaction(self, tx: Dict[str, Any]) -> PendingTransaction:
        """Sign and submit a transaction. May block awaiting user approval."""

    @abstractmethod
    def get_code(self, address: str) -> str:
        """Deployed code at an address as 0x-prefixed hex ("0x" if none)."""


class WalletProvider(ABC):
    """
    The user's wallet, reduced to the capabilities the deployment needs.

    Implementations raise WalletProviderError (carrying the provider's code)
    for failures; they must not leak their own exception types.
    """

    @abstractmethod
    def get_account(self) -> Optional[str]:
        """Connected account address, or None if disconnected."""

    @abstractmethod
    def get_active_chain(self) -> Optional[int]:
        """Chain ID the wallet is currently on, or None if unknown."""

    @abstractmethod
    def request_chain_switch(self, chain_id: int) -> None:
        """Ask the wallet to switch chains. May block awaiting user approval."""

    @abstractmethod
    def get_signer(self) -> Signer:
        """Signer for the connected account."""


class WalletSessionAdapter:
    """Sole integration point between the deployment workflow and the wallet."""

    def __init__(self, provider: WalletProvider):
        self.provider = provider

    def get_session(self) -> WalletSession:
        """
        Read the wallet's account and active chain.

        Always queries the provider; sessions are never cached.

        Raises:
            WalletNotConnected: If no account is available
            NetworkError: If the wallet cannot be queried
        """
        try:
            address = self.provider.get_account()
            if not address:
                raise WalletNotConnected("No wallet connected. Please connect your wallet.")
            active_chain_id = self.provider.get_active_chain()
        except WalletProviderError as e:
            raise NetworkError(f"Could not read wallet state: {describe_provider_error(e)}") from e
        return WalletSession(address=address, active_chain_id=active_chain_id)

    def request_chain_switch(self, chain_id: int) -> None:
        """Pass-through; WalletProviderError propagates for the caller to classify."""
        self.provider.request_chain_switch(chain_id)

    def get_signer(self) -> Signer:
        try:
            return self.provider.get_signer()
        except WalletProviderError as e:
            raise NetworkError(f"Could not obtain wallet signer: {describe_provider_error(e)}") from e
