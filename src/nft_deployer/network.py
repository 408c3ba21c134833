"""Network reconciliation between the wallet's active chain and the deployment target."""

import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .errors import ProviderCondition, classify_provider_error, describe_provider_error
from .exceptions import (
    DeploymentError,
    NetworkError,
    NetworkMismatchAfterSwitch,
    NetworkNotConfigured,
    NetworkSwitchRejected,
    SignerNetworkMismatch,
    WalletProviderError,
)
from .observer import DeploymentObserver
from .timeouts import call_with_timeout
from .types import ChainDescriptor, WalletSession
from .wallet import Signer, WalletSessionAdapter

logger = logging.getLogger(__name__)


class ReconcileState(Enum):
    """
    Network reconciliation states.

    SAME_CHAIN and SWITCH_CONFIRMED are terminal successes; SWITCH_REJECTED
    and SWITCH_UNSUPPORTED are terminal failures; SWITCH_REQUESTED is the
    only intermediate state.
    """

    SAME_CHAIN = "same-chain"
    SWITCH_REQUESTED = "switch-requested"
    SWITCH_CONFIRMED = "switch-confirmed"
    SWITCH_REJECTED = "switch-rejected"
    SWITCH_UNSUPPORTED = "switch-unsupported"


@dataclass(frozen=True)
class NetworkReconciliation:
    """Settled outcome of reconcile(): final state and the session read in it."""

    state: ReconcileState
    session: WalletSession


class NetworkReconciler:
    """Brings the wallet onto the target chain, verifying rather than assuming the switch."""

    def __init__(
        self,
        session_adapter: WalletSessionAdapter,
        observer: Optional[DeploymentObserver] = None,
        switch_timeout: Optional[float] = None,
        settle_delay: float = 1.0,
    ):
        """
        Initialize the reconciler.

        Args:
            session_adapter: Wallet session adapter
            observer: Checkpoint observer
            switch_timeout: Seconds to wait for the user to approve a switch
            settle_delay: Seconds to wait after a switch before re-reading the wallet
        """
        self.session_adapter = session_adapter
        self.observer = observer or DeploymentObserver()
        self.switch_timeout = switch_timeout
        self.settle_delay = settle_delay

    def reconcile(
        self, target: ChainDescriptor, session: Optional[WalletSession] = None
    ) -> NetworkReconciliation:
        """
        Ensure the wallet is on the target chain.

        Args:
            target: Chain the deployment targets
            session: Session read immediately before this call; read here if None

        Returns:
            NetworkReconciliation in state SAME_CHAIN or SWITCH_CONFIRMED

        Raises:
            WalletNotConnected: If the wallet has no account
            NetworkSwitchRejected: If the user declined the switch
            NetworkNotConfigured: If the wallet does not know the target chain
            NetworkMismatchAfterSwitch: If the wallet is still on another chain
            NetworkError: On any other switch failure
            DeploymentTimedOut: If the switch prompt outlasts switch_timeout

        Errors raised by the switch request carry the terminal ReconcileState
        in their reconcile_state attribute.
        """
        if session is None:
            session = self.session_adapter.get_session()
        if session.active_chain_id == target.chain_id:
            logger.debug("Wallet already on %s (%d)", target.display_name, target.chain_id)
            return NetworkReconciliation(ReconcileState.SAME_CHAIN, session)

        self.observer.switch_requested(session.active_chain_id, target)
        try:
            call_with_timeout(
                lambda: self.session_adapter.request_chain_switch(target.chain_id),
                self.switch_timeout,
                f"network switch to {target.display_name}",
            )
        except WalletProviderError as e:
            error = self._switch_error(e, target)
            error.reconcile_state = self._failed_state(e)
            logger.debug("Network switch ended in %s: %s", error.reconcile_state.value, e)
            raise error from e

        if self.settle_delay > 0:
            time.sleep(self.settle_delay)

        # Fresh read: the switch itself is what is being verified
        session = self.session_adapter.get_session()
        if session.active_chain_id != target.chain_id:
            raise NetworkMismatchAfterSwitch(
                f"Failed to switch to {target.display_name}. Wallet reports chain ID "
                f"{session.active_chain_id}. Please switch manually in your wallet."
            )

        self.observer.switch_confirmed(target)
        return NetworkReconciliation(ReconcileState.SWITCH_CONFIRMED, session)

    @staticmethod
    def _failed_state(error: WalletProviderError) -> ReconcileState:
        condition = classify_provider_error(error)
        if condition is ProviderCondition.USER_REJECTED:
            return ReconcileState.SWITCH_REJECTED
        if condition is ProviderCondition.CHAIN_NOT_ADDED:
            return ReconcileState.SWITCH_UNSUPPORTED
        return ReconcileState.SWITCH_REQUESTED

    @staticmethod
    def _switch_error(error: WalletProviderError, target: ChainDescriptor) -> DeploymentError:
        condition = classify_provider_error(error)
        if condition is ProviderCondition.USER_REJECTED:
            return NetworkSwitchRejected(
                f"You must switch to {target.display_name} to deploy this contract. "
                "Please approve the network switch in your wallet.",
                chain_name=target.display_name,
            )
        if condition is ProviderCondition.CHAIN_NOT_ADDED:
            return NetworkNotConfigured(
                f"{target.display_name} is not configured in your wallet. "
                "Please add it manually and try again.",
                chain_name=target.display_name,
            )
        return NetworkError(
            f"Failed to switch to {target.display_name}: {describe_provider_error(error)}"
        )


def verify_signer_network(signer: Signer, target: ChainDescriptor) -> None:
    """
    Check the signer's own network view matches the target chain.

    Catches providers whose switch call and signer object disagree.

    Raises:
        SignerNetworkMismatch: If the signer is on another chain
        NetworkError: If the signer cannot report its chain
    """
    try:
        chain_id = signer.get_chain_id()
    except WalletProviderError as e:
        raise NetworkError(f"Could not read signer network: {describe_provider_error(e)}") from e

    if chain_id != target.chain_id:
        raise SignerNetworkMismatch(
            f"Network mismatch. Expected {target.display_name} ({target.chain_id}) "
            f"but got chain ID {chain_id}. Please switch networks in your wallet."
        )
    logger.debug("Signer verified on chain %d", chain_id)
