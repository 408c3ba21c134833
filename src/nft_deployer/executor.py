"""Submission of the contract-creation transaction."""

from typing import Any, Dict, Optional

from .errors import translate_transaction_error
from .exceptions import NetworkError, WalletProviderError
from .observer import DeploymentObserver
from .timeouts import call_with_timeout
from .types import TransactionReceipt
from .wallet import PendingTransaction, Signer


class DeploymentExecutor:
    """Sends the deployment transaction and waits for it to be mined."""

    def __init__(
        self,
        observer: Optional[DeploymentObserver] = None,
        signing_timeout: Optional[float] = None,
        mining_timeout: Optional[float] = None,
    ):
        self.observer = observer or DeploymentObserver()
        self.signing_timeout = signing_timeout
        self.mining_timeout = mining_timeout

    def submit(self, signer: Signer, tx: Dict[str, Any], gas_limit: int) -> PendingTransaction:
        """
        Sign and send the transaction with the given gas limit.

        The transaction hash is reported to the observer as soon as it is known.

        Raises:
            UserRejectedSigning: If the user declined to sign
            InsufficientFunds: If the wallet cannot pay for gas
            NetworkError: On any other provider failure
            DeploymentTimedOut: If signing outlasts signing_timeout
        """
        signed_tx = dict(tx, gas=gas_limit)
        try:
            pending = call_with_timeout(
                lambda: signer.send_transaction(signed_tx),
                self.signing_timeout,
                "deployment transaction signature",
            )
        except WalletProviderError as e:
            raise translate_transaction_error(e, NetworkError, "deploy contract") from e

        self.observer.transaction_submitted(pending.hash)
        return pending

    def await_mining(self, pending: PendingTransaction) -> TransactionReceipt:
        """
        Wait for the transaction to be mined.

        Raises:
            DeploymentTimedOut: If mining outlasts mining_timeout
            NetworkError: On provider failure while waiting
        """
        try:
            receipt = pending.wait(timeout=self.mining_timeout)
        except WalletProviderError as e:
            raise translate_transaction_error(e, NetworkError, "confirm deployment") from e

        self.observer.transaction_mined(receipt)
        return receipt
