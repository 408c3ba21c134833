"""Deployment checkpoints, reported to an injectable observer."""

import logging
from typing import Optional

from .exceptions import DeploymentError
from .types import (
    ChainDescriptor,
    DeploymentParams,
    DeploymentResult,
    DeploymentWarning,
    TransactionReceipt,
)

logger = logging.getLogger(__name__)


class DeploymentObserver:
    """
    Receives checkpoint notifications from the deployment workflow.

    All methods are no-ops; subclass and override the ones you need. A UI can
    use transaction_submitted() to show a pending state before mining.
    """

    def deployment_started(self, params: DeploymentParams) -> None:
        pass

    def switch_requested(self, from_chain_id: Optional[int], target: ChainDescriptor) -> None:
        pass

    def switch_confirmed(self, target: ChainDescriptor) -> None:
        pass

    def transaction_submitted(self, transaction_hash: str) -> None:
        pass

    def transaction_mined(self, receipt: TransactionReceipt) -> None:
        pass

    def verification_passed(self, contract_address: str) -> None:
        pass

    def verification_failed(self, error: DeploymentError) -> None:
        pass

    def post_deploy_configured(self, contract_address: str, warning: Optional[DeploymentWarning]) -> None:
        pass

    def deployment_completed(self, result: DeploymentResult) -> None:
        pass

    def deployment_failed(self, error: DeploymentError) -> None:
        pass


class LoggingObserver(DeploymentObserver):
    """Default observer: writes every checkpoint to the nft_deployer logger."""

    def __init__(self, log: Optional[logging.Logger] = None):
        self.log = log or logger

    def deployment_started(self, params: DeploymentParams) -> None:
        self.log.info(
            "Starting %s deployment of %s (%s) on %s",
            params.standard.value,
            params.name,
            params.symbol,
            params.chain,
        )

    def switch_requested(self, from_chain_id: Optional[int], target: ChainDescriptor) -> None:
        self.log.info(
            "Requesting network switch from chain %s to %s (%d)",
            from_chain_id,
            target.display_name,
            target.chain_id,
        )

    def switch_confirmed(self, target: ChainDescriptor) -> None:
        self.log.info("Network switched to %s (%d)", target.display_name, target.chain_id)

    def transaction_submitted(self, transaction_hash: str) -> None:
        self.log.info("Deployment transaction sent: %s", transaction_hash)

    def transaction_mined(self, receipt: TransactionReceipt) -> None:
        self.log.info(
            "Transaction %s mined in block %d, status %d, gas used %d",
            receipt.transaction_hash,
            receipt.block_number,
            receipt.status,
            receipt.gas_used,
        )

    def verification_passed(self, contract_address: str) -> None:
        self.log.info("Contract code verified at %s", contract_address)

    def verification_failed(self, error: DeploymentError) -> None:
        self.log.error("Deployment verification failed: %s", error)

    def post_deploy_configured(self, contract_address: str, warning: Optional[DeploymentWarning]) -> None:
        if warning is None:
            self.log.info("Public minting enabled on %s", contract_address)
        else:
            self.log.warning(
                "Public minting is DISABLED on %s: %s. Manual action required: %s",
                contract_address,
                warning.message,
                warning.action,
            )

    def deployment_completed(self, result: DeploymentResult) -> None:
        self.log.info(
            "Contract deployed at %s (tx %s, block %d, cost %s)",
            result.contract_address,
            result.transaction_hash,
            result.block_number,
            result.deployment_cost,
        )

    def deployment_failed(self, error: DeploymentError) -> None:
        self.log.error("Deployment failed [%s]: %s", error.kind.value, error)
