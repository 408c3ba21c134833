"""Best-effort configuration of a freshly deployed collection."""

import logging
from typing import Optional

from .constants import PUBLIC_MINT_TOGGLE_FUNCTION
from .encoding import encode_function_call
from .errors import describe_provider_error
from .exceptions import ErrorKind, PostDeployConfigFailed
from .timeouts import call_with_timeout
from .types import ContractArtifact, DeploymentWarning
from .wallet import Signer

logger = logging.getLogger(__name__)

ENABLE_PUBLIC_MINT_ACTION = "enable public minting"


class PublicMintConfigurator:
    """
    Turns public minting on after deployment.

    This overrides the constructor's isPublicMint flag, which only sets the
    initial state. A failure never invalidates the deployment: the contract
    exists and is verified, so the problem is returned as a warning.
    """

    def __init__(self, signing_timeout: Optional[float] = None, mining_timeout: Optional[float] = None):
        self.signing_timeout = signing_timeout
        self.mining_timeout = mining_timeout

    def enable_public_mint(
        self, signer: Signer, artifact: ContractArtifact, contract_address: str
    ) -> Optional[DeploymentWarning]:
        """
        Send togglePublicMint(true) to the deployed contract.

        Returns:
            None on success, DeploymentWarning describing the failure otherwise
        """
        try:
            self._send_toggle(signer, artifact, contract_address)
        except Exception as e:
            error = e if isinstance(e, PostDeployConfigFailed) else PostDeployConfigFailed(
                f"Failed to enable public minting: {describe_provider_error(e)}"
            )
            logger.warning("Post-deploy configuration failed for %s: %s", contract_address, error, exc_info=e)
            return DeploymentWarning(
                kind=ErrorKind.POST_DEPLOY_CONFIG_FAILED,
                message=str(error),
                action=ENABLE_PUBLIC_MINT_ACTION,
            )
        return None

    def _send_toggle(self, signer: Signer, artifact: ContractArtifact, contract_address: str) -> None:
        try:
            data = encode_function_call(artifact.abi, PUBLIC_MINT_TOGGLE_FUNCTION, [True])
        except ValueError as e:
            raise PostDeployConfigFailed(f"Failed to enable public minting: {e}") from e

        tx = {"from": signer.address, "to": contract_address, "data": data}
        pending = call_with_timeout(
            lambda: signer.send_transaction(tx),
            self.signing_timeout,
            "public mint transaction signature",
        )
        logger.info("Public mint enable transaction sent: %s", pending.hash)

        receipt = pending.wait(timeout=self.mining_timeout)
        if receipt.status != 1:
            raise PostDeployConfigFailed(
                f"Failed to enable public minting: transaction {receipt.transaction_hash} reverted"
            )
