"""Gas estimation for the contract-creation transaction."""

import logging
import math
from dataclasses import dataclass
from fractions import Fraction
from typing import Any, Dict, List

from eth_abi.exceptions import EncodingError

from .constants import GAS_LIMIT_MULTIPLIER
from .encoding import encode_deploy_data
from .errors import describe_provider_error
from .exceptions import GasEstimationFailed, WalletProviderError
from .types import ContractArtifact, DeploymentParams
from .wallet import Signer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GasEstimate:
    estimated_gas: int
    gas_limit: int


def build_constructor_args(params: DeploymentParams, deployer_address: str) -> List[Any]:
    """
    Constructor arguments in the order the NFT contracts declare them.

    The deploying wallet is both royalty recipient and owner.
    """
    return [
        params.name,
        params.symbol,
        params.base_token_uri or "",
        params.max_supply,
        params.royalty_percentage,
        deployer_address,  # royalty recipient
        params.mint_price_wei(),
        params.is_public_mint,
        deployer_address,  # owner
    ]


def build_deploy_transaction(
    artifact: ContractArtifact, constructor_args: List[Any], from_address: str
) -> Dict[str, Any]:
    """
    Build the unsigned contract-creation transaction.

    Raises:
        GasEstimationFailed: If the arguments cannot be encoded against the ABI
    """
    try:
        data = encode_deploy_data(artifact.abi, artifact.bytecode, constructor_args)
    except (ValueError, TypeError, EncodingError) as e:
        raise GasEstimationFailed(f"Could not encode constructor arguments: {e}") from e
    return {"from": from_address, "data": data}


def apply_gas_margin(estimated_gas: int) -> int:
    """Gas limit for an estimate: ceil(estimate * 1.5)."""
    return math.ceil(estimated_gas * Fraction(GAS_LIMIT_MULTIPLIER))


class GasEstimator:
    """Asks the connected node for a gas estimate and applies the fixed safety margin."""

    def estimate(self, signer: Signer, tx: Dict[str, Any]) -> GasEstimate:
        """
        Estimate gas for tx.

        Args:
            signer: Signer connected to the target chain
            tx: Unsigned transaction from build_deploy_transaction()

        Returns:
            GasEstimate with the raw estimate and the limit to send with

        Raises:
            GasEstimationFailed: If the node rejects the transaction, which
                                 almost always means deployment would revert
        """
        logger.debug("Estimating gas for %d bytes of deployment data", (len(tx["data"]) - 2) // 2)
        try:
            estimated_gas = int(signer.estimate_gas(tx))
        except WalletProviderError as e:
            raise GasEstimationFailed(
                f"Gas estimation failed: {describe_provider_error(e)}. "
                "The contract deployment will likely fail. "
                "Please check your network connection and try again."
            ) from e

        gas_limit = apply_gas_margin(estimated_gas)
        logger.info("Estimated gas %d, gas limit with buffer %d", estimated_gas, gas_limit)
        return GasEstimate(estimated_gas=estimated_gas, gas_limit=gas_limit)
