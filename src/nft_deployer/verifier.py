"""On-chain verification of a mined deployment."""

from .constants import EMPTY_CODE_VALUES
from .errors import describe_provider_error
from .exceptions import (
    DeploymentVerificationFailed,
    NetworkError,
    TransactionReverted,
    WalletProviderError,
)
from .types import TransactionReceipt
from .wallet import Signer


def is_empty_code(code) -> bool:
    if code is None:
        return True
    if isinstance(code, (bytes, bytearray)):
        return len(code) == 0
    return code.strip().lower() in EMPTY_CODE_VALUES


def verify_deployment(signer: Signer, receipt: TransactionReceipt) -> str:
    """
    Confirm the deployment succeeded, independently of what the receipt claims.

    Two checks, both mandatory: the receipt status must be 1, and the chain
    must hold code at the contract address.

    Args:
        signer: Signer connected to the deployment chain
        receipt: Mined deployment receipt

    Returns:
        Contract address

    Raises:
        TransactionReverted: If the receipt status is not 1
        DeploymentVerificationFailed: If there is no code at the address
        NetworkError: If the code query fails
    """
    if receipt.status != 1:
        raise TransactionReverted(
            "Contract deployment failed on blockchain. The transaction was reverted. "
            f"(tx {receipt.transaction_hash})"
        )

    address = receipt.contract_address
    if not address:
        raise DeploymentVerificationFailed(
            "Contract deployment verification failed: receipt has no contract address."
        )

    try:
        code = signer.get_code(address)
    except WalletProviderError as e:
        raise NetworkError(f"Could not verify contract code: {describe_provider_error(e)}") from e

    if is_empty_code(code):
        raise DeploymentVerificationFailed(
            "Contract deployment verification failed: No code found at contract address "
            f"{address}. The deployment may have been reverted."
        )

    return address
