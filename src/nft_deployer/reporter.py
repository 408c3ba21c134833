"""Assembly of the final deployment result."""

from typing import Sequence

from eth_utils import from_wei

from .exceptions import ErrorKind, InvariantViolation
from .types import ChainDescriptor, DeploymentResult, DeploymentWarning, TokenStandard, TransactionReceipt
from .wallet import PendingTransaction


def effective_gas_price(receipt: TransactionReceipt, pending: PendingTransaction) -> int:
    """
    Gas price actually paid: from the receipt if present, else the sent transaction.

    Raises:
        InvariantViolation: If neither source reports a price
    """
    if receipt.effective_gas_price is not None:
        return receipt.effective_gas_price
    if pending.gas_price is not None:
        return pending.gas_price
    raise InvariantViolation(
        f"No gas price available for mined transaction {receipt.transaction_hash}"
    )


def format_native_amount(amount_wei: int) -> str:
    """Render a wei amount as a plain decimal string in native units."""
    amount = from_wei(amount_wei, "ether")
    text = format(amount, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text or "0"


def build_result(
    receipt: TransactionReceipt,
    pending: PendingTransaction,
    contract_address: str,
    chain: ChainDescriptor,
    standard: TokenStandard,
    warnings: Sequence[DeploymentWarning] = (),
) -> DeploymentResult:
    """
    Compute deployment cost and assemble the DeploymentResult.

    Raises:
        InvariantViolation: If the receipt is inconsistent with a verified
                            deployment (a bug in an earlier step)
    """
    if receipt.status != 1 or not contract_address:
        raise InvariantViolation("Result requested for an unverified deployment")

    price = effective_gas_price(receipt, pending)
    cost_wei = receipt.gas_used * price
    public_mint_enabled = not any(w.kind is ErrorKind.POST_DEPLOY_CONFIG_FAILED for w in warnings)

    return DeploymentResult(
        contract_address=contract_address,
        transaction_hash=receipt.transaction_hash,
        block_number=receipt.block_number,
        gas_used=receipt.gas_used,
        deployment_cost=format_native_amount(cost_wei),
        deployment_cost_wei=cost_wei,
        effective_gas_price=price,
        chain_id=chain.chain_id,
        chain_name=chain.display_name,
        standard=standard,
        explorer_url=chain.address_url(contract_address),
        public_mint_enabled=public_mint_enabled,
        warnings=tuple(warnings),
    )
