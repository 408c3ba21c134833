"""Translation of wallet provider error codes into deployment errors."""

from enum import Enum
from typing import Any, Dict, Optional, Type

from .constants import (
    CHAIN_NOT_ADDED_CODES,
    INSUFFICIENT_FUNDS_CODES,
    INSUFFICIENT_FUNDS_MARKER,
    NETWORK_ERROR_CODES,
    USER_REJECTED_CODES,
)
from .exceptions import (
    DeploymentError,
    InsufficientFunds,
    NetworkError,
    UserRejectedSigning,
    WalletProviderError,
)


class ProviderCondition(Enum):
    """What a provider error code means, independent of which step raised it."""

    USER_REJECTED = "user-rejected"
    CHAIN_NOT_ADDED = "chain-not-added"
    INSUFFICIENT_FUNDS = "insufficient-funds"
    NETWORK_ERROR = "network-error"
    UNKNOWN = "unknown"


def _build_code_table() -> Dict[Any, ProviderCondition]:
    table: Dict[Any, ProviderCondition] = {}
    for codes, condition in [
        (USER_REJECTED_CODES, ProviderCondition.USER_REJECTED),
        (CHAIN_NOT_ADDED_CODES, ProviderCondition.CHAIN_NOT_ADDED),
        (INSUFFICIENT_FUNDS_CODES, ProviderCondition.INSUFFICIENT_FUNDS),
        (NETWORK_ERROR_CODES, ProviderCondition.NETWORK_ERROR),
    ]:
        for code in codes:
            table[code] = condition
    return table


PROVIDER_CODE_TABLE = _build_code_table()


def classify_provider_error(error: WalletProviderError) -> ProviderCondition:
    """
    Classify a provider error by its code, falling back to its message.

    Args:
        error: Error raised by a WalletProvider or Signer

    Returns:
        ProviderCondition (UNKNOWN if nothing matches)
    """
    condition = PROVIDER_CODE_TABLE.get(error.code)
    if condition is None and isinstance(error.code, str) and error.code.isdigit():
        condition = PROVIDER_CODE_TABLE.get(int(error.code))
    if condition is not None:
        return condition

    # JSON-RPC nodes report balance problems as generic -32000 errors
    if INSUFFICIENT_FUNDS_MARKER in (error.message or "").lower():
        return ProviderCondition.INSUFFICIENT_FUNDS

    return ProviderCondition.UNKNOWN


def translate_transaction_error(
    error: WalletProviderError,
    fallback: Type[DeploymentError] = NetworkError,
    action: str = "send transaction",
) -> DeploymentError:
    """
    Build the typed error for a failed transaction-sending call.

    Args:
        error: Error raised by the signer
        fallback: Error class used for unrecognized codes
        action: Short description used in the fallback message

    Returns:
        DeploymentError instance to raise (caller chains the cause)
    """
    condition = classify_provider_error(error)
    if condition is ProviderCondition.USER_REJECTED:
        return UserRejectedSigning("Transaction rejected by user")
    if condition is ProviderCondition.INSUFFICIENT_FUNDS:
        return InsufficientFunds("Insufficient funds to deploy contract")
    if condition is ProviderCondition.NETWORK_ERROR:
        return NetworkError(f"Network error. Please check your connection. ({error.message})")
    return fallback(f"Failed to {action}: {describe_provider_error(error)}")


def describe_provider_error(error: Optional[BaseException]) -> str:
    """Human-readable message for any exception, preferring the provider's own text."""
    if error is None:
        return "Unknown error"
    message = getattr(error, "message", None) or str(error)
    return message or type(error).__name__
