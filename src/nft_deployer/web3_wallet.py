"""
web3.py implementation of the wallet provider boundary.

This is the only module that knows how signer and provider primitives are
obtained. The deployment workflow depends on the abstract WalletProvider
and Signer interfaces and never on web3 objects directly.
"""

import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Mapping, Optional

import requests
from eth_account.signers.local import LocalAccount
from web3 import Web3
from web3.exceptions import ContractLogicError, TimeExhausted, TransactionNotFound, Web3RPCError

from .exceptions import DeploymentTimedOut, WalletProviderError
from .types import TransactionReceipt
from .wallet import PendingTransaction, Signer, WalletProvider

logger = logging.getLogger(__name__)

# Used when the caller sets no mining timeout
DEFAULT_RECEIPT_TIMEOUT = 600


@contextmanager
def provider_errors(action: str) -> Iterator[None]:
    """Re-raise web3 and transport failures as WalletProviderError."""
    try:
        yield
    except ContractLogicError as e:
        raise WalletProviderError(
            f"{action} reverted: {e}", code="CALL_EXCEPTION", data=getattr(e, "data", None)
        ) from e
    except Web3RPCError as e:
        error = (getattr(e, "rpc_response", None) or {}).get("error") or {}
        raise WalletProviderError(
            error.get("message") or str(e), code=error.get("code"), data=error.get("data")
        ) from e
    except (requests.RequestException, ConnectionError) as e:
        raise WalletProviderError(f"{action} failed: {e}", code="NETWORK_ERROR") from e


def to_receipt(raw: Mapping[str, Any]) -> TransactionReceipt:
    """Normalize a web3 receipt AttributeDict."""
    contract_address = raw.get("contractAddress")
    gas_price = raw.get("effectiveGasPrice")
    return TransactionReceipt(
        transaction_hash=Web3.to_hex(raw["transactionHash"]),
        block_number=int(raw["blockNumber"]),
        status=int(raw.get("status", 0)),
        gas_used=int(raw["gasUsed"]),
        effective_gas_price=int(gas_price) if gas_price is not None else None,
        contract_address=Web3.to_checksum_address(contract_address) if contract_address else None,
    )


class Web3PendingTransaction(PendingTransaction):
    def __init__(self, web3: Web3, tx_hash: str, gas_price: Optional[int] = None):
        self.web3 = web3
        self._hash = tx_hash
        self._gas_price = gas_price

    @property
    def hash(self) -> str:
        return self._hash

    @property
    def gas_price(self) -> Optional[int]:
        if self._gas_price is None:
            try:
                tx = self.web3.eth.get_transaction(self._hash)
            except TransactionNotFound:
                return None
            if tx.get("gasPrice") is not None:
                self._gas_price = int(tx["gasPrice"])
        return self._gas_price

    def wait(self, timeout: Optional[float] = None) -> TransactionReceipt:
        if timeout is None:
            timeout = DEFAULT_RECEIPT_TIMEOUT
        try:
            with provider_errors("Waiting for receipt"):
                raw = self.web3.eth.wait_for_transaction_receipt(self._hash, timeout=timeout)
        except TimeExhausted as e:
            raise DeploymentTimedOut(f"transaction {self._hash} to be mined", timeout) from e
        return to_receipt(raw)


class Web3Signer(Signer):
    """
    Sends transactions through web3.py.

    With a LocalAccount the transaction is signed in-process; otherwise the
    node or injected wallet signs it via eth_sendTransaction.
    """

    def __init__(self, web3: Web3, address: str, account: Optional[LocalAccount] = None):
        self.web3 = web3
        self._address = Web3.to_checksum_address(address)
        self.account = account

    @property
    def address(self) -> str:
        return self._address

    def get_chain_id(self) -> int:
        with provider_errors("Reading chain ID"):
            return int(self.web3.eth.chain_id)

    def estimate_gas(self, tx: Dict[str, Any]) -> int:
        with provider_errors("Gas estimation"):
            return int(self.web3.eth.estimate_gas(self._prepare(tx)))

    def send_transaction(self, tx: Dict[str, Any]) -> PendingTransaction:
        tx = self._prepare(tx)
        with provider_errors("Sending transaction"):
            if self.account is None:
                tx_hash = self.web3.eth.send_transaction(tx)
                return Web3PendingTransaction(self.web3, Web3.to_hex(tx_hash))

            if "gas" not in tx:
                tx["gas"] = self.web3.eth.estimate_gas(tx)
            tx.setdefault("gasPrice", self.web3.eth.gas_price)
            tx.setdefault("nonce", self.web3.eth.get_transaction_count(self._address, "pending"))
            tx.setdefault("chainId", self.web3.eth.chain_id)
            signed = self.account.sign_transaction(tx)
            tx_hash = self.web3.eth.send_raw_transaction(signed.raw_transaction)
        return Web3PendingTransaction(self.web3, Web3.to_hex(tx_hash), gas_price=tx["gasPrice"])

    def get_code(self, address: str) -> str:
        with provider_errors("Reading contract code"):
            return Web3.to_hex(self.web3.eth.get_code(Web3.to_checksum_address(address)))

    def _prepare(self, tx: Dict[str, Any]) -> Dict[str, Any]:
        tx = dict(tx)
        tx["from"] = self._address
        if tx.get("to"):
            tx["to"] = Web3.to_checksum_address(tx["to"])
        return tx


class Web3WalletProvider(WalletProvider):
    """
    WalletProvider backed by a web3.py connection.

    Args:
        web3: Connected Web3 instance (an injected wallet bridge, a node with
              unlocked accounts, or any RPC endpoint when account is given)
        account: Optional local account to sign with. If omitted, the first
                 account reported by eth_accounts is used.
    """

    def __init__(self, web3: Web3, account: Optional[LocalAccount] = None):
        self.web3 = web3
        self.account = account

    def get_account(self) -> Optional[str]:
        if self.account is not None:
            return self.account.address
        with provider_errors("Reading accounts"):
            accounts = self.web3.eth.accounts
        if not accounts:
            return None
        return Web3.to_checksum_address(accounts[0])

    def get_active_chain(self) -> Optional[int]:
        with provider_errors("Reading chain ID"):
            return int(self.web3.eth.chain_id)

    def request_chain_switch(self, chain_id: int) -> None:
        logger.debug("wallet_switchEthereumChain to %d", chain_id)
        with provider_errors("Switching chain"):
            response = self.web3.provider.make_request(
                "wallet_switchEthereumChain", [{"chainId": hex(chain_id)}]
            )
        error = response.get("error") if isinstance(response, Mapping) else None
        if error:
            raise WalletProviderError(
                error.get("message", "Chain switch failed"),
                code=error.get("code"),
                data=error.get("data"),
            )

    def get_signer(self) -> Signer:
        address = self.get_account()
        if address is None:
            raise WalletProviderError("No account available for signing", code=4100)
        return Web3Signer(self.web3, address, account=self.account)
