"""
In-memory wallet for exercising the deployment workflow without a node.

Example::

    provider = InMemoryWalletProvider(address="0x" + "ab" * 20, chain_id=1)
    provider.signer.receipt_status = 0
    NFTDeployer(provider, switch_settle_delay=0).deploy(params)
"""

from enum import Enum
from typing import Any, Dict, List, Optional, Set

from eth_utils import keccak, to_checksum_address

from .exceptions import DeploymentTimedOut, WalletProviderError
from .types import TransactionReceipt
from .wallet import PendingTransaction, Signer, WalletProvider


class SwitchBehaviour(Enum):
    """How the fake wallet answers wallet_switchEthereumChain."""

    APPROVE = "approve"
    REJECT = "reject"
    UNKNOWN_CHAIN = "unknown-chain"
    IGNORE = "ignore"  # reports success but stays on the old chain
    FAIL = "fail"


class InMemoryPendingTransaction(PendingTransaction):
    """
    A transaction that is mined after mining_time simulated seconds.

    wait() raises DeploymentTimedOut when mining_time exceeds the timeout,
    or wait_error when one is set.
    """

    def __init__(
        self,
        tx_hash: str,
        receipt: TransactionReceipt,
        gas_price: Optional[int] = None,
        mining_time: float = 0,
        wait_error: Optional[WalletProviderError] = None,
    ):
        self._hash = tx_hash
        self._receipt = receipt
        self._gas_price = gas_price
        self.mining_time = mining_time
        self.wait_error = wait_error
        self.wait_calls: List[Optional[float]] = []

    @property
    def hash(self) -> str:
        return self._hash

    @property
    def gas_price(self) -> Optional[int]:
        return self._gas_price

    def wait(self, timeout: Optional[float] = None) -> TransactionReceipt:
        self.wait_calls.append(timeout)
        if self.wait_error is not None:
            raise self.wait_error
        if timeout is not None and self.mining_time > timeout:
            raise DeploymentTimedOut(f"transaction {self._hash} to be mined", timeout)
        return self._receipt


class InMemorySigner(Signer):
    """
    Records everything sent through it.

    The first transaction without a "to" field is the deployment; later
    transactions are calls to the deployed contract.
    """

    def __init__(self, wallet: "InMemoryWalletProvider"):
        self.wallet = wallet
        self.chain_id_override: Optional[int] = None
        self.gas_estimate = 2_000_000
        self.estimate_error: Optional[WalletProviderError] = None
        self.send_error: Optional[WalletProviderError] = None
        self.call_error: Optional[WalletProviderError] = None
        self.wait_error: Optional[WalletProviderError] = None
        self.mining_time: float = 0
        self.receipt_status = 1
        self.call_receipt_status = 1
        self.gas_used = 1_500_000
        self.receipt_gas_price: Optional[int] = 5_000_000_000
        self.transaction_gas_price: Optional[int] = 5_000_000_000
        self.deployed_code: Optional[str] = "0x6080604052348015600f57600080fd5b50"
        self.block_number = 1_000
        self.estimate_calls: List[Dict[str, Any]] = []
        self.sent_transactions: List[Dict[str, Any]] = []
        self.code_queries: List[str] = []
        self.contracts: Dict[str, str] = {}

    @property
    def address(self) -> str:
        return self.wallet.address

    def get_chain_id(self) -> int:
        if self.chain_id_override is not None:
            return self.chain_id_override
        return self.wallet.chain_id

    def estimate_gas(self, tx: Dict[str, Any]) -> int:
        self.estimate_calls.append(dict(tx))
        if self.estimate_error is not None:
            raise self.estimate_error
        return self.gas_estimate

    def send_transaction(self, tx: Dict[str, Any]) -> PendingTransaction:
        is_deployment = not tx.get("to")
        error = self.send_error if is_deployment else self.call_error
        if error is not None:
            raise error

        nonce = len(self.sent_transactions)
        self.sent_transactions.append(dict(tx))
        tx_hash = "0x" + keccak(text=f"{self.address}:{nonce}:{tx.get('data')}").hex()

        contract_address = None
        if is_deployment:
            contract_address = to_checksum_address("0x" + keccak(text=f"{self.address}:{nonce}")[-20:].hex())
            if self.deployed_code is not None:
                self.contracts[contract_address.lower()] = self.deployed_code

        self.block_number += 1
        receipt = TransactionReceipt(
            transaction_hash=tx_hash,
            block_number=self.block_number,
            status=self.receipt_status if is_deployment else self.call_receipt_status,
            gas_used=self.gas_used if is_deployment else 50_000,
            effective_gas_price=self.receipt_gas_price,
            contract_address=contract_address,
        )
        return InMemoryPendingTransaction(
            tx_hash,
            receipt,
            gas_price=self.transaction_gas_price,
            mining_time=self.mining_time if is_deployment else 0,
            wait_error=self.wait_error if is_deployment else None,
        )

    def get_code(self, address: str) -> str:
        self.code_queries.append(address)
        return self.contracts.get(address.lower(), "0x")

    @property
    def deployment_transaction(self) -> Optional[Dict[str, Any]]:
        for tx in self.sent_transactions:
            if not tx.get("to"):
                return tx
        return None

    @property
    def contract_calls(self) -> List[Dict[str, Any]]:
        return [tx for tx in self.sent_transactions if tx.get("to")]


class InMemoryWalletProvider(WalletProvider):
    """Fake wallet with scriptable chain-switch and signing behaviour."""

    def __init__(
        self,
        address: Optional[str] = "0x" + "ab" * 20,
        chain_id: Optional[int] = 56,
        known_chains: Optional[Set[int]] = None,
        switch_behaviour: SwitchBehaviour = SwitchBehaviour.APPROVE,
    ):
        self.address = address
        self.chain_id = chain_id
        self.known_chains = known_chains
        self.switch_behaviour = switch_behaviour
        self.switch_requests: List[int] = []
        self.session_reads = 0
        self.signer = InMemorySigner(self)

    def get_account(self) -> Optional[str]:
        self.session_reads += 1
        return self.address

    def get_active_chain(self) -> Optional[int]:
        return self.chain_id

    def request_chain_switch(self, chain_id: int) -> None:
        self.switch_requests.append(chain_id)
        if self.switch_behaviour is SwitchBehaviour.REJECT:
            raise WalletProviderError("User rejected the request.", code=4001)
        if self.switch_behaviour is SwitchBehaviour.UNKNOWN_CHAIN or (
            self.known_chains is not None and chain_id not in self.known_chains
        ):
            raise WalletProviderError(f"Unrecognized chain ID {hex(chain_id)}.", code=4902)
        if self.switch_behaviour is SwitchBehaviour.FAIL:
            raise WalletProviderError("Internal JSON-RPC error.", code=-32603)
        if self.switch_behaviour is SwitchBehaviour.APPROVE:
            self.chain_id = chain_id

    def get_signer(self) -> Signer:
        if self.address is None:
            raise WalletProviderError("No account available for signing", code=4100)
        return self.signer
