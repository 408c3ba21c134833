"""Data types and dataclasses for nft-deployer library."""

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from enum import Enum
from fractions import Fraction
from typing import Any, Dict, FrozenSet, List, Optional, Tuple

from eth_utils import to_wei

from .constants import MAX_ROYALTY_BPS
from .exceptions import ErrorKind, InvalidDeploymentParams


class TokenStandard(Enum):
    """
    Supported NFT token standards.

    Value strings define de/serialization law and name the artifact resource
    ({value}NFT.json) shipped by the platform's NFT capability.
    """

    ERC721 = "ERC721"
    ERC1155 = "ERC1155"

    @property
    def artifact_name(self) -> str:
        return f"{self.value}NFT.json"

    @classmethod
    def parse(cls, value: Any) -> "TokenStandard":
        """
        Parse a token standard from an enum member or case-insensitive string.

        Raises:
            InvalidDeploymentParams: If the value names no supported standard
        """
        if isinstance(value, cls):
            return value
        normalized = str(value).strip().upper().replace("-", "")
        for standard in cls:
            if standard.value == normalized:
                return standard
        raise InvalidDeploymentParams(f"Unsupported token standard: {value!r}")


@dataclass(frozen=True)
class DeploymentParams:
    """User-supplied collection parameters for a single deployment."""

    name: str
    symbol: str
    base_token_uri: str  # may be empty
    max_supply: int
    royalty_percentage: int  # basis points, 250 = 2.5%
    mint_price: str  # decimal string in native units, e.g. "0.01"
    is_public_mint: bool
    standard: TokenStandard
    chain: str  # free-text alias, resolved through ChainRegistry

    def __post_init__(self):
        if not isinstance(self.standard, TokenStandard):
            object.__setattr__(self, "standard", TokenStandard.parse(self.standard))

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DeploymentParams":
        """
        Build params from the camelCase record submitted by the platform form.

        Args:
            data: Dictionary with name, symbol, baseTokenURI, maxSupply,
                  royaltyPercentage, mintPrice, isPublicMint, standard, chain

        Returns:
            DeploymentParams instance (not yet validated)

        Raises:
            InvalidDeploymentParams: If a required key is missing
        """
        try:
            return cls(
                name=data["name"],
                symbol=data["symbol"],
                base_token_uri=data.get("baseTokenURI") or "",
                max_supply=data["maxSupply"],
                royalty_percentage=data["royaltyPercentage"],
                mint_price=str(data.get("mintPrice") or "0"),
                is_public_mint=bool(data.get("isPublicMint", False)),
                standard=TokenStandard.parse(data["standard"]),
                chain=data["chain"],
            )
        except KeyError as e:
            raise InvalidDeploymentParams(f"Missing deployment parameter: {e.args[0]}") from e

    def validate(self) -> None:
        """
        Check every field is within range.

        Raises:
            InvalidDeploymentParams: On the first invalid field
        """
        if not self.name or not self.name.strip():
            raise InvalidDeploymentParams("Collection name must not be empty")
        if not self.symbol or not self.symbol.strip():
            raise InvalidDeploymentParams("Collection symbol must not be empty")
        if isinstance(self.max_supply, bool) or not isinstance(self.max_supply, int):
            raise InvalidDeploymentParams(f"maxSupply must be an integer, got {self.max_supply!r}")
        if self.max_supply <= 0:
            raise InvalidDeploymentParams(f"maxSupply must be positive, got {self.max_supply}")
        if isinstance(self.royalty_percentage, bool) or not isinstance(self.royalty_percentage, int):
            raise InvalidDeploymentParams(
                f"royaltyPercentage must be an integer, got {self.royalty_percentage!r}"
            )
        if not 0 <= self.royalty_percentage <= MAX_ROYALTY_BPS:
            raise InvalidDeploymentParams(
                f"royaltyPercentage must be between 0 and {MAX_ROYALTY_BPS} basis points, "
                f"got {self.royalty_percentage}"
            )
        self.mint_price_wei()

    def mint_price_wei(self) -> int:
        """
        Convert mint_price to the smallest native unit.

        Empty string is treated as "0".

        Raises:
            InvalidDeploymentParams: If the price is not a non-negative decimal
                                     with at most 18 decimal places that fits
                                     in a uint256
        """
        raw = (self.mint_price or "0").strip() or "0"
        try:
            price = Decimal(raw)
        except InvalidOperation as e:
            raise InvalidDeploymentParams(f"mintPrice is not a decimal number: {self.mint_price!r}") from e
        if not price.is_finite() or price < 0:
            raise InvalidDeploymentParams(f"mintPrice must be a non-negative number, got {self.mint_price!r}")
        if (Fraction(price) * 10**18).denominator != 1:
            raise InvalidDeploymentParams(
                f"mintPrice has more than 18 decimal places: {self.mint_price!r}"
            )
        try:
            return to_wei(price, "ether")
        except ValueError as e:
            raise InvalidDeploymentParams(f"mintPrice is out of range: {self.mint_price!r}") from e


@dataclass(frozen=True)
class ChainDescriptor:
    """A registered chain and the aliases resolving to it."""

    chain_id: int
    display_name: str
    aliases: FrozenSet[str] = frozenset()
    native_currency: str = "ETH"
    block_explorer_url: Optional[str] = None

    def address_url(self, address: str) -> Optional[str]:
        if self.block_explorer_url is None:
            return None
        return f"{self.block_explorer_url}/address/{address}"

    def transaction_url(self, transaction_hash: str) -> Optional[str]:
        if self.block_explorer_url is None:
            return None
        return f"{self.block_explorer_url}/tx/{transaction_hash}"


@dataclass(frozen=True)
class ContractArtifact:
    """Compiled contract for one token standard."""

    standard: TokenStandard
    abi: List[Dict[str, Any]]
    bytecode: str  # 0x-prefixed creation bytecode

    def constructor_abi(self) -> Optional[Dict[str, Any]]:
        for item in self.abi:
            if item.get("type") == "constructor":
                return item
        return None

    def function_abi(self, name: str) -> Optional[Dict[str, Any]]:
        for item in self.abi:
            if item.get("type", "function") == "function" and item.get("name") == name:
                return item
        return None


@dataclass(frozen=True)
class WalletSession:
    """Snapshot of the wallet's account and active chain."""

    address: str
    active_chain_id: Optional[int]


@dataclass(frozen=True)
class TransactionReceipt:
    """Mined transaction, normalized from whatever the provider returns."""

    transaction_hash: str
    block_number: int
    status: int  # 1 = success, 0 = reverted
    gas_used: int
    effective_gas_price: Optional[int] = None
    contract_address: Optional[str] = None


@dataclass(frozen=True)
class DeploymentWarning:
    """Non-fatal problem attached to a successful deployment."""

    kind: ErrorKind
    message: str
    action: str  # manual follow-up the user must perform


@dataclass(frozen=True)
class DeploymentResult:
    """Outcome of a successful, verified deployment."""

    # Required fields
    contract_address: str
    transaction_hash: str
    block_number: int
    gas_used: int
    deployment_cost: str  # decimal string in native units

    # Derived / contextual fields
    deployment_cost_wei: int = 0
    effective_gas_price: int = 0
    chain_id: Optional[int] = None
    chain_name: Optional[str] = None
    standard: Optional[TokenStandard] = None
    explorer_url: Optional[str] = None
    public_mint_enabled: bool = False
    warnings: Tuple[DeploymentWarning, ...] = field(default_factory=tuple)

    @property
    def has_warnings(self) -> bool:
        return bool(self.warnings)

    def to_record(self) -> Dict[str, Any]:
        """
        Serialize for the platform's "save record" collaborator.

        Returns:
            camelCase dictionary; integers that may exceed JS safe range
            are rendered as strings
        """
        return {
            "contractAddress": self.contract_address,
            "transactionHash": self.transaction_hash,
            "blockNumber": self.block_number,
            "gasUsed": str(self.gas_used),
            "deploymentCost": self.deployment_cost,
            "chainId": self.chain_id,
            "chain": self.chain_name,
            "standard": self.standard.value if self.standard else None,
            "explorerUrl": self.explorer_url,
            "publicMintEnabled": self.public_mint_enabled,
            "warnings": [
                {"kind": w.kind.value, "message": w.message, "action": w.action}
                for w in self.warnings
            ],
        }
