"""Configuration constants for nft-deployer library."""

from decimal import Decimal

# Chain aliases accepted in DeploymentParams.chain (matched upper-cased)
CHAIN_ALIASES = {
    "ETH": 1,
    "ETHEREUM": 1,
    "BSC": 56,
    "BINANCE": 56,
    "POLYGON": 137,
    "MATIC": 137,
    "ARBITRUM": 42161,
    "OPTIMISM": 10,
    "BASE": 8453,
    "AVALANCHE": 43114,
    "AVAX": 43114,
    "FANTOM": 250,
    "FTM": 250,
    "CRONOS": 25,
    "CRO": 25,
}

# Per-chain metadata, keyed by chain ID
CHAIN_CONFIG = {
    1: {
        "display_name": "Ethereum Mainnet",
        "native_currency": "ETH",
        "block_explorer_url": "https://etherscan.io",
    },
    56: {
        "display_name": "BNB Smart Chain",
        "native_currency": "BNB",
        "block_explorer_url": "https://bscscan.com",
    },
    137: {
        "display_name": "Polygon",
        "native_currency": "POL",
        "block_explorer_url": "https://polygonscan.com",
    },
    42161: {
        "display_name": "Arbitrum One",
        "native_currency": "ETH",
        "block_explorer_url": "https://arbiscan.io",
    },
    10: {
        "display_name": "Optimism",
        "native_currency": "ETH",
        "block_explorer_url": "https://optimistic.etherscan.io",
    },
    8453: {
        "display_name": "Base",
        "native_currency": "ETH",
        "block_explorer_url": "https://basescan.org",
    },
    43114: {
        "display_name": "Avalanche",
        "native_currency": "AVAX",
        "block_explorer_url": "https://snowtrace.io",
    },
    250: {
        "display_name": "Fantom",
        "native_currency": "FTM",
        "block_explorer_url": "https://ftmscan.com",
    },
    25: {
        "display_name": "Cronos",
        "native_currency": "CRO",
        "block_explorer_url": "https://cronoscan.com",
    },
}

# Unknown aliases fall back to BNB Smart Chain, the low-fee chain
# deployments were historically tested on
DEFAULT_CHAIN_ID = 56

# Applied to every gas estimate: limit = ceil(estimate * 1.5)
GAS_LIMIT_MULTIPLIER = Decimal("1.5")

# EIP-1193 / ethers-style provider error codes
USER_REJECTED_CODES = frozenset({4001, "ACTION_REJECTED"})
CHAIN_NOT_ADDED_CODES = frozenset({4902})
INSUFFICIENT_FUNDS_CODES = frozenset({"INSUFFICIENT_FUNDS"})
NETWORK_ERROR_CODES = frozenset({"NETWORK_ERROR", "SERVER_ERROR", "TIMEOUT"})

# Nodes report insufficient balance as a generic JSON-RPC error
INSUFFICIENT_FUNDS_MARKER = "insufficient funds"

PUBLIC_MINT_TOGGLE_FUNCTION = "togglePublicMint"

# getCode results meaning "no contract at this address"
EMPTY_CODE_VALUES = frozenset({"", "0x", "0x0"})

MAX_ROYALTY_BPS = 10_000

# Environment variables for artifact location
ARTIFACTS_URL_ENV = "NFT_ARTIFACTS_URL"
ARTIFACTS_DIR_ENV = "NFT_ARTIFACTS_DIR"
