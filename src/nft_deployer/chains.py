"""Chain registry: maps free-text chain aliases to chain descriptors."""

import logging
from typing import Any, Dict, List, Mapping, Optional

from .constants import CHAIN_ALIASES, CHAIN_CONFIG, DEFAULT_CHAIN_ID
from .types import ChainDescriptor

logger = logging.getLogger(__name__)


class ChainRegistry:
    """
    Immutable lookup from case-insensitive chain aliases to ChainDescriptor.

    Unknown aliases do not fail deployments: resolve_or_default() falls back
    to the registry's default chain (BNB Smart Chain unless overridden) and
    logs a warning. A typo in the chain field therefore deploys to the
    default chain rather than aborting.
    """

    def __init__(
        self,
        aliases: Optional[Mapping[str, int]] = None,
        chain_config: Optional[Mapping[int, Dict[str, Any]]] = None,
        default_chain_id: int = DEFAULT_CHAIN_ID,
    ):
        """
        Build the registry.

        Args:
            aliases: Alias -> chain ID mapping (defaults to CHAIN_ALIASES)
            chain_config: Chain ID -> metadata mapping (defaults to CHAIN_CONFIG)
            default_chain_id: Chain used when an alias is unknown

        Raises:
            ValueError: If an alias maps to two chain IDs, or the default
                        chain has no metadata
        """
        if aliases is None:
            aliases = CHAIN_ALIASES
        if chain_config is None:
            chain_config = CHAIN_CONFIG

        alias_to_id: Dict[str, int] = {}
        for alias, chain_id in aliases.items():
            key = alias.strip().upper()
            existing = alias_to_id.get(key)
            if existing is not None and existing != chain_id:
                raise ValueError(
                    f"Alias '{key}' maps to both chain {existing} and chain {chain_id}"
                )
            alias_to_id[key] = chain_id

        descriptors: Dict[int, ChainDescriptor] = {}
        for chain_id, config in chain_config.items():
            descriptors[chain_id] = ChainDescriptor(
                chain_id=chain_id,
                display_name=config["display_name"],
                aliases=frozenset(a for a, cid in alias_to_id.items() if cid == chain_id),
                native_currency=config.get("native_currency", "ETH"),
                block_explorer_url=config.get("block_explorer_url"),
            )

        missing = sorted({cid for cid in alias_to_id.values() if cid not in descriptors})
        if missing:
            raise ValueError(f"Aliases reference chains without metadata: {missing}")
        if default_chain_id not in descriptors:
            raise ValueError(f"Default chain {default_chain_id} is not registered")

        self._alias_to_id = alias_to_id
        self._descriptors = descriptors
        self._default_chain_id = default_chain_id

    @property
    def default(self) -> ChainDescriptor:
        return self._descriptors[self._default_chain_id]

    def resolve(self, alias: str) -> Optional[ChainDescriptor]:
        """
        Look up a chain by alias, case-insensitively.

        Args:
            alias: Chain alias or symbol, e.g. "eth", "BSC", "Polygon"

        Returns:
            ChainDescriptor, or None if the alias is unknown
        """
        if alias is None:
            return None
        chain_id = self._alias_to_id.get(alias.strip().upper())
        if chain_id is None:
            return None
        return self._descriptors[chain_id]

    def resolve_or_default(self, alias: str) -> ChainDescriptor:
        """
        Look up a chain by alias, falling back to the default chain on a miss.

        Args:
            alias: Chain alias or symbol

        Returns:
            The matching ChainDescriptor, or the default chain's descriptor
        """
        descriptor = self.resolve(alias)
        if descriptor is None:
            descriptor = self.default
            logger.warning(
                "Unknown chain alias %r, deploying to default chain %s (%d)",
                alias,
                descriptor.display_name,
                descriptor.chain_id,
            )
        return descriptor

    def get(self, chain_id: int) -> Optional[ChainDescriptor]:
        return self._descriptors.get(chain_id)

    def aliases_for(self, chain_id: int) -> List[str]:
        descriptor = self._descriptors.get(chain_id)
        if descriptor is None:
            return []
        return sorted(descriptor.aliases)

    def chain_ids(self) -> List[int]:
        return sorted(self._descriptors)
