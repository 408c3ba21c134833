"""Contract artifact loading for nft-deployer library."""

import json
import logging
from pathlib import Path
from typing import Optional, Union

import requests

from .exceptions import ArtifactNotFound, NetworkError
from .parsers import parse_artifact
from .paths import get_artifact_location, is_url, resolve_artifacts_source
from .types import ContractArtifact, TokenStandard

logger = logging.getLogger(__name__)

FEATURE_MISSING_HINT = (
    "NFT deployment requires the NFT contract artifacts. "
    "Please ensure the Ecosystem extension is installed and configured."
)


class ArtifactLoader:
    """Loads ABI and bytecode for a token standard from a directory or base URL."""

    def __init__(self, source: Optional[Union[Path, str]] = None, timeout: float = 30):
        """
        Initialize the loader.

        Args:
            source: Directory or http(s) base URL holding ERC721NFT.json and
                    ERC1155NFT.json. Defaults per resolve_artifacts_source().
            timeout: HTTP timeout in seconds for URL sources
        """
        self.source = resolve_artifacts_source(source)
        self.timeout = timeout

    def load(self, standard: TokenStandard) -> ContractArtifact:
        """
        Load the artifact for one token standard.

        Args:
            standard: Token standard to load

        Returns:
            ContractArtifact

        Raises:
            ArtifactNotFound: If the artifact is absent or unusable
            NetworkError: If an HTTP source cannot be reached
        """
        location = get_artifact_location(self.source, standard)
        if is_url(location):
            data = self._fetch(str(location), standard)
        else:
            data = self._read(Path(location), standard)

        artifact = parse_artifact(data, standard, str(location))
        logger.debug("Loaded %s artifact from %s", standard.value, location)
        return artifact

    def _read(self, path: Path, standard: TokenStandard):
        try:
            with open(path) as f:
                return json.load(f)
        except FileNotFoundError as e:
            raise ArtifactNotFound(
                f"{standard.value} artifact not found at {path}. {FEATURE_MISSING_HINT}"
            ) from e
        except json.JSONDecodeError as e:
            raise ArtifactNotFound(f"Malformed {standard.value} artifact at {path}: {e}") from e

    def _fetch(self, url: str, standard: TokenStandard):
        try:
            response = requests.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            raise NetworkError(f"Network error while fetching {standard.value} artifact: {e}") from e

        if response.status_code != 200:
            raise ArtifactNotFound(
                f"{standard.value} artifact not available at {url} "
                f"(HTTP {response.status_code}). {FEATURE_MISSING_HINT}"
            )

        try:
            return response.json()
        except ValueError as e:
            raise ArtifactNotFound(f"Malformed {standard.value} artifact at {url}: {e}") from e
