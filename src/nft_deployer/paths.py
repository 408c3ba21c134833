"""Artifact location utilities for nft-deployer library."""

import os
from pathlib import Path
from typing import Optional, Union

from .constants import ARTIFACTS_DIR_ENV, ARTIFACTS_URL_ENV
from .types import TokenStandard


def get_default_artifacts_dir() -> Path:
    """
    Get default artifacts directory.

    Returns:
        Path to ./contracts/nft
    """
    return Path.cwd() / "contracts" / "nft"


def is_url(source: Union[Path, str]) -> bool:
    return isinstance(source, str) and source.lower().startswith(("http://", "https://"))


def resolve_artifacts_source(source: Optional[Union[Path, str]] = None) -> Union[Path, str]:
    """
    Decide where contract artifacts are loaded from.

    Args:
        source: Explicit directory or http(s) base URL. If None, uses
                $NFT_ARTIFACTS_URL, then $NFT_ARTIFACTS_DIR, then ./contracts/nft

    Returns:
        Base URL string or absolute directory Path
    """
    if source is None:
        source = os.environ.get(ARTIFACTS_URL_ENV) or os.environ.get(ARTIFACTS_DIR_ENV)
    if source is None:
        return get_default_artifacts_dir()
    if is_url(source):
        return str(source).rstrip("/")
    return Path(source).absolute()


def get_artifact_location(source: Union[Path, str], standard: TokenStandard) -> Union[Path, str]:
    """
    Get the path or URL of one standard's artifact file.

    Args:
        source: Value returned by resolve_artifacts_source()
        standard: Token standard

    Returns:
        URL string for http(s) sources, Path otherwise
    """
    if is_url(source):
        return f"{source}/{standard.artifact_name}"
    return Path(source) / standard.artifact_name
