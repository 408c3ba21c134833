"""Contract artifact parsers for nft-deployer library."""

from enum import Enum
from typing import Any, Dict, Optional

from .exceptions import ArtifactNotFound
from .types import ContractArtifact, TokenStandard


class ArtifactFormat(Enum):
    """
    Compiler output layouts understood by parse_artifact.

    - HARDHAT: {"abi": [...], "bytecode": "0x..."}
    - FOUNDRY: {"abi": [...], "bytecode": {"object": "0x..."}}
    """

    HARDHAT = "hardhat"
    FOUNDRY = "foundry"


def detect_artifact_format(data: Dict[str, Any]) -> Optional[ArtifactFormat]:
    """
    Detect which compiler layout an artifact document uses.

    Args:
        data: Decoded artifact JSON

    Returns:
        ArtifactFormat, or None if the document has no bytecode field
    """
    bytecode = data.get("bytecode")
    if isinstance(bytecode, dict):
        return ArtifactFormat.FOUNDRY
    if isinstance(bytecode, str):
        return ArtifactFormat.HARDHAT
    return None


def normalize_bytecode(bytecode: str) -> str:
    """Return bytecode with a single lower-case 0x prefix, or "" if empty."""
    bytecode = bytecode.strip()
    if bytecode[:2].lower() == "0x":
        bytecode = bytecode[2:]
    if not bytecode:
        return ""
    return "0x" + bytecode


def parse_artifact(data: Any, standard: TokenStandard, origin: str) -> ContractArtifact:
    """
    Parse a compiled contract artifact document.

    Args:
        data: Decoded artifact JSON
        standard: Token standard the artifact is for
        origin: Path or URL the document came from (for error messages)

    Returns:
        ContractArtifact with normalized bytecode

    Raises:
        ArtifactNotFound: If the ABI is missing or the bytecode is empty
    """
    if not isinstance(data, dict):
        raise ArtifactNotFound(f"Malformed {standard.value} artifact at {origin}")

    abi = data.get("abi")
    if not isinstance(abi, list):
        raise ArtifactNotFound(f"Contract ABI not found in {standard.value} artifact at {origin}")

    artifact_format = detect_artifact_format(data)
    if artifact_format is ArtifactFormat.FOUNDRY:
        raw_bytecode = data["bytecode"].get("object") or ""
    elif artifact_format is ArtifactFormat.HARDHAT:
        raw_bytecode = data["bytecode"]
    else:
        raw_bytecode = ""

    bytecode = normalize_bytecode(raw_bytecode)
    if not bytecode:
        raise ArtifactNotFound(f"Contract bytecode not found in {standard.value} artifact at {origin}")

    return ContractArtifact(standard=standard, abi=abi, bytecode=bytecode)
