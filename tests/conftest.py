"""Shared pytest fixtures for nft-deployer tests."""

import json
from pathlib import Path
from typing import Any, Dict, List, Tuple

import pytest

from nft_deployer import (
    ArtifactLoader,
    DeploymentObserver,
    DeploymentParams,
    NFTDeployer,
    TokenStandard,
)
from nft_deployer.testing import InMemoryWalletProvider

DEPLOYER_ADDRESS = "0x" + "ab" * 20


class RecordingObserver(DeploymentObserver):
    """Observer that records checkpoint names and arguments in call order."""

    def __init__(self):
        self.events: List[Tuple[str, tuple]] = []

    def deployment_started(self, *args):
        self.events.append(("deployment_started", args))

    def switch_requested(self, *args):
        self.events.append(("switch_requested", args))

    def switch_confirmed(self, *args):
        self.events.append(("switch_confirmed", args))

    def transaction_submitted(self, *args):
        self.events.append(("transaction_submitted", args))

    def transaction_mined(self, *args):
        self.events.append(("transaction_mined", args))

    def verification_passed(self, *args):
        self.events.append(("verification_passed", args))

    def verification_failed(self, *args):
        self.events.append(("verification_failed", args))

    def post_deploy_configured(self, *args):
        self.events.append(("post_deploy_configured", args))

    def deployment_completed(self, *args):
        self.events.append(("deployment_completed", args))

    def deployment_failed(self, *args):
        self.events.append(("deployment_failed", args))

    def args_for(self, name: str) -> tuple:
        for event, args in self.events:
            if event == name:
                return args
        raise KeyError(name)

    @property
    def names(self) -> List[str]:
        return [name for name, _ in self.events]


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def artifacts_dir(fixtures_dir: Path) -> Path:
    """Directory holding ERC721NFT.json and ERC1155NFT.json."""
    return fixtures_dir / "artifacts"


@pytest.fixture
def erc721_artifact_json(artifacts_dir: Path) -> Dict[str, Any]:
    with open(artifacts_dir / "ERC721NFT.json") as f:
        return json.load(f)


@pytest.fixture
def artifact_loader(artifacts_dir: Path) -> ArtifactLoader:
    return ArtifactLoader(artifacts_dir)


@pytest.fixture
def erc721_artifact(artifact_loader: ArtifactLoader):
    return artifact_loader.load(TokenStandard.ERC721)


@pytest.fixture
def wallet() -> InMemoryWalletProvider:
    """Connected in-memory wallet already on BNB Smart Chain (56)."""
    return InMemoryWalletProvider(address=DEPLOYER_ADDRESS, chain_id=56)


@pytest.fixture
def observer() -> RecordingObserver:
    return RecordingObserver()


@pytest.fixture
def deployment_params() -> DeploymentParams:
    """ERC721 collection on BSC."""
    return DeploymentParams(
        name="Test Collection",
        symbol="TEST",
        base_token_uri="ipfs://bafybeigdyrzt/",
        max_supply=10000,
        royalty_percentage=250,
        mint_price="0.01",
        is_public_mint=False,
        standard=TokenStandard.ERC721,
        chain="BSC",
    )


@pytest.fixture
def deployer(
    wallet: InMemoryWalletProvider, artifact_loader: ArtifactLoader, observer: RecordingObserver
) -> NFTDeployer:
    """Deployer wired to the in-memory wallet, with no post-switch delay."""
    return NFTDeployer(
        wallet,
        artifact_loader=artifact_loader,
        observer=observer,
        switch_settle_delay=0,
    )
