"""End-to-end deployment scenarios against the in-memory wallet."""

import threading
from dataclasses import replace

import pytest
from eth_abi import decode

from nft_deployer import (
    ArtifactLoader,
    DeploymentTimeouts,
    NFTDeployer,
    TokenStandard,
    deploy_nft_contract,
)
from nft_deployer.exceptions import (
    ArtifactNotFound,
    DeploymentTimedOut,
    DeploymentVerificationFailed,
    ErrorKind,
    GasEstimationFailed,
    InsufficientFunds,
    InvalidDeploymentParams,
    NetworkError,
    NetworkNotConfigured,
    NetworkSwitchRejected,
    SignerNetworkMismatch,
    TransactionReverted,
    UserRejectedSigning,
    WalletNotConnected,
    WalletProviderError,
)
from nft_deployer.testing import InMemoryWalletProvider, SwitchBehaviour

DEPLOYER_ADDRESS = "0x" + "ab" * 20
CONSTRUCTOR_TYPES = ["string", "string", "string", "uint256", "uint96", "address", "uint256", "bool", "address"]


def decode_constructor_args(artifact, tx):
    return decode(CONSTRUCTOR_TYPES, bytes.fromhex(tx["data"][len(artifact.bytecode):]))


class TestSuccessfulDeployment:
    """Wallet already on the target chain."""

    def test_deploys_without_switching(self, deployer, wallet, deployment_params):
        result = deployer.deploy(deployment_params)

        assert wallet.switch_requests == []
        assert result.chain_id == 56
        assert result.chain_name == "BNB Smart Chain"
        assert result.standard is TokenStandard.ERC721
        assert result.contract_address in wallet.signer.code_queries

    def test_constructor_arguments_in_contract_order(self, deployer, wallet, deployment_params, erc721_artifact):
        deployer.deploy(deployment_params)

        args = decode_constructor_args(erc721_artifact, wallet.signer.deployment_transaction)

        assert args[:5] == ("Test Collection", "TEST", "ipfs://bafybeigdyrzt/", 10000, 250)
        assert args[5].lower() == DEPLOYER_ADDRESS
        assert args[6] == 10**16
        assert args[7] is False
        assert args[8].lower() == DEPLOYER_ADDRESS

    def test_gas_limit_has_fixed_margin(self, deployer, wallet, deployment_params):
        wallet.signer.gas_estimate = 1_000_001

        deployer.deploy(deployment_params)

        assert wallet.signer.deployment_transaction["gas"] == 1_500_002

    def test_cost_and_receipt_fields(self, deployer, wallet, deployment_params):
        result = deployer.deploy(deployment_params)

        assert result.gas_used == 1_500_000
        assert result.deployment_cost_wei == 1_500_000 * 5_000_000_000
        assert result.deployment_cost == "0.0075"
        assert result.block_number == 1001
        assert result.explorer_url == f"https://bscscan.com/address/{result.contract_address}"

    def test_cost_uses_sent_price_without_receipt_price(self, deployer, wallet, deployment_params):
        wallet.signer.receipt_gas_price = None
        wallet.signer.transaction_gas_price = 3_000_000_000

        result = deployer.deploy(deployment_params)

        assert result.effective_gas_price == 3_000_000_000
        assert result.deployment_cost == "0.0045"

    def test_public_mint_is_enabled_after_deploy(self, deployer, wallet, deployment_params):
        result = deployer.deploy(deployment_params)

        calls = wallet.signer.contract_calls
        assert len(calls) == 1
        assert calls[0]["to"] == result.contract_address
        assert result.public_mint_enabled is True
        assert result.warnings == ()

    def test_checkpoints_in_order(self, deployer, observer, deployment_params):
        result = deployer.deploy(deployment_params)

        assert observer.names == [
            "deployment_started",
            "transaction_submitted",
            "transaction_mined",
            "verification_passed",
            "post_deploy_configured",
            "deployment_completed",
        ]
        assert observer.args_for("transaction_submitted") == (result.transaction_hash,)
        assert observer.args_for("deployment_completed") == (result,)

    def test_erc1155_uses_its_own_artifact(self, deployer, wallet, deployment_params, artifact_loader):
        result = deployer.deploy(replace(deployment_params, standard=TokenStandard.ERC1155))

        erc1155 = artifact_loader.load(TokenStandard.ERC1155)
        assert wallet.signer.deployment_transaction["data"].startswith(erc1155.bytecode)
        assert result.standard is TokenStandard.ERC1155

    def test_unknown_chain_alias_deploys_to_default_chain(self, deployer, wallet, deployment_params):
        result = deployer.deploy(replace(deployment_params, chain="ETHEREUMM"))

        assert result.chain_id == 56
        assert wallet.switch_requests == []


class TestNetworkSwitching:
    """Wallet on a different chain than the target."""

    def test_switches_once_then_deploys(self, deployer, wallet, observer, deployment_params):
        result = deployer.deploy(replace(deployment_params, chain="ETH"))

        assert wallet.switch_requests == [1]
        assert result.chain_id == 1
        assert result.explorer_url.startswith("https://etherscan.io/address/")
        assert observer.names[:3] == ["deployment_started", "switch_requested", "switch_confirmed"]

    def test_ethereum_and_eth_deploy_to_same_chain(self, artifact_loader, deployment_params):
        chain_ids = set()
        for alias in ("ETHEREUM", "ETH", "eth"):
            wallet = InMemoryWalletProvider(chain_id=56)
            deployer = NFTDeployer(wallet, artifact_loader=artifact_loader, switch_settle_delay=0)
            chain_ids.add(deployer.deploy(replace(deployment_params, chain=alias)).chain_id)

        assert chain_ids == {1}

    def test_rejected_switch_sends_nothing(self, deployer, wallet, observer, deployment_params):
        wallet.switch_behaviour = SwitchBehaviour.REJECT

        with pytest.raises(NetworkSwitchRejected) as exc_info:
            deployer.deploy(replace(deployment_params, chain="POLYGON"))

        assert "Polygon" in str(exc_info.value)
        assert exc_info.value.kind is ErrorKind.NETWORK_SWITCH_REJECTED
        assert wallet.signer.estimate_calls == []
        assert wallet.signer.sent_transactions == []
        assert observer.names[-1] == "deployment_failed"

    def test_chain_missing_from_wallet(self, deployer, wallet, deployment_params):
        wallet.known_chains = {56}

        with pytest.raises(NetworkNotConfigured):
            deployer.deploy(replace(deployment_params, chain="BASE"))

        assert wallet.signer.sent_transactions == []

    def test_signer_on_wrong_chain_after_switch(self, deployer, wallet, deployment_params):
        wallet.signer.chain_id_override = 56

        with pytest.raises(SignerNetworkMismatch):
            deployer.deploy(replace(deployment_params, chain="POLYGON"))

        assert wallet.signer.sent_transactions == []


class TestFailedDeployment:
    """Fatal failures at each step."""

    def test_invalid_params_touch_nothing(self, deployer, wallet, observer, deployment_params):
        with pytest.raises(InvalidDeploymentParams):
            deployer.deploy(replace(deployment_params, royalty_percentage=10_001))

        assert wallet.session_reads == 0
        assert observer.names == ["deployment_failed"]

    @pytest.mark.parametrize("mint_price", ["1e80", "0.0000000000000000015"])
    def test_unrepresentable_mint_price_touches_nothing(
        self, deployer, wallet, observer, deployment_params, mint_price
    ):
        with pytest.raises(InvalidDeploymentParams, match="mintPrice"):
            deployer.deploy(replace(deployment_params, mint_price=mint_price))

        assert wallet.session_reads == 0
        assert wallet.signer.sent_transactions == []
        assert observer.names == ["deployment_failed"]

    def test_missing_artifact(self, wallet, tmp_path, deployment_params):
        deployer = NFTDeployer(wallet, artifact_loader=ArtifactLoader(tmp_path), switch_settle_delay=0)

        with pytest.raises(ArtifactNotFound):
            deployer.deploy(deployment_params)

        assert wallet.session_reads == 0

    def test_wallet_not_connected(self, deployer, wallet, deployment_params):
        wallet.address = None

        with pytest.raises(WalletNotConnected):
            deployer.deploy(deployment_params)

    def test_gas_estimation_failure_sends_nothing(self, deployer, wallet, deployment_params):
        wallet.signer.estimate_error = WalletProviderError("execution reverted", code=-32000)

        with pytest.raises(GasEstimationFailed):
            deployer.deploy(deployment_params)

        assert wallet.signer.sent_transactions == []

    def test_user_rejects_signature(self, deployer, wallet, deployment_params):
        wallet.signer.send_error = WalletProviderError("User denied transaction signature.", code=4001)

        with pytest.raises(UserRejectedSigning):
            deployer.deploy(deployment_params)

    def test_insufficient_funds(self, deployer, wallet, deployment_params):
        wallet.signer.send_error = WalletProviderError("insufficient funds", code="INSUFFICIENT_FUNDS")

        with pytest.raises(InsufficientFunds):
            deployer.deploy(deployment_params)

    def test_reverted_deployment_with_code_fails(self, deployer, wallet, observer, deployment_params):
        wallet.signer.receipt_status = 0

        with pytest.raises(TransactionReverted):
            deployer.deploy(deployment_params)

        assert wallet.signer.contract_calls == []
        assert "verification_failed" in observer.names
        assert "deployment_completed" not in observer.names

    def test_no_code_at_address_fails(self, deployer, wallet, observer, deployment_params):
        wallet.signer.deployed_code = "0x"

        with pytest.raises(DeploymentVerificationFailed):
            deployer.deploy(deployment_params)

        assert wallet.signer.contract_calls == []
        assert observer.names[-2:] == ["verification_failed", "deployment_failed"]

    def test_signature_timeout(self, wallet, artifact_loader, deployment_params):
        release = threading.Event()
        original_send = wallet.signer.send_transaction

        def slow_send(tx):
            release.wait(5)
            return original_send(tx)

        wallet.signer.send_transaction = slow_send
        deployer = NFTDeployer(
            wallet,
            artifact_loader=artifact_loader,
            timeouts=DeploymentTimeouts(signing=0.05),
            switch_settle_delay=0,
        )

        try:
            with pytest.raises(DeploymentTimedOut):
                deployer.deploy(deployment_params)
        finally:
            release.set()

    def test_mining_timeout(self, wallet, observer, artifact_loader, deployment_params):
        wallet.signer.mining_time = 120
        deployer = NFTDeployer(
            wallet,
            artifact_loader=artifact_loader,
            observer=observer,
            timeouts=DeploymentTimeouts(mining=30),
            switch_settle_delay=0,
        )

        with pytest.raises(DeploymentTimedOut) as exc_info:
            deployer.deploy(deployment_params)

        assert exc_info.value.timeout == 30
        assert "to be mined" in str(exc_info.value)
        assert len(wallet.signer.sent_transactions) == 1
        assert wallet.signer.contract_calls == []
        assert "transaction_submitted" in observer.names
        assert "transaction_mined" not in observer.names
        assert observer.names[-1] == "deployment_failed"

    def test_mined_within_timeout(self, wallet, observer, artifact_loader, deployment_params):
        wallet.signer.mining_time = 10
        deployer = NFTDeployer(
            wallet,
            artifact_loader=artifact_loader,
            observer=observer,
            timeouts=DeploymentTimeouts(mining=30),
            switch_settle_delay=0,
        )

        result = deployer.deploy(deployment_params)

        assert result.public_mint_enabled is True
        assert observer.names[-1] == "deployment_completed"

    def test_provider_failure_while_mining(self, deployer, wallet, observer, deployment_params):
        wallet.signer.wait_error = WalletProviderError("Internal JSON-RPC error.", code=-32603)

        with pytest.raises(NetworkError, match="confirm deployment"):
            deployer.deploy(deployment_params)

        assert wallet.signer.contract_calls == []
        assert observer.names[-1] == "deployment_failed"


class TestPostDeployFailure:
    """The toggle transaction fails but the contract exists."""

    def test_rejected_toggle_is_a_warning(self, deployer, wallet, observer, deployment_params):
        wallet.signer.call_error = WalletProviderError("User denied transaction signature.", code=4001)

        result = deployer.deploy(deployment_params)

        assert result.contract_address
        assert result.public_mint_enabled is False
        assert len(result.warnings) == 1
        assert result.warnings[0].kind is ErrorKind.POST_DEPLOY_CONFIG_FAILED
        assert result.warnings[0].action == "enable public minting"
        assert observer.names[-1] == "deployment_completed"

    def test_reverted_toggle_is_a_warning(self, deployer, wallet, deployment_params):
        wallet.signer.call_receipt_status = 0

        result = deployer.deploy(deployment_params)

        assert result.public_mint_enabled is False
        assert result.to_record()["warnings"][0]["kind"] == "post-deploy-config-failed"


class TestDeployNftContract:
    """Test the one-call entry point."""

    def test_accepts_form_record(self, wallet, artifacts_dir, artifact_loader, observer):
        record = {
            "name": "Genesis Apes",
            "symbol": "GAPE",
            "baseTokenURI": "",
            "maxSupply": 5000,
            "royaltyPercentage": 500,
            "mintPrice": "",
            "isPublicMint": True,
            "standard": "ERC1155",
            "chain": "bsc",
        }

        result = deploy_nft_contract(record, wallet, artifacts_source=artifacts_dir, observer=observer)

        erc1155 = artifact_loader.load(TokenStandard.ERC1155)
        args = decode_constructor_args(erc1155, wallet.signer.deployment_transaction)
        assert args[2] == ""
        assert args[6] == 0
        assert args[7] is True
        assert result.standard is TokenStandard.ERC1155
        assert observer.names[-1] == "deployment_completed"

    def test_incomplete_record_is_rejected(self, wallet, artifacts_dir):
        with pytest.raises(InvalidDeploymentParams):
            deploy_nft_contract({"name": "x"}, wallet, artifacts_source=artifacts_dir)
