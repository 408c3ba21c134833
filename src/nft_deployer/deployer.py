"""Main API for nft-deployer library."""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .artifacts import ArtifactLoader
from .chains import ChainRegistry
from .configurator import PublicMintConfigurator
from .exceptions import DeploymentVerificationFailed, TransactionReverted
from .executor import DeploymentExecutor
from .gas import GasEstimate, GasEstimator, build_constructor_args, build_deploy_transaction
from .network import NetworkReconciler, ReconcileState, verify_signer_network
from .observer import DeploymentObserver, LoggingObserver
from .pipeline import Pipeline
from .reporter import build_result
from .timeouts import DeploymentTimeouts
from .types import (
    ChainDescriptor,
    ContractArtifact,
    DeploymentParams,
    DeploymentResult,
    DeploymentWarning,
    TransactionReceipt,
    WalletSession,
)
from .verifier import verify_deployment
from .wallet import PendingTransaction, Signer, WalletProvider, WalletSessionAdapter


@dataclass
class DeploymentContext:
    """State owned by a single deploy() invocation."""

    params: DeploymentParams
    chain: Optional[ChainDescriptor] = None
    artifact: Optional[ContractArtifact] = None
    session: Optional[WalletSession] = None
    reconcile_state: Optional[ReconcileState] = None
    signer: Optional[Signer] = None
    constructor_args: List[Any] = field(default_factory=list)
    transaction: Dict[str, Any] = field(default_factory=dict)
    gas: Optional[GasEstimate] = None
    pending: Optional[PendingTransaction] = None
    receipt: Optional[TransactionReceipt] = None
    contract_address: Optional[str] = None
    warnings: List[DeploymentWarning] = field(default_factory=list)
    result: Optional[DeploymentResult] = None


class NFTDeployer:
    """Deploys NFT collection contracts through a user's wallet."""

    def __init__(
        self,
        provider: WalletProvider,
        registry: Optional[ChainRegistry] = None,
        artifact_loader: Optional[ArtifactLoader] = None,
        observer: Optional[DeploymentObserver] = None,
        timeouts: Optional[DeploymentTimeouts] = None,
        switch_settle_delay: float = 1.0,
    ):
        """
        Initialize the deployer.

        Args:
            provider: The user's wallet
            registry: Chain registry (defaults to the built-in chain table)
            artifact_loader: Artifact loader (defaults to $NFT_ARTIFACTS_URL,
                             $NFT_ARTIFACTS_DIR or ./contracts/nft)
            observer: Checkpoint observer (defaults to LoggingObserver)
            timeouts: Timeouts for network switch, signing and mining
                      (defaults to waiting indefinitely)
            switch_settle_delay: Seconds to wait after a network switch
                                 before re-reading the wallet
        """
        self.session_adapter = WalletSessionAdapter(provider)
        self.registry = registry or ChainRegistry()
        self.artifact_loader = artifact_loader or ArtifactLoader()
        self.observer = observer or LoggingObserver()
        self.timeouts = timeouts or DeploymentTimeouts()
        self.reconciler = NetworkReconciler(
            self.session_adapter,
            observer=self.observer,
            switch_timeout=self.timeouts.network_switch,
            settle_delay=switch_settle_delay,
        )
        self.gas_estimator = GasEstimator()
        self.executor = DeploymentExecutor(
            observer=self.observer,
            signing_timeout=self.timeouts.signing,
            mining_timeout=self.timeouts.mining,
        )
        self.configurator = PublicMintConfigurator(
            signing_timeout=self.timeouts.signing,
            mining_timeout=self.timeouts.mining,
        )
        self.pipeline: Pipeline[DeploymentContext] = Pipeline(
            [
                ("validate", self._validate),
                ("resolve", self._resolve_chain_and_artifact),
                ("session", self._open_session),
                ("reconcile", self._reconcile_network),
                ("signer", self._prepare_signer),
                ("estimate", self._estimate_gas),
                ("submit", self._submit),
                ("mine", self._await_mining),
                ("verify", self._verify),
                ("configure", self._configure),
                ("report", self._report),
            ]
        )

    def deploy(self, params: DeploymentParams) -> DeploymentResult:
        """
        Deploy an NFT collection contract.

        Args:
            params: Collection parameters

        Returns:
            DeploymentResult for the verified contract; check .warnings for
            non-fatal post-deployment problems

        Raises:
            DeploymentError: Subclass describing the first fatal failure
            InvariantViolation: If result assembly finds inconsistent state
        """
        context = DeploymentContext(params=params)
        failure = self.pipeline.run(context)
        if failure is not None:
            self.observer.deployment_failed(failure.error)
            failure.raise_()

        self.observer.deployment_completed(context.result)
        return context.result

    # Steps, in pipeline order

    def _validate(self, ctx: DeploymentContext) -> None:
        ctx.params.validate()
        self.observer.deployment_started(ctx.params)

    def _resolve_chain_and_artifact(self, ctx: DeploymentContext) -> None:
        with ThreadPoolExecutor(max_workers=2, thread_name_prefix="nft-deployer") as pool:
            chain_future = pool.submit(self.registry.resolve_or_default, ctx.params.chain)
            artifact_future = pool.submit(self.artifact_loader.load, ctx.params.standard)
            ctx.chain = chain_future.result()
            ctx.artifact = artifact_future.result()

    def _open_session(self, ctx: DeploymentContext) -> None:
        ctx.session = self.session_adapter.get_session()

    def _reconcile_network(self, ctx: DeploymentContext) -> None:
        reconciliation = self.reconciler.reconcile(ctx.chain, ctx.session)
        ctx.reconcile_state = reconciliation.state
        ctx.session = reconciliation.session

    def _prepare_signer(self, ctx: DeploymentContext) -> None:
        ctx.signer = self.session_adapter.get_signer()
        verify_signer_network(ctx.signer, ctx.chain)

    def _estimate_gas(self, ctx: DeploymentContext) -> None:
        ctx.constructor_args = build_constructor_args(ctx.params, ctx.session.address)
        ctx.transaction = build_deploy_transaction(ctx.artifact, ctx.constructor_args, ctx.session.address)
        ctx.gas = self.gas_estimator.estimate(ctx.signer, ctx.transaction)

    def _submit(self, ctx: DeploymentContext) -> None:
        ctx.pending = self.executor.submit(ctx.signer, ctx.transaction, ctx.gas.gas_limit)

    def _await_mining(self, ctx: DeploymentContext) -> None:
        ctx.receipt = self.executor.await_mining(ctx.pending)

    def _verify(self, ctx: DeploymentContext) -> None:
        try:
            ctx.contract_address = verify_deployment(ctx.signer, ctx.receipt)
        except (TransactionReverted, DeploymentVerificationFailed) as e:
            self.observer.verification_failed(e)
            raise
        self.observer.verification_passed(ctx.contract_address)

    def _configure(self, ctx: DeploymentContext) -> None:
        warning = self.configurator.enable_public_mint(ctx.signer, ctx.artifact, ctx.contract_address)
        if warning is not None:
            ctx.warnings.append(warning)
        self.observer.post_deploy_configured(ctx.contract_address, warning)

    def _report(self, ctx: DeploymentContext) -> None:
        ctx.result = build_result(
            ctx.receipt,
            ctx.pending,
            ctx.contract_address,
            ctx.chain,
            ctx.params.standard,
            ctx.warnings,
        )


def deploy_nft_contract(
    params: Union[DeploymentParams, Dict[str, Any]],
    provider: WalletProvider,
    artifacts_source: Optional[Union[Path, str]] = None,
    observer: Optional[DeploymentObserver] = None,
    timeouts: Optional[DeploymentTimeouts] = None,
) -> DeploymentResult:
    """
    Deploy an NFT collection contract in one call.

    Args:
        params: DeploymentParams, or the camelCase dict submitted by the platform form
        provider: The user's wallet
        artifacts_source: Directory or base URL of the contract artifacts
                          (defaults to $NFT_ARTIFACTS_URL, $NFT_ARTIFACTS_DIR
                          or ./contracts/nft)
        observer: Checkpoint observer (defaults to LoggingObserver)
        timeouts: Suspension-point timeouts (defaults to none)

    Returns:
        DeploymentResult

    Raises:
        DeploymentError: Subclass describing the first fatal failure
    """
    if isinstance(params, dict):
        params = DeploymentParams.from_dict(params)

    deployer = NFTDeployer(
        provider,
        artifact_loader=ArtifactLoader(artifacts_source),
        observer=observer,
        timeouts=timeouts,
    )
    return deployer.deploy(params)
