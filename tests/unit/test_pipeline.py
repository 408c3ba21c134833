"""Unit tests for the step pipeline."""

import pytest

from nft_deployer.exceptions import ErrorKind, GasEstimationFailed, WalletNotConnected
from nft_deployer.pipeline import Pipeline, StepFailure, StepSuccess, run_step


class TestRunStep:
    """Test run_step()."""

    def test_success_carries_value(self):
        outcome = run_step("double", lambda x: x * 2, 21)
        assert outcome == StepSuccess("double", 42)

    def test_deployment_error_becomes_failure(self):
        error = WalletNotConnected("No wallet connected")

        def step():
            raise error

        outcome = run_step("session", step)

        assert isinstance(outcome, StepFailure)
        assert outcome.step == "session"
        assert outcome.error is error
        assert outcome.kind is ErrorKind.WALLET_NOT_CONNECTED

    def test_other_exceptions_propagate(self):
        def step():
            raise KeyError("bug")

        with pytest.raises(KeyError):
            run_step("broken", step)

    def test_failure_reraises_its_error(self):
        failure = StepFailure("estimate", GasEstimationFailed("reverted"))
        with pytest.raises(GasEstimationFailed, match="reverted"):
            failure.raise_()


class TestPipeline:
    """Test ordered execution and short-circuiting."""

    def test_runs_steps_in_order(self):
        pipeline = Pipeline(
            [
                ("first", lambda ctx: ctx.append("first")),
                ("second", lambda ctx: ctx.append("second")),
                ("third", lambda ctx: ctx.append("third")),
            ]
        )
        context = []

        assert pipeline.run(context) is None
        assert context == ["first", "second", "third"]
        assert pipeline.step_names == ["first", "second", "third"]

    def test_stops_at_first_failure(self):
        def fail(ctx):
            ctx.append("estimate")
            raise GasEstimationFailed("Gas estimation failed")

        pipeline = Pipeline(
            [
                ("session", lambda ctx: ctx.append("session")),
                ("estimate", fail),
                ("submit", lambda ctx: ctx.append("submit")),
            ]
        )
        context = []

        failure = pipeline.run(context)

        assert failure.step == "estimate"
        assert failure.kind is ErrorKind.GAS_ESTIMATION_FAILED
        assert context == ["session", "estimate"]
