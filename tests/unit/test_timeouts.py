"""Unit tests for suspension-point timeouts."""

import threading

import pytest

from nft_deployer.exceptions import DeploymentTimedOut, WalletProviderError
from nft_deployer.timeouts import DeploymentTimeouts, call_with_timeout


class TestCallWithTimeout:
    """Test the call_with_timeout function."""

    def test_no_timeout_calls_directly(self):
        caller = []

        def func():
            caller.append(threading.current_thread())
            return "done"

        assert call_with_timeout(func, None, "anything") == "done"
        assert caller == [threading.current_thread()]

    def test_returns_value_within_timeout(self):
        assert call_with_timeout(lambda: 42, 5, "answer") == 42

    def test_expired_timeout_raises(self):
        release = threading.Event()
        try:
            with pytest.raises(DeploymentTimedOut) as exc_info:
                call_with_timeout(lambda: release.wait(5), 0.05, "network switch to Polygon")
        finally:
            release.set()

        assert exc_info.value.operation == "network switch to Polygon"
        assert exc_info.value.timeout == 0.05

    def test_timed_out_is_a_timeout_error(self):
        release = threading.Event()
        try:
            with pytest.raises(TimeoutError):
                call_with_timeout(lambda: release.wait(5), 0.05, "signature")
        finally:
            release.set()

    def test_function_errors_propagate_unchanged(self):
        def func():
            raise WalletProviderError("User rejected the request.", code=4001)

        with pytest.raises(WalletProviderError) as exc_info:
            call_with_timeout(func, 5, "network switch")
        assert exc_info.value.code == 4001


class TestDeploymentTimeouts:
    def test_defaults_wait_indefinitely(self):
        timeouts = DeploymentTimeouts()
        assert timeouts.network_switch is None
        assert timeouts.signing is None
        assert timeouts.mining is None
