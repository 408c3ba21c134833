"""Optional timeouts around human-timescale suspension points."""

from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from dataclasses import dataclass
from typing import Callable, Optional, TypeVar

from .exceptions import DeploymentTimedOut

T = TypeVar("T")


@dataclass(frozen=True)
class DeploymentTimeouts:
    """
    Per-suspension-point timeouts in seconds. None waits indefinitely.

    - network_switch: waiting for the user to approve a chain switch
    - signing: waiting for the user to sign the deployment transaction
    - mining: waiting for the deployment transaction to be mined
    """

    network_switch: Optional[float] = None
    signing: Optional[float] = None
    mining: Optional[float] = None


def call_with_timeout(func: Callable[[], T], timeout: Optional[float], operation: str) -> T:
    """
    Run func, giving up after timeout seconds.

    The call runs in a worker thread. On expiry the thread is abandoned (the
    wallet prompt cannot be cancelled from here) and DeploymentTimedOut is
    raised. Exceptions raised by func propagate unchanged.

    Args:
        func: Zero-argument callable
        timeout: Seconds, or None to call func directly
        operation: Description used in the timeout message

    Raises:
        DeploymentTimedOut: If func does not return in time
    """
    if timeout is None:
        return func()

    executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="nft-deployer")
    future = executor.submit(func)
    try:
        return future.result(timeout=timeout)
    except FutureTimeoutError as e:
        # On 3.11+ this also catches TimeoutError raised by func itself
        if future.done():
            raise
        future.cancel()
        raise DeploymentTimedOut(operation, timeout) from e
    finally:
        executor.shutdown(wait=False)
