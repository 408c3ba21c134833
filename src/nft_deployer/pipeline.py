"""Ordered step execution with tagged success/failure outcomes."""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Generic, List, Optional, Sequence, Tuple, TypeVar, Union

from .exceptions import DeploymentError, ErrorKind

logger = logging.getLogger(__name__)

C = TypeVar("C")


@dataclass(frozen=True)
class StepSuccess:
    step: str
    value: Any = None


@dataclass(frozen=True)
class StepFailure:
    step: str
    error: DeploymentError

    @property
    def kind(self) -> ErrorKind:
        return self.error.kind

    def raise_(self) -> None:
        raise self.error


StepOutcome = Union[StepSuccess, StepFailure]


def run_step(step: str, func: Callable[..., Any], *args: Any) -> StepOutcome:
    """
    Run one step, tagging a DeploymentError as a StepFailure.

    Any other exception is a programming error and propagates.
    """
    logger.debug("Running step %s", step)
    try:
        return StepSuccess(step, func(*args))
    except DeploymentError as e:
        return StepFailure(step, e)


class Pipeline(Generic[C]):
    """
    Named steps executed strictly in order against a shared context.

    Execution stops at the first StepFailure. Nothing is retried.
    """

    def __init__(self, steps: Sequence[Tuple[str, Callable[[C], Any]]]):
        self.steps = list(steps)

    @property
    def step_names(self) -> List[str]:
        return [name for name, _ in self.steps]

    def run(self, context: C) -> Optional[StepFailure]:
        """
        Run all steps.

        Returns:
            The first StepFailure, or None if every step succeeded
        """
        for name, func in self.steps:
            outcome = run_step(name, func, context)
            if isinstance(outcome, StepFailure):
                logger.debug("Step %s failed with %s", name, outcome.kind.value)
                return outcome
        return None
