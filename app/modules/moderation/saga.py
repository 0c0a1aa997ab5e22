"""
Ordered multi-step writes with no transaction behind them.

Steps run in order and stop at the first failure. Nothing is compensated: a
failure before any step committed re-raises the GatewayError untouched, a
failure after that raises PartialCompletionError so the operator knows the
store was left half-updated and needs manual reconciliation.
"""

from app.database.gateway import GatewayError
from typing import Any, Callable, List
import logging

logger = logging.getLogger(__name__)


class PartialCompletionError(Exception):
    def __init__(self, action: str, completed_steps: List[str], failed_step: str, cause: GatewayError):
        super().__init__(
            f"{action} stopped at '{failed_step}' after completing {', '.join(completed_steps)}: {cause.message}"
        )
        self.action = action
        self.completed_steps = completed_steps
        self.failed_step = failed_step
        self.cause = cause


class SagaStep:
    def __init__(self, name: str, run: Callable[[], Any]):
        self.name = name
        self.run = run


class Saga:
    def __init__(self, action: str):
        self.action = action
        self.steps: List[SagaStep] = []

    def step(self, name: str, run: Callable[[], Any]) -> "Saga":
        self.steps.append(SagaStep(name, run))
        return self

    def execute(self) -> List[str]:
        """Run every step in order; returns the names of the completed steps"""
        completed: List[str] = []
        for step in self.steps:
            try:
                step.run()
            except GatewayError as e:
                if not completed:
                    raise
                logger.error(
                    f"{self.action}: step '{step.name}' failed after {completed} committed; "
                    f"store left partially updated: {e.message}"
                )
                raise PartialCompletionError(self.action, list(completed), step.name, e) from e
            completed.append(step.name)
        return completed
