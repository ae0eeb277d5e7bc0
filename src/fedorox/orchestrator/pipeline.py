import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Union

from fedorox.errors import ProvisionAborted
from fedorox.orchestrator.models import RunResult, RunState, StepOutcome, StepStatus

logger = logging.getLogger(__name__)

StepReturn = Union[bool, StepStatus, None]


@dataclass(frozen=True)
class Step:
    """A named unit of work.

    `action` returns True/None on success, False on a logged failure, or a
    StepStatus. A fatal step aborts the run when it raises.
    """

    name: str
    action: Callable[[], StepReturn]
    fatal: bool = False


@dataclass(frozen=True)
class Precondition:
    message: str
    check: Callable[[], bool]


def _status_from(value: StepReturn) -> StepStatus:
    if isinstance(value, StepStatus):
        return value
    if value is False:
        return StepStatus.FAILED
    return StepStatus.SUCCEEDED


class Orchestrator:
    def __init__(self, steps: Sequence[Step], preconditions: Sequence[Precondition] = ()):
        self.steps = list(steps)
        self.preconditions = list(preconditions)
        self.state = RunState.NOT_STARTED

    def _abort(self, outcomes: List[StepOutcome], reason: str) -> RunResult:
        self.state = RunState.ABORTED
        return RunResult(state=self.state, outcomes=outcomes, aborted_reason=reason)

    def run(self) -> RunResult:
        """Run every step once, in order. Nothing is retried."""
        outcomes: List[StepOutcome] = []

        for precondition in self.preconditions:
            if not precondition.check():
                logger.error(precondition.message)
                return self._abort(outcomes, precondition.message)

        self.state = RunState.RUNNING
        for step in self.steps:
            logger.info(f"Running step {step.name}")
            error: Optional[str] = None
            try:
                status = _status_from(step.action())
            except ProvisionAborted as e:
                outcomes.append(StepOutcome(name=step.name, status=StepStatus.FAILED, error=e.reason))
                return self._abort(outcomes, e.reason)
            except Exception as e:
                if step.fatal:
                    logger.exception(f"Step {step.name} failed")
                    outcomes.append(StepOutcome(name=step.name, status=StepStatus.FAILED, error=str(e)))
                    return self._abort(outcomes, f"{step.name}: {e}")
                logger.error(f"Step {step.name} failed: {e}")
                status, error = StepStatus.FAILED, str(e)

            if status == StepStatus.FAILED and error is None:
                logger.error(f"Step {step.name} reported failure")
            outcomes.append(StepOutcome(name=step.name, status=status, error=error))

        self.state = RunState.COMPLETED
        return RunResult(state=self.state, outcomes=outcomes)
