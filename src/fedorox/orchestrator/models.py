from enum import Enum
from typing import List, Optional
from pydantic import BaseModel

class RunState(str, Enum):
    NOT_STARTED = "not_started"
    RUNNING = "running"
    COMPLETED = "completed"
    ABORTED = "aborted"

class StepStatus(str, Enum):
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    SKIPPED = "skipped"

class StepOutcome(BaseModel):
    name: str
    status: StepStatus
    error: Optional[str] = None

class RunResult(BaseModel):
    state: RunState
    outcomes: List[StepOutcome] = []
    aborted_reason: Optional[str] = None

    @property
    def exit_code(self) -> int:
        return 1 if self.state == RunState.ABORTED else 0

    @property
    def failed_steps(self) -> List[str]:
        return [o.name for o in self.outcomes if o.status == StepStatus.FAILED]
