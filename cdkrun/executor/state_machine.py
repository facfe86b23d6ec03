# cdkrun/executor/state_machine.py

import asyncio
import json
import logging
from typing import Any, Awaitable, Callable, Optional

from cdkrun.aws.sdk import IAwsSdk
from cdkrun.config import POLL_INTERVAL_SECONDS
from cdkrun.executor.base import BaseExecutor, ExecutionRun
from cdkrun.models import ExecuteResult, ResourceKind
from cdkrun.observability.prometheus_metrics import STATE_MACHINE_POLLS

logger = logging.getLogger(__name__)

RUNNING = "RUNNING"
SUCCEEDED = "SUCCEEDED"


class StateMachineExecutor(BaseExecutor):
    """Starts a Step Functions execution and polls it until it leaves RUNNING."""

    resource_kind = ResourceKind.StateMachine

    def __init__(
        self,
        physical_resource_id: str,
        stepfunctions: Any,
        poll_interval: Optional[float] = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        super().__init__(physical_resource_id)
        self._stepfunctions = stepfunctions
        self._poll_interval = POLL_INTERVAL_SECONDS if poll_interval is None else poll_interval
        self._sleep = sleep

    @classmethod
    def from_sdk(cls, physical_resource_id: str, sdk: IAwsSdk) -> "StateMachineExecutor":
        return cls(physical_resource_id, sdk.stepfunctions())

    @property
    def poll_interval(self) -> float:
        return self._poll_interval

    async def _execute(self, input: Optional[str], run: ExecutionRun) -> ExecuteResult:
        params = {"stateMachineArn": self.physical_resource_id}
        if input is not None:
            params["input"] = input

        execution = await asyncio.to_thread(self._stepfunctions.start_execution, **params)
        execution_arn = run.execution_arn = execution["executionArn"]
        logger.info("Started execution %s", execution_arn)

        while True:
            description = await asyncio.to_thread(
                self._stepfunctions.describe_execution,
                executionArn=execution_arn,
            )
            run.polls += 1
            STATE_MACHINE_POLLS.inc()

            status = description.get("status")
            if status == RUNNING:
                await self._sleep(self._poll_interval)
                continue

            logger.info("Execution %s finished with status %s after %s poll(s)", execution_arn, status, run.polls)

            if status == SUCCEEDED:
                raw_output = description.get("output")
                output = json.loads(raw_output) if raw_output else None
                return ExecuteResult(output=output)

            return ExecuteResult(error=f"State machine execution's final status is {status}")
