# cdkrun/executor/base.py

import asyncio
import json
import logging
import time
from abc import ABC, abstractmethod
from typing import ClassVar, Optional

from cdkrun.aws.sdk import IAwsSdk
from cdkrun.config import EXECUTE_TIMEOUT_SECONDS
from cdkrun.errors import ExecutionTimeoutError, InvalidInputError
from cdkrun.models import ExecuteResult, ResourceKind
from cdkrun.observability.prometheus_metrics import EXECUTIONS, EXECUTION_DURATION
from cdkrun.observability.trace_utils import set_span_attributes, traced_span

logger = logging.getLogger(__name__)


def is_json_object(text: str) -> bool:
    try:
        return isinstance(json.loads(text), dict)
    except (ValueError, RecursionError):
        return False


def validate_json_object_input(input: Optional[str]) -> None:
    if input and not is_json_object(input):
        raise InvalidInputError(input)


class ExecutionRun:
    """Per-call state an executor fills in while it runs."""

    def __init__(self):
        self.execution_arn: Optional[str] = None
        self.polls = 0


class BaseExecutor(ABC):
    """
    Runs one deployed resource and blocks until it has a result.

    Subclasses bind the physical resource id and a boto3 client at
    construction; neither changes afterwards. Anything learned during one
    call goes on that call's ``ExecutionRun``.
    """

    resource_kind: ClassVar[ResourceKind]

    def __init__(self, physical_resource_id: str):
        self._physical_resource_id = physical_resource_id

    @property
    def physical_resource_id(self) -> str:
        return self._physical_resource_id

    @classmethod
    @abstractmethod
    def from_sdk(cls, physical_resource_id: str, sdk: IAwsSdk) -> "BaseExecutor": ...

    async def execute(self, input: Optional[str] = None, timeout: Optional[float] = None) -> ExecuteResult:
        """
        Validate ``input`` and run the resource.

        ``timeout`` (seconds) falls back to CDKRUN_EXECUTE_TIMEOUT; with neither
        set the call waits as long as the resource runs.
        """
        validate_json_object_input(input)

        if timeout is None:
            timeout = EXECUTE_TIMEOUT_SECONDS
        if timeout is not None and timeout <= 0:
            raise ValueError(f"timeout must be positive, got {timeout}")

        resource_type = self.resource_kind.value
        status_label = "success"
        started = time.perf_counter()
        run = ExecutionRun()

        async with traced_span(
            "cdkrun.execute",
            resource_type=resource_type,
            physical_resource_id=self.physical_resource_id,
            timeout_seconds=timeout,
        ) as span:
            try:
                if timeout is None:
                    result = await self._execute(input, run)
                else:
                    try:
                        result = await asyncio.wait_for(self._execute(input, run), timeout=timeout)
                    except asyncio.TimeoutError:
                        status_label = "timeout"
                        raise ExecutionTimeoutError(
                            self.physical_resource_id, timeout, execution_arn=run.execution_arn,
                        )

                if result.error is not None:
                    status_label = "error"
                    logger.info("%s reported an error: %s", self.physical_resource_id, result.error)
                return result
            except BaseException:
                if status_label == "success":
                    status_label = "fail"
                raise
            finally:
                set_span_attributes(
                    span,
                    status=status_label,
                    execution_arn=run.execution_arn,
                    polls=run.polls or None,
                )
                EXECUTION_DURATION.labels(resource_type).observe(time.perf_counter() - started)
                EXECUTIONS.labels(resource_type, status_label).inc()

    @abstractmethod
    async def _execute(self, input: Optional[str], run: ExecutionRun) -> ExecuteResult: ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.physical_resource_id!r})"
