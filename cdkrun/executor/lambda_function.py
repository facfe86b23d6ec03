# cdkrun/executor/lambda_function.py

import asyncio
import json
import logging
from typing import Any, Optional

from cdkrun.aws.sdk import IAwsSdk
from cdkrun.errors import EmptyPayloadError
from cdkrun.executor.base import BaseExecutor, ExecutionRun
from cdkrun.models import ExecuteResult, ResourceKind

logger = logging.getLogger(__name__)


def get_lambda_error_message(output: Any) -> Optional[str]:
    if not isinstance(output, dict):
        return None
    return output.get("errorMessage") or None


def _read_payload(payload: Any) -> str:
    # boto3 返回 StreamingBody，测试里也可能直接给 bytes / str
    if payload is None:
        return ""
    if hasattr(payload, "read"):
        payload = payload.read()
    if isinstance(payload, (bytes, bytearray)):
        payload = payload.decode("utf-8")
    return payload


class LambdaFunctionExecutor(BaseExecutor):
    """Invokes a Lambda function synchronously (RequestResponse)."""

    resource_kind = ResourceKind.LambdaFunction

    def __init__(self, physical_resource_id: str, lambda_client: Any):
        super().__init__(physical_resource_id)
        self._lambda = lambda_client

    @classmethod
    def from_sdk(cls, physical_resource_id: str, sdk: IAwsSdk) -> "LambdaFunctionExecutor":
        return cls(physical_resource_id, sdk.lambda_())

    def _invoke(self, input: Optional[str]) -> str:
        params = {"FunctionName": self.physical_resource_id}
        if input is not None:
            params["Payload"] = input

        response = self._lambda.invoke(**params)
        if response.get("FunctionError"):
            logger.info("%s returned FunctionError=%s", self.physical_resource_id, response["FunctionError"])
        return _read_payload(response.get("Payload"))

    async def _execute(self, input: Optional[str], run: ExecutionRun) -> ExecuteResult:
        logger.info("Invoking function %s", self.physical_resource_id)
        payload = await asyncio.to_thread(self._invoke, input)
        if not payload:
            raise EmptyPayloadError(self.physical_resource_id)

        output = json.loads(payload)
        error_message = get_lambda_error_message(output)
        if error_message:
            return ExecuteResult(
                error=f"Lambda returned an error message: {error_message}",
                output=output,
            )

        return ExecuteResult(output=output)
