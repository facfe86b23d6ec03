"""Errors raised while resolving or executing a construct.

Every error carries a ``kind`` tag plus the context it was raised with, so
callers can branch on ``err.kind`` instead of parsing messages. Failures the
resource itself reports (a failed execution, a Lambda ``errorMessage``) are
not errors here: they come back in ``ExecuteResult.error``.
"""

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    ResourceListUnavailable = "ResourceListUnavailable"
    PhysicalResourceNotFound = "PhysicalResourceNotFound"
    UnsupportedResourceType = "UnsupportedResourceType"
    InvalidInput = "InvalidInput"
    EmptyPayload = "EmptyPayload"
    ExecutionTimeout = "ExecutionTimeout"
    AssemblyNotFound = "AssemblyNotFound"


class CdkRunError(Exception):
    kind: ErrorKind

    def to_dict(self) -> dict:
        return {"kind": self.kind.value, "message": str(self)}


class ResourceListUnavailableError(CdkRunError):
    kind = ErrorKind.ResourceListUnavailable

    def __init__(self, stack_name: str):
        self.stack_name = stack_name
        super().__init__(f"Stack resources not available for stack {stack_name}")


class PhysicalResourceNotFoundError(CdkRunError):
    kind = ErrorKind.PhysicalResourceNotFound

    def __init__(self, construct_path: str, logical_resource_id: str, stack_name: str):
        self.construct_path = construct_path
        self.logical_resource_id = logical_resource_id
        self.stack_name = stack_name
        super().__init__(f"Could not find the physical resource id for {construct_path}")


class UnsupportedResourceTypeError(CdkRunError):
    kind = ErrorKind.UnsupportedResourceType

    def __init__(self, construct_path: str, resource_type: Optional[str]):
        self.construct_path = construct_path
        self.resource_type = resource_type
        super().__init__(f"Unsupported resource type {resource_type}")


class InvalidInputError(CdkRunError):
    kind = ErrorKind.InvalidInput

    def __init__(self, input: str):
        self.input = input
        super().__init__("The provided input should be a JSON object")


class EmptyPayloadError(CdkRunError):
    kind = ErrorKind.EmptyPayload

    def __init__(self, function_name: str):
        self.function_name = function_name
        super().__init__("Lambda invocation did not return a payload")


class ExecutionTimeoutError(CdkRunError):
    kind = ErrorKind.ExecutionTimeout

    def __init__(self, resource_id: str, timeout: float, execution_arn: Optional[str] = None):
        self.resource_id = resource_id
        self.timeout = timeout
        # 超时后远端执行仍在运行，带上 execution ARN 方便查询或停止
        self.execution_arn = execution_arn
        message = f"Execution of {resource_id} did not finish within {timeout}s"
        if execution_arn:
            message += f" (execution {execution_arn} is still running)"
        super().__init__(message)

    def to_dict(self) -> dict:
        data = super().to_dict()
        if self.execution_arn:
            data["execution_arn"] = self.execution_arn
        return data


class AssemblyNotFoundError(CdkRunError):
    kind = ErrorKind.AssemblyNotFound

    def __init__(self, assembly_dir: str):
        self.assembly_dir = assembly_dir
        super().__init__(f"No cloud assembly manifest found in {assembly_dir}")
