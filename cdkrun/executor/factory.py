# cdkrun/executor/factory.py

import logging
from typing import Dict, Optional, Sequence, Type, Union

from cdkrun.assembly.template_resolver import find_logical_resource_id
from cdkrun.aws.sdk import IAwsSdk
from cdkrun.aws.stack_resources import LazyListStackResources
from cdkrun.errors import PhysicalResourceNotFoundError, UnsupportedResourceTypeError
from cdkrun.executor.lambda_function import LambdaFunctionExecutor
from cdkrun.executor.state_machine import StateMachineExecutor
from cdkrun.models import ResourceKind, StackArtifact
from cdkrun.observability.trace_utils import set_span_attributes, traced_span

logger = logging.getLogger(__name__)

Executor = Union[StateMachineExecutor, LambdaFunctionExecutor]

# 资源类型 -> 执行器
EXECUTOR_TYPES: Dict[ResourceKind, Type[Executor]] = {
    ResourceKind.StateMachine: StateMachineExecutor,
    ResourceKind.LambdaFunction: LambdaFunctionExecutor,
}


async def get_executor(
    construct_path: str,
    stack_artifacts: Sequence[StackArtifact],
    sdk: IAwsSdk,
) -> Optional[Executor]:
    """
    Find the deployed resource behind ``construct_path`` and build its executor.

    Stacks are searched in the given order and the search stops at the first
    template that declares the path. Returns None when no template does.
    """
    async with traced_span("cdkrun.get_executor", construct_path=construct_path) as span:
        for stack_artifact in stack_artifacts:
            logical_resource_id = find_logical_resource_id(stack_artifact.template, construct_path)
            if not logical_resource_id:
                # Not found in this stack artifact
                continue

            logger.info(
                "%s resolved to %s in stack %s",
                construct_path, logical_resource_id, stack_artifact.stack_name,
            )
            set_span_attributes(span, logical_resource_id=logical_resource_id, stack_name=stack_artifact.stack_name)

            stack_resources = LazyListStackResources(sdk, stack_artifact.stack_name)
            stack_resource = await stack_resources.find(logical_resource_id)

            if stack_resource is None or not stack_resource.physical_resource_id:
                raise PhysicalResourceNotFoundError(
                    construct_path, logical_resource_id, stack_artifact.stack_name,
                )

            kind = ResourceKind.from_type(stack_resource.resource_type)
            if kind is None:
                raise UnsupportedResourceTypeError(construct_path, stack_resource.resource_type)

            set_span_attributes(span, resource_type=kind.value)
            return EXECUTOR_TYPES[kind].from_sdk(stack_resource.physical_resource_id, sdk)

        logger.info("%s not found in %s stack(s)", construct_path, len(stack_artifacts))
        return None
