# cdkrun/aws/stack_resources.py

import asyncio
import logging
from typing import List, Optional

from cdkrun.aws.sdk import IAwsSdk
from cdkrun.errors import ResourceListUnavailableError
from cdkrun.models import StackResource

logger = logging.getLogger(__name__)


class LazyListStackResources:
    """
    Resources of one deployed stack, fetched on first use and then kept.

    The listing is a snapshot for the lifetime of the instance; later calls
    never go back to CloudFormation. Concurrent first callers share a single
    ``describe_stack_resources`` call.
    """

    def __init__(self, sdk: IAwsSdk, stack_name: str):
        self.cloudformation = sdk.cloudformation()
        self.stack_name = stack_name
        self._stack_resources: Optional[List[StackResource]] = None
        self._lock = asyncio.Lock()

    @property
    def fetched(self) -> bool:
        return self._stack_resources is not None

    async def list_stack_resources(self) -> List[StackResource]:
        if self._stack_resources is None:
            async with self._lock:
                if self._stack_resources is None:
                    self._stack_resources = await self._list_stack_resources_actual()
        return self._stack_resources

    async def find(self, logical_resource_id: str) -> Optional[StackResource]:
        for resource in await self.list_stack_resources():
            if resource.logical_resource_id == logical_resource_id:
                return resource
        return None

    async def _list_stack_resources_actual(self) -> List[StackResource]:
        logger.info("Listing resources of stack %s", self.stack_name)
        res = await asyncio.to_thread(
            self.cloudformation.describe_stack_resources,
            StackName=self.stack_name,
        )

        stack_resources = res.get("StackResources") if res else None
        if stack_resources is None:
            raise ResourceListUnavailableError(self.stack_name)

        return [StackResource.model_validate(r) for r in stack_resources]
