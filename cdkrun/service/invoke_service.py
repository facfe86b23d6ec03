import logging
from pathlib import Path
from typing import Any, List, Optional, Sequence, Union

from pydantic import BaseModel

from cdkrun.assembly.cloud_assembly import load_stack_artifacts
from cdkrun.aws.sdk import IAwsSdk
from cdkrun.executor.factory import get_executor
from cdkrun.models import StackArtifact

logger = logging.getLogger(__name__)


class InvokeOutcome(BaseModel):
    construct_path: str
    found: bool = True
    resource_type: Optional[str] = None
    physical_resource_id: Optional[str] = None
    output: Optional[Any] = None
    error: Optional[str] = None


class InvokeService:
    """Loads a cloud assembly and runs one construct in it."""

    def __init__(self, sdk: IAwsSdk):
        self.sdk = sdk

    def load_artifacts(
        self,
        assembly_dir: Union[str, Path],
        stack_names: Optional[Sequence[str]] = None,
    ) -> List[StackArtifact]:
        return load_stack_artifacts(assembly_dir, stack_names)

    async def invoke(
        self,
        construct_path: str,
        stack_artifacts: Sequence[StackArtifact],
        input: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> InvokeOutcome:
        logger.info(f"[invoke] Resolving {construct_path}")
        executor = await get_executor(
            construct_path=construct_path,
            stack_artifacts=stack_artifacts,
            sdk=self.sdk,
        )
        if executor is None:
            return InvokeOutcome(construct_path=construct_path, found=False)

        logger.info(f"[invoke] Executing {executor!r}")
        result = await executor.execute(input, timeout=timeout)
        return InvokeOutcome(
            construct_path=construct_path,
            resource_type=executor.resource_kind.value,
            physical_resource_id=executor.physical_resource_id,
            output=result.output,
            error=result.error,
        )
