# cdkrun/api/routes.py
import json
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException

from cdkrun.assembly.cloud_assembly import list_runnable_constructs, load_stack_artifacts
from cdkrun.aws.sdk import AwsSdk, IAwsSdk
from cdkrun.config import ASSEMBLY_DIR
from cdkrun.errors import AssemblyNotFoundError, CdkRunError
from cdkrun.service.invoke_service import InvokeService
from .schemas import InvokeRequest, InvokeResponse, RunnableConstruct

router = APIRouter(tags=["invoke"])

logger = logging.getLogger(__name__)

_sdk: Optional[IAwsSdk] = None


def get_sdk() -> IAwsSdk:
    # boto3 session 按进程复用
    global _sdk
    if _sdk is None:
        _sdk = AwsSdk()
    return _sdk


@router.get("/constructs", response_model=List[RunnableConstruct])
def list_constructs_api(assembly_dir: Optional[str] = None):
    try:
        artifacts = load_stack_artifacts(assembly_dir or ASSEMBLY_DIR)
    except AssemblyNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.to_dict())
    return list_runnable_constructs(artifacts)


@router.post("/invoke", response_model=InvokeResponse)
async def invoke_api(req: InvokeRequest, sdk: IAwsSdk = Depends(get_sdk)):
    service = InvokeService(sdk)
    input_str = json.dumps(req.input) if req.input is not None else None

    try:
        artifacts = service.load_artifacts(req.assembly_dir or ASSEMBLY_DIR, req.stack_names)
        outcome = await service.invoke(req.construct_path, artifacts, input=input_str, timeout=req.timeout)
    except AssemblyNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.to_dict())
    except CdkRunError as e:
        logger.warning("Invoke of %s failed: %s", req.construct_path, e)
        raise HTTPException(status_code=400, detail=e.to_dict())

    if not outcome.found:
        raise HTTPException(status_code=404, detail=f"No resource found for {req.construct_path}")

    return InvokeResponse(**outcome.model_dump(exclude={"found"}))
