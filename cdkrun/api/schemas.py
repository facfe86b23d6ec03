# cdkrun/api/schemas.py
from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional

class InvokeRequest(BaseModel):
    construct_path: str
    assembly_dir: Optional[str] = None
    stack_names: Optional[List[str]] = None
    input: Optional[Dict[str, Any]] = None
    timeout: Optional[float] = Field(None, gt=0)

class InvokeResponse(BaseModel):
    construct_path: str
    resource_type: str
    physical_resource_id: str
    output: Optional[Any] = None
    error: Optional[str] = None

class RunnableConstruct(BaseModel):
    stack_name: str
    construct_path: str
    logical_resource_id: str
    resource_type: str
