from enum import Enum
from typing import Any, Dict, Optional
from pydantic import BaseModel, ConfigDict, Field

# -----------------------------
# alias generator
# -----------------------------

def to_pascal_case(s: str) -> str:
    return ''.join(word.capitalize() for word in s.split('_'))

class CfnBase(BaseModel):
    """Models mirroring CloudFormation's PascalCase payloads."""
    model_config = ConfigDict(
        alias_generator=to_pascal_case,
        populate_by_name=True,
        frozen=True,
    )

# -----------------------------
# Resource kinds
# -----------------------------

class ResourceKind(str, Enum):
    StateMachine = "AWS::StepFunctions::StateMachine"
    LambdaFunction = "AWS::Lambda::Function"

    @classmethod
    def from_type(cls, resource_type: Optional[str]) -> Optional["ResourceKind"]:
        try:
            return cls(resource_type)
        except ValueError:
            return None

# -----------------------------
# Cloud assembly / stack
# -----------------------------

class StackResource(CfnBase):
    """One entry of ``describe_stack_resources``."""
    logical_resource_id: str
    physical_resource_id: Optional[str] = None
    resource_type: str
    resource_status: Optional[str] = None

class StackArtifact(BaseModel):
    """A synthesized template and the name of the stack it was deployed as."""
    stack_name: str
    template: Dict[str, Any] = Field(default_factory=dict)
    artifact_id: Optional[str] = None
    template_file: Optional[str] = None

# -----------------------------
# Execution result
# -----------------------------

class ExecuteResult(BaseModel):
    """
    output 为空表示执行失败，error 为空表示执行成功；
    只有 Lambda 返回 errorMessage 时两者同时存在。
    """
    output: Optional[Any] = None
    error: Optional[str] = None
