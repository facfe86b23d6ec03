import json
from unittest.mock import MagicMock

import pytest

from cdkrun.aws.sdk import IAwsSdk
from cdkrun.models import StackArtifact


class FakeSdk(IAwsSdk):
    """IAwsSdk backed by MagicMock clients."""

    def __init__(self):
        self.cloudformation_client = MagicMock(name="cloudformation")
        self.stepfunctions_client = MagicMock(name="stepfunctions")
        self.lambda_client = MagicMock(name="lambda")

    def cloudformation(self):
        return self.cloudformation_client

    def stepfunctions(self):
        return self.stepfunctions_client

    def lambda_(self):
        return self.lambda_client


def make_template(paths: dict) -> dict:
    """{logical_id: (construct_path, resource_type)} -> CloudFormation template"""
    return {
        "Resources": {
            logical_id: {
                "Type": resource_type,
                "Metadata": {"aws:cdk:path": construct_path},
            }
            for logical_id, (construct_path, resource_type) in paths.items()
        }
    }


def write_assembly(root, stacks: dict, nested: dict = None) -> None:
    """Write a minimal cdk.out: {artifact_id: (stack_name, template)}"""
    root.mkdir(parents=True, exist_ok=True)
    artifacts = {}
    for artifact_id, (stack_name, template) in stacks.items():
        template_file = f"{artifact_id}.template.json"
        (root / template_file).write_text(json.dumps(template), encoding="utf-8")
        properties = {"templateFile": template_file}
        if stack_name:
            properties["stackName"] = stack_name
        artifacts[artifact_id] = {"type": "aws:cloudformation:stack", "properties": properties}
    for artifact_id, directory_name in (nested or {}).items():
        artifacts[artifact_id] = {
            "type": "cdk:cloud-assembly",
            "properties": {"directoryName": directory_name},
        }
    artifacts["Tree"] = {"type": "cdk:tree", "properties": {"file": "tree.json"}}
    manifest = {"version": "36.0.0", "artifacts": artifacts}
    (root / "manifest.json").write_text(json.dumps(manifest), encoding="utf-8")


@pytest.fixture
def sdk() -> FakeSdk:
    return FakeSdk()


@pytest.fixture
def stack_artifact() -> StackArtifact:
    return StackArtifact(
        stack_name="AppStack",
        template=make_template({
            "MyStateMachine1234": ("AppStack/MyStateMachine/Resource", "AWS::StepFunctions::StateMachine"),
            "MyFunctionABCD": ("AppStack/MyFunction/Resource", "AWS::Lambda::Function"),
            "MyQueue0000": ("AppStack/MyQueue/Resource", "AWS::SQS::Queue"),
        }),
    )
