import pytest

from cdkrun.assembly.cloud_assembly import list_runnable_constructs, load_stack_artifacts
from cdkrun.errors import AssemblyNotFoundError, ErrorKind
from cdkrun.models import StackArtifact
from conftest import make_template, write_assembly


def test_load_stack_artifacts_in_manifest_order(tmp_path):
    write_assembly(tmp_path, {
        "StackB": ("prod-stack-b", make_template({"Fn": ("StackB/Fn/Resource", "AWS::Lambda::Function")})),
        "StackA": (None, make_template({})),
    })

    artifacts = load_stack_artifacts(tmp_path)

    assert [a.stack_name for a in artifacts] == ["prod-stack-b", "StackA"]
    assert artifacts[0].artifact_id == "StackB"
    assert artifacts[0].template_file == "StackB.template.json"
    assert "Fn" in artifacts[0].template["Resources"]


def test_nested_assemblies_are_expanded(tmp_path):
    write_assembly(tmp_path, {"Root": ("Root", make_template({}))}, nested={"Stage": "assembly-Stage"})
    write_assembly(tmp_path / "assembly-Stage", {"StageStack": ("Stage-Stack", make_template({}))})

    artifacts = load_stack_artifacts(tmp_path)

    assert [a.stack_name for a in artifacts] == ["Root", "Stage-Stack"]


def test_filter_by_stack_name_or_artifact_id(tmp_path):
    write_assembly(tmp_path, {
        "One": ("one", make_template({})),
        "Two": ("two", make_template({})),
        "Three": ("three", make_template({})),
    })

    artifacts = load_stack_artifacts(tmp_path, ["two", "Three"])

    assert [a.stack_name for a in artifacts] == ["two", "three"]


def test_missing_manifest(tmp_path):
    with pytest.raises(AssemblyNotFoundError) as exc_info:
        load_stack_artifacts(tmp_path / "nowhere")
    assert exc_info.value.kind == ErrorKind.AssemblyNotFound


def test_list_runnable_constructs(stack_artifact):
    found = list_runnable_constructs([stack_artifact, StackArtifact(stack_name="Empty")])

    assert found == [
        {
            "stack_name": "AppStack",
            "construct_path": "AppStack/MyStateMachine",
            "logical_resource_id": "MyStateMachine1234",
            "resource_type": "AWS::StepFunctions::StateMachine",
        },
        {
            "stack_name": "AppStack",
            "construct_path": "AppStack/MyFunction",
            "logical_resource_id": "MyFunctionABCD",
            "resource_type": "AWS::Lambda::Function",
        },
    ]
