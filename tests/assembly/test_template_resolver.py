import pytest

from cdkrun.assembly.template_resolver import find_logical_resource_id


def _resource(path=None, resource_type="AWS::Lambda::Function"):
    resource = {"Type": resource_type}
    if path is not None:
        resource["Metadata"] = {"aws:cdk:path": path}
    return resource


@pytest.mark.parametrize("annotation", ["App/Stack/Fn", "App/Stack/Fn/Resource"])
def test_matches_path_or_default_child(annotation):
    template = {"Resources": {"Fn1234": _resource(annotation)}}
    assert find_logical_resource_id(template, "App/Stack/Fn") == "Fn1234"


def test_returns_none_when_path_absent():
    template = {"Resources": {
        "Other": _resource("App/Stack/Other/Resource"),
        "Nested": _resource("App/Stack/Fn/ServiceRole/Resource"),
    }}
    assert find_logical_resource_id(template, "App/Stack/Fn") is None


def test_does_not_match_prefix_of_longer_path():
    template = {"Resources": {"Fn2": _resource("App/Stack/Fn2/Resource")}}
    assert find_logical_resource_id(template, "App/Stack/Fn") is None


def test_first_match_in_document_order_wins():
    template = {"Resources": {
        "First": _resource("App/Stack/Fn/Resource"),
        "Second": _resource("App/Stack/Fn"),
    }}
    assert find_logical_resource_id(template, "App/Stack/Fn") == "First"


@pytest.mark.parametrize("template", [
    {},
    {"Resources": None},
    {"Resources": "not-a-mapping"},
    {"Resources": [{"Metadata": {"aws:cdk:path": "App/Stack/Fn"}}]},
])
def test_templates_without_resource_mapping(template):
    assert find_logical_resource_id(template, "App/Stack/Fn") is None


def test_skips_malformed_declarations():
    template = {"Resources": {
        "Null": None,
        "Text": "oops",
        "NoMetadata": {"Type": "AWS::Lambda::Function"},
        "BadMetadata": {"Type": "AWS::Lambda::Function", "Metadata": "x"},
        "Fn": _resource("App/Stack/Fn/Resource"),
    }}
    assert find_logical_resource_id(template, "App/Stack/Fn") == "Fn"
