# cdkrun/assembly/template_resolver.py
from typing import Any, Dict, Optional

from cdkrun.assembly.constants import CDK_PATH_DELIMITER, CDK_PATH_METADATA_KEY, DEFAULT_CHILD_ID


def find_logical_resource_id(template: Dict[str, Any], construct_path: str) -> Optional[str]:
    """
    Return the logical id of the resource a construct path produced, or None.

    A resource matches when its ``aws:cdk:path`` metadata equals the construct
    path or the path of its default ``Resource`` child. The first match in
    document order wins.
    """
    l2_path = f"{construct_path}{CDK_PATH_DELIMITER}{DEFAULT_CHILD_ID}"

    resources = template.get("Resources") if isinstance(template, dict) else None
    if not isinstance(resources, dict):
        return None

    for logical_resource_id, resource in resources.items():
        if not isinstance(resource, dict):
            continue

        metadata = resource.get("Metadata")
        if not isinstance(metadata, dict):
            continue

        resource_path = metadata.get(CDK_PATH_METADATA_KEY)
        if resource_path == construct_path or resource_path == l2_path:
            return logical_resource_id

    return None
