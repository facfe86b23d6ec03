# cdkrun/assembly/cloud_assembly.py

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

from cdkrun.assembly.constants import (
    CDK_PATH_DELIMITER,
    CDK_PATH_METADATA_KEY,
    DEFAULT_CHILD_ID,
    MANIFEST_FILENAME,
    NESTED_ASSEMBLY_TYPE,
    STACK_TYPE,
)
from cdkrun.errors import AssemblyNotFoundError
from cdkrun.models import ResourceKind, StackArtifact

logger = logging.getLogger(__name__)


def load_manifest(assembly_dir: Union[str, Path]) -> dict:
    path = Path(assembly_dir) / MANIFEST_FILENAME
    if not path.is_file():
        raise AssemblyNotFoundError(str(assembly_dir))
    with open(path, 'r', encoding='utf-8') as f:
        return json.load(f)


def load_template(assembly_dir: Union[str, Path], template_file: str) -> dict:
    path = Path(assembly_dir) / template_file
    with open(path, 'r', encoding='utf-8') as f:
        return json.load(f)


def load_stack_artifacts(
    assembly_dir: Union[str, Path],
    stack_names: Optional[Iterable[str]] = None,
) -> List[StackArtifact]:
    """
    读取 cdk.out/manifest.json，按 manifest 顺序返回所有 stack artifact。
    嵌套的 cloud assembly（Stage）会递归展开；传入 stack_names 时只保留这些 stack。
    """
    wanted = set(stack_names) if stack_names else None
    artifacts = _collect_stack_artifacts(Path(assembly_dir))
    if wanted is not None:
        artifacts = [a for a in artifacts if a.stack_name in wanted or a.artifact_id in wanted]

    logger.info("Loaded %s stack artifact(s) from %s", len(artifacts), assembly_dir)
    return artifacts


def _collect_stack_artifacts(assembly_dir: Path) -> List[StackArtifact]:
    manifest = load_manifest(assembly_dir)
    result: List[StackArtifact] = []

    for artifact_id, artifact in (manifest.get("artifacts") or {}).items():
        artifact_type = artifact.get("type")
        properties = artifact.get("properties") or {}

        if artifact_type == STACK_TYPE:
            template_file = properties.get("templateFile")
            if not template_file:
                logger.warning("Stack artifact %s has no templateFile, skipping", artifact_id)
                continue
            result.append(StackArtifact(
                stack_name=properties.get("stackName") or artifact_id,
                template=load_template(assembly_dir, template_file),
                artifact_id=artifact_id,
                template_file=template_file,
            ))
        elif artifact_type == NESTED_ASSEMBLY_TYPE:
            directory_name = properties.get("directoryName")
            if directory_name:
                result.extend(_collect_stack_artifacts(assembly_dir / directory_name))

    return result


def list_runnable_constructs(stack_artifacts: List[StackArtifact]) -> List[Dict[str, Any]]:
    """Construct paths of every state machine and Lambda function in the given stacks."""
    suffix = f"{CDK_PATH_DELIMITER}{DEFAULT_CHILD_ID}"
    found: List[Dict[str, Any]] = []

    for artifact in stack_artifacts:
        resources = artifact.template.get("Resources")
        if not isinstance(resources, dict):
            continue

        for logical_resource_id, resource in resources.items():
            if not isinstance(resource, dict):
                continue
            if ResourceKind.from_type(resource.get("Type")) is None:
                continue

            metadata = resource.get("Metadata")
            path = metadata.get(CDK_PATH_METADATA_KEY) if isinstance(metadata, dict) else None
            if not path:
                continue
            if path.endswith(suffix):
                path = path[: -len(suffix)]

            found.append({
                "stack_name": artifact.stack_name,
                "construct_path": path,
                "logical_resource_id": logical_resource_id,
                "resource_type": resource["Type"],
            })

    return found
