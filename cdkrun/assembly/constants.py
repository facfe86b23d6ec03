"""
Cloud assembly constants
"""
MANIFEST_FILENAME = "manifest.json"

STACK_TYPE = "aws:cloudformation:stack"
NESTED_ASSEMBLY_TYPE = "cdk:cloud-assembly"

CDK_PATH_DELIMITER = "/"
CDK_PATH_METADATA_KEY = "aws:cdk:path"

# L2 constructs put their CfnResource under a child named "Resource"
DEFAULT_CHILD_ID = "Resource"
