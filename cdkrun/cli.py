import asyncio
import json

import click
from botocore.exceptions import BotoCoreError, ClientError

from cdkrun.assembly.cloud_assembly import list_runnable_constructs, load_stack_artifacts
from cdkrun.aws.sdk import AwsSdk
from cdkrun.config import ASSEMBLY_DIR
from cdkrun.errors import CdkRunError
from cdkrun.observability.otel_tracing import init_tracer
from cdkrun.service.invoke_service import InvokeService
from cdkrun.utils.logger import log_error, log_info

EXIT_OK = 0
EXIT_RESOURCE_ERROR = 1
EXIT_FAILURE = 2


def _dump(data) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False, default=str)


def _error_dict(exc: Exception) -> dict:
    if isinstance(exc, CdkRunError):
        return exc.to_dict()
    data = {"kind": type(exc).__name__, "message": str(exc)}
    if isinstance(exc, ClientError):
        data["code"] = exc.response.get("Error", {}).get("Code")
    return data


@click.group()
def cli():
    """Run deployed CDK constructs (state machines and Lambda functions) by construct path."""
    init_tracer("cdkrun")


@cli.command()
@click.argument("construct_path")
@click.option("--app", "assembly_dir", default=ASSEMBLY_DIR, show_default=True,
              type=click.Path(file_okay=False), help="Cloud assembly directory produced by `cdk synth`.")
@click.option("--stack", "stack_names", multiple=True, help="Only search these stacks (repeatable).")
@click.option("--input", "input_", default=None, help="Execution input, a JSON object.")
@click.option("--input-file", type=click.File("r", encoding="utf-8"), default=None,
              help="Read the execution input from a file.")
@click.option("--timeout", type=click.FloatRange(min=0, min_open=True), default=None, help="Give up after this many seconds.")
@click.option("--profile", default=None, help="AWS profile to use.")
@click.option("--region", default=None, help="AWS region to use.")
@click.pass_context
def invoke(ctx, construct_path, assembly_dir, stack_names, input_, input_file, timeout, profile, region):
    """
    Execute the resource behind CONSTRUCT_PATH and print its result.
    """
    if input_ is not None and input_file is not None:
        raise click.UsageError("--input and --input-file are mutually exclusive")
    if input_file is not None:
        input_ = input_file.read()

    service = InvokeService(AwsSdk(profile_name=profile, region_name=region))

    try:
        artifacts = service.load_artifacts(assembly_dir, stack_names or None)
        outcome = asyncio.run(service.invoke(construct_path, artifacts, input=input_, timeout=timeout))
    except (CdkRunError, ClientError, BotoCoreError, json.JSONDecodeError) as e:
        # 工具本身失败（AWS 调用出错、返回内容不是 JSON）统一退出码 2，与资源自身报错区分
        log_error(f"{construct_path}: {e}")
        click.echo(_dump(_error_dict(e)), err=True)
        ctx.exit(EXIT_FAILURE)

    if not outcome.found:
        log_error(f"Could not find a resource for {construct_path} in {assembly_dir}")
        ctx.exit(EXIT_FAILURE)

    log_info(f"{construct_path} -> {outcome.physical_resource_id}")
    click.echo(_dump(outcome.model_dump(exclude={"found"})))
    ctx.exit(EXIT_RESOURCE_ERROR if outcome.error is not None else EXIT_OK)


@cli.command(name="list")
@click.option("--app", "assembly_dir", default=ASSEMBLY_DIR, show_default=True,
              type=click.Path(file_okay=False), help="Cloud assembly directory produced by `cdk synth`.")
@click.option("--stack", "stack_names", multiple=True, help="Only list these stacks (repeatable).")
@click.pass_context
def list_constructs(ctx, assembly_dir, stack_names):
    """List the construct paths that can be invoked."""
    try:
        artifacts = load_stack_artifacts(assembly_dir, stack_names or None)
    except CdkRunError as e:
        click.echo(_dump(e.to_dict()), err=True)
        ctx.exit(EXIT_FAILURE)

    for entry in list_runnable_constructs(artifacts):
        click.echo(f"{entry['construct_path']}\t{entry['resource_type']}\t{entry['stack_name']}")


if __name__ == "__main__":
    cli()
