"""CLI entrypoint for cwpolicy."""

import json
import logging
import sys
from typing import NoReturn

import click
from rich.console import Console
from rich.logging import RichHandler

from cwpolicy.aws.client import CloudFormationClient, CloudWatchLogsClient
from cwpolicy.errors import CloudwatchPolicyError
from cwpolicy.formatter import format_json, format_markdown, format_table
from cwpolicy.models import SUPPORTED_PROVIDER, DeploymentTarget, PolicyConfig
from cwpolicy.naming import DEFAULT_STAGE, NamingPolicy
from cwpolicy.reconciler import TemplateReconciler


def _fail(message: str) -> NoReturn:
    click.echo(f"Error: {message}", err=True)
    sys.exit(2)


def _enable_debug_logging() -> None:
    """Send cwpolicy debug logs to stderr, keeping stdout for the report."""
    logger = logging.getLogger("cwpolicy")
    logger.setLevel(logging.DEBUG)
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        logger.addHandler(RichHandler(console=Console(stderr=True), show_path=False))


@click.command()
@click.argument("template", type=click.Path(exists=True, dir_okay=False))
@click.option("--service", required=True, help="Service name the stack belongs to.")
@click.option("--stage", default=DEFAULT_STAGE, show_default=True, help="Deployment stage.")
@click.option("--stack-name", default=None, help="Override the {service}-{stage} stack name.")
@click.option("--provider", default=SUPPORTED_PROVIDER, show_default=True, help="Cloud provider.")
@click.option("--region", default=None, help="AWS region.")
@click.option(
    "--retain-logs/--no-retain-logs",
    default=False,
    envvar="CWPOLICY_RETAIN_LOGS",
    help="Retain log groups on stack delete and stop managing existing ones.",
)
@click.option(
    "--output",
    type=click.Path(dir_okay=False, writable=True),
    default=None,
    help="Write the reconciled template here instead of updating TEMPLATE in place.",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["table", "json", "markdown"]),
    default="table",
    help="Report format.",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
def main(
    template,
    service,
    stage,
    stack_name,
    provider,
    region,
    retain_logs,
    output,
    output_format,
    verbose,
):
    """Apply CloudWatch log group retention to a compiled CloudFormation template."""
    if verbose:
        _enable_debug_logging()

    try:
        with open(template) as f:
            compiled = json.load(f)
    except (OSError, ValueError) as err:
        _fail(f"cannot read template {template}: {err}")
    if not isinstance(compiled, dict):
        _fail(f"template {template} is not a JSON object")

    naming = NamingPolicy(service=service, stage=stage, stack_name_override=stack_name)
    target = DeploymentTarget(provider=provider, stack_name=naming.stack_name(), region=region)

    reconciler = TemplateReconciler(
        CloudFormationClient(region=target.region),
        CloudWatchLogsClient(region=target.region),
    )

    try:
        report = reconciler.reconcile(compiled, PolicyConfig(retain_logs=retain_logs), target)
    except CloudwatchPolicyError as err:
        _fail(str(err))

    destination = output or template
    try:
        with open(destination, "w") as f:
            json.dump(compiled, f, indent=2)
            f.write("\n")
    except OSError as err:
        _fail(f"cannot write template {destination}: {err}")

    formatters = {
        "table": format_table,
        "json": format_json,
        "markdown": format_markdown,
    }
    click.echo(formatters[output_format](report))
