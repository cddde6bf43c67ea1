#!/usr/bin/env python
"""Command-line interface for cdk-eks-fargate.

This module provides the CLI entry point. ``synth`` is also what the cdk
toolkit runs as the CDK app (see ``cdk.json``).
"""

import sys
from pathlib import Path

import click
import questionary
from icecream import ic

from cdk_eks_fargate import __version__, console
from cdk_eks_fargate.app import synth as synth_app
from cdk_eks_fargate.config import DEFAULT_CONFIG_FILE, dump_settings, load_settings
from cdk_eks_fargate.exceptions import CdkEksFargateError
from cdk_eks_fargate.models import EndpointAccess, StackSettings, WorkloadReport
from cdk_eks_fargate.prompts import PROMPT_STYLE, QMARK, collect_settings
from cdk_eks_fargate.status import WorkloadStatus

_config_option = click.option(
    "--config",
    "-c",
    "config_path",
    required=False,
    type=click.Path(dir_okay=False),
    help=f"settings file (defaults to {DEFAULT_CONFIG_FILE} if present)",
)


def _fail(err: CdkEksFargateError) -> None:
    console.error(str(err))
    sys.exit(1)


def print_synth_summary(settings: StackSettings, assembly_dir: str) -> None:
    """Print what was synthesized.

    Args:
        settings: Settings the stack was declared from.
        assembly_dir: Cloud assembly output directory.

    """
    console.newline()
    console.summary_panel(
        "Stack Synthesized",
        {
            "Stack": settings.stack_id,
            "Cluster": settings.cluster_name or "(generated by CDK)",
            "VPC": settings.vpc_id or "(new VPC)",
            "Endpoint access": settings.endpoint_access.value,
            "Workload namespace": settings.workload.namespace,
            "Cloud assembly": assembly_dir,
        },
    )


def print_status_report(report: WorkloadReport) -> None:
    """Print the observed state of the deployed workload."""
    healthy = report.total_pods > 0 and report.running_pods == report.total_pods
    items = {
        "Namespace": report.namespace,
        "Pods running": f"{report.running_pods}/{report.total_pods}",
        "Load balancer": report.hostname or "(provisioning)",
    }
    if report.http_status is not None:
        items["HTTP status"] = str(report.http_status)

    console.newline()
    console.summary_panel("Workload Status", items, border_style="green" if healthy else "yellow")


@click.group(invoke_without_command=True, help="EKS on Fargate with the AWS Load Balancer Controller")
@click.option("--version", "-v", required=False, is_flag=True, help="print version")
@click.option("--debug", required=False, is_flag=True, help="print debug information")
@click.pass_context
def cli(ctx: click.Context, version: bool, debug: bool) -> None:
    """Process global options.

    Args:
        ctx: Click context.
        version: Print version and exit.
        debug: Enable debug output.

    """
    if not debug:
        ic.disable()

    if version:
        click.echo(__version__)
        ctx.exit()

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@cli.command(help="Synthesize the CloudFormation template")
@_config_option
@click.option("--cluster-name", required=False, help="EKS cluster name")
@click.option("--vpc-id", required=False, help="existing VPC to deploy into")
@click.option(
    "--endpoint-access",
    required=False,
    type=click.Choice([mode.value for mode in EndpointAccess]),
    help="API server endpoint access",
)
@click.option("--outdir", "-o", required=False, help="cloud assembly output directory")
def synth(
    config_path: str | None,
    cluster_name: str | None,
    vpc_id: str | None,
    endpoint_access: str | None,
    outdir: str | None,
) -> None:
    """Build the CDK app and write the cloud assembly."""
    try:
        settings = load_settings(
            config_path,
            cluster_name=cluster_name,
            vpc_id=vpc_id,
            endpoint_access=endpoint_access,
        )
        ic(settings)
        with console.spinner("Synthesizing stack..."):
            assembly = synth_app(settings, outdir=outdir)
    except CdkEksFargateError as e:
        _fail(e)
        return

    print_synth_summary(settings, assembly.directory)


@cli.command(help="Interactively write a settings file")
@click.option(
    "--output",
    "-o",
    required=False,
    default=DEFAULT_CONFIG_FILE,
    show_default=True,
    type=click.Path(dir_okay=False),
    help="file to write",
)
def init(output: str) -> None:
    """Collect settings with prompts and write them as YAML."""
    if Path(output).exists():
        overwrite = questionary.confirm(
            f"{output} already exists. Overwrite?",
            default=False,
            style=PROMPT_STYLE,
            qmark=QMARK,
        ).unsafe_ask()
        if not overwrite:
            console.warning("Nothing written.")
            raise click.Abort()

    settings = collect_settings()
    ic(settings)

    try:
        path = dump_settings(settings, output)
    except CdkEksFargateError as e:
        _fail(e)
        return

    console.success(f"Settings written to {console.highlight(str(path))}")
    console.step("Run `cdk deploy` to provision the stack")


@cli.command(help="Show the state of the deployed workload")
@_config_option
@click.option("--context", required=False, help="kubeconfig context to use")
@click.option("--probe", required=False, is_flag=True, help="send an HTTP request through the load balancer")
def status(config_path: str | None, context: str | None, probe: bool) -> None:
    """Report pods, load balancer and optionally probe the workload."""
    try:
        settings = load_settings(config_path)
        report = WorkloadStatus(settings.workload, context=context).report(probe=probe)
    except CdkEksFargateError as e:
        _fail(e)
        return

    print_status_report(report)


if __name__ == "__main__":
    cli()
