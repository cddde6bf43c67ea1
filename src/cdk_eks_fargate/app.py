"""CDK application assembly."""

from pathlib import Path

import aws_cdk as cdk
from aws_cdk import cx_api
from icecream import ic

from cdk_eks_fargate.models import StackSettings
from cdk_eks_fargate.stack import CdkEksFargateStack


def build_app(settings: StackSettings, outdir: str | Path | None = None) -> tuple[cdk.App, CdkEksFargateStack]:
    """Create the CDK app and declare the stack.

    Args:
        settings: Stack settings.
        outdir: Cloud assembly directory. When None the cdk toolkit's
            ``CDK_OUTDIR`` (or ``cdk.out``) is used.

    Returns:
        The app and the declared stack.

    """
    app = cdk.App(outdir=str(outdir)) if outdir is not None else cdk.App()
    stack = CdkEksFargateStack(app, settings.stack_id, settings=settings)
    ic(stack.stack_name)
    return app, stack


def synth(settings: StackSettings, outdir: str | Path | None = None) -> cx_api.CloudAssembly:
    """Build the app and synthesize the cloud assembly.

    Returns:
        The synthesized cloud assembly.

    """
    app, _ = build_app(settings, outdir=outdir)
    return app.synth()
