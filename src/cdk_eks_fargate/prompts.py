"""Interactive prompts for writing a stack configuration file.

This module provides the questionary style shared by all prompts and the
``collect_settings`` flow used by ``cdk-eks-fargate init``.
"""

import os

import questionary
from questionary import Style

from cdk_eks_fargate import console
from cdk_eks_fargate.config import validate_k8s_name, validate_vpc_id
from cdk_eks_fargate.models import DEFAULT_STACK_ID, EndpointAccess, ProxySettings, StackSettings, WorkloadSettings

PROMPT_STYLE = Style(
    [
        ("qmark", "fg:#ff9900 bold"),  # AWS orange question mark
        ("question", "bold"),
        ("answer", "fg:#ffaf5f bold"),
        ("pointer", "fg:#ff9900 bold"),
        ("highlighted", "fg:#1c1c1c bg:#ff9900 bold"),
        ("selected", "fg:#87d787"),
        ("separator", "fg:#6c6c6c"),
        ("instruction", "fg:#6c6c6c italic"),
        ("text", ""),
        ("disabled", "fg:#585858 italic"),
    ]
)

POINTER = "❯ "
QMARK = "? "


def _validate_account(value: str) -> bool | str:
    if len(value) == 12 and value.isdigit():
        return True
    return "Account must be a 12-digit AWS account id"


def _validate_region(value: str) -> bool | str:
    return True if value else "Region cannot be empty"


def _validate_replicas(value: str) -> bool | str:
    if value.isdigit() and int(value) > 0:
        return True
    return "Replicas must be a positive integer"


def _text(message: str, default: str = "", validate=None) -> str:
    return questionary.text(
        message,
        default=default,
        validate=validate,
        style=PROMPT_STYLE,
        qmark=QMARK,
    ).unsafe_ask()


def _collect_proxy() -> ProxySettings:
    """Prompt for the kubectl proxy environment, if one is needed."""
    use_proxy = questionary.confirm(
        "Do private subnets reach AWS APIs only through a proxy?",
        default=False,
        style=PROMPT_STYLE,
        qmark=QMARK,
    ).unsafe_ask()
    if not use_proxy:
        return ProxySettings()

    https_proxy = _text("https_proxy")
    http_proxy = _text("http_proxy", default=https_proxy)
    no_proxy = _text("no_proxy", default="localhost,127.0.0.1,169.254.169.254,.eks.amazonaws.com")
    return ProxySettings(https_proxy=https_proxy or None, http_proxy=http_proxy or None, no_proxy=no_proxy or None)


def _collect_workload() -> WorkloadSettings:
    defaults = WorkloadSettings()
    namespace = _text("Workload namespace", default=defaults.namespace, validate=validate_k8s_name)
    service_account = _text("Workload service account", default=defaults.service_account, validate=validate_k8s_name)
    ingress_name = _text("Ingress name", default=defaults.ingress_name, validate=validate_k8s_name)
    image = _text("Container image", default=defaults.image)
    replicas = _text("Replicas", default=str(defaults.replicas), validate=_validate_replicas)

    return WorkloadSettings(
        namespace=namespace,
        service_account=service_account,
        ingress_name=ingress_name,
        image=image,
        replicas=int(replicas),
    )


def collect_settings() -> StackSettings:
    """Interactively collect stack settings.

    Account and region are only asked for when an existing VPC is used,
    otherwise the cdk toolkit's environment decides them at synth time.

    Returns:
        The collected StackSettings.

    """
    stack_id = _text("Stack name", default=DEFAULT_STACK_ID)
    cluster_name = _text("EKS cluster name (empty to let CDK generate one)")
    vpc_id = _text("Existing VPC id (empty to create a new VPC)", validate=validate_vpc_id)
    account = region = None
    if vpc_id:
        console.warning("Private subnets of an existing VPC must be tagged kubernetes.io/role/internal-elb=1")
        # the VPC lookup needs a concrete account and region
        account = _text("AWS account", default=os.environ.get("CDK_DEFAULT_ACCOUNT", ""), validate=_validate_account)
        region = _text("AWS region", default=os.environ.get("CDK_DEFAULT_REGION", ""), validate=_validate_region)

    endpoint_access = questionary.select(
        "API server endpoint access",
        choices=[mode.value for mode in EndpointAccess],
        default=EndpointAccess.PUBLIC.value,
        style=PROMPT_STYLE,
        pointer=POINTER,
        qmark=QMARK,
    ).unsafe_ask()

    return StackSettings(
        stack_id=stack_id,
        account=account,
        region=region,
        cluster_name=cluster_name or None,
        vpc_id=vpc_id or None,
        endpoint_access=EndpointAccess(endpoint_access),
        proxy=_collect_proxy(),
        workload=_collect_workload(),
    )
