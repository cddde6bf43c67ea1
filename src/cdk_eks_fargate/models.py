"""Data models for cdk-eks-fargate.

This module provides the configuration value objects that are handed to
the CDK constructs. They carry no lifecycle of their own; the provisioning
engine assigns identity to the resources they describe.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import NamedTuple

from aws_cdk import aws_eks as eks

DEFAULT_STACK_ID = "k8s-app-on-eks-fargate-stack"


class EndpointAccess(str, Enum):
    """Supported EKS API server endpoint access modes.

    Inherits from str so values can be read straight from YAML and
    command-line options.
    """

    PUBLIC = "public"
    PRIVATE = "private"
    PUBLIC_AND_PRIVATE = "public-and-private"

    def to_eks(self) -> eks.EndpointAccess:
        """Return the matching ``aws_eks.EndpointAccess`` value."""
        match self:
            case EndpointAccess.PRIVATE:
                return eks.EndpointAccess.PRIVATE
            case EndpointAccess.PUBLIC_AND_PRIVATE:
                return eks.EndpointAccess.PUBLIC_AND_PRIVATE
            case _:
                return eks.EndpointAccess.PUBLIC


class ProxySettings(NamedTuple):
    """Proxy environment for the kubectl handler behind the cluster.

    Needed when private subnets reach AWS APIs only through an
    enterprise proxy.

    Attributes:
        https_proxy: Value for ``https_proxy``.
        http_proxy: Value for ``http_proxy``.
        no_proxy: Comma-separated hosts that bypass the proxy.

    """

    https_proxy: str | None = None
    http_proxy: str | None = None
    no_proxy: str | None = None

    def to_environment(self) -> dict[str, str]:
        """Return the non-empty settings as an environment mapping."""
        return {key: value for key, value in self._asdict().items() if value}


@dataclass(frozen=True, slots=True)
class WorkloadSettings:
    """Settings for the sample workload deployed on Fargate.

    Attributes:
        namespace: Kubernetes namespace selected by the Fargate profile.
        service_account: Service account bound to the workload IAM role.
        ingress_name: Name of the ALB ingress.
        image: Container image for the deployment.
        replicas: Number of pod replicas.
        container_port: Port the container listens on.

    """

    namespace: str = "nginx"
    service_account: str = "sa-nginx"
    ingress_name: str = "api-ingress"
    image: str = "nginx:1.25"
    replicas: int = 2
    container_port: int = 80

    @property
    def app_label(self) -> str:
        """Value of the ``app`` label shared by the deployment and service."""
        return self.namespace


@dataclass(frozen=True, slots=True)
class StackSettings:
    """Parameters for the EKS on Fargate stack.

    Attributes:
        stack_id: CloudFormation stack name.
        account: Target AWS account, or None for an environment-agnostic stack.
        region: Target AWS region, or None for an environment-agnostic stack.
        cluster_name: EKS cluster name. Generated by CDK when None.
        vpc_id: Existing VPC to look up. A new VPC is created when None.
        endpoint_access: API server endpoint access mode.
        proxy: kubectl proxy environment.
        workload: Sample workload settings.
        load_balancer_controller_chart_version: Helm chart version pin.

    """

    stack_id: str = DEFAULT_STACK_ID
    account: str | None = None
    region: str | None = None
    cluster_name: str | None = None
    vpc_id: str | None = None
    endpoint_access: EndpointAccess = EndpointAccess.PUBLIC
    proxy: ProxySettings = field(default_factory=ProxySettings)
    workload: WorkloadSettings = field(default_factory=WorkloadSettings)
    load_balancer_controller_chart_version: str | None = None

    @property
    def has_environment(self) -> bool:
        """Whether both account and region are known."""
        return bool(self.account and self.region)


class WorkloadReport(NamedTuple):
    """Observed state of the deployed workload.

    Attributes:
        namespace: Workload namespace.
        running_pods: Number of pods in the Running phase.
        total_pods: Number of pods in the namespace.
        hostname: ALB hostname of the ingress, if provisioned.
        http_status: Status code of the HTTP probe, if one was made.

    """

    namespace: str
    running_pods: int
    total_pods: int
    hostname: str | None = None
    http_status: int | None = None
